from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_timeout: float = 5.0
    log_level: str = "INFO"

    def missing_fields(self) -> list[str]:
        """Names of the required environment variables that are empty."""
        missing = []
        if not self.supabase_url.strip():
            missing.append("SUPABASE_URL")
        if not self.supabase_anon_key.strip():
            missing.append("SUPABASE_ANON_KEY")
        return missing

    @property
    def is_configured(self) -> bool:
        return not self.missing_fields()


settings = Settings()
