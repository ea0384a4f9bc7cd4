"""Supabase REST service which calls the PostgREST API for the movies table."""

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from app.config import Settings
from app.models import Movie

logger = logging.getLogger(__name__)

PAGE_SIZE = 8
UNKNOWN_ERROR = "Unknown error"

_movie_list = TypeAdapter(list[Movie])


class SupabaseError(Exception):
    """The backend answered with a non-success status."""

    def __init__(self, status_code: int, details: str):
        super().__init__(f"Supabase returned {status_code}: {details}")
        self.status_code = status_code
        self.details = details


def page_window(page: int, page_size: int = PAGE_SIZE) -> tuple[int, int]:
    """Inclusive row window for a zero-based page."""
    start = page * page_size
    return start, start + page_size - 1


def parse_total(content_range: str | None) -> int:
    """Total row count from a ``Content-Range: 0-7/23`` header."""
    if not content_range:
        return 0
    try:
        return max(int(content_range.rsplit("/", 1)[-1].strip()), 0)
    except ValueError:
        return 0


def _error_details(resp: httpx.Response) -> str:
    try:
        return resp.text
    except (UnicodeDecodeError, LookupError, httpx.ResponseNotRead):
        return UNKNOWN_ERROR


def _first_record(resp: httpx.Response) -> Movie | None:
    try:
        records = _movie_list.validate_python(resp.json())
    except (ValueError, ValidationError):
        logger.warning("Could not decode returned representation: %r", resp.text[:200])
        return None
    return records[0] if records else None


class SupabaseService:
    TABLE = "movies"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "SupabaseService":
        return cls(
            settings.supabase_url,
            settings.supabase_anon_key,
            timeout=settings.supabase_timeout,
            transport=transport,
        )

    @property
    def table_url(self) -> str:
        return f"{self._base_url}/rest/v1/{self.TABLE}"

    def _headers(self, **extra: str) -> dict[str, str]:
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
        }
        headers.update(extra)
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    @staticmethod
    def _raise_for_status(resp: httpx.Response) -> None:
        if not resp.is_success:
            raise SupabaseError(resp.status_code, _error_details(resp))

    async def list_movies(self, search: str = "", page: int = 0) -> tuple[list[Movie], int]:
        """One page of movies, newest release first, plus the exact total."""
        start, end = page_window(page)
        params = [("select", "*")]
        if search:
            params.append(("title", f"ilike.*{search}*"))
        params.append(("order", "release_date.desc"))

        async with self._client() as client:
            resp = await client.get(
                self.table_url,
                params=params,
                headers=self._headers(Range=f"{start}-{end}", Prefer="count=exact"),
            )
        self._raise_for_status(resp)

        movies = _movie_list.validate_python(resp.json())
        total = parse_total(resp.headers.get("content-range"))
        logger.debug("Fetched %d movies (rows %d-%d of %d)", len(movies), start, end, total)
        return movies, total

    async def create_movie(self, payload: dict) -> Movie | None:
        async with self._client() as client:
            resp = await client.post(
                self.table_url,
                json=payload,
                headers=self._headers(Prefer="return=representation"),
            )
        self._raise_for_status(resp)
        return _first_record(resp)

    async def update_movie(self, movie_id: str, payload: dict) -> Movie | None:
        async with self._client() as client:
            resp = await client.patch(
                self.table_url,
                params={"id": f"eq.{movie_id}"},
                json=payload,
                headers=self._headers(Prefer="return=representation"),
            )
        self._raise_for_status(resp)
        return _first_record(resp)

    async def delete_movie(self, movie_id: str) -> None:
        async with self._client() as client:
            resp = await client.delete(
                self.table_url,
                params={"id": f"eq.{movie_id}"},
                headers=self._headers(),
            )
        self._raise_for_status(resp)

    async def health_check(self) -> dict:
        """Check if the REST endpoint is reachable with the configured key."""
        try:
            async with self._client() as client:
                resp = await client.get(
                    self.table_url,
                    params={"select": "id", "limit": "1"},
                    headers=self._headers(),
                )
            return {
                "reachable": True,
                "authorized": resp.is_success,
                "status_code": resp.status_code,
            }
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Supabase health check failed: %s", exc)
            return {
                "reachable": False,
                "authorized": False,
                "error": str(exc),
            }
