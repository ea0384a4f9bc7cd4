"""Query-string helpers for the movies dispatcher."""

from urllib.parse import parse_qsl


def parse_query_string(raw: str | None) -> dict[str, str]:
    """Parse ``a=1&b=2`` into a dict.

    Percent-escapes and ``+`` are decoded, blank values are kept and the first
    occurrence of a repeated key wins.
    """
    params: dict[str, str] = {}
    if not raw:
        return params
    for key, value in parse_qsl(raw.lstrip("?"), keep_blank_values=True):
        if key and key not in params:
            params[key] = value
    return params


def parse_page(value: str | None) -> int:
    """Zero-based page index; anything missing, malformed or negative is 0."""
    if value is None:
        return 0
    value = value.strip()
    if not (value.isascii() and value.isdigit()):
        return 0
    return int(value)


def required_id(params: dict[str, str]) -> str | None:
    value = params.get("id", "").strip()
    return value or None
