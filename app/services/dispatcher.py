"""Translates inbound movie requests into one Supabase REST call each.

Every path ends in an envelope (see ``app.models.Envelope``). Local problems
(configuration, missing ``id``, bad body) are reported before anything is
sent upstream. Upstream rejections and transport faults are caught here and
reported with the backend's body or the exception text as ``details``.
"""

import json
import logging

import httpx
from pydantic import ValidationError

from app.config import Settings
from app.models import (
    DeleteResponse,
    Envelope,
    ErrorResponse,
    MovieInput,
    MovieListResponse,
    MovieResponse,
    MovieUpdate,
)
from app.services.query_params import parse_page, parse_query_string, required_id
from app.services.supabase import SupabaseError, SupabaseService

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PATCH", "DELETE")

CONFIG_ERROR = "Backend environment variables are not set"
INVALID_JSON = "Invalid JSON payload."
MISSING_ID = "Missing id query parameter."
NO_UPDATE_FIELDS = "No fields provided for update."
UNSUPPORTED_METHOD = "Unsupported method."

# httpx.InvalidURL is not an httpx.HTTPError; a malformed SUPABASE_URL raises it.
UPSTREAM_FAULTS = (SupabaseError, httpx.HTTPError, httpx.InvalidURL)


def _decode_body(body: bytes) -> object:
    if not body or not body.strip():
        raise ValueError("empty body")
    return json.loads(body)


def _upstream_error(action: str, exc: Exception) -> ErrorResponse:
    if isinstance(exc, SupabaseError):
        logger.warning("Supabase %s rejected (%d): %s", action, exc.status_code, exc.details)
        details = exc.details
    else:
        logger.error("Supabase %s failed: %s", action, exc)
        details = str(exc) or type(exc).__name__
    return ErrorResponse(error=f"Supabase {action} failed.", details=details)


class MovieDispatcher:
    def __init__(self, settings: Settings, service: SupabaseService | None = None):
        self.settings = settings
        self.service = service or SupabaseService.from_settings(settings)

    async def handle(self, method: str, query_string: str | None, body: bytes = b"") -> Envelope:
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            return ErrorResponse(error=UNSUPPORTED_METHOD)

        missing = self.settings.missing_fields()
        if missing:
            logger.error("Refusing %s: missing %s", method, ", ".join(missing))
            return ErrorResponse(
                error=CONFIG_ERROR,
                details=f"Set {' and '.join(missing)} in the deployment environment.",
            )

        params = parse_query_string(query_string)
        if method == "GET":
            return await self.list_movies(params)
        if method == "POST":
            return await self.create_movie(body)
        if method == "PATCH":
            return await self.update_movie(params, body)
        return await self.delete_movie(params)

    async def list_movies(self, params: dict[str, str]) -> Envelope:
        search = params.get("query", "")
        page = parse_page(params.get("page"))
        try:
            movies, total = await self.service.list_movies(search, page)
        except UPSTREAM_FAULTS + (ValueError,) as exc:
            return _upstream_error("query", exc)
        return MovieListResponse(movies=movies, total=total)

    async def create_movie(self, body: bytes) -> Envelope:
        try:
            payload = MovieInput.model_validate(_decode_body(body))
        except (ValueError, ValidationError):
            return ErrorResponse(error=INVALID_JSON)

        try:
            movie = await self.service.create_movie(payload.model_dump(exclude_none=True))
        except UPSTREAM_FAULTS as exc:
            return _upstream_error("insert", exc)
        return MovieResponse(movie=movie)

    async def update_movie(self, params: dict[str, str], body: bytes) -> Envelope:
        movie_id = required_id(params)
        if movie_id is None:
            return ErrorResponse(error=MISSING_ID)

        try:
            changes = MovieUpdate.model_validate(_decode_body(body)).changes()
        except (ValueError, ValidationError):
            return ErrorResponse(error=INVALID_JSON)
        if not changes:
            return ErrorResponse(error=NO_UPDATE_FIELDS)

        try:
            movie = await self.service.update_movie(movie_id, changes)
        except UPSTREAM_FAULTS as exc:
            return _upstream_error("update", exc)
        return MovieResponse(movie=movie)

    async def delete_movie(self, params: dict[str, str]) -> Envelope:
        movie_id = required_id(params)
        if movie_id is None:
            return ErrorResponse(error=MISSING_ID)

        try:
            await self.service.delete_movie(movie_id)
        except UPSTREAM_FAULTS as exc:
            return _upstream_error("delete", exc)
        return DeleteResponse(status="deleted")
