"""Movie CRUD endpoints proxied to the Supabase REST API."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.services.dispatcher import MovieDispatcher

logger = logging.getLogger(__name__)
router = APIRouter(tags=["movies"])

# Unsupported verbs still reach the dispatcher so they get the JSON envelope
# instead of a bare 405.
ACCEPTED_METHODS = ["GET", "POST", "PATCH", "DELETE", "PUT", "HEAD", "OPTIONS", "TRACE", "CONNECT"]

_dispatcher: MovieDispatcher | None = None


def init_router(dispatcher: MovieDispatcher) -> None:
    global _dispatcher
    _dispatcher = dispatcher


def _get_dispatcher() -> MovieDispatcher:
    assert _dispatcher is not None, "movies router not initialized"
    return _dispatcher


@router.api_route("/", methods=ACCEPTED_METHODS)
@router.api_route("/api/movies", methods=ACCEPTED_METHODS)
async def movies(request: Request):
    """
    List/search (GET ?query=&page=), create (POST), update (PATCH ?id=)
    or delete (DELETE ?id=) movies.

    Every outcome, errors included, is answered with HTTP 200 and a JSON
    envelope.
    """
    dispatcher = _get_dispatcher()
    body = await request.body()
    envelope = await dispatcher.handle(request.method, request.url.query, body)
    if getattr(envelope, "error", None):
        logger.info("%s %s answered with error: %s", request.method, request.url.path, envelope.error)
    return JSONResponse(content=envelope.model_dump(mode="json", exclude_unset=True))
