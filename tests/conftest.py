"""Shared fixtures: a fake Supabase backend built on httpx.MockTransport."""

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import app
from app.routers import movies
from app.services.dispatcher import MovieDispatcher
from app.services.supabase import SupabaseService

SUPABASE_URL = "https://demo.supabase.co"
SUPABASE_KEY = "anon-test-key"


class FakeSupabase:
    """Records outbound requests and answers with a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.response = httpx.Response(200, json=[])

    def reply(self, status_code: int = 200, **kwargs) -> None:
        self.response = httpx.Response(status_code, **kwargs)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no outbound request was made"
        return self.requests[-1]


@pytest.fixture()
def backend():
    return FakeSupabase()


@pytest.fixture()
def configured():
    return Settings(supabase_url=SUPABASE_URL, supabase_anon_key=SUPABASE_KEY)


@pytest.fixture()
def unconfigured():
    return Settings(supabase_url="", supabase_anon_key="")


def _client_for(settings: Settings, backend: FakeSupabase):
    with TestClient(app) as c:
        dispatcher = MovieDispatcher(
            settings, SupabaseService.from_settings(settings, transport=backend.transport)
        )
        movies.init_router(dispatcher)
        app.state.dispatcher = dispatcher
        yield c


@pytest.fixture()
def client(configured, backend):
    yield from _client_for(configured, backend)


@pytest.fixture()
def unconfigured_client(unconfigured, backend):
    yield from _client_for(unconfigured, backend)
