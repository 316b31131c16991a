import json
from typing import Any

import pytest

from nanobanana.config.environment import Environment


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep tests away from the user's settings, secrets and .env files."""
    for key in ("NANO_BANANA_API_KEY", "NANO_BANANA_API_BASE", "LOG_LEVEL", "DEBUG"):
        monkeypatch.delenv(key, raising=False)
    Environment.settings = {}
    Environment.secrets = {}
    yield
    Environment.reset()


class DummyResponse:
    def __init__(
        self,
        status: int = 200,
        body: bytes = b"",
        json_data: Any = None,
        headers: dict[str, str] | None = None,
        reason: str = "OK",
    ):
        self.status = status
        self.reason = reason
        self.headers = headers or {}
        self._json = json_data
        self._body = body if json_data is None else json.dumps(json_data).encode()

    async def read(self):
        return self._body

    async def text(self):
        return self._body.decode()

    async def json(self):
        return self._json

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        pass


class DummySession:
    """Stand-in for aiohttp.ClientSession that records every request."""

    def __init__(self):
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self._get: dict[str, DummyResponse] = {}
        self._post: DummyResponse | None = None

    def respond_get(self, url: str, **kwargs) -> DummyResponse:
        self._get[url] = DummyResponse(**kwargs)
        return self._get[url]

    def respond_post(self, **kwargs) -> DummyResponse:
        self._post = DummyResponse(**kwargs)
        return self._post

    @property
    def posts(self):
        return [c for c in self.calls if c[0] == "POST"]

    @property
    def gets(self):
        return [c for c in self.calls if c[0] == "GET"]

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        pass

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return self._get[url]

    def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        assert self._post is not None, "no POST response configured"
        return self._post


@pytest.fixture
def http_session(monkeypatch) -> DummySession:
    session = DummySession()
    monkeypatch.setattr("aiohttp.ClientSession", lambda *args, **kwargs: session)
    return session
