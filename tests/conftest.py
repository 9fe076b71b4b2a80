import json as _json

import httpx
import pytest

from services.relay_service.app.config import Settings


class MockResp:
    def __init__(self, status_code=200, json_data=None, text=None):
        self.status_code = status_code
        self._json = json_data
        if text is None:
            text = _json.dumps(json_data) if json_data is not None else ""
        self.text = text

    def json(self):
        if self._json is None:
            return _json.loads(self.text)
        return self._json


class MockAsyncClient:
    """Stands in for httpx.AsyncClient; routes POSTs by URL substring."""

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def post(self, url, json=None, headers=None):
        self.calls.append({"url": url, "json": json, "headers": headers or {}})
        for key, resp in self.routes.items():
            if key in url:
                if isinstance(resp, Exception):
                    raise resp
                return resp
        raise httpx.ConnectError("no route", request=httpx.Request("POST", url))


GEMINI_OK = {"candidates": [{"content": {"parts": [{"text": "from gemini"}]}}]}
ANTHROPIC_OK = {"content": [{"type": "text", "text": "from anthropic"}]}
OPENAI_OK = {"choices": [{"message": {"content": "from openai"}}]}


def make_settings(**keys):
    return Settings(credentials={name: keys.get(name) for name in ("gemini", "anthropic", "openai")})


@pytest.fixture
def all_keys():
    return make_settings(gemini="g-key-123456789", anthropic="a-key-123456789", openai="o-key-123456789")
