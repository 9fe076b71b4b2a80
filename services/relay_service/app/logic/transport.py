from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .errors import ProviderCallFailed

JSON = Dict[str, Any]


@dataclass(frozen=True)
class HttpResult:
    status: int
    body: JSON
    raw_text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def new_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    # timeout=None disables httpx's default 5s limit; upstream generation is slow
    return httpx.AsyncClient(timeout=timeout)


async def post_json(
    client: httpx.AsyncClient,
    provider: str,
    url: str,
    payload: JSON,
    headers: Optional[Dict[str, str]] = None,
) -> HttpResult:
    try:
        r = await client.post(url, json=payload, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
        # InvalidURL and non-ASCII header values fail while httpx builds the request
        raise ProviderCallFailed(provider, f"request failed: {exc.__class__.__name__}: {exc}", "transport") from exc

    raw = r.text or ""
    try:
        body = r.json() if raw.strip() else {}
    except ValueError as exc:
        raise ProviderCallFailed(provider, f"invalid JSON response (HTTP {r.status_code})", "transport") from exc
    if not isinstance(body, dict):
        raise ProviderCallFailed(provider, f"unexpected response body (HTTP {r.status_code})", "transport")
    return HttpResult(status=r.status_code, body=body, raw_text=raw)
