"""Wire-level integrations for the upstream text-generation APIs.

Each provider differs only in how a GenerationRequest is shaped into its
request JSON and where the generated text sits in its response JSON. The
order of PROVIDERS is the fallback order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from .types import GenerationRequest

JSON = Dict[str, Any]
WireRequest = Tuple[str, Dict[str, str], JSON]  # (url, headers, payload)

GEMINI_API = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
ANTHROPIC_API = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
OPENAI_API = "https://api.openai.com/v1/chat/completions"


@dataclass(frozen=True)
class ProviderDescriptor:
    name: str
    build_request: Callable[[GenerationRequest, str, str], WireRequest]
    extract_text: Callable[[JSON], Optional[str]]

    def extract_error(self, body: JSON) -> Optional[str]:
        return extract_error(body)


def extract_error(body: JSON) -> Optional[str]:
    """Return the upstream error message when the body carries an ``error`` field."""
    if not isinstance(body, dict) or body.get("error") is None:
        return None
    err = body["error"]
    if not err:
        return "unspecified error"
    if isinstance(err, dict):
        return str(err.get("message") or err.get("type") or err)
    return str(err)


# --- gemini: one combined prompt blob ---

def build_gemini_request(req: GenerationRequest, api_key: str, model: str) -> WireRequest:
    url = GEMINI_API.format(model=model)
    headers = {"x-goog-api-key": api_key, "Content-Type": "application/json"}
    payload = {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": f"{req.system_prompt}\n\n{req.user_message}"}],
            }
        ],
        "generationConfig": {"maxOutputTokens": req.max_tokens},
    }
    return url, headers, payload


def extract_gemini_text(body: JSON) -> Optional[str]:
    candidates = body.get("candidates") or [{}]
    parts = ((candidates[0] or {}).get("content") or {}).get("parts") or []
    texts = [p.get("text") for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
    return "".join(texts) if texts else None


# --- anthropic: system field + user message ---

def build_anthropic_request(req: GenerationRequest, api_key: str, model: str) -> WireRequest:
    headers = {
        "x-api-key": api_key,
        "anthropic-version": ANTHROPIC_VERSION,
        "Content-Type": "application/json",
    }
    payload = {
        "model": model,
        "max_tokens": req.max_tokens,
        "system": req.system_prompt,
        "messages": [{"role": "user", "content": req.user_message}],
    }
    return ANTHROPIC_API, headers, payload


def extract_anthropic_text(body: JSON) -> Optional[str]:
    content = body.get("content") or [{}]
    text = (content[0] or {}).get("text")
    return text if isinstance(text, str) else None


# --- openai: system role message + user role message ---

def build_openai_request(req: GenerationRequest, api_key: str, model: str) -> WireRequest:
    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }
    payload = {
        "model": model,
        "max_tokens": req.max_tokens,
        "messages": [
            {"role": "system", "content": req.system_prompt},
            {"role": "user", "content": req.user_message},
        ],
    }
    return OPENAI_API, headers, payload


def extract_openai_text(body: JSON) -> Optional[str]:
    choices = body.get("choices") or [{}]
    content = ((choices[0] or {}).get("message") or {}).get("content")
    return content if isinstance(content, str) else None


GEMINI = ProviderDescriptor("gemini", build_gemini_request, extract_gemini_text)
ANTHROPIC = ProviderDescriptor("anthropic", build_anthropic_request, extract_anthropic_text)
OPENAI = ProviderDescriptor("openai", build_openai_request, extract_openai_text)

PROVIDERS: Tuple[ProviderDescriptor, ...] = (GEMINI, ANTHROPIC, OPENAI)
