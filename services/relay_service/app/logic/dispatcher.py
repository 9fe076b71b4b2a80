import logging
from typing import Any, Callable, List, Optional, Sequence

import httpx

from ..config import DEFAULT_MAX_TOKENS, Settings
from .errors import AllProvidersFailed, InvalidRequest, NoProvidersConfigured, ProviderCallFailed
from .providers import PROVIDERS, ProviderDescriptor
from .transport import new_client, post_json
from .types import (
    AttemptResult,
    GenerationFailure,
    GenerationRequest,
    GenerationResult,
    GenerationSuccess,
    ProviderFailure,
    ProviderSuccess,
)

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], httpx.AsyncClient]
MISSING_PROMPT = "Missing sys or userMsg"
BLANK_PROMPT = "sys and userMsg must not be blank"


def build_request(sys: Optional[str], user_msg: Optional[str], max_tokens: Optional[int] = None) -> GenerationRequest:
    """Normalize the inbound body, rejecting it when either prompt is missing."""
    if not sys or not user_msg:
        raise InvalidRequest(MISSING_PROMPT)
    if not sys.strip() or not user_msg.strip():
        raise InvalidRequest(BLANK_PROMPT)
    if not max_tokens or max_tokens <= 0:
        max_tokens = DEFAULT_MAX_TOKENS
    return GenerationRequest(system_prompt=sys, user_message=user_msg, max_tokens=max_tokens)


def _redact(message: str, secret: str) -> str:
    if not secret or secret not in message:
        return message
    tail = secret[-4:] if len(secret) > 8 else ""
    return message.replace(secret, f"****{tail}")


class ProviderDispatcher:
    """Tries each configured provider in fixed order; the first non-empty answer wins."""

    def __init__(
        self,
        settings: Settings,
        providers: Sequence[ProviderDescriptor] = PROVIDERS,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self.settings = settings
        self.providers = tuple(providers)
        self._client_factory = client_factory or (lambda: new_client(settings.http_timeout_seconds))

    def candidates(self) -> List[ProviderDescriptor]:
        return [p for p in self.providers if self.settings.is_configured(p.name)]

    async def _call(self, client: Any, provider: ProviderDescriptor, request: GenerationRequest, api_key: str) -> str:
        url, headers, payload = provider.build_request(request, api_key, self.settings.model_for(provider.name))
        result = await post_json(client, provider.name, url, payload, headers)

        error = provider.extract_error(result.body)
        if error:
            raise ProviderCallFailed(provider.name, f"provider error: {error}", "provider_error")
        if not result.ok:
            raise ProviderCallFailed(provider.name, f"HTTP {result.status}", "http_status")
        try:
            text = provider.extract_text(result.body)
        except (AttributeError, IndexError, KeyError, TypeError):
            text = None
        text = (text or "").strip()
        if not text:
            raise ProviderCallFailed(provider.name, "empty response", "empty")
        return text

    async def attempt(self, client: Any, provider: ProviderDescriptor, request: GenerationRequest) -> AttemptResult:
        api_key = self.settings.credential(provider.name) or ""
        logger.info("Trying provider %s", provider.name)
        try:
            text = await self._call(client, provider, request, api_key)
        except ProviderCallFailed as exc:
            message = _redact(exc.message, api_key)
            logger.warning("Provider %s failed (%s): %s", provider.name, exc.kind, message)
            return ProviderFailure(provider=provider.name, message=message, kind=exc.kind)
        logger.info("Provider %s answered (%d chars)", provider.name, len(text))
        return ProviderSuccess(provider=provider.name, text=text)

    async def fallback(self, request: GenerationRequest) -> GenerationResult:
        if not request.system_prompt or not request.user_message:
            raise InvalidRequest(MISSING_PROMPT)
        if not request.system_prompt.strip() or not request.user_message.strip():
            raise InvalidRequest(BLANK_PROMPT)

        candidates = self.candidates()
        if not candidates:
            logger.error("Generation requested but no provider credential is configured")
            raise NoProvidersConfigured()

        failures: List[ProviderFailure] = []
        async with self._client_factory() as client:
            for provider in candidates:
                result = await self.attempt(client, provider, request)
                if isinstance(result, ProviderSuccess):
                    return GenerationSuccess(text=result.text, provider=result.provider)
                failures.append(result)
        return GenerationFailure(attempts=failures)

    async def dispatch(self, request: GenerationRequest) -> GenerationSuccess:
        result = await self.fallback(request)
        if isinstance(result, GenerationFailure):
            logger.error("All providers failed: %s", result.message)
            raise AllProvidersFailed(result)
        return result


async def dispatch(request: GenerationRequest, config: Settings, **kwargs: Any) -> GenerationSuccess:
    return await ProviderDispatcher(config, **kwargs).dispatch(request)
