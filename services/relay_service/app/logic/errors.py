from typing import Optional

from .types import FailureKind, GenerationFailure


class RelayError(RuntimeError):
    pass


class InvalidRequest(RelayError):
    """Raised before any provider is contacted when sys or userMsg is missing."""


class NoProvidersConfigured(RelayError):
    def __init__(self, message: str = "No AI provider configured. Set GEMINI_API_KEY, ANTHROPIC_API_KEY or OPENAI_API_KEY.") -> None:
        super().__init__(message)


class ProviderCallFailed(RelayError):
    """A single provider attempt failed; the dispatcher records it and moves on."""

    def __init__(self, provider: str, message: str, kind: FailureKind = "transport") -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message
        self.kind = kind


class AllProvidersFailed(RelayError):
    def __init__(self, failure: GenerationFailure, message: Optional[str] = None) -> None:
        super().__init__(message or f"All AI providers failed. {failure.message}")
        self.failure = failure

    @property
    def attempts(self):
        return self.failure.attempts
