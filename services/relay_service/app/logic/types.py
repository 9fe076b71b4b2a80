from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Union

from ..config import DEFAULT_MAX_TOKENS

FailureKind = Literal["transport", "http_status", "provider_error", "empty"]


@dataclass(frozen=True)
class GenerationRequest:
    system_prompt: str
    user_message: str
    max_tokens: int = DEFAULT_MAX_TOKENS


@dataclass(frozen=True)
class ProviderSuccess:
    provider: str
    text: str


@dataclass(frozen=True)
class ProviderFailure:
    provider: str
    message: str
    kind: FailureKind = "transport"


AttemptResult = Union[ProviderSuccess, ProviderFailure]


@dataclass(frozen=True)
class GenerationSuccess:
    text: str
    provider: str


@dataclass(frozen=True)
class GenerationFailure:
    attempts: List[ProviderFailure] = field(default_factory=list)

    @property
    def message(self) -> str:
        return "; ".join(f"{a.provider}: {a.message}" for a in self.attempts)


GenerationResult = Union[GenerationSuccess, GenerationFailure]
