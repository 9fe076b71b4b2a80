# Central config for the relay service
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load from .env if it exists (useful for local development)
load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_MAX_TOKENS = 900
DEFAULT_PUBLIC_DIR = Path("public")

# Provider identifier -> environment variable holding its credential
CREDENTIAL_ENV: Dict[str, str] = {
    "gemini": "GEMINI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}

DEFAULT_MODELS: Dict[str, str] = {
    "gemini": "gemini-1.5-flash",
    "anthropic": "claude-3-haiku-20240307",
    "openai": "gpt-4o-mini",
}


class Settings(BaseModel):
    """Process-wide configuration, read once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    credentials: Dict[str, Optional[str]] = {}
    models: Dict[str, str] = dict(DEFAULT_MODELS)
    port: int = DEFAULT_PORT
    app_pin: Optional[str] = None
    http_timeout_seconds: Optional[float] = None  # None: no client-side timeout
    public_dir: Path = DEFAULT_PUBLIC_DIR
    cors_origins: Tuple[str, ...] = ("*",)
    logging_level: str = "INFO"

    def credential(self, provider: str) -> Optional[str]:
        value = self.credentials.get(provider)
        if value is None:
            return None
        value = value.strip()
        return value or None

    def is_configured(self, provider: str) -> bool:
        return self.credential(provider) is not None

    def model_for(self, provider: str) -> str:
        return self.models.get(provider) or DEFAULT_MODELS[provider]


def _optional(env: Mapping[str, str], key: str) -> Optional[str]:
    value = env.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    port_raw = _optional(env, "PORT")
    try:
        port = int(port_raw) if port_raw else DEFAULT_PORT
    except ValueError as exc:
        raise ValueError(f"PORT must be an integer, got {port_raw!r}") from exc

    timeout_raw = _optional(env, "HTTP_TIMEOUT_SECONDS")
    try:
        timeout = float(timeout_raw) if timeout_raw else None
    except ValueError as exc:
        raise ValueError(f"HTTP_TIMEOUT_SECONDS must be a number, got {timeout_raw!r}") from exc

    origins = _optional(env, "CORS_ORIGINS") or "*"

    return Settings(
        credentials={name: _optional(env, key) for name, key in CREDENTIAL_ENV.items()},
        models={
            name: _optional(env, f"{name.upper()}_MODEL") or default
            for name, default in DEFAULT_MODELS.items()
        },
        port=port,
        app_pin=_optional(env, "APP_PIN"),
        http_timeout_seconds=timeout,
        public_dir=Path(_optional(env, "PUBLIC_DIR") or DEFAULT_PUBLIC_DIR),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        logging_level=(_optional(env, "LOGGING_LEVEL") or "INFO").upper(),
    )
