from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import os


DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_USER_AGENT = "ClarityCompass/0.2 (+https://example.com)"
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:3001"


@dataclass(frozen=True)
class AppConfig:
    # LLM evaluator (optional)
    openai_api_key: str | None
    openai_model: str
    llm_timeout: float

    # Page fetch
    fetch_timeout: float
    user_agent: str

    # HTTP surface
    cors_origins: Tuple[str, ...]
    log_level: str

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openai_api_key)


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def load_config() -> AppConfig:
    openai_api_key = os.getenv("OPENAI_API_KEY", "").strip() or None
    openai_model = os.getenv("CLARITY_OPENAI_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL
    llm_timeout = _float_env("CLARITY_LLM_TIMEOUT", 20.0)

    fetch_timeout = _float_env("CLARITY_FETCH_TIMEOUT", 10.0)
    user_agent = os.getenv("CLARITY_USER_AGENT", DEFAULT_USER_AGENT).strip() or DEFAULT_USER_AGENT

    origins = os.getenv("CLARITY_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    cors_origins = tuple(o.strip() for o in origins.split(",") if o.strip())
    log_level = os.getenv("CLARITY_LOG_LEVEL", "INFO").strip().upper() or "INFO"

    return AppConfig(
        openai_api_key=openai_api_key,
        openai_model=openai_model,
        llm_timeout=llm_timeout,

        fetch_timeout=fetch_timeout,
        user_agent=user_agent,

        cors_origins=cors_origins,
        log_level=log_level,
    )


def get_config() -> AppConfig:
    """FastAPI dependency; re-reads the environment per request."""
    return load_config()
