"""Runtime configuration loaded from environment variables (.env)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_MODELS: dict[str, dict[str, str]] = {
    "openai": {
        "news": "gpt-4.1-mini",
        "analysis": "gpt-5-mini",
        "chat": "gpt-4.1-mini",
    },
    "anthropic": {
        "news": "claude-sonnet-4-20250514",
        "analysis": "claude-sonnet-4-20250514",
        "chat": "claude-sonnet-4-20250514",
    },
}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """Settings for the AI client, refresh timers and logging."""

    openai_api_key: str = ""
    anthropic_api_key: str = ""
    provider: str = ""
    model_overrides: dict[str, str] = field(default_factory=dict)
    news_refresh_seconds: float = 300.0
    matchup_refresh_seconds: float = 120.0
    max_retries: int = 3
    retry_initial_delay: float = 2.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        overrides = {}
        for role in ("news", "analysis", "chat"):
            value = os.getenv(f"COURTSIDE_{role.upper()}_MODEL", "").strip()
            if value:
                overrides[role] = value

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY", "").strip(),
            provider=os.getenv("COURTSIDE_PROVIDER", "").strip().lower(),
            model_overrides=overrides,
            news_refresh_seconds=_env_float("COURTSIDE_NEWS_REFRESH_SECONDS", 300.0),
            matchup_refresh_seconds=_env_float("COURTSIDE_MATCHUP_REFRESH_SECONDS", 120.0),
            max_retries=_env_int("COURTSIDE_MAX_RETRIES", 3),
            retry_initial_delay=_env_float("COURTSIDE_RETRY_INITIAL_DELAY", 2.0),
            log_level=os.getenv("COURTSIDE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.openai_api_key or self.anthropic_api_key)

    def model_for(self, role: str, provider: str) -> str:
        """Resolve the model name for a role ("news", "analysis", "chat")."""
        if role in self.model_overrides:
            return self.model_overrides[role]
        return DEFAULT_MODELS.get(provider, DEFAULT_MODELS["openai"])[role]
