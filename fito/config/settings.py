"""Engine configuration read from ``FITO_*`` and ``AITUNNEL_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

AI_PROVIDERS = ("backend", "chat")


def _load_env_file(path: str | None = None) -> None:
    """Seed os.environ from a dotenv file; variables already set take precedence."""

    env_path = Path(path or os.getenv("FITO_ENV_FILE", ".env"))
    if not env_path.is_file():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        entry = line.strip()
        if entry.startswith("export "):
            entry = entry[len("export "):]
        if not entry or entry.startswith("#") or "=" not in entry:
            continue
        key, value = entry.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip().strip("'\""))


@dataclass(frozen=True, slots=True)
class Settings:
    """Transport, quota and progress settings of the outfit engine."""

    environment: str = "dev"
    log_level: str = "INFO"

    backend_base_url: str = "https://fito-nine.vercel.app/api"
    backend_timeout: float = 30.0
    app_version: str = "1.0.0"
    bundle_id: str = "com.fito.app"

    ai_provider: str = "backend"
    aitunnel_api_key: str = ""
    aitunnel_base_url: str = "https://api.aitunnel.ru/v1"
    aitunnel_chat_model: str = "gpt-4o-mini"

    status_interval: float = 1.5


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        backend_base_url=os.getenv("FITO_BACKEND_URL", "https://fito-nine.vercel.app/api"),
        backend_timeout=float(os.getenv("FITO_BACKEND_TIMEOUT", "30")),
        app_version=os.getenv("FITO_APP_VERSION", "1.0.0"),
        bundle_id=os.getenv("FITO_BUNDLE_ID", "com.fito.app"),
        ai_provider=os.getenv("FITO_AI_PROVIDER", "backend").lower(),
        aitunnel_api_key=os.getenv("AITUNNEL_API_KEY", ""),
        aitunnel_base_url=os.getenv("AITUNNEL_BASE_URL", "https://api.aitunnel.ru/v1"),
        aitunnel_chat_model=os.getenv("AITUNNEL_CHAT_MODEL", "gpt-4o-mini"),
        status_interval=float(os.getenv("FITO_STATUS_INTERVAL", "1.5")),
    )


@lru_cache
def get_settings() -> Settings:
    """Settings are read once per process; tests clear the cache."""

    return _build_settings()
