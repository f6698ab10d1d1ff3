"""Connectivity checks for the remote AI stylist services."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

from fito.api.backend_client import BackendSuggestionClient
from fito.api.chat_client import ChatSuggestionClient
from fito.config.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IntegrationCheckResult:
    """Outcome of pinging one suggestion transport."""

    name: str
    provider: str
    success: bool
    message: str
    active: bool = False


async def _run_check(
    name: str,
    provider: str,
    ping: Callable[[], Awaitable[bool]],
) -> IntegrationCheckResult:
    active = get_settings().ai_provider == provider
    try:
        reachable = await ping()
    except Exception as exc:
        reason = type(exc).__name__
        logger.warning("%s check failed with %s: %s", name, reason, exc)
        return IntegrationCheckResult(name, provider, False, f"{reason}: {exc}", active)

    if reachable:
        return IntegrationCheckResult(name, provider, True, "reachable", active)
    return IntegrationCheckResult(name, provider, False, "responded with a non-success status", active)


async def check_backend() -> IntegrationCheckResult:
    """Ping the Fito backend suggestion service."""

    async def _ping() -> bool:
        client = BackendSuggestionClient(get_settings(), user_id=None, auth_token=None)
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check("Fito backend", "backend", _ping)


async def check_chat_model() -> IntegrationCheckResult:
    """Ping the OpenAI-compatible chat endpoint."""

    async def _ping() -> bool:
        client = ChatSuggestionClient(get_settings())
        try:
            return await client.ping()
        finally:
            await client.close()

    return await _run_check("Chat model", "chat", _ping)


async def run_all_checks() -> list[IntegrationCheckResult]:
    """Ping every transport concurrently, the configured one included."""

    return list(await asyncio.gather(check_backend(), check_chat_model()))
