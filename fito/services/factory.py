"""Wiring helpers that build the orchestrator from settings."""

from __future__ import annotations

import random

from fito.api.backend_client import BackendSuggestionClient
from fito.api.chat_client import ChatSuggestionClient
from fito.config.settings import AI_PROVIDERS, Settings
from fito.services.collaborators import QuotaProvider, SessionProvider, SuggestionTransport
from fito.services.orchestrator import OutfitOrchestrator


def build_transport(
    settings: Settings,
    *,
    user_id: str | None = None,
    auth_token: str | None = None,
) -> BackendSuggestionClient | ChatSuggestionClient:
    """Return the suggestion transport selected by ``settings.ai_provider``."""

    if settings.ai_provider == "chat":
        return ChatSuggestionClient(settings)
    if settings.ai_provider == "backend":
        return BackendSuggestionClient(settings, user_id=user_id, auth_token=auth_token)
    raise ValueError(f"Unknown AI provider {settings.ai_provider!r}; expected one of {AI_PROVIDERS}")


def build_orchestrator(
    settings: Settings,
    *,
    session: SessionProvider,
    quota: QuotaProvider,
    transport: SuggestionTransport | None,
    seed: int | None = None,
) -> OutfitOrchestrator:
    """Create an orchestrator honouring the configured status interval."""

    return OutfitOrchestrator(
        session=session,
        quota=quota,
        transport=transport,
        rng=random.Random(seed),
        status_interval=settings.status_interval,
    )
