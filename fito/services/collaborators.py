"""Contracts for the services the outfit orchestrator depends on."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Sequence

from fito.api.backend_client import BackendSuggestionClient
from fito.api.schemas import ClothingItemDTO, OutfitSuggestion

logger = logging.getLogger(__name__)


class SuggestionTransport(Protocol):
    """Remote stylist that picks item ids for a prompt."""

    async def generate_suggestion(
        self,
        prompt: str,
        available_items: Sequence[ClothingItemDTO],
        user_style: str | None = None,
    ) -> OutfitSuggestion: ...


class SessionProvider(Protocol):
    """Tells whether the current caller may use AI styling."""

    @property
    def ai_enabled(self) -> bool: ...


class QuotaProvider(Protocol):
    """Usage quota of the current caller."""

    @property
    def requests_remaining(self) -> int | None: ...

    @property
    def has_unlimited_entitlement(self) -> bool: ...

    async def track_generation(self) -> None: ...


@dataclass(slots=True)
class StaticSession:
    """Session whose AI flag is set by the caller."""

    ai_enabled: bool = False


@dataclass(slots=True)
class QuotaStatus:
    """In-memory quota; ``requests_remaining=None`` means not loaded yet."""

    requests_remaining: int | None = None
    has_unlimited_entitlement: bool = False

    async def track_generation(self) -> None:
        if self.requests_remaining is not None and not self.has_unlimited_entitlement:
            self.requests_remaining = max(self.requests_remaining - 1, 0)


class BackendQuota:
    """Quota mirrored from the backend subscription endpoint."""

    def __init__(self, client: BackendSuggestionClient) -> None:
        self._client = client
        self._remaining: int | None = None
        self._unlimited = False

    @property
    def requests_remaining(self) -> int | None:
        return self._remaining

    @property
    def has_unlimited_entitlement(self) -> bool:
        return self._unlimited

    async def refresh(self) -> None:
        """Reload the quota snapshot from the backend."""

        status = await self._client.fetch_subscription()
        self._remaining = status.requests_remaining
        self._unlimited = status.is_unlimited
        logger.debug("Quota refreshed: remaining=%s unlimited=%s", self._remaining, self._unlimited)

    async def track_generation(self) -> None:
        await self._client.track_usage("generate_outfit")
        if self._remaining is not None and not self._unlimited:
            self._remaining = max(self._remaining - 1, 0)
