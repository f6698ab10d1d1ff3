"""Async client for the Fito backend that proxies outfit generation."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import httpx
from pydantic import ValidationError

from fito.api.errors import NotAuthenticatedError, SuggestionRequestError, UsageLimitReachedError
from fito.api.schemas import ClothingItemDTO, GenerateOutfitResponse, OutfitSuggestion, SubscriptionStatus
from fito.config.settings import Settings

logger = logging.getLogger(__name__)


class BackendSuggestionClient:
    """Talks to the backend that holds the model credentials and usage counters."""

    def __init__(
        self,
        settings: Settings,
        *,
        user_id: str | None,
        auth_token: str | None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._user_id = user_id
        self._auth_token = auth_token
        self._client = httpx.AsyncClient(
            base_url=settings.backend_base_url.rstrip("/"),
            timeout=settings.backend_timeout,
            headers={
                "Content-Type": "application/json",
                "X-App-Version": settings.app_version,
                "X-Bundle-Id": settings.bundle_id,
            },
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    def _auth_headers(self) -> dict[str, str]:
        if not self._auth_token:
            raise NotAuthenticatedError("No auth token available for the Fito backend.")
        return {"Authorization": f"Bearer {self._auth_token}"}

    async def _request_json(
        self,
        method: str,
        endpoint: str,
        *,
        json_body: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        headers = self._auth_headers()
        try:
            response = await self._client.request(method, endpoint, json=json_body, headers=headers)
        except httpx.TimeoutException as exc:
            raise SuggestionRequestError("Timed out waiting for the Fito backend.") from exc
        except httpx.TransportError as exc:
            raise SuggestionRequestError(f"Could not reach the Fito backend: {exc}") from exc

        status = response.status_code
        if status == 401:
            raise NotAuthenticatedError("Fito backend rejected the auth token.")
        if status in (402, 429):
            raise UsageLimitReachedError("Outfit generation limit reached.")
        if status >= 500:
            raise SuggestionRequestError(f"Fito backend error {status}.", status_code=status)
        if not response.is_success:
            message = self._error_message(response) or f"Unexpected status {status}."
            raise SuggestionRequestError(message, status_code=status)

        if not response.content:
            return {}
        try:
            payload = response.json()
        except ValueError as exc:
            raise SuggestionRequestError("Fito backend returned invalid JSON.", status_code=status) from exc
        if not isinstance(payload, dict):
            raise SuggestionRequestError("Fito backend returned an unexpected payload.", status_code=status)
        return payload

    @staticmethod
    def _error_message(response: httpx.Response) -> str | None:
        try:
            payload = response.json()
        except ValueError:
            return None
        if isinstance(payload, dict):
            return payload.get("message") or payload.get("error")
        return None

    async def generate_suggestion(
        self,
        prompt: str,
        available_items: Sequence[ClothingItemDTO],
        user_style: str | None = None,
    ) -> OutfitSuggestion:
        """Ask the backend to pick an outfit for ``prompt``."""

        if not self._user_id:
            raise NotAuthenticatedError("No signed-in user for AI styling.")

        body: dict[str, Any] = {
            "userId": self._user_id,
            "prompt": prompt,
            "clothingItems": [item.model_dump() for item in available_items],
        }
        if user_style:
            body["userStyle"] = user_style

        payload = await self._request_json("POST", "/generate-outfit", json_body=body)
        try:
            response = GenerateOutfitResponse.model_validate(payload)
        except ValidationError as exc:
            logger.error("Invalid generate-outfit payload: %s", payload)
            raise SuggestionRequestError("Fito backend returned a malformed outfit.") from exc

        if response.notSuitable:
            raise SuggestionRequestError(response.reasoning or "Missing essential clothing items")
        return response.to_suggestion()

    async def fetch_subscription(self) -> SubscriptionStatus:
        """Return the caller's current quota snapshot."""

        payload = await self._request_json("GET", "/subscription")
        try:
            return SubscriptionStatus.model_validate(payload)
        except ValidationError as exc:
            raise SuggestionRequestError("Fito backend returned a malformed subscription.") from exc

    async def track_usage(self, action: str = "generate_outfit") -> None:
        """Record one usage event against the caller's quota."""

        await self._request_json(
            "POST",
            "/usage/track",
            json_body={"userId": self._user_id, "action": action},
        )

    async def ping(self) -> bool:
        """Return ``True`` if the backend answers the public suggestions endpoint."""

        response = await self._client.get("/suggestions")
        return response.status_code == 200
