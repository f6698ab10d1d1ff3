"""Tests for the Fito backend transport."""

from __future__ import annotations

import json
import random
from typing import Callable

import httpx
import pytest

from fito.api.backend_client import BackendSuggestionClient
from fito.api.errors import NotAuthenticatedError, SuggestionRequestError, UsageLimitReachedError
from fito.api.schemas import ClothingItemDTO, SubscriptionStatus
from fito.config.settings import Settings
from fito.services.collaborators import BackendQuota, StaticSession
from fito.services.orchestrator import GenerationState, OutfitOrchestrator
from fito.wardrobe.models import ClothingItem

SETTINGS = Settings(backend_base_url="https://fito.test/api", app_version="2.0.0", bundle_id="com.fito.test")

ITEMS = [
    ClothingItemDTO(id="t1", category="top", tags=["Formal"]),
    ClothingItemDTO(id="b1", category="bottom", tags=[]),
]


def _client(handler: Callable[[httpx.Request], httpx.Response], token: str | None = "token-1") -> BackendSuggestionClient:
    return BackendSuggestionClient(
        SETTINGS,
        user_id="user-1",
        auth_token=token,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_generate_suggestion_posts_wardrobe() -> None:
    captured: dict[str, httpx.Request] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(
            200,
            json={"top_id": "t1", "bottom_id": "b1", "shoes_id": None, "reasoning": "Crisp.", "style_tip": "Tuck in."},
        )

    client = _client(handler)
    try:
        suggestion = await client.generate_suggestion("Job interview", ITEMS)
    finally:
        await client.close()

    request = captured["request"]
    body = json.loads(request.content)
    assert request.method == "POST"
    assert request.url == "https://fito.test/api/generate-outfit"
    assert request.headers["Authorization"] == "Bearer token-1"
    assert request.headers["X-App-Version"] == "2.0.0"
    assert request.headers["X-Bundle-Id"] == "com.fito.test"
    assert body["userId"] == "user-1"
    assert body["prompt"] == "Job interview"
    assert body["clothingItems"][0] == {"id": "t1", "category": "top", "tags": ["Formal"]}
    assert suggestion.selected_item_ids == ["t1", "b1"]
    assert suggestion.reasoning == "Crisp."
    assert suggestion.style_tip == "Tuck in."


@pytest.mark.asyncio
async def test_missing_texts_use_defaults() -> None:
    client = _client(lambda request: httpx.Response(200, json={"top_id": "t1"}))
    try:
        suggestion = await client.generate_suggestion("Brunch", ITEMS)
    finally:
        await client.close()

    assert suggestion.reasoning == "Here's a great outfit for you!"
    assert suggestion.style_tip == "Style it your way!"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "error_cls"),
    [
        (401, NotAuthenticatedError),
        (402, UsageLimitReachedError),
        (429, UsageLimitReachedError),
        (500, SuggestionRequestError),
        (503, SuggestionRequestError),
        (418, SuggestionRequestError),
    ],
)
async def test_status_codes_map_to_errors(status: int, error_cls: type[Exception]) -> None:
    client = _client(lambda request: httpx.Response(status, json={"message": "nope"}))
    try:
        with pytest.raises(error_cls):
            await client.generate_suggestion("Brunch", ITEMS)
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_server_message_is_kept_for_unexpected_status() -> None:
    client = _client(lambda request: httpx.Response(400, json={"message": "Prompt too long"}))
    try:
        with pytest.raises(SuggestionRequestError, match="Prompt too long") as info:
            await client.generate_suggestion("Brunch", ITEMS)
    finally:
        await client.close()

    assert info.value.status_code == 400


@pytest.mark.asyncio
async def test_not_suitable_response_is_a_request_error() -> None:
    payload = {"notSuitable": True, "reasoning": "No shoes in closet", "missingCategories": ["shoes"]}
    client = _client(lambda request: httpx.Response(200, json=payload))
    try:
        with pytest.raises(SuggestionRequestError, match="No shoes in closet"):
            await client.generate_suggestion("Brunch", ITEMS)
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_timeout_is_a_request_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    client = _client(handler)
    try:
        with pytest.raises(SuggestionRequestError):
            await client.generate_suggestion("Brunch", ITEMS)
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_invalid_json_is_a_request_error() -> None:
    client = _client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))
    try:
        with pytest.raises(SuggestionRequestError):
            await client.generate_suggestion("Brunch", ITEMS)
    finally:
        await client.close()


@pytest.mark.asyncio
async def test_missing_token_is_not_authenticated() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    client = _client(handler, token=None)
    try:
        with pytest.raises(NotAuthenticatedError):
            await client.generate_suggestion("Brunch", ITEMS)
    finally:
        await client.close()

    assert calls == []


@pytest.mark.asyncio
async def test_subscription_and_usage_tracking() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.url.path.endswith("/subscription"):
            return httpx.Response(
                200,
                json={
                    "tier": "PREMIUM",
                    "status": "ACTIVE",
                    "monthlyLimit": "Unlimited",
                    "monthlyUsed": 3,
                    "features": ["unlimited_outfits"],
                    "currentPeriodEnd": "2026-11-01T00:00:00.000Z",
                    "cancelAtPeriodEnd": False,
                },
            )
        return httpx.Response(200, json={"success": True})

    client = _client(handler)
    try:
        status = await client.fetch_subscription()
        await client.track_usage()
    finally:
        await client.close()

    assert status.is_unlimited
    assert status.requests_remaining == 97
    assert requests[0].method == "GET"
    assert requests[1].url.path == "/api/usage/track"
    assert json.loads(requests[1].content) == {"userId": "user-1", "action": "generate_outfit"}


@pytest.mark.parametrize(
    ("payload", "remaining", "unlimited"),
    [
        ({"tier": "FREE", "status": "ACTIVE", "monthlyLimit": 10, "monthlyUsed": 0}, 10, False),
        ({"tier": "FREE", "status": "ACTIVE", "monthlyLimit": 10, "monthlyUsed": 12}, 0, False),
        ({"tier": "PREMIUM", "status": "ACTIVE", "monthlyLimit": "Unlimited", "monthlyUsed": 100}, 0, True),
        ({"tier": "PREMIUM", "status": "CANCELED", "monthlyLimit": "Unlimited", "monthlyUsed": 5}, 95, False),
    ],
)
def test_subscription_status_derives_quota(payload: dict, remaining: int, unlimited: bool) -> None:
    status = SubscriptionStatus.model_validate(payload)

    assert status.requests_remaining == remaining
    assert status.is_unlimited is unlimited


@pytest.mark.asyncio
async def test_backend_quota_mirrors_subscription() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/subscription"):
            return httpx.Response(200, json={"tier": "FREE", "status": "ACTIVE", "monthlyLimit": 10, "monthlyUsed": 8})
        return httpx.Response(200, json={})

    client = _client(handler)
    quota = BackendQuota(client)
    try:
        assert quota.requests_remaining is None
        await quota.refresh()
        await quota.track_generation()
    finally:
        await client.close()

    assert quota.requests_remaining == 1
    assert not quota.has_unlimited_entitlement


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"tier": "FREE", "status": "ACTIVE", "monthlyLimit": 10, "monthlyUsed": 0, "features": []},
        {"tier": "PREMIUM", "status": "ACTIVE", "monthlyLimit": "Unlimited", "monthlyUsed": 3, "features": []},
    ],
)
async def test_backend_quota_lets_subscribed_users_generate(payload: dict) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    client = _client(handler)
    quota = BackendQuota(client)
    orchestrator = OutfitOrchestrator(session=StaticSession(), quota=quota, rng=random.Random(1))
    try:
        await quota.refresh()
        result = await orchestrator.generate("Job interview today", [ClothingItem.create("t1", "top", ["Formal"])])
    finally:
        await client.close()

    assert result.state is GenerationState.COMPLETED
    assert not orchestrator.show_upgrade_offer
