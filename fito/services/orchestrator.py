"""Outfit generation pipeline: validation, AI suggestion and local fallback."""

from __future__ import annotations

import asyncio
import itertools
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Sequence

from fito.api.errors import NotAuthenticatedError, UsageLimitReachedError
from fito.api.schemas import ClothingItemDTO
from fito.config.settings import get_settings
from fito.metrics.prometheus_exporter import ai_fallback_total, outfit_generation_total
from fito.recommender.composer import OutfitComposer
from fito.recommender.reconciliation import reconcile
from fito.services.collaborators import QuotaProvider, SessionProvider, SuggestionTransport
from fito.wardrobe.models import ClothingItem, GeneratedOutfit

logger = logging.getLogger(__name__)

STATUS_MESSAGES: tuple[str, ...] = (
    "Analyzing your wardrobe...",
    "Considering color harmony...",
    "Checking style compatibility...",
    "Finding the perfect match...",
    "Almost there...",
)

PROMPT_SUGGESTIONS: tuple[str, ...] = (
    "Job interview today",
    "Casual coffee date",
    "Gym workout session",
    "Dinner party tonight",
    "Rainy day walk",
    "Beach day with friends",
    "Working from home",
    "Wedding guest outfit",
    "Winter shopping trip",
    "Summer festival",
)


class GenerationState(str, Enum):
    """Stages of a single generation attempt."""

    IDLE = "idle"
    VALIDATING = "validating"
    AI = "ai"
    LOCAL = "local"
    COMPLETED = "completed"
    EMPTY = "empty"
    FAILED = "failed"
    SUPERSEDED = "superseded"


class GenerationFailure(str, Enum):
    """Reasons an attempt ends without an outfit."""

    EMPTY_PROMPT = "empty_prompt"
    EMPTY_WARDROBE = "empty_wardrobe"
    QUOTA_EXCEEDED = "quota_exceeded"
    NOT_AUTHENTICATED = "not_authenticated"
    NOTHING_SUITABLE = "nothing_suitable"


FAILURE_MESSAGES: dict[GenerationFailure, str] = {
    GenerationFailure.EMPTY_PROMPT: "Please enter what you're doing today!",
    GenerationFailure.EMPTY_WARDROBE: "Your closet is empty! Add some clothes first.",
    GenerationFailure.QUOTA_EXCEEDED: "You've used all your free generations this month",
    GenerationFailure.NOT_AUTHENTICATED: "Please sign in to use AI styling",
    GenerationFailure.NOTHING_SUITABLE: "Nothing suitable for this occasion! Try adding more clothes to your closet",
}

AI_LIMIT_MESSAGE = "You've reached your monthly limit"


class OutfitGenerationError(RuntimeError):
    """Raised inside the pipeline when an attempt must stop."""

    def __init__(self, kind: GenerationFailure, message: str | None = None, *, upgrade_offer: bool = False) -> None:
        self.kind = kind
        self.upgrade_offer = upgrade_offer
        super().__init__(message or FAILURE_MESSAGES[kind])


@dataclass(frozen=True, slots=True)
class GenerationResult:
    """What a caller gets back from :meth:`OutfitOrchestrator.generate`."""

    state: GenerationState
    outfit: GeneratedOutfit | None = None
    reasoning: str | None = None
    style_tip: str | None = None
    error: GenerationFailure | None = None
    message: str | None = None
    upgrade_offer: bool = False
    path: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is GenerationState.COMPLETED


@dataclass(frozen=True, slots=True)
class OutfitDraft:
    """A valid outfit ready to be persisted by the caller."""

    items: list[ClothingItem]
    prompt_used: str
    reasoning: str | None
    style_tip: str | None
    occasion: str


Listener = Callable[["OutfitOrchestrator"], None]


class OutfitOrchestrator:
    """
    Runs one outfit generation at a time and exposes its progress.

    The remote stylist is only consulted when the session allows it. Sign-in
    and quota failures from it are final; anything else it raises is logged
    and the outfit is matched locally instead. Observable fields always
    reflect the most recently started request.
    """

    def __init__(
        self,
        *,
        session: SessionProvider,
        quota: QuotaProvider,
        transport: SuggestionTransport | None = None,
        composer: OutfitComposer | None = None,
        rng: random.Random | None = None,
        sleep: Callable[[float], Awaitable[None]] | None = None,
        status_interval: float | None = None,
    ) -> None:
        self._session = session
        self._quota = quota
        self._transport = transport
        self._composer = composer or OutfitComposer(rng=rng)
        self._sleep = sleep or asyncio.sleep
        self._status_interval = get_settings().status_interval if status_interval is None else status_interval
        self._request_ids = itertools.count(1)
        self._latest_request = 0
        self._listeners: list[Listener] = []
        self._ticker: asyncio.Task[None] | None = None

        self.prompt = ""
        self.state = GenerationState.IDLE
        self.is_generating = False
        self.current_status_message = STATUS_MESSAGES[0]
        self.last_outfit: GeneratedOutfit | None = None
        self._outfit_prompt = ""
        self.last_reasoning: str | None = None
        self.last_style_tip: str | None = None
        self.last_error: GenerationFailure | None = None
        self.last_error_message: str | None = None
        self.show_upgrade_offer = False

    # observation

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` on every observable change; returns an unsubscribe hook."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Outfit state listener %r failed.", listener)

    def _set_state(self, state: GenerationState) -> None:
        self.state = state
        self._notify()

    # public API

    async def generate(
        self,
        prompt: str,
        wardrobe: Sequence[ClothingItem],
        *,
        user_style: str | None = None,
    ) -> GenerationResult:
        """Produce an outfit for ``prompt`` from ``wardrobe``."""

        request_id = next(self._request_ids)
        self._latest_request = request_id
        self.prompt = prompt
        self._set_state(GenerationState.VALIDATING)

        try:
            self._validate(prompt, wardrobe)
        except OutfitGenerationError as exc:
            return self._fail(exc, path=None)

        self.is_generating = True
        self.last_error = None
        self.last_error_message = None
        self.last_reasoning = None
        self.last_style_tip = None
        self.show_upgrade_offer = False
        self.current_status_message = STATUS_MESSAGES[0]

        if self._session.ai_enabled and self._transport is not None:
            return await self._generate_with_ai(self._transport, request_id, prompt, wardrobe, user_style)
        return self._generate_locally(prompt, wardrobe)

    async def regenerate(self, wardrobe: Sequence[ClothingItem]) -> GenerationResult:
        """Run another attempt with the last prompt."""

        return await self.generate(self.prompt, wardrobe)

    def reset(self) -> None:
        self.prompt = ""
        self.last_outfit = None
        self._outfit_prompt = ""
        self.last_error = None
        self.last_error_message = None
        self.show_upgrade_offer = False
        self._set_state(GenerationState.IDLE)

    def outfit_draft(self) -> OutfitDraft | None:
        """Return the current outfit in a persistable shape, if it is valid."""

        outfit = self.last_outfit
        if outfit is None or not outfit.is_valid:
            return None
        return OutfitDraft(
            items=outfit.items,
            prompt_used=self._outfit_prompt,
            reasoning=self.last_reasoning,
            style_tip=self.last_style_tip,
            occasion=self._outfit_prompt,
        )

    # pipeline steps

    def _validate(self, prompt: str, wardrobe: Sequence[ClothingItem]) -> None:
        if not prompt.strip():
            raise OutfitGenerationError(GenerationFailure.EMPTY_PROMPT)
        if not wardrobe:
            raise OutfitGenerationError(GenerationFailure.EMPTY_WARDROBE)

        remaining = self._quota.requests_remaining
        if remaining is not None and remaining <= 0 and not self._quota.has_unlimited_entitlement:
            raise OutfitGenerationError(GenerationFailure.QUOTA_EXCEEDED, upgrade_offer=True)

    async def _generate_with_ai(
        self,
        transport: SuggestionTransport,
        request_id: int,
        prompt: str,
        wardrobe: Sequence[ClothingItem],
        user_style: str | None,
    ) -> GenerationResult:
        self._set_state(GenerationState.AI)
        # only the AI wait can suspend
        self._start_ticker(request_id)
        items = [ClothingItemDTO.from_item(item) for item in wardrobe]

        try:
            suggestion = await transport.generate_suggestion(prompt, items, user_style)
        except NotAuthenticatedError:
            if self._is_stale(request_id):
                return self._superseded(request_id)
            return self._fail(OutfitGenerationError(GenerationFailure.NOT_AUTHENTICATED), path="ai")
        except UsageLimitReachedError:
            if self._is_stale(request_id):
                return self._superseded(request_id)
            error = OutfitGenerationError(
                GenerationFailure.QUOTA_EXCEEDED,
                AI_LIMIT_MESSAGE,
                upgrade_offer=True,
            )
            return self._fail(error, path="ai")
        except Exception as exc:
            if self._is_stale(request_id):
                return self._superseded(request_id)
            reason = type(exc).__name__
            logger.warning("AI suggestion failed with %s: %s; using local matching.", reason, exc)
            ai_fallback_total.labels(reason=reason).inc()
            return self._generate_locally(prompt, wardrobe)

        await self._track_usage()
        if self._is_stale(request_id):
            return self._superseded(request_id)

        outfit = reconcile(suggestion, wardrobe)
        return self._finish(prompt, outfit, suggestion.reasoning, suggestion.style_tip, path="ai")

    def _generate_locally(self, prompt: str, wardrobe: Sequence[ClothingItem]) -> GenerationResult:
        self._set_state(GenerationState.LOCAL)
        outfit = self._composer.compose(prompt, wardrobe)
        if not outfit.is_valid:
            return self._finish(prompt, outfit, None, None, path="local")
        notes = self._composer.describe(prompt)
        return self._finish(prompt, outfit, notes.reasoning, notes.style_tip, path="local")

    async def _track_usage(self) -> None:
        try:
            await self._quota.track_generation()
        except Exception as exc:
            logger.warning("Failed to track outfit generation usage: %s", exc)

    # terminal transitions

    def _finish(
        self,
        prompt: str,
        outfit: GeneratedOutfit,
        reasoning: str | None,
        style_tip: str | None,
        *,
        path: str,
    ) -> GenerationResult:
        self.is_generating = False
        self._stop_ticker()
        self.last_outfit = outfit
        self._outfit_prompt = prompt
        self.last_reasoning = reasoning
        self.last_style_tip = style_tip

        if outfit.is_valid:
            state = GenerationState.COMPLETED
            error = None
            message = None
        else:
            state = GenerationState.EMPTY
            error = GenerationFailure.NOTHING_SUITABLE
            message = FAILURE_MESSAGES[error]
        self.last_error = error
        self.last_error_message = message
        outfit_generation_total.labels(path=path, outcome=state.value).inc()
        self._set_state(state)
        return GenerationResult(
            state=state,
            outfit=outfit,
            reasoning=reasoning,
            style_tip=style_tip,
            error=error,
            message=message,
            path=path,
        )

    def _fail(self, error: OutfitGenerationError, *, path: str | None) -> GenerationResult:
        self.is_generating = False
        self._stop_ticker()
        self.last_error = error.kind
        self.last_error_message = str(error)
        if error.upgrade_offer:
            self.show_upgrade_offer = True
        logger.info("Outfit generation failed: %s", error.kind.value)
        outfit_generation_total.labels(path=path or "none", outcome=GenerationState.FAILED.value).inc()
        self._set_state(GenerationState.FAILED)
        return GenerationResult(
            state=GenerationState.FAILED,
            error=error.kind,
            message=str(error),
            upgrade_offer=error.upgrade_offer,
            path=path,
        )

    def _is_stale(self, request_id: int) -> bool:
        return request_id != self._latest_request

    def _superseded(self, request_id: int) -> GenerationResult:
        logger.info("Discarding AI response for request %s; a newer request owns the result.", request_id)
        return GenerationResult(state=GenerationState.SUPERSEDED, path="ai")

    # progress messages

    def _start_ticker(self, request_id: int) -> None:
        self._stop_ticker()
        self._ticker = asyncio.get_running_loop().create_task(self._rotate_status(request_id))

    async def _rotate_status(self, request_id: int) -> None:
        index = 0
        while self.is_generating and not self._is_stale(request_id):
            await self._sleep(self._status_interval)
            if self.is_generating and not self._is_stale(request_id):
                index = (index + 1) % len(STATUS_MESSAGES)
                self.current_status_message = STATUS_MESSAGES[index]
                self._notify()

    def _stop_ticker(self) -> None:
        ticker, self._ticker = self._ticker, None
        if ticker is not None and not ticker.done():
            ticker.cancel()
