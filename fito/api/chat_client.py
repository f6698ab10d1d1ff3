"""Outfit suggestions straight from an OpenAI-compatible chat model."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Sequence

import openai
from openai import AsyncOpenAI
from pydantic import ValidationError

from fito.api.errors import NotAuthenticatedError, SuggestionRequestError, UsageLimitReachedError
from fito.api.schemas import ClothingItemDTO, OutfitSuggestion
from fito.config.settings import Settings

logger = logging.getLogger(__name__)

_JSON_BLOCK = re.compile(r"\{.*\}", re.DOTALL)

_SECTIONS = (
    ("TOPS", "top"),
    ("BOTTOMS", "bottom"),
    ("SHOES", "shoes"),
    ("OUTERWEAR", "outerwear"),
)

_SLOT_FIELDS = ("top_id", "bottom_id", "shoes_id", "outerwear_id")


class ChatSuggestionClient:
    """Thin client that asks the chat model to pick one item per category."""

    def __init__(self, settings: Settings, client: AsyncOpenAI | None = None) -> None:
        if client is None and not settings.aitunnel_api_key:
            raise RuntimeError("AITunnel API key is not configured.")

        self._settings = settings
        self._client = client or AsyncOpenAI(
            api_key=settings.aitunnel_api_key,
            base_url=settings.aitunnel_base_url.rstrip("/"),
        )

    @staticmethod
    def build_prompt(
        prompt: str,
        available_items: Sequence[ClothingItemDTO],
        user_style: str | None = None,
    ) -> str:
        """Render the stylist instruction listing the wardrobe by category."""

        sections: list[str] = []
        for title, category in _SECTIONS:
            items = [item for item in available_items if item.category.lower() == category]
            if items:
                lines = [
                    f'  {index}. ID: "{item.id}" - Tags: [{", ".join(item.tags) or "none"}]'
                    for index, item in enumerate(items, start=1)
                ]
            else:
                lines = ["  (none available)"]
            sections.append(f"{title}:\n" + "\n".join(lines))

        style_line = f"\nThe user describes their style as: {user_style}\n" if user_style else ""
        return (
            f'You are a professional fashion stylist, named FITO. Select the best outfit for: "{prompt}"\n'
            f"{style_line}\n"
            "AVAILABLE ITEMS (select ONE from each category that has items):\n\n"
            + "\n\n".join(sections)
            + "\n\nSelect items that work well together for the occasion. "
            "If a category has no suitable items or is empty, set that ID to null.\n\n"
            "Respond ONLY with valid JSON (no markdown):\n"
            '{"top_id": "...", "bottom_id": "...", "shoes_id": "...", "outerwear_id": "...", '
            '"reasoning": "Brief explanation of why these items work together for the occasion", '
            '"style_tip": "One helpful styling tip for wearing this outfit"}'
        )

    async def generate_suggestion(
        self,
        prompt: str,
        available_items: Sequence[ClothingItemDTO],
        user_style: str | None = None,
    ) -> OutfitSuggestion:
        """Send the wardrobe to the chat model and parse its pick."""

        try:
            response = await self._client.chat.completions.create(
                model=self._settings.aitunnel_chat_model,
                messages=[{"role": "user", "content": self.build_prompt(prompt, available_items, user_style)}],
                response_format={"type": "json_object"},
            )
        except openai.AuthenticationError as exc:
            raise NotAuthenticatedError("Chat model rejected the API key.") from exc
        except openai.RateLimitError as exc:
            raise UsageLimitReachedError("Chat model rate limit reached.") from exc
        except openai.APIError as exc:
            raise SuggestionRequestError(f"Chat model request failed: {exc}") from exc

        if not response.choices:
            raise SuggestionRequestError("Chat model returned no choices.")
        content = response.choices[0].message.content or ""
        return self._parse_suggestion(content, available_items)

    def _parse_suggestion(self, content: str, available_items: Sequence[ClothingItemDTO]) -> OutfitSuggestion:
        match = _JSON_BLOCK.search(content)
        if not match:
            logger.warning("Chat model answer has no JSON object: %s", content)
            raise SuggestionRequestError("Couldn't understand AI response.")
        try:
            parsed: Any = json.loads(match.group(0))
        except json.JSONDecodeError as exc:
            raise SuggestionRequestError("Error processing AI response.") from exc
        if not isinstance(parsed, dict):
            raise SuggestionRequestError("Error processing AI response.")

        known_ids = {item.id for item in available_items}
        for field_name in _SLOT_FIELDS:
            value = parsed.get(field_name)
            parsed[field_name] = value if isinstance(value, str) and value in known_ids else None
        for text_field in ("reasoning", "style_tip"):
            if not parsed.get(text_field):
                parsed.pop(text_field, None)

        try:
            return OutfitSuggestion.model_validate(parsed)
        except ValidationError as exc:
            logger.error("Invalid suggestion payload after cleanup: %s", parsed)
            raise SuggestionRequestError("Error processing AI response.") from exc

    async def ping(self) -> bool:
        """Return ``True`` if the upstream service responds to a model listing call."""

        models = await self._client.models.list()
        return bool(models.data)

    async def close(self) -> None:
        """Release HTTP resources."""

        await self._client.close()
