"""Local, keyword-driven outfit composition used when AI is not involved."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Sequence

from fito.nlp.lexicon import TagLexicon
from fito.recommender import commentary
from fito.recommender.matcher import best_match
from fito.wardrobe.models import ClothingCategory, ClothingItem, GeneratedOutfit

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OutfitNotes:
    """Stylist comment and tip delivered next to an outfit."""

    reasoning: str
    style_tip: str


class OutfitComposer:
    """Assembles an outfit slot by slot from the tags implied by a prompt."""

    def __init__(self, lexicon: TagLexicon | None = None, rng: random.Random | None = None) -> None:
        self._lexicon = lexicon or TagLexicon()
        self._rng = rng or random.Random()

    def compose(self, prompt: str, wardrobe: Sequence[ClothingItem]) -> GeneratedOutfit:
        """Pick top, bottom, shoes and, for cold or wet occasions, outerwear."""

        match = self._lexicon.tags_for(prompt)
        needs_outerwear = self._lexicon.needs_outerwear(prompt)

        # accessories never take part in composition
        pools: dict[ClothingCategory, list[ClothingItem]] = {
            ClothingCategory.TOP: [],
            ClothingCategory.BOTTOM: [],
            ClothingCategory.SHOES: [],
            ClothingCategory.OUTERWEAR: [],
        }
        for item in wardrobe:
            if item.category in pools:
                pools[item.category].append(item)

        top = best_match(pools[ClothingCategory.TOP], match.tags, self._rng)
        bottom = best_match(pools[ClothingCategory.BOTTOM], match.tags, self._rng)
        shoes = best_match(pools[ClothingCategory.SHOES], match.tags, self._rng)
        outerwear = (
            best_match(pools[ClothingCategory.OUTERWEAR], match.tags, self._rng) if needs_outerwear else None
        )

        logger.debug(
            "Composed outfit for keywords=%s tags=%s outerwear=%s",
            match.matched_keywords,
            sorted(match.tags),
            needs_outerwear,
        )
        return GeneratedOutfit(
            top=top,
            bottom=bottom,
            shoes=shoes,
            outerwear=outerwear,
            matched_keywords=match.matched_keywords,
        )

    def describe(self, prompt: str) -> OutfitNotes:
        """Pick a comment and a tip for a locally composed outfit."""

        return OutfitNotes(
            reasoning=commentary.outfit_comment(prompt, self._rng),
            style_tip=commentary.style_tip(prompt, self._rng),
        )
