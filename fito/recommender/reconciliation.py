"""Map item ids picked by the remote stylist back onto the live wardrobe."""

from __future__ import annotations

import logging
from typing import Sequence

from fito.api.schemas import OutfitSuggestion
from fito.wardrobe.models import OUTFIT_SLOTS, ClothingCategory, ClothingItem, GeneratedOutfit

logger = logging.getLogger(__name__)


def reconcile(suggestion: OutfitSuggestion, wardrobe: Sequence[ClothingItem]) -> GeneratedOutfit:
    """
    Resolve suggested ids into concrete items.

    Ids are processed in order and the first item resolved for a category
    fills its slot. Accessories and ids that are no longer in the wardrobe
    are dropped.
    """

    by_id = {}
    for item in wardrobe:
        by_id.setdefault(item.id, item)

    slots: dict[ClothingCategory, ClothingItem] = {}
    for item_id in suggestion.selected_item_ids:
        item = by_id.get(item_id)
        if item is None:
            logger.info("Suggested item %s is not in the wardrobe; skipping.", item_id)
            continue
        if item.category not in OUTFIT_SLOTS:
            continue
        slots.setdefault(item.category, item)

    return GeneratedOutfit(
        top=slots.get(ClothingCategory.TOP),
        bottom=slots.get(ClothingCategory.BOTTOM),
        shoes=slots.get(ClothingCategory.SHOES),
        outerwear=slots.get(ClothingCategory.OUTERWEAR),
        matched_keywords=(),
    )
