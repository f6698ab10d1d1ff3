"""Tests for mapping AI-picked ids back to wardrobe items."""

from __future__ import annotations

from fito.api.schemas import OutfitSuggestion
from fito.recommender.reconciliation import reconcile
from fito.wardrobe.models import ClothingItem


def test_resolves_ids_into_slots(full_wardrobe: list[ClothingItem]) -> None:
    suggestion = OutfitSuggestion(
        top_id="top-gym",
        bottom_id="bottom-jeans",
        shoes_id="shoes-sneakers",
        outerwear_id="coat-rain",
        reasoning="Sporty",
    )

    outfit = reconcile(suggestion, full_wardrobe)

    by_id = {item.id: item for item in full_wardrobe}
    assert outfit.top is by_id["top-gym"]
    assert outfit.bottom is by_id["bottom-jeans"]
    assert outfit.shoes is by_id["shoes-sneakers"]
    assert outfit.outerwear is by_id["coat-rain"]
    assert outfit.matched_keywords == ()
    assert outfit.is_valid


def test_unknown_and_accessory_ids_are_dropped(full_wardrobe: list[ClothingItem]) -> None:
    suggestion = OutfitSuggestion(top_id="deleted-item", bottom_id="scarf", shoes_id="shoes-loafers")

    outfit = reconcile(suggestion, full_wardrobe)

    assert outfit.top is None
    assert outfit.bottom is None
    assert outfit.shoes is not None and outfit.shoes.id == "shoes-loafers"


def test_first_item_per_category_wins(full_wardrobe: list[ClothingItem]) -> None:
    # both ids resolve to tops; the bottom slot must not receive a top
    suggestion = OutfitSuggestion(top_id="top-formal", bottom_id="top-gym")

    outfit = reconcile(suggestion, full_wardrobe)

    assert outfit.top is not None and outfit.top.id == "top-formal"
    assert outfit.bottom is None
    assert len(outfit.items) == 1


def test_slots_always_match_item_category(full_wardrobe: list[ClothingItem]) -> None:
    ids = [item.id for item in full_wardrobe]
    for offset in range(len(ids)):
        rotated = ids[offset:] + ids[:offset]
        suggestion = OutfitSuggestion(
            top_id=rotated[0],
            bottom_id=rotated[1],
            shoes_id=rotated[2],
            outerwear_id=rotated[3],
        )

        outfit = reconcile(suggestion, full_wardrobe)

        for slot in ("top", "bottom", "shoes", "outerwear"):
            item = getattr(outfit, slot)
            assert item is None or item.category.value == slot
        assert len({item.id for item in outfit.items}) == len(outfit.items)


def test_outerwear_only_is_not_valid(full_wardrobe: list[ClothingItem]) -> None:
    outfit = reconcile(OutfitSuggestion(outerwear_id="coat-rain"), full_wardrobe)

    assert outfit.items == [outfit.outerwear]
    assert not outfit.is_valid
