"""Shared wardrobe fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from fito.config.settings import get_settings
from fito.wardrobe.models import ClothingItem


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def interview_wardrobe() -> list[ClothingItem]:
    return [
        ClothingItem.create("top-formal", "Top", ["Formal", "Business"]),
        ClothingItem.create("bottom-formal", "Bottom", ["Formal"]),
        ClothingItem.create("shoes-casual", "Shoes", ["Casual"]),
    ]


@pytest.fixture
def full_wardrobe() -> list[ClothingItem]:
    return [
        ClothingItem.create("top-formal", "top", ["Formal", "Business"]),
        ClothingItem.create("top-gym", "top", ["Active", "Gym"]),
        ClothingItem.create("bottom-formal", "bottom", ["Formal"]),
        ClothingItem.create("bottom-jeans", "bottom", ["Casual", "Denim"]),
        ClothingItem.create("shoes-loafers", "shoes", ["Formal", "Leather"]),
        ClothingItem.create("shoes-sneakers", "shoes", ["Casual", "Gym"]),
        ClothingItem.create("coat-rain", "outerwear", ["All-Season", "Outerwear"]),
        ClothingItem.create("scarf", "accessory", ["Winter", "Wool"]),
    ]
