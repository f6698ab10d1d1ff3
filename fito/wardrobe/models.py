"""Wardrobe entities shared by the matching and orchestration layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class ClothingCategory(str, Enum):
    """Wardrobe categories an item can belong to."""

    TOP = "top"
    BOTTOM = "bottom"
    SHOES = "shoes"
    OUTERWEAR = "outerwear"
    ACCESSORY = "accessory"

    @classmethod
    def parse(cls, raw_value: str | ClothingCategory) -> ClothingCategory:
        """Accept both ``"Top"`` style display names and lower-case values."""

        if isinstance(raw_value, ClothingCategory):
            return raw_value
        return cls(raw_value.strip().lower())


OUTFIT_SLOTS: tuple[ClothingCategory, ...] = (
    ClothingCategory.TOP,
    ClothingCategory.BOTTOM,
    ClothingCategory.SHOES,
    ClothingCategory.OUTERWEAR,
)


@dataclass(frozen=True, slots=True)
class ClothingItem:
    """A single garment owned by the wardrobe store."""

    id: str
    category: ClothingCategory
    tags: tuple[str, ...] = ()
    image_path: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "category", ClothingCategory.parse(self.category))
        object.__setattr__(self, "tags", tuple(self.tags))

    @classmethod
    def create(
        cls,
        item_id: str,
        category: str | ClothingCategory,
        tags: Iterable[str] = (),
        image_path: str | None = None,
    ) -> ClothingItem:
        return cls(
            id=str(item_id),
            category=ClothingCategory.parse(category),
            tags=tuple(tags),
            image_path=image_path,
        )


@dataclass(frozen=True, slots=True)
class GeneratedOutfit:
    """Result of one generation attempt; superseded, never mutated."""

    top: ClothingItem | None = None
    bottom: ClothingItem | None = None
    shoes: ClothingItem | None = None
    outerwear: ClothingItem | None = None
    matched_keywords: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for slot in OUTFIT_SLOTS:
            item = getattr(self, slot.value)
            if item is not None and item.category is not slot:
                raise ValueError(
                    f"Item {item.id} of category {item.category.value} cannot fill the {slot.value} slot.",
                )

    @property
    def items(self) -> list[ClothingItem]:
        """Filled slots in slot order."""

        return [item for item in (self.top, self.bottom, self.shoes, self.outerwear) if item is not None]

    @property
    def is_valid(self) -> bool:
        # outerwear alone is not an outfit
        return self.top is not None or self.bottom is not None or self.shoes is not None
