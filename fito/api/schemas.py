"""Transport models exchanged with the AI suggestion services."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from fito.wardrobe.models import ClothingItem


class ClothingItemDTO(BaseModel):
    """Wardrobe item as offered to the remote stylist."""

    id: str
    category: str
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_item(cls, item: ClothingItem) -> ClothingItemDTO:
        return cls(id=item.id, category=item.category.value, tags=list(item.tags))


class OutfitSuggestion(BaseModel):
    """Item ids picked by the remote stylist plus its explanation."""

    model_config = ConfigDict(populate_by_name=True)

    top_id: str | None = None
    bottom_id: str | None = None
    shoes_id: str | None = None
    outerwear_id: str | None = None
    reasoning: str = "Here's a great outfit for you!"
    style_tip: str = "Style it your way!"
    match_score: int | None = Field(default=None, alias="matchScore")

    @property
    def selected_item_ids(self) -> list[str]:
        return [
            item_id
            for item_id in (self.top_id, self.bottom_id, self.shoes_id, self.outerwear_id)
            if item_id
        ]


class GenerateOutfitResponse(BaseModel):
    """Raw ``/generate-outfit`` payload returned by the Fito backend."""

    top_id: str | None = None
    bottom_id: str | None = None
    shoes_id: str | None = None
    outerwear_id: str | None = None
    reasoning: str | None = None
    style_tip: str | None = None
    notSuitable: bool | None = None
    missingCategories: list[str] | None = None

    def to_suggestion(self) -> OutfitSuggestion:
        payload = {
            "top_id": self.top_id,
            "bottom_id": self.bottom_id,
            "shoes_id": self.shoes_id,
            "outerwear_id": self.outerwear_id,
        }
        if self.reasoning:
            payload["reasoning"] = self.reasoning
        if self.style_tip:
            payload["style_tip"] = self.style_tip
        return OutfitSuggestion.model_validate(payload)


UNLIMITED_MONTHLY_CAP = 100


class SubscriptionStatus(BaseModel):
    """Quota snapshot served by ``GET /subscription``."""

    tier: str = "FREE"
    status: str = "ACTIVE"
    monthlyLimit: int | str = 0
    monthlyUsed: int = 0
    features: list[str] = Field(default_factory=list)

    @property
    def is_active(self) -> bool:
        return self.status.upper() == "ACTIVE"

    @property
    def has_unlimited_limit(self) -> bool:
        return isinstance(self.monthlyLimit, str) and self.monthlyLimit.strip().lower() == "unlimited"

    @property
    def requests_remaining(self) -> int:
        """Generations left this month; "Unlimited" plans are capped."""

        if isinstance(self.monthlyLimit, int):
            return max(0, self.monthlyLimit - self.monthlyUsed)
        if self.has_unlimited_limit:
            return max(0, UNLIMITED_MONTHLY_CAP - self.monthlyUsed)
        return 0

    @property
    def is_unlimited(self) -> bool:
        return self.has_unlimited_limit and self.is_active
