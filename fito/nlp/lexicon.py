"""Keyword lexicon that turns a free-form occasion into style tags."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

# Insertion order is the order matched keywords are reported in.
KEYWORD_TAGS: dict[str, tuple[str, ...]] = {
    # activities
    "gym": ("Active", "Gym", "Casual"),
    "workout": ("Active", "Gym"),
    "exercise": ("Active", "Gym"),
    "run": ("Active", "Gym"),
    "sport": ("Active", "Gym"),
    # occasions
    "date": ("Date Night", "Formal", "Party"),
    "dinner": ("Date Night", "Formal", "Party"),
    "interview": ("Formal", "Business", "Work"),
    "meeting": ("Business", "Work", "Formal"),
    "work": ("Work", "Business"),
    "office": ("Work", "Business"),
    "wedding": ("Wedding", "Formal", "Party"),
    "party": ("Party", "Date Night"),
    "club": ("Party", "Date Night"),
    "beach": ("Beach", "Summer", "Casual"),
    "travel": ("Travel", "Casual", "Loungewear"),
    # seasons and weather
    "winter": ("Winter", "Wool", "Outerwear"),
    "cold": ("Winter", "Wool", "Outerwear"),
    "snow": ("Winter", "Wool"),
    "summer": ("Summer", "Linen", "Cotton"),
    "hot": ("Summer", "Linen"),
    "spring": ("Spring", "All-Season"),
    "fall": ("Fall", "All-Season"),
    "autumn": ("Fall", "All-Season"),
    "rain": ("All-Season", "Outerwear"),
    "rainy": ("All-Season", "Outerwear"),
    # styles
    "casual": ("Casual", "Loungewear"),
    "relaxed": ("Casual", "Loungewear"),
    "chill": ("Casual", "Loungewear"),
    "formal": ("Formal", "Business"),
    "fancy": ("Formal", "Party"),
    "elegant": ("Formal", "Party"),
    # colours
    "black": ("Black",),
    "white": ("White",),
    "blue": ("Blue", "Navy"),
    "red": ("Red",),
    "green": ("Green",),
    "pink": ("Pink",),
}

OUTERWEAR_KEYWORDS: frozenset[str] = frozenset(
    {"winter", "cold", "snow", "rain", "rainy", "jacket", "coat", "chilly", "freezing"},
)


@dataclass(frozen=True, slots=True)
class LexiconMatch:
    """Keywords recognised in a prompt and the union of their tags."""

    matched_keywords: tuple[str, ...]
    tags: frozenset[str]


class TagLexicon:
    """Substring-based keyword lookup; ``"gymnastics"`` matches ``"gym"``."""

    def __init__(
        self,
        keyword_tags: Mapping[str, Iterable[str]] | None = None,
        outerwear_keywords: Iterable[str] | None = None,
    ) -> None:
        source = KEYWORD_TAGS if keyword_tags is None else keyword_tags
        self._keyword_tags = {keyword.lower(): tuple(tags) for keyword, tags in source.items()}
        triggers = OUTERWEAR_KEYWORDS if outerwear_keywords is None else outerwear_keywords
        self._outerwear_keywords = frozenset(keyword.lower() for keyword in triggers)

    def tags_for(self, prompt: str) -> LexiconMatch:
        """Return matched keywords (table order) and the tags they imply."""

        lower = prompt.lower()
        matched: list[str] = []
        tags: set[str] = set()
        for keyword, keyword_tags in self._keyword_tags.items():
            if keyword in lower:
                matched.append(keyword)
                tags.update(keyword_tags)
        return LexiconMatch(matched_keywords=tuple(matched), tags=frozenset(tags))

    def needs_outerwear(self, prompt: str) -> bool:
        lower = prompt.lower()
        return any(keyword in lower for keyword in self._outerwear_keywords)
