"""Per-category best-match selection."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import AbstractSet, Sequence

from fito.wardrobe.models import ClothingItem


@dataclass(frozen=True, slots=True)
class CandidateScores:
    """Deterministic part of a match: every score, the best one and its ties."""

    scores: tuple[tuple[ClothingItem, int], ...]
    best_score: int
    tied: tuple[ClothingItem, ...]


def score_candidates(candidates: Sequence[ClothingItem], desired_tags: AbstractSet[str]) -> CandidateScores:
    """Score each candidate by the number of desired tags it carries."""

    scores = tuple((item, len(set(item.tags) & desired_tags)) for item in candidates)
    best_score = max((score for _, score in scores), default=0)
    tied = tuple(item for item, score in scores if score == best_score)
    return CandidateScores(scores=scores, best_score=best_score, tied=tied)


def best_match(
    candidates: Sequence[ClothingItem],
    desired_tags: AbstractSet[str],
    rng: random.Random,
) -> ClothingItem | None:
    """
    Pick one item for a slot.

    Ties at the top score are broken at random so repeated prompts vary. When
    nothing matches (or there is nothing to match) any candidate is returned:
    a slot is only left empty if the pool is empty.
    """

    if not candidates:
        return None

    if desired_tags:
        scored = score_candidates(candidates, desired_tags)
        if scored.best_score > 0:
            return rng.choice(scored.tied)

    return rng.choice(list(candidates))
