"""Outfit generation services."""

from .collaborators import BackendQuota, QuotaStatus, StaticSession
from .orchestrator import (
    PROMPT_SUGGESTIONS,
    GenerationFailure,
    GenerationResult,
    GenerationState,
    OutfitDraft,
    OutfitOrchestrator,
)

__all__ = [
    "PROMPT_SUGGESTIONS",
    "BackendQuota",
    "GenerationFailure",
    "GenerationResult",
    "GenerationState",
    "OutfitDraft",
    "OutfitOrchestrator",
    "QuotaStatus",
    "StaticSession",
]
