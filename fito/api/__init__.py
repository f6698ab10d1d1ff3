"""Clients for the remote AI stylist services."""

from .backend_client import BackendSuggestionClient
from .chat_client import ChatSuggestionClient
from .errors import (
    NotAuthenticatedError,
    SuggestionError,
    SuggestionRequestError,
    UsageLimitReachedError,
)
from .schemas import ClothingItemDTO, OutfitSuggestion

__all__ = [
    "BackendSuggestionClient",
    "ChatSuggestionClient",
    "ClothingItemDTO",
    "NotAuthenticatedError",
    "OutfitSuggestion",
    "SuggestionError",
    "SuggestionRequestError",
    "UsageLimitReachedError",
]
