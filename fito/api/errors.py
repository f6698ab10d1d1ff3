"""Errors raised by the AI suggestion transports."""

from __future__ import annotations


class SuggestionError(RuntimeError):
    """Base class for suggestion transport failures."""


class NotAuthenticatedError(SuggestionError):
    """The caller has no valid session for AI styling."""


class UsageLimitReachedError(SuggestionError):
    """The caller's AI generation quota is exhausted."""


class SuggestionRequestError(SuggestionError):
    """Raised when the suggestion service fails or answers with garbage."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
