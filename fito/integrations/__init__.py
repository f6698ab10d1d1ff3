"""Integration check helpers."""

from .checks import (
    IntegrationCheckResult,
    check_backend,
    check_chat_model,
    run_all_checks,
)

__all__ = [
    "IntegrationCheckResult",
    "check_backend",
    "check_chat_model",
    "run_all_checks",
]
