"""Ping the suggestion transports; exits non-zero when the configured one is down."""

from __future__ import annotations

import asyncio
import sys
from typing import Iterable

from fito.integrations import IntegrationCheckResult, run_all_checks
from fito.monitoring.logging import configure_logging


def _format_result(result: IntegrationCheckResult) -> str:
    status = "OK  " if result.success else "FAIL"
    marker = " (configured)" if result.active else ""
    return f"{status} {result.name}{marker}: {result.message}"


def print_results(results: Iterable[IntegrationCheckResult]) -> None:
    for result in results:
        print(_format_result(result))


def main() -> int:
    configure_logging()
    results = asyncio.run(run_all_checks())
    print_results(results)
    return 0 if all(result.success for result in results if result.active) else 1


if __name__ == "__main__":
    sys.exit(main())
