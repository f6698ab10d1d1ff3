"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


outfit_generation_total = Counter(
    "outfit_generation_total",
    "Total number of finished outfit generation attempts.",
    ["path", "outcome"],
)

ai_fallback_total = Counter(
    "ai_fallback_total",
    "AI suggestion failures recovered by the local matcher.",
    ["reason"],
)
