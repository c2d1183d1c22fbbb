"""Formatting helpers for displaying measurements."""

from __future__ import annotations

from collections.abc import Mapping
import math

from sky_height.constants import DEFAULT_DISPLAY_PRECISION
from sky_height.core.types import CalculationResult

DEFAULT_LABELS: Mapping[str, str] = {
    "current": "Current height:",
    "tallest": "Tallest:",
    "shortest": "Shortest:",
}


def format_value(value: float, precision: int = DEFAULT_DISPLAY_PRECISION) -> str:
    """Fixed-point text, or a ``?.????`` placeholder for NaN and infinities."""
    if not math.isfinite(value):
        return "?." + "?" * precision if precision else "?"
    return f"{value:.{precision}f}"


def summary_text(
    result: CalculationResult,
    *,
    labels: Mapping[str, str] | None = None,
    precision: int = DEFAULT_DISPLAY_PRECISION,
) -> str:
    """Three-line copyable summary: current, tallest, shortest."""
    names = {**DEFAULT_LABELS, **(labels or {})}
    return "\n".join(
        f"{names[field]} {format_value(getattr(result, field), precision)}"
        for field in ("current", "tallest", "shortest")
    )
