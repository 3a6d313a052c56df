"""
Display Formatting

Turns raw solver output into the short strings shown by the CLI, the web
demo and the renderer overlay. Raw values are never modified here.
"""

from __future__ import annotations
from typing import Iterable


PLACEHOLDER = "---"
OVERLAY_PLACEHOLDER = "N/A"


def format_value(value: float | None, decimals: int = 2) -> str:
    """Fixed-decimal rendering, or the placeholder for unknown values."""
    if value is None:
        return PLACEHOLDER
    text = f"{value:.{decimals}f}"
    # -0.00 reads as noise
    if float(text) == 0.0:
        text = f"{0.0:.{decimals}f}"
    return text


def format_compact(value: float | None, decimals: int = 2) -> str:
    """
    Overlay style: drop a trailing run of zero decimals.

    >>> format_compact(12.0)
    '12'
    >>> format_compact(4.081)
    '4.08'
    """
    if value is None:
        return OVERLAY_PLACEHOLDER
    text = format_value(value, decimals)
    zeros = "." + "0" * decimals
    if decimals > 0 and text.endswith(zeros):
        return text[:-len(zeros)]
    return text


def _join(values: Iterable[float] | None, unit: str, decimals: int) -> str:
    if not values:
        return PLACEHOLDER
    return " or ".join(f"{format_value(v, decimals)}{unit}" for v in values)


def format_times(times: Iterable[float] | None, decimals: int = 2) -> str:
    """Render the crossing times of a height query, e.g. ``1.43s or 2.65s``."""
    return _join(times, "s", decimals)


def format_velocities(velocities: Iterable[float] | None, decimals: int = 2) -> str:
    """Render the velocities of a height query, e.g. ``-8.85m/s or 8.85m/s``."""
    return _join(velocities, "m/s", decimals)


def result_lines(result, decimals: int = 2) -> list[str]:
    """
    Labelled result lines in overlay order.

    Args:
        result: A MotionResult
        decimals: Number of decimals per value

    Returns:
        One string per displayed quantity
    """
    def c(value):
        return format_compact(value, decimals)

    return [
        f"Vi: {c(result.vi)} m/s",
        f"Vf: {c(result.vf)} m/s",
        f"h: {c(result.h)} m",
        f"t: {c(result.t)} s",
        f"g: {c(result.g)} m/s²",
        f"a: {c(result.a)} m/s²",
        f"t_max: {c(result.t_max)} s",
        f"h_max: {c(result.h_max)} m",
        f"t_flight: {c(result.t_flight)} s",
        f"Total Dist: {c(result.total_distance)} m",
        f"Query V(tq): {c(result.v_at_query_time)} m/s",
        f"Query H(tq): {c(result.h_at_query_time)} m",
        f"Query T(hq): {format_times(result.times_at_query_height, decimals)}",
        f"Query V(hq): {format_velocities(result.velocities_at_query_height, decimals)}",
    ]
