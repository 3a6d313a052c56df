"""
Point Queries

Stateless evaluations against a solved motion: where the object is and
how fast it moves at a given time, and when and how fast it passes a
given height. Height queries are multi-valued because a launched object
passes most heights twice.
"""

from __future__ import annotations
import math

from kinematics.state import ReferenceFrame
from kinematics.utils import non_negative_roots, velocity_at, displacement_at


def velocity_at_time(vi: float | None, a: float, query_time: float | None) -> float | None:
    """v(T) = vi + a*T, or None for a missing or negative T."""
    if query_time is None or vi is None or query_time < 0:
        return None
    return velocity_at(vi, a, query_time)


def height_at_time(
    vi: float | None,
    a: float,
    frame: ReferenceFrame,
    query_time: float | None
) -> float | None:
    """y(T) = initial_y + vi*T + a*T^2/2, or None for a missing or negative T."""
    if query_time is None or vi is None or query_time < 0:
        return None
    return frame.start_y + displacement_at(vi, a, query_time)


def times_at_height(
    vi: float | None,
    a: float,
    frame: ReferenceFrame,
    query_height: float | None,
    tolerance: float = 1e-9
) -> tuple[float, ...] | None:
    """
    Every non-negative time at which the object is at ``query_height``.

    Returns:
        Sorted tuple of zero, one or two times; None if no query was given
    """
    if query_height is None or vi is None:
        return None
    relative = query_height - frame.start_y
    return tuple(non_negative_roots(0.5 * a, vi, -relative, tolerance))


def _dedupe_velocities(velocities: list[float], decimals: int) -> tuple[float, ...]:
    seen = {}
    for v in velocities:
        key = round(v, decimals) + 0.0
        seen.setdefault(key, v + 0.0)
    return tuple(sorted(seen.values()))


def velocities_at_height(
    vi: float | None,
    a: float,
    frame: ReferenceFrame,
    query_height: float | None,
    h_max_relative: float | None = None,
    decimals: int = 2
) -> tuple[float, ...] | None:
    """
    Velocities the object has when passing ``query_height``.

    The speed follows from v^2 = vi^2 + 2*a*(H - initial_y). The sign is
    picked from a single decision table:

    =========================  ===========================================
    a == 0                     vi (uniform motion)
    upward launch (vi>0, a<0)  +|v|, and -|v| too if H is below the peak
    vi < 0                     -|v|
    vi == 0                    |v| with the sign of a
    vi > 0, a > 0              +|v|
    =========================  ===========================================

    Values equal at ``decimals`` places are reported once.

    Returns:
        Sorted tuple of velocities (empty if the height is unreachable);
        None if no query was given
    """
    if query_height is None or vi is None:
        return None

    relative = query_height - frame.start_y
    squared = vi * vi + 2 * a * relative
    if squared < 0:
        return ()

    speed = math.sqrt(squared)
    if a == 0:
        velocities = [vi]
    elif vi > 0 and a < 0:
        velocities = [speed]
        if h_max_relative is not None and 0 < h_max_relative and relative < h_max_relative:
            velocities.append(-speed)
    elif vi < 0:
        velocities = [-speed]
    elif vi == 0:
        velocities = [math.copysign(speed, a)]
    else:
        velocities = [speed]

    return _dedupe_velocities(velocities, decimals)
