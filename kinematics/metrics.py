"""
Motion Metrics

Secondary quantities of a solved motion: the peak of an upward launch,
the time until the object returns to the ground, and the total path
length, which differs from the net displacement once the object has
turned around at the peak.
"""

from __future__ import annotations
from typing import NamedTuple

from kinematics.state import ReferenceFrame
from kinematics.utils import non_negative_roots, displacement_at


class PeakFlightMetrics(NamedTuple):
    """
    Attributes:
        t_max: Time to reach the peak (None without an upward launch)
        h_max_relative: Peak displacement above the start
        h_max_absolute: Highest point above the ground, never below 0
        t_flight: Time at which the height returns to the ground
    """
    t_max: float | None
    h_max_relative: float | None
    h_max_absolute: float | None
    t_flight: float | None


def peak(vi: float, a: float) -> tuple[float | None, float | None]:
    """
    Time and displacement of the peak, defined only when the object moves
    against the acceleration initially (vi > 0, a < 0).
    """
    if not (vi > 0 and a < 0):
        return None, None
    t_max = -vi / a
    h_max_relative = displacement_at(vi, a, t_max)
    if t_max < 0 or h_max_relative < 0:
        return None, None
    return t_max, h_max_relative


def flight_time(
    vi: float,
    a: float,
    start_y: float,
    t_max: float | None = None,
    tolerance: float = 1e-9
) -> float | None:
    """
    Time until the height start_y + vi*t + a*t^2/2 returns to 0.

    The latest non-negative root is used so the object is followed until it
    lands rather than until it first crosses the ground on the way up. A
    launch from the ground is the symmetric parabola and takes exactly
    ``2 * t_max``. Without acceleration the object only reaches the ground
    if it starts above it and is already moving down. A crossing within
    ``tolerance`` of t=0 counts as t=0.

    Args:
        vi: Initial velocity
        a: Acceleration
        start_y: Height at t=0
        t_max: Time to peak if known
        tolerance: Root de-duplication tolerance

    Returns:
        Flight time, or None if the ground is never reached
    """
    if a == 0:
        if start_y > 0 and vi < 0:
            return -start_y / vi
        return None

    if start_y == 0 and vi > 0 and a < 0 and t_max is not None:
        return 2 * t_max

    roots = non_negative_roots(0.5 * a, vi, start_y, tolerance)
    if not roots:
        return None
    return max(roots)


def compute_metrics(
    vi: float | None,
    a: float,
    frame: ReferenceFrame,
    tolerance: float = 1e-9
) -> PeakFlightMetrics:
    """
    Peak and flight metrics for a solved motion.

    Args:
        vi: Solved initial velocity (None leaves every metric unknown)
        a: Acceleration
        frame: Reference frame placing the start above the ground
        tolerance: Root de-duplication tolerance

    Returns:
        PeakFlightMetrics
    """
    if vi is None:
        return PeakFlightMetrics(None, None, None, None)

    start_y = frame.start_y
    t_max, h_max_relative = peak(vi, a)

    if h_max_relative is not None:
        h_max_absolute = start_y + h_max_relative
    elif a == 0 and vi > 0:
        # rises forever
        h_max_absolute = None
    else:
        h_max_absolute = start_y

    if h_max_absolute is not None and h_max_absolute < 0:
        h_max_absolute = 0.0

    t_flight = flight_time(vi, a, start_y, t_max, tolerance)
    return PeakFlightMetrics(t_max, h_max_relative, h_max_absolute, t_flight)


def total_distance(
    vi: float | None,
    a: float,
    h: float | None,
    t: float | None,
    t_max: float | None,
    h_max_relative: float | None
) -> float | None:
    """
    Path length over the solved interval.

    Once an upward launch has passed its peak the object has covered the
    rise twice less the net displacement; otherwise the path is monotonic
    and its length is |h|.
    """
    if t is None or h is None or vi is None:
        return None
    if a == 0:
        return abs(h)
    if vi > 0 and a < 0 and t_max is not None and t > t_max:
        return 2 * h_max_relative - h
    return abs(h)
