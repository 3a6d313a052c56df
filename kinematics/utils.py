"""
Kinematics Utilities

Closed-form helpers shared by the solver, the motion metrics and the
point queries: root extraction for the displacement equation and the
two basic evaluations of uniformly accelerated motion.
"""

from __future__ import annotations
import math


# =============================================================================
# Root Extraction
# =============================================================================

def non_negative_roots(
    qa: float,
    qb: float,
    qc: float,
    tolerance: float = 1e-9
) -> list[float]:
    """
    Real, non-negative roots of ``qa*t^2 + qb*t + qc = 0``, sorted ascending.

    Degrades to the linear equation when ``qa`` is zero. Negative roots are
    discarded, except that a root less than ``tolerance`` below zero is
    floating-point noise at the boundary and is snapped to 0. Roots closer
    than ``tolerance`` collapse into one. Uses the cancellation-free form
    ``q = -(b + sign(b)*sqrt(D))/2``.

    Args:
        qa: Quadratic coefficient
        qb: Linear coefficient
        qc: Constant term
        tolerance: Distance under which two roots are the same root

    Returns:
        Zero, one or two roots

    Example:
        >>> non_negative_roots(1.0, -3.0, 2.0)
        [1.0, 2.0]
        >>> non_negative_roots(1.0, 0.0, 1.0)
        []
    """
    if qa == 0:
        if qb == 0:
            return []
        roots = [-qc / qb]
    else:
        discriminant = qb * qb - 4.0 * qa * qc
        if discriminant < 0:
            return []
        q = -0.5 * (qb + math.copysign(math.sqrt(discriminant), qb))
        if q == 0:
            # qb == 0 and qc == 0: double root at the origin
            roots = [0.0]
        else:
            roots = [q / qa, qc / q]

    valid = sorted(max(r, 0.0) + 0.0 for r in roots if r >= -tolerance)
    unique: list[float] = []
    for root in valid:
        if not unique or abs(root - unique[-1]) > tolerance:
            unique.append(root)
    return unique


# =============================================================================
# Motion Equations
# =============================================================================

def velocity_at(vi: float, a: float, t: float) -> float:
    """v(t) = vi + a*t"""
    return vi + a * t


def displacement_at(vi: float, a: float, t: float) -> float:
    """h(t) = vi*t + a*t^2/2"""
    return vi * t + 0.5 * a * t * t
