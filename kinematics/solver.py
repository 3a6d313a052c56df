"""
Kinematic Variable Solver

Given any two of {vi, vf, h, t} and a fixed acceleration, this module
derives the remaining quantities by propagating a small table of
closed-form rules to a fixed point.

The four classic equations of uniformly accelerated motion are

    vf = vi + a*t
    h  = vi*t + a*t^2/2
    vf^2 = vi^2 + 2*a*h
    h  = (vi + vf)*t/2

Several of them are quadratic, so a derivation can have two valid
answers. The heuristics that pick the physical one (velocity sign,
earliest or latest time) are separate functions so they can be tested
against hand-worked scenarios.
"""

from __future__ import annotations
from typing import Callable, NamedTuple
import logging
import math

from kinematics.state import MotionState, SolverConfig, PRIMARY_FIELDS, default_config
from kinematics.utils import non_negative_roots, velocity_at, displacement_at


logger = logging.getLogger(__name__)

# Slack when matching a time root against an already known final velocity
_VELOCITY_MATCH = 1e-6


# =============================================================================
# Branch Selection Heuristics
# =============================================================================

def choose_final_velocity_sign(vi: float, h: float, a: float) -> float:
    """
    Sign of vf when it is recovered from vf^2 = vi^2 + 2*a*h.

    Positive by default. Negative when the object ends below its start
    while accelerating downwards, or when it was launched upwards and the
    displacement lies beyond what the launch speed can reach on the way up
    (it is already descending). Under zero acceleration the velocity keeps
    the sign of vi.

    Args:
        vi: Initial velocity
        h: Displacement
        a: Acceleration

    Returns:
        1.0 or -1.0
    """
    if a == 0:
        return -1.0 if vi < 0 else 1.0
    if h < 0 and a < 0:
        return -1.0
    if vi > 0 and a < 0 and h >= 0 and vi * vi < 2 * abs(a) * h:
        return -1.0
    return 1.0


def choose_initial_velocity_sign(vf: float, h: float, a: float) -> float:
    """
    Sign of vi when it is recovered from vi^2 = vf^2 - 2*a*h.

    Mirror image of ``choose_final_velocity_sign``: an object that ends
    above its start while falling must have been thrown upwards; one that
    ends at or below its start while falling was already moving down.
    """
    if a == 0:
        return -1.0 if vf < 0 else 1.0
    if h > 0 and a < 0 and vf < 0:
        return 1.0
    if h <= 0 and a < 0 and vf < 0:
        return -1.0
    return 1.0


def choose_time_root(
    roots: list[float],
    vi: float,
    h: float,
    a: float
) -> float | None:
    """
    Pick the physical elapsed time among the non-negative roots of
    a*t^2/2 + vi*t - h = 0.

    - Below the start while accelerating down: the later root (the object
      may have gone up first and come back past its start).
    - Above the start after an upward launch: the earlier root (first time
      the height is reached, on the way up).
    - Otherwise: the earliest root.

    Args:
        roots: Sorted, de-duplicated non-negative roots
        vi: Initial velocity
        h: Displacement
        a: Acceleration

    Returns:
        The chosen time, or None when there is no root
    """
    if not roots:
        return None
    if h < 0 and a < 0:
        return max(roots)
    if h > 0 and a < 0 and vi > 0:
        return min(roots) if len(roots) == 2 else roots[0]
    return min(roots)


def solve_time_for_displacement(
    vi: float,
    h: float,
    a: float,
    tolerance: float = 1e-9
) -> float | None:
    """Elapsed time to cover displacement h, linear when a == 0."""
    roots = non_negative_roots(0.5 * a, vi, -h, tolerance)
    return choose_time_root(roots, vi, h, a)


# =============================================================================
# Derivations
# =============================================================================
#
# Each derivation receives the working values, the acceleration and the root
# tolerance, and returns the derived float or None when its precondition does
# not hold (zero divisor, negative discriminant, negative time).

def _vf_from_vi_t(v: dict, a: float, tol: float) -> float | None:
    return velocity_at(v['vi'], a, v['t'])


def _h_from_vi_t(v: dict, a: float, tol: float) -> float | None:
    return displacement_at(v['vi'], a, v['t'])


def _t_from_vi_vf(v: dict, a: float, tol: float) -> float | None:
    if a == 0:
        return None
    t = (v['vf'] - v['vi']) / a
    return None if t < 0 else t + 0.0


def _h_from_vi_vf(v: dict, a: float, tol: float) -> float | None:
    if a == 0:
        return None
    return (v['vf'] ** 2 - v['vi'] ** 2) / (2 * a)


def _vf_from_vi_h(v: dict, a: float, tol: float) -> float | None:
    vi, h = v['vi'], v['h']
    if a == 0:
        return vi
    squared = vi * vi + 2 * a * h
    if squared < 0:
        return None
    return choose_final_velocity_sign(vi, h, a) * math.sqrt(squared)


def _t_from_vi_h(v: dict, a: float, tol: float) -> float | None:
    vi, h, vf = v['vi'], v['h'], v['vf']
    if vf is None:
        return solve_time_for_displacement(vi, h, a, tol)
    # Only a root at which the object actually moves with vf
    roots = [
        r for r in non_negative_roots(0.5 * a, vi, -h, tol)
        if math.isclose(velocity_at(vi, a, r), vf, rel_tol=_VELOCITY_MATCH, abs_tol=_VELOCITY_MATCH)
    ]
    return choose_time_root(roots, vi, h, a)


def _vi_from_vf_t(v: dict, a: float, tol: float) -> float | None:
    return v['vf'] - a * v['t']


def _h_from_vf_t(v: dict, a: float, tol: float) -> float | None:
    t = v['t']
    return v['vf'] * t - 0.5 * a * t * t


def _vi_from_vf_h(v: dict, a: float, tol: float) -> float | None:
    vf, h = v['vf'], v['h']
    if a == 0:
        return vf
    squared = vf * vf - 2 * a * h
    if squared < 0:
        return None
    return choose_initial_velocity_sign(vf, h, a) * math.sqrt(squared)


def _vi_from_h_t(v: dict, a: float, tol: float) -> float | None:
    h, t = v['h'], v['t']
    if t == 0:
        return None
    return (h - 0.5 * a * t * t) / t


def _vf_from_h_t(v: dict, a: float, tol: float) -> float | None:
    h, t = v['h'], v['t']
    if t == 0:
        return None
    return (h + 0.5 * a * t * t) / t


def _t_from_mean_velocity(v: dict, a: float, tol: float) -> float | None:
    # h = (vi + vf) * t / 2, usable even when a == 0
    total = v['vi'] + v['vf']
    if total == 0:
        return None
    t = 2 * v['h'] / total
    return None if t < 0 else t + 0.0


# =============================================================================
# Rule Table
# =============================================================================

class Rule(NamedTuple):
    """One derivation: fills ``target`` once every field in ``requires`` is known."""
    name: str
    requires: tuple[str, ...]
    target: str
    derive: Callable[[dict, float, float], float | None]

    def applies(self, values: dict) -> bool:
        return values[self.target] is None and all(
            values[name] is not None for name in self.requires
        )


RULES: tuple[Rule, ...] = (
    Rule("vf<-vi,t", ("vi", "t"), "vf", _vf_from_vi_t),
    Rule("h<-vi,t", ("vi", "t"), "h", _h_from_vi_t),
    Rule("t<-vi,vf", ("vi", "vf"), "t", _t_from_vi_vf),
    Rule("h<-vi,vf", ("vi", "vf"), "h", _h_from_vi_vf),
    Rule("vf<-vi,h", ("vi", "h"), "vf", _vf_from_vi_h),
    Rule("t<-vi,h", ("vi", "h"), "t", _t_from_vi_h),
    Rule("vi<-vf,t", ("vf", "t"), "vi", _vi_from_vf_t),
    Rule("h<-vf,t", ("vf", "t"), "h", _h_from_vf_t),
    Rule("vi<-vf,h", ("vf", "h"), "vi", _vi_from_vf_h),
    Rule("vi<-h,t", ("h", "t"), "vi", _vi_from_h_t),
    Rule("vf<-h,t", ("h", "t"), "vf", _vf_from_h_t),
    Rule("t<-vi,vf,h", ("vi", "vf", "h"), "t", _t_from_mean_velocity),
)


def run_pass(
    values: dict,
    a: float,
    rules: tuple[Rule, ...] = RULES,
    tolerance: float = 1e-9
) -> list[str]:
    """
    Apply every applicable rule once, in table order, updating ``values``.

    Later rules see the assignments made earlier in the same pass.

    Returns:
        Names of the rules that assigned a value
    """
    fired = []
    for rule in rules:
        if not rule.applies(values):
            continue
        result = rule.derive(values, a, tolerance)
        if result is None:
            continue
        values[rule.target] = float(result)
        fired.append(rule.name)
    return fired


def solve_variables(
    state: MotionState,
    config: SolverConfig | None = None
) -> MotionState:
    """
    Derive as many unknowns of ``state`` as the equations permit.

    Quantities that cannot be determined (negative discriminant, zero
    acceleration where a division by a is needed, only negative times)
    stay None. Acceleration is never changed.

    Args:
        state: State with the known quantities filled in
        config: Solver configuration (uses default if None)

    Returns:
        A new MotionState with the derived quantities

    Example:
        >>> solved = solve_variables(MotionState.create(a=-10.0, vi=20.0, t=1.0))
        >>> solved.vf, solved.h
        (10.0, 15.0)
    """
    if config is None:
        config = default_config()

    values = {name: getattr(state, name) for name in PRIMARY_FIELDS}

    for pass_index in range(config.max_passes):
        fired = run_pass(values, state.a, RULES, config.root_tolerance)
        logger.debug("pass %d fired %s", pass_index, fired or "nothing")
        if not fired:
            break

    return state._replace(**values)


# =============================================================================
# Consistency
# =============================================================================

def inconsistent_equations(state: MotionState, tolerance: float = 1e-6) -> list[str]:
    """
    Equations of motion that the known values of ``state`` violate.

    Only equations whose quantities are all known are checked, so a state
    built from two values is always consistent. A state with more known
    values than the motion needs can contradict itself.

    Args:
        state: State to check
        tolerance: Relative and absolute slack per equation

    Returns:
        The violated equations, empty when every checked one holds
    """
    vi, vf, h, t, a = state

    def differs(lhs, rhs):
        return not math.isclose(lhs, rhs, rel_tol=tolerance, abs_tol=tolerance)

    mismatched = []
    if None not in (vi, vf, t) and differs(vf, velocity_at(vi, a, t)):
        mismatched.append("vf = vi + a*t")
    if None not in (vi, h, t) and differs(h, displacement_at(vi, a, t)):
        mismatched.append("h = vi*t + a*t^2/2")
    if None not in (vi, vf, h) and differs(vf * vf, vi * vi + 2 * a * h):
        mismatched.append("vf^2 = vi^2 + 2*a*h")
    return mismatched
