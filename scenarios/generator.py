"""
Scenario Generator

Generates random but physically consistent motion scenarios. The two
sampled quantities (vi and t) come from jax.random; vf and h are then
derived exactly in double precision so that any pair of the four can be
fed back to the solver and compared against the rest.
"""

from __future__ import annotations
from itertools import combinations
from typing import NamedTuple
from jax import Array, random

from kinematics.state import PRIMARY_FIELDS, MotionState


# ascending: launched upwards, interval ends before the peak
# falling: already moving down (or at rest) under gravity
PHASES = ("ascending", "falling")


class Scenario(NamedTuple):
    """A fully known motion interval."""
    vi: float
    vf: float
    h: float
    t: float
    a: float
    phase: str

    def full_state(self) -> MotionState:
        """The scenario as a complete MotionState."""
        return MotionState(vi=self.vi, vf=self.vf, h=self.h, t=self.t, a=self.a)

    def known(self, fields: tuple[str, ...]) -> MotionState:
        """A MotionState in which only ``fields`` are known."""
        values = {name: (getattr(self, name) if name in fields else None) for name in PRIMARY_FIELDS}
        return MotionState(a=self.a, **values)


def scenario_pairs() -> list[tuple[str, str]]:
    """The six unordered pairs of primary quantities."""
    return list(combinations(PRIMARY_FIELDS, 2))


def generate_scenario(
    key: Array,
    phase: str = "ascending",
    gravity_range: tuple[float, float] = (1.0, 25.0),
    speed_range: tuple[float, float] = (1.0, 40.0),
    time_range: tuple[float, float] = (0.1, 5.0),
) -> Scenario:
    """
    Generate a single scenario.

    Args:
        key: JAX random key
        phase: One of PHASES
        gravity_range: Range of the gravity magnitude
        speed_range: Range of the launch speed
        time_range: Range of the interval length for falling scenarios

    Returns:
        Scenario with all four quantities known
    """
    if phase not in PHASES:
        raise ValueError(f"Unknown phase {phase!r}, expected one of {PHASES}")

    keys = random.split(key, 4)
    g = float(random.uniform(keys[0], (), minval=gravity_range[0], maxval=gravity_range[1]))
    speed = float(random.uniform(keys[1], (), minval=speed_range[0], maxval=speed_range[1]))
    # Keeps the interval away from the peak and from t=0
    fraction = float(random.uniform(keys[2], (), minval=0.05, maxval=0.95))
    a = -g

    if phase == "ascending":
        vi = speed
        t = fraction * (vi / g)
    else:
        vi = -fraction * speed
        t = float(random.uniform(keys[3], (), minval=time_range[0], maxval=time_range[1]))

    vf = vi + a * t
    h = vi * t + 0.5 * a * t * t
    return Scenario(vi=vi, vf=vf, h=h, t=t, a=a, phase=phase)


def generate_scenarios(
    num_scenarios: int,
    seed: int = 42,
    phase: str = "ascending",
) -> list[Scenario]:
    """
    Generate a batch of scenarios.

    Args:
        num_scenarios: Number of scenarios
        seed: Random seed
        phase: One of PHASES

    Returns:
        List of Scenario objects
    """
    key = random.PRNGKey(seed)
    keys = random.split(key, num_scenarios)
    return [generate_scenario(keys[i], phase=phase) for i in range(num_scenarios)]
