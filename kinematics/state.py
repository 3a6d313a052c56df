"""
Motion State Definitions

This module defines the core data structures for one-dimensional
constant-acceleration motion: the kinematic state the solver works on,
the reference frame that places it above the ground, the solver
configuration, and the result record handed to callers.

Unknown quantities are represented by ``None`` so that "not determined"
is never confused with "computed as zero".
"""

from __future__ import annotations
from enum import Enum
from typing import NamedTuple

from kinematics.formatting import format_times, format_value, format_velocities


PRIMARY_FIELDS = ("vi", "vf", "h", "t")


class MotionKind(str, Enum):
    """Scenario tag chosen by the caller."""
    FREE_FALL = "freeFall"
    VERTICAL_LAUNCH = "verticalLaunch"


class LaunchDirection(str, Enum):
    """Direction of a vertical launch as entered by the caller."""
    UPWARDS = "upwards"
    DOWNWARDS = "downwards"


class MotionState(NamedTuple):
    """
    Kinematic state of a single interval of uniformly accelerated motion.

    All quantities use the "up is positive" convention. Acceleration is
    fixed for the whole computation; the other four fields are either a
    float or ``None`` while unknown.

    Attributes:
        vi: Initial velocity (m/s)
        vf: Final velocity (m/s)
        h: Signed displacement, end position minus start position (m)
        t: Elapsed time (s), never negative
        a: Constant acceleration (m/s^2)

    Example:
        >>> state = MotionState.create(a=-9.8, vi=20.0, t=1.0)
        >>> state.known_fields()
        ('vi', 't')
    """
    vi: float | None
    vf: float | None
    h: float | None
    t: float | None
    a: float

    @staticmethod
    def create(
        a: float,
        vi: float | None = None,
        vf: float | None = None,
        h: float | None = None,
        t: float | None = None,
    ) -> MotionState:
        """
        Factory method that coerces every known value to float.

        Args:
            a: Constant acceleration
            vi: Initial velocity, or None
            vf: Final velocity, or None
            h: Displacement, or None
            t: Elapsed time, or None

        Returns:
            A new MotionState instance
        """
        def _opt(value):
            return None if value is None else float(value)

        return MotionState(vi=_opt(vi), vf=_opt(vf), h=_opt(h), t=_opt(t), a=float(a))

    def known_fields(self) -> tuple[str, ...]:
        """Names of the primary quantities that currently have a value."""
        return tuple(name for name in PRIMARY_FIELDS if getattr(self, name) is not None)

    @property
    def is_complete(self) -> bool:
        """True when vi, vf, h and t are all known."""
        return len(self.known_fields()) == len(PRIMARY_FIELDS)


class ReferenceFrame(NamedTuple):
    """
    Ground-fixed frame in which the motion is placed.

    Attributes:
        initial_y: Height of the object at t=0 above the ground (Y=0).
            None means "not given" and is resolved by the session.
        motion_kind: Free fall or vertical launch
    """
    initial_y: float | None = None
    motion_kind: MotionKind = MotionKind.VERTICAL_LAUNCH

    @property
    def start_y(self) -> float:
        """Starting height with an unset frame treated as ground level."""
        return 0.0 if self.initial_y is None else float(self.initial_y)


class SolverConfig(NamedTuple):
    """
    Tunables shared by the solver, the metrics and the renderer interface.

    Attributes:
        max_passes: Upper bound on fixed-point passes over the rule table
        root_tolerance: Roots closer than this are treated as one root
        display_decimals: Decimals used for display and de-duplication
        default_duration: Playback length when no flight time exists (s)
        trajectory_points: Number of samples along the drawn trajectory
        pause_tolerance: Time window for merging playback pauses (s)
        consistency_tolerance: Relative slack when checking solved values
            against the equations of motion
    """
    max_passes: int = 5
    root_tolerance: float = 1e-9
    display_decimals: int = 2
    default_duration: float = 5.0
    trajectory_points: int = 101
    pause_tolerance: float = 0.05
    consistency_tolerance: float = 1e-6


class MotionResult(NamedTuple):
    """
    Complete answer for one motion request.

    Query fields are None when the corresponding query was not supplied.
    A height query that is never reached yields empty tuples.
    """
    vi: float | None
    vf: float | None
    h: float | None
    t: float | None
    g: float
    a: float
    t_max: float | None
    h_max_relative: float | None
    h_max: float | None
    t_flight: float | None
    total_distance: float | None
    motion_kind: MotionKind
    initial_y: float
    query_time: float | None = None
    v_at_query_time: float | None = None
    h_at_query_time: float | None = None
    query_height: float | None = None
    times_at_query_height: tuple[float, ...] | None = None
    velocities_at_query_height: tuple[float, ...] | None = None

    def to_dict(self) -> dict:
        """Convert to a JSON-serialisable dictionary of raw values."""
        data = self._asdict()
        data['motion_kind'] = self.motion_kind.value
        for key in ('times_at_query_height', 'velocities_at_query_height'):
            if data[key] is not None:
                data[key] = list(data[key])
        return data

    def display(self, decimals: int = 2) -> dict[str, str]:
        """Formatted values for display, keyed like ``to_dict``."""
        scalars = (
            'vi', 'vf', 'h', 't', 'g', 'a', 't_max', 'h_max', 't_flight',
            'total_distance', 'v_at_query_time', 'h_at_query_time',
        )
        shown = {key: format_value(getattr(self, key), decimals) for key in scalars}
        shown['times_at_query_height'] = format_times(self.times_at_query_height, decimals)
        shown['velocities_at_query_height'] = format_velocities(
            self.velocities_at_query_height, decimals
        )
        return shown


def default_config() -> SolverConfig:
    """Return the default solver configuration."""
    return SolverConfig()
