"""
Trajectory Sampling for Playback

This module turns a MotionResult into what a drawing surface needs to
animate it: how long to play, how to scale the scene, the sampled
trajectory and the instants at which playback should stop for the user
to read off a value.

The motion itself is one-dimensional; the horizontal coordinate of a
vertical launch is a purely visual parametrisation that opens the path
into a parabola. Sampling uses jax.numpy so the whole path is evaluated
as one vectorised expression.
"""

from __future__ import annotations
from typing import NamedTuple
import jax.numpy as jnp
from jax import Array

from kinematics.state import MotionKind, MotionResult, SolverConfig, default_config


# Fraction of the scene left above the highest point of the motion
HEADROOM_RATIO = 0.25
# Smallest vertical range shown (m)
MIN_SCENE_RANGE = 5.0
# Horizontal extent of a launch parabola in scene units
PARABOLA_WIDTH = 1.0


class SimulationScale(NamedTuple):
    """
    Attributes:
        min_y: Lowest height shown (the ground)
        max_y: Highest height shown, including headroom
        vx: Visual horizontal speed (0 for free fall)
    """
    min_y: float
    max_y: float
    vx: float

    @property
    def y_range(self) -> float:
        return self.max_y - self.min_y


class TrajectoryData(NamedTuple):
    """
    Sampled trajectory.

    Attributes:
        times: Sample times, shape (N,)
        positions: Display positions (x, y) with y clamped to the ground, shape (N, 2)
        velocities: Vertical velocity at each sample, shape (N,)
    """
    times: Array
    positions: Array
    velocities: Array

    @property
    def num_points(self) -> int:
        return self.times.shape[0]


class PauseEvent(NamedTuple):
    """Instant at which playback stops, with the reason."""
    time: float
    label: str


# =============================================================================
# Scene Setup
# =============================================================================

def simulation_duration(result: MotionResult, config: SolverConfig | None = None) -> float:
    """Play until the object lands, or for the default duration if it never does."""
    if config is None:
        config = default_config()
    if result.t_flight is not None and result.t_flight > 0:
        return result.t_flight
    return config.default_duration


def simulation_scale(result: MotionResult, duration: float) -> SimulationScale:
    """
    Vertical window and horizontal speed for drawing the motion.

    The ground is always the bottom of the scene. The top is chosen so the
    highest point reached sits ``HEADROOM_RATIO`` of the way down from the
    top edge, with at least ``MIN_SCENE_RANGE`` metres shown.
    """
    vi = result.vi or 0.0
    min_y = 0.0
    highest = result.initial_y
    if result.h_max is not None:
        highest = max(highest, result.h_max)
    final_y = result.initial_y + vi * duration + 0.5 * result.a * duration ** 2
    highest = max(highest, final_y)

    if highest > min_y:
        max_y = max((highest - min_y) / (1 - HEADROOM_RATIO) + min_y, MIN_SCENE_RANGE)
    else:
        max_y = min_y + MIN_SCENE_RANGE

    if result.motion_kind == MotionKind.VERTICAL_LAUNCH and duration > 0:
        vx = PARABOLA_WIDTH / duration
    else:
        vx = 0.0
    return SimulationScale(min_y=min_y, max_y=float(max_y), vx=vx)


# =============================================================================
# Sampling
# =============================================================================

def positions_at(result: MotionResult, times: Array, scale: SimulationScale) -> Array:
    """
    Display positions at the given times.

    Args:
        result: Solved motion
        times: Times to evaluate, shape (N,)
        scale: Scene scale from ``simulation_scale``

    Returns:
        Positions, shape (N, 2), with heights clamped to the ground
    """
    vi = result.vi or 0.0
    y = result.initial_y + vi * times + 0.5 * result.a * times ** 2
    y = jnp.maximum(y, scale.min_y)
    x = scale.vx * times
    return jnp.stack([x, y], axis=1)


def sample_trajectory(
    result: MotionResult,
    duration: float | None = None,
    num_points: int | None = None,
    config: SolverConfig | None = None
) -> TrajectoryData:
    """
    Sample the whole motion at evenly spaced times.

    Args:
        result: Solved motion
        duration: Time span to sample (defaults to ``simulation_duration``)
        num_points: Number of samples (defaults to config.trajectory_points)
        config: Solver configuration

    Returns:
        TrajectoryData

    Example:
        >>> traj = sample_trajectory(solve_motion(MotionInputs(vi=20, g=9.8, t=1)))
        >>> traj.positions.shape
        (101, 2)
    """
    if config is None:
        config = default_config()
    if duration is None:
        duration = simulation_duration(result, config)
    if num_points is None:
        num_points = config.trajectory_points

    scale = simulation_scale(result, duration)
    times = jnp.linspace(0.0, duration, num_points)
    vi = result.vi or 0.0
    return TrajectoryData(
        times=times,
        positions=positions_at(result, times, scale),
        velocities=vi + result.a * times,
    )


# =============================================================================
# Playback Pauses
# =============================================================================

def pause_schedule(
    result: MotionResult,
    duration: float | None = None,
    config: SolverConfig | None = None
) -> tuple[PauseEvent, ...]:
    """
    Instants at which playback should stop, in time order.

    Candidates are the peak of an upward launch, the solved time t (skipped
    when it coincides with the peak or with the end of playback), the query
    time and every time at which the queried height is crossed. Only
    instants strictly inside the playback window are kept, and instants
    equal to two decimals are merged.
    """
    if config is None:
        config = default_config()
    if duration is None:
        duration = simulation_duration(result, config)
    tol = config.pause_tolerance

    candidates = []
    vi = result.vi or 0.0
    if result.t_max is not None and result.a < 0 and vi > 0:
        candidates.append(PauseEvent(result.t_max, "peak"))

    if result.t is not None and result.h is not None:
        near_peak = result.t_max is not None and abs(result.t - result.t_max) < tol
        near_end = abs(result.t - duration) < tol
        if not near_peak and not near_end:
            candidates.append(PauseEvent(result.t, "solved time"))

    if result.query_time is not None:
        candidates.append(PauseEvent(result.query_time, "query time"))
    for crossing in result.times_at_query_height or ():
        candidates.append(PauseEvent(crossing, "query height"))

    events = {}
    for event in sorted(candidates):
        if not 0 < event.time < duration:
            continue
        events.setdefault(round(event.time, config.display_decimals), event)
    return tuple(events.values())
