"""
Motion Session

Single entry point for a motion request: validates the request, fixes the
acceleration from gravity, runs the solver, places the solved motion in
its reference frame, derives the peak/flight metrics and answers the
optional point queries.

Malformed requests are rejected with a MotionInputError. Quantities that
are merely physically unreachable come back as None in the result.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Mapping, NamedTuple
import logging
import math

from kinematics.errors import InvalidInputError, MissingGravityError, WrongKnownCountError
from kinematics.metrics import compute_metrics, total_distance
from kinematics.queries import (
    height_at_time,
    times_at_height,
    velocities_at_height,
    velocity_at_time,
)
from kinematics.solver import inconsistent_equations, solve_variables
from kinematics.state import (
    PRIMARY_FIELDS,
    LaunchDirection,
    MotionKind,
    MotionResult,
    MotionState,
    ReferenceFrame,
    SolverConfig,
    default_config,
)


logger = logging.getLogger(__name__)

# Keys used by browser forms and older payloads
_KEY_ALIASES = {
    'initialY': 'initial_y',
    'initialYForSim': 'initial_y',
    'motionType': 'motion_kind',
    'motion_type': 'motion_kind',
    'queryTime': 'query_time',
    'queryHeight': 'query_height',
}

# Displacements smaller than this do not move the frame
_FRAME_EPSILON = 1e-6


class MotionInputs(NamedTuple):
    """
    A motion request as supplied by the caller.

    Exactly two of vi, vf, h and t must be given (free fall fixes vi at 0
    when it is omitted). ``g`` is the gravity magnitude; the acceleration
    used throughout is ``-g``.
    """
    vi: Any = None
    vf: Any = None
    h: Any = None
    t: Any = None
    g: Any = None
    initial_y: Any = None
    motion_kind: Any = MotionKind.VERTICAL_LAUNCH
    direction: Any = LaunchDirection.UPWARDS
    query_time: Any = None
    query_height: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> MotionInputs:
        """
        Build inputs from a JSON/form payload.

        Empty strings count as "not given", camelCase form keys are accepted
        and unrecognised keys are ignored.
        """
        kwargs = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name not in cls._fields:
                continue
            if isinstance(value, str) and value.strip() == '':
                value = None
            kwargs[name] = value
        for name in ('motion_kind', 'direction'):
            if kwargs.get(name) is None:
                kwargs.pop(name, None)
        return cls(**kwargs)


# =============================================================================
# Input Coercion
# =============================================================================

def _as_number(name: str, value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise InvalidInputError(f"{name} must be a finite number, got {value!r}")
    return number


def _as_gravity(value: Any) -> float:
    if value is None or isinstance(value, bool):
        raise MissingGravityError(value)
    try:
        g = float(value)
    except (TypeError, ValueError):
        raise MissingGravityError(value) from None
    if not math.isfinite(g):
        raise MissingGravityError(value)
    if g < 0:
        raise InvalidInputError(f"Gravity (g) is a magnitude and cannot be negative, got {value!r}")
    return g


def _as_enum(enum_cls: type[Enum], value: Any):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise InvalidInputError(
            f"{enum_cls.__name__} must be one of {choices}, got {value!r}"
        ) from None


# =============================================================================
# Frame Placement
# =============================================================================

def resolve_frame(
    initial_y: float | None,
    motion_kind: MotionKind,
    downward: bool,
    h: float | None
) -> ReferenceFrame:
    """
    Fix the starting height of the motion.

    An explicit ``initial_y`` is kept. Without one, downward motion with a
    known drop is placed so that it ends on the ground (start at ``-h``);
    everything else starts on the ground.
    """
    if initial_y is None:
        if downward and h is not None and h < -_FRAME_EPSILON:
            initial_y = -h
            logger.debug("placing %s start at %.6g from displacement", motion_kind.value, initial_y)
        else:
            initial_y = 0.0
    return ReferenceFrame(initial_y=float(initial_y), motion_kind=motion_kind)


# =============================================================================
# Entry Point
# =============================================================================

def solve_motion(
    inputs: MotionInputs,
    config: SolverConfig | None = None
) -> MotionResult:
    """
    Solve a motion request end to end.

    Args:
        inputs: The request
        config: Solver configuration (uses default if None)

    Returns:
        MotionResult with unknown quantities as None

    Raises:
        MissingGravityError: g is absent or not a number
        WrongKnownCountError: not exactly two of vi, vf, h, t were given
        InvalidInputError: a value is not a finite number, g or t is
            negative, or a free fall was given a non-zero vi, a positive
            displacement or values that do not fit a start from rest

    Example:
        >>> result = solve_motion(MotionInputs(vi=20, t=2, g=10))
        >>> result.vf, result.h
        (0.0, 20.0)
    """
    if config is None:
        config = default_config()

    g = _as_gravity(inputs.g)
    motion_kind = _as_enum(MotionKind, inputs.motion_kind)
    direction = _as_enum(LaunchDirection, inputs.direction)

    values = {name: _as_number(name, getattr(inputs, name)) for name in PRIMARY_FIELDS}
    known = tuple(name for name in PRIMARY_FIELDS if values[name] is not None)
    if len(known) != 2:
        raise WrongKnownCountError(known)
    if values['t'] is not None and values['t'] < 0:
        raise InvalidInputError(f"t cannot be negative, got t={values['t']}")

    free_fall = motion_kind == MotionKind.FREE_FALL
    if free_fall:
        if values['vi'] is None:
            values['vi'] = 0.0
        elif values['vi'] != 0:
            raise InvalidInputError(
                f"A free fall starts from rest, vi must be 0 or omitted, got vi={values['vi']}"
            )
        if values['h'] is not None and values['h'] > 0:
            raise InvalidInputError(
                f"A free fall cannot have a positive displacement, got h={values['h']}"
            )
    elif direction == LaunchDirection.DOWNWARDS and values['vi'] is not None and values['vi'] > 0:
        values['vi'] = -values['vi']

    initial_y = _as_number('initial_y', inputs.initial_y)
    query_time = _as_number('query_time', inputs.query_time)
    query_height = _as_number('query_height', inputs.query_height)

    a = 0.0 - g
    state = solve_variables(MotionState.create(a=a, **values), config)
    if free_fall and 'vi' not in known:
        # vi=0 plus two given values over-determines the motion
        mismatched = inconsistent_equations(state, config.consistency_tolerance)
        if mismatched:
            raise InvalidInputError(
                "A free fall from rest does not fit the given values: "
                + ", ".join(mismatched) + " is violated"
            )

    downward = free_fall or direction == LaunchDirection.DOWNWARDS
    frame = resolve_frame(initial_y, motion_kind, downward, state.h)

    metrics = compute_metrics(state.vi, a, frame, config.root_tolerance)
    distance = total_distance(
        state.vi, a, state.h, state.t, metrics.t_max, metrics.h_max_relative
    )

    logger.debug(
        "solved %s from %s: vi=%s vf=%s h=%s t=%s",
        motion_kind.value, known, state.vi, state.vf, state.h, state.t,
    )

    return MotionResult(
        vi=state.vi,
        vf=state.vf,
        h=state.h,
        t=state.t,
        g=g,
        a=a,
        t_max=metrics.t_max,
        h_max_relative=metrics.h_max_relative,
        h_max=metrics.h_max_absolute,
        t_flight=metrics.t_flight,
        total_distance=distance,
        motion_kind=motion_kind,
        initial_y=frame.start_y,
        query_time=query_time,
        v_at_query_time=velocity_at_time(state.vi, a, query_time),
        h_at_query_time=height_at_time(state.vi, a, frame, query_time),
        query_height=query_height,
        times_at_query_height=times_at_height(
            state.vi, a, frame, query_height, config.root_tolerance
        ),
        velocities_at_query_height=velocities_at_height(
            state.vi, a, frame, query_height, metrics.h_max_relative,
            config.display_decimals,
        ),
    )
