"""
KinematicsForge Motion Engine

Solves one-dimensional constant-acceleration motion (vertical launch and
free fall) from any two known quantities and derives peak, flight and
point-query results.
"""

from kinematics.state import (
    MotionKind,
    LaunchDirection,
    MotionState,
    ReferenceFrame,
    MotionResult,
    SolverConfig,
    default_config,
)
from kinematics.errors import (
    MotionInputError,
    MissingGravityError,
    WrongKnownCountError,
    InvalidInputError,
)
from kinematics.solver import (
    solve_variables,
    choose_final_velocity_sign,
    choose_initial_velocity_sign,
    choose_time_root,
    RULES,
)
from kinematics.metrics import (
    compute_metrics,
    flight_time,
    total_distance,
    PeakFlightMetrics,
)
from kinematics.queries import (
    velocity_at_time,
    height_at_time,
    times_at_height,
    velocities_at_height,
)
from kinematics.session import (
    MotionInputs,
    solve_motion,
    resolve_frame,
)

__all__ = [
    # State
    "MotionKind",
    "LaunchDirection",
    "MotionState",
    "ReferenceFrame",
    "MotionResult",
    "SolverConfig",
    "default_config",
    # Errors
    "MotionInputError",
    "MissingGravityError",
    "WrongKnownCountError",
    "InvalidInputError",
    # Solver
    "solve_variables",
    "choose_final_velocity_sign",
    "choose_initial_velocity_sign",
    "choose_time_root",
    "RULES",
    # Metrics
    "compute_metrics",
    "flight_time",
    "total_distance",
    "PeakFlightMetrics",
    # Queries
    "velocity_at_time",
    "height_at_time",
    "times_at_height",
    "velocities_at_height",
    # Session
    "MotionInputs",
    "solve_motion",
    "resolve_frame",
]
