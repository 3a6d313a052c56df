"""
Tests for the Motion Session

Request validation, frame placement and end-to-end results of
``solve_motion``, including the JSON payload path used by the web demo.
"""

import itertools
import math

import pytest

from kinematics.errors import (
    InvalidInputError,
    MissingGravityError,
    MotionInputError,
    WrongKnownCountError,
)
from kinematics.session import MotionInputs, resolve_frame, solve_motion
from kinematics.state import MotionKind, MotionResult, SolverConfig


G = 9.8


@pytest.fixture
def round_trip():
    """Launch at 20 m/s from the ground, solved until it is back at the start."""
    return solve_motion(MotionInputs(vi=20.0, vf=-20.0, g=G, query_height=15.0, query_time=1.0))


# =============================================================================
# Validation
# =============================================================================

class TestValidation:
    """Malformed requests are rejected before any physics is computed."""

    @pytest.mark.parametrize("g", [None, "", "abc", float("nan"), float("inf"), True])
    def test_missing_gravity(self, g):
        with pytest.raises(MissingGravityError):
            solve_motion(MotionInputs(vi=20.0, t=1.0, g=g))

    def test_gravity_is_checked_first(self):
        with pytest.raises(MissingGravityError):
            solve_motion(MotionInputs(vi=20.0))

    def test_three_knowns(self):
        with pytest.raises(WrongKnownCountError) as excinfo:
            solve_motion(MotionInputs(vi=20.0, vf=10.0, h=5.0, g=G))
        assert excinfo.value.known == ("vi", "vf", "h")

    def test_only_gravity(self):
        with pytest.raises(WrongKnownCountError) as excinfo:
            solve_motion(MotionInputs(g=G))
        assert excinfo.value.known == ()
        assert "none" in str(excinfo.value)

    def test_one_known(self):
        with pytest.raises(WrongKnownCountError):
            solve_motion(MotionInputs(t=2.0, g=G))

    def test_errors_share_a_base(self):
        with pytest.raises(MotionInputError):
            solve_motion(MotionInputs(g=G))
        with pytest.raises(ValueError):
            solve_motion(MotionInputs(vi=1.0, t=1.0))

    def test_non_numeric_quantity(self):
        with pytest.raises(InvalidInputError):
            solve_motion(MotionInputs(vi="fast", t=1.0, g=G))

    @pytest.mark.parametrize("field", ["vi", "vf", "h", "t"])
    def test_non_finite_quantity(self, field):
        other = "t" if field != "t" else "vi"
        with pytest.raises(InvalidInputError):
            solve_motion(MotionInputs(g=G, **{field: float("inf"), other: 1.0}))

    def test_non_finite_query(self):
        with pytest.raises(InvalidInputError):
            solve_motion(MotionInputs(vi=20.0, t=1.0, g=G, query_height="-inf"))

    def test_negative_gravity(self):
        with pytest.raises(InvalidInputError):
            solve_motion(MotionInputs(vi=20.0, t=1.0, g=-G))

    def test_negative_time(self):
        with pytest.raises(InvalidInputError):
            solve_motion(MotionInputs(vi=20.0, t=-1.0, g=G))

    def test_unknown_motion_kind(self):
        with pytest.raises(InvalidInputError):
            solve_motion(MotionInputs(vi=20.0, t=1.0, g=G, motion_kind="sideways"))

    def test_free_fall_cannot_rise(self):
        with pytest.raises(InvalidInputError):
            solve_motion(MotionInputs(vi=0.0, h=5.0, g=G, motion_kind="freeFall"))


# =============================================================================
# Free Fall
# =============================================================================

class TestFreeFall:
    """In free fall vi is 0 unless given, and only counts when given."""

    def test_explicit_rest_counts(self):
        result = solve_motion(MotionInputs(vi=0.0, h=-45.0, g=10.0, motion_kind=MotionKind.FREE_FALL))
        assert result.vf == pytest.approx(-30.0)
        assert result.t == pytest.approx(3.0)

    def test_implicit_rest_needs_two_others(self):
        with pytest.raises(WrongKnownCountError):
            solve_motion(MotionInputs(h=-45.0, g=10.0, motion_kind="freeFall"))
        result = solve_motion(MotionInputs(h=-45.0, t=3.0, g=10.0, motion_kind="freeFall"))
        assert result.vi == 0.0
        assert result.vf == pytest.approx(-30.0)

    def test_moving_start_is_rejected(self):
        with pytest.raises(InvalidInputError):
            solve_motion(MotionInputs(vi=5.0, t=2.0, g=10.0, motion_kind="freeFall"))
        with pytest.raises(InvalidInputError):
            solve_motion(MotionInputs(vi=-5.0, h=-20.0, g=10.0, motion_kind="freeFall"))

    def test_contradictory_pair_is_rejected(self):
        # from rest, 2 s at 10 m/s^2 covers 20 m, not 45 m
        with pytest.raises(InvalidInputError, match=r"h = vi\*t"):
            solve_motion(MotionInputs(h=-45.0, t=2.0, g=10.0, motion_kind="freeFall"))
        with pytest.raises(InvalidInputError):
            solve_motion(MotionInputs(vf=5.0, h=-45.0, g=10.0, motion_kind="freeFall"))

    def test_consistent_pair_is_accepted(self):
        result = solve_motion(MotionInputs(vf=-30.0, h=-45.0, g=10.0, motion_kind="freeFall"))
        assert result.t == pytest.approx(3.0)
        result = solve_motion(MotionInputs(h=-44.1, t=3.0, g=G, motion_kind="freeFall"))
        assert result.vf == pytest.approx(-29.4)

    def test_starts_where_it_lands_on_ground(self):
        result = solve_motion(MotionInputs(vi=0.0, h=-45.0, g=10.0, motion_kind="freeFall"))
        assert result.initial_y == pytest.approx(45.0)
        assert result.h_max == pytest.approx(45.0)
        assert result.t_flight == pytest.approx(3.0)
        assert result.total_distance == pytest.approx(45.0)
        assert result.t_max is None


# =============================================================================
# Direction and Frame
# =============================================================================

class TestDirectionAndFrame:

    def test_downward_launch_flips_speed(self):
        result = solve_motion(MotionInputs(vi=5.0, t=2.0, g=10.0, direction="downwards"))
        assert result.vi == -5.0
        assert result.vf == pytest.approx(-25.0)
        assert result.h == pytest.approx(-30.0)

    def test_downward_launch_lands_at_end(self):
        result = solve_motion(MotionInputs(vi=5.0, t=2.0, g=10.0, direction="downwards"))
        assert result.initial_y == pytest.approx(30.0)
        assert result.t_flight == pytest.approx(2.0)

    def test_explicit_start_is_kept(self):
        result = solve_motion(MotionInputs(vi=5.0, t=2.0, g=10.0, direction="downwards", initial_y=100.0))
        assert result.initial_y == 100.0

    def test_upward_launch_starts_on_ground(self, round_trip):
        assert round_trip.initial_y == 0.0

    def test_resolve_frame(self):
        assert resolve_frame(None, MotionKind.FREE_FALL, True, -20.0).initial_y == 20.0
        assert resolve_frame(None, MotionKind.FREE_FALL, True, None).initial_y == 0.0
        assert resolve_frame(None, MotionKind.VERTICAL_LAUNCH, False, -20.0).initial_y == 0.0
        assert resolve_frame(7.0, MotionKind.FREE_FALL, True, -20.0).initial_y == 7.0


# =============================================================================
# End-to-End Results
# =============================================================================

class TestSolveMotion:

    def test_acceleration_is_negative_gravity(self, round_trip):
        assert round_trip.g == G
        assert round_trip.a == -G

    def test_worked_example(self):
        result = solve_motion(MotionInputs(vi=20, t=2, g=10))
        assert (result.vf, result.h) == (0.0, 20.0)
        assert result.motion_kind == MotionKind.VERTICAL_LAUNCH

    def test_flight_is_twice_time_to_peak(self, round_trip):
        assert round_trip.t_max == pytest.approx(20.0 / G)
        assert round_trip.t_flight == pytest.approx(2 * round_trip.t_max)

    def test_round_trip_distance(self, round_trip):
        assert round_trip.h == pytest.approx(0.0, abs=1e-12)
        assert round_trip.t == pytest.approx(40.0 / G)
        assert round_trip.total_distance == pytest.approx(2 * 400.0 / (2 * G))

    def test_height_query_has_two_roots(self, round_trip):
        root = math.sqrt(400.0 - 2 * G * 15.0)
        assert round_trip.times_at_query_height == pytest.approx(((20.0 - root) / G, (20.0 + root) / G))
        assert round_trip.velocities_at_query_height == pytest.approx((-root, root))

    def test_time_query(self, round_trip):
        assert round_trip.v_at_query_time == pytest.approx(10.2)
        assert round_trip.h_at_query_time == pytest.approx(15.1)

    def test_queries_absent_when_not_asked(self):
        result = solve_motion(MotionInputs(vi=20.0, t=1.0, g=G))
        assert result.query_time is None
        assert result.v_at_query_time is None
        assert result.times_at_query_height is None
        assert result.velocities_at_query_height is None

    def test_unreachable_fields_stay_unknown(self):
        result = solve_motion(MotionInputs(vi=10.0, h=10.0, g=G))
        assert result.vf is None
        assert result.t is None
        assert result.total_distance is None
        assert result.t_max == pytest.approx(10.0 / G)

    def test_zero_gravity(self):
        result = solve_motion(MotionInputs(vi=10.0, t=5.0, g=0.0))
        assert result.a == 0.0
        assert result.h == pytest.approx(50.0)
        assert result.vf == pytest.approx(10.0)
        assert result.t_max is None
        assert result.t_flight is None
        assert result.h_max is None
        assert result.total_distance == pytest.approx(50.0)

    def test_custom_config(self):
        result = solve_motion(MotionInputs(vf=-10.0, h=5.0, g=G), SolverConfig(max_passes=0))
        assert result.vi is None
        assert result.t_flight is None

    def test_calls_are_independent(self):
        inputs = MotionInputs(vi=12.0, h=-3.0, g=G, query_height=1.0)
        assert solve_motion(inputs) == solve_motion(inputs)


class TestNoNegativeTimes:
    """Every time handed back is either unknown or non-negative."""

    VALUES = {
        'vi': (-15.0, 0.0, 8.0, 25.0),
        'vf': (-30.0, -2.0, 0.0, 6.0),
        'h': (-40.0, 0.0, 3.0, 12.0),
        't': (0.0, 0.4, 2.5),
    }

    def test_sweep(self):
        fields = list(self.VALUES)
        for first, second in itertools.combinations(fields, 2):
            for x, y in itertools.product(self.VALUES[first], self.VALUES[second]):
                for g in (0.0, G):
                    result = solve_motion(MotionInputs(
                        g=g, query_height=5.0, query_time=1.0, **{first: x, second: y}
                    ))
                    times = [result.t, result.t_max, result.t_flight]
                    times.extend(result.times_at_query_height or ())
                    for value in times:
                        assert value is None or value >= 0, (first, x, second, y, g, result)


# =============================================================================
# Payloads
# =============================================================================

class TestPayloads:

    def test_from_mapping_form_keys(self):
        inputs = MotionInputs.from_mapping({
            'vi': '20', 'vf': '', 'h': None, 't': '2', 'g': '9.8',
            'motionType': 'verticalLaunch', 'initialY': '10',
            'queryTime': '1', 'queryHeight': '', 'colour': 'red',
        })
        assert inputs.vi == '20'
        assert inputs.vf is None
        assert inputs.query_height is None
        assert inputs.motion_kind == 'verticalLaunch'
        result = solve_motion(inputs)
        assert result.initial_y == 10.0
        assert result.vf == pytest.approx(20.0 - 2 * G)

    def test_from_mapping_keeps_default_kind(self):
        inputs = MotionInputs.from_mapping({'vi': 1, 't': 1, 'g': 1, 'motionType': ''})
        assert inputs.motion_kind == MotionKind.VERTICAL_LAUNCH

    def test_to_dict(self, round_trip):
        data = round_trip.to_dict()
        assert data['motion_kind'] == 'verticalLaunch'
        assert isinstance(data['times_at_query_height'], list)
        assert len(data['times_at_query_height']) == 2
        assert set(data) == set(MotionResult._fields)

    def test_display_uses_placeholder(self):
        result = solve_motion(MotionInputs(vi=10.0, h=10.0, g=G))
        shown = result.display()
        assert shown['vf'] == '---'
        assert shown['vi'] == '10.00'
        assert shown['times_at_query_height'] == '---'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
