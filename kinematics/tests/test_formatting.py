"""Tests for display formatting."""

import pytest

from kinematics.formatting import (
    OVERLAY_PLACEHOLDER,
    PLACEHOLDER,
    format_compact,
    format_times,
    format_value,
    format_velocities,
    result_lines,
)
from kinematics.session import MotionInputs, solve_motion


class TestValues:

    def test_two_decimals(self):
        assert format_value(1.234) == "1.23"
        assert format_value(2.0) == "2.00"

    def test_unknown(self):
        assert format_value(None) == PLACEHOLDER == "---"

    def test_negative_zero(self):
        assert format_value(-0.001) == "0.00"
        assert format_value(-0.0) == "0.00"

    def test_decimals(self):
        assert format_value(3.14159, decimals=4) == "3.1416"

    def test_compact(self):
        assert format_compact(12.0) == "12"
        assert format_compact(4.081) == "4.08"
        assert format_compact(2.5) == "2.50"
        assert format_compact(-0.001) == "0"

    def test_compact_unknown(self):
        assert format_compact(None) == OVERLAY_PLACEHOLDER == "N/A"


class TestLists:

    def test_times(self):
        assert format_times((0.98, 3.0914)) == "0.98s or 3.09s"
        assert format_times([1.5]) == "1.50s"

    def test_velocities(self):
        assert format_velocities((-10.2956, 10.2956)) == "-10.30m/s or 10.30m/s"

    def test_empty_or_missing(self):
        assert format_times(()) == PLACEHOLDER
        assert format_times(None) == PLACEHOLDER
        assert format_velocities(()) == PLACEHOLDER


class TestResultLines:

    def test_overlay_lines(self):
        result = solve_motion(MotionInputs(vi=20.0, vf=-20.0, g=9.8, query_height=15.0))
        lines = result_lines(result)
        assert len(lines) == 14
        assert lines[0] == "Vi: 20 m/s"
        assert lines[1] == "Vf: -20 m/s"
        assert lines[2] == "h: 0 m"
        assert lines[5] == "a: -9.80 m/s²"
        assert lines[10] == "Query V(tq): N/A m/s"
        assert lines[12] == "Query T(hq): 0.99s or 3.09s"

    def test_raw_values_untouched(self):
        result = solve_motion(MotionInputs(vi=20.0, vf=-20.0, g=9.8, query_height=15.0))
        before = result.times_at_query_height
        result_lines(result)
        result.display()
        assert result.times_at_query_height == before
        assert len(before) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
