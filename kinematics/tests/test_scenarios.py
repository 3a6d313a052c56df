"""Tests for the random scenario generator used by the closure checks."""

import pytest
from jax import random

from kinematics.state import PRIMARY_FIELDS
from scenarios.generator import (
    PHASES,
    generate_scenario,
    generate_scenarios,
    scenario_pairs,
)


class TestScenarioGenerator:

    def test_pairs(self):
        pairs = scenario_pairs()
        assert len(pairs) == 6
        assert len(set(pairs)) == 6
        assert ("vi", "vf") in pairs and ("h", "t") in pairs

    @pytest.mark.parametrize("phase", PHASES)
    def test_scenarios_are_consistent(self, phase):
        for s in generate_scenarios(20, seed=3, phase=phase):
            assert s.vf == pytest.approx(s.vi + s.a * s.t)
            assert s.h == pytest.approx(s.vi * s.t + 0.5 * s.a * s.t ** 2)
            assert s.vf ** 2 == pytest.approx(s.vi ** 2 + 2 * s.a * s.h)
            assert s.a < 0
            assert s.t > 0

    def test_ascending_ends_before_peak(self):
        for s in generate_scenarios(20, phase="ascending"):
            assert s.vi > 0
            assert s.vf > 0
            assert s.h > 0

    def test_falling_moves_down(self):
        for s in generate_scenarios(20, phase="falling"):
            assert s.vi < 0
            assert s.h < 0

    def test_seed_is_reproducible(self):
        assert generate_scenarios(5, seed=11) == generate_scenarios(5, seed=11)
        assert generate_scenarios(5, seed=11) != generate_scenarios(5, seed=12)

    def test_known_hides_other_fields(self):
        scenario = generate_scenario(random.PRNGKey(0))
        state = scenario.known(("vi", "t"))
        assert state.known_fields() == ("vi", "t")
        assert state.a == scenario.a
        assert scenario.full_state().known_fields() == PRIMARY_FIELDS

    def test_unknown_phase(self):
        with pytest.raises(ValueError):
            generate_scenario(random.PRNGKey(0), phase="hovering")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
