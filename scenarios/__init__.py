"""
KinematicsForge Scenarios Module

Random, self-consistent motion scenarios for solver verification.
"""

from scenarios.generator import (
    Scenario,
    PHASES,
    generate_scenario,
    generate_scenarios,
    scenario_pairs,
)

__all__ = [
    "Scenario",
    "PHASES",
    "generate_scenario",
    "generate_scenarios",
    "scenario_pairs",
]
