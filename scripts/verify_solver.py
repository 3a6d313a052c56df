#!/usr/bin/env python3
"""
Verify KinematicsForge Setup

Run this script to verify that all components are working correctly.
Besides a few worked examples it sweeps random consistent scenarios and
checks that the solver recovers every quantity from every pair.

Usage:
    python scripts/verify_solver.py
    python scripts/verify_solver.py --samples 2000 --seed 7
"""

import argparse
import sys
from pathlib import Path

# Add project root to path (parent of scripts/)
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tqdm import tqdm


def test_imports():
    """Test that all modules can be imported."""
    print("Testing imports...")

    try:
        import jax
        print(f"  ✅ JAX {jax.__version__}")
    except ImportError as e:
        print(f"  ❌ JAX: {e}")
        return False

    try:
        from kinematics.session import solve_motion, MotionInputs
        from kinematics.solver import solve_variables
        from kinematics.simulator import sample_trajectory
        print("  ✅ Kinematics module")
    except ImportError as e:
        print(f"  ❌ Kinematics module: {e}")
        return False

    try:
        from scenarios.generator import generate_scenarios
        print("  ✅ Scenarios module")
    except ImportError as e:
        print(f"  ❌ Scenarios module: {e}")
        return False

    return True


def test_worked_example():
    """Solve a symmetric launch by hand-checkable numbers."""
    print("\nTesting worked example...")

    from kinematics.session import solve_motion, MotionInputs

    result = solve_motion(MotionInputs(vi=20.0, vf=-20.0, g=9.8, query_height=15.0))
    ok = (
        abs(result.t - 40.0 / 9.8) < 1e-9
        and abs(result.t_flight - 2 * result.t_max) < 1e-9
        and len(result.times_at_query_height) == 2
    )
    mark = "✅" if ok else "❌"
    print(f"  {mark} t = {result.t:.4f} s, t_flight = {result.t_flight:.4f} s, "
          f"distance = {result.total_distance:.2f} m")
    return ok


def test_closure(num_samples, seed, tolerance=1e-6):
    """Recover every scenario from every pair of its quantities."""
    print("\nTesting closure over random scenarios...")

    from kinematics.solver import solve_variables
    from kinematics.state import PRIMARY_FIELDS
    from scenarios.generator import PHASES, generate_scenarios, scenario_pairs

    failures = 0
    checked = 0
    for phase in PHASES:
        scenarios = generate_scenarios(num_samples, seed=seed, phase=phase)
        for scenario in tqdm(scenarios, desc=phase, leave=False):
            for pair in scenario_pairs():
                solved = solve_variables(scenario.known(pair))
                checked += 1
                for name in PRIMARY_FIELDS:
                    value = getattr(solved, name)
                    expected = getattr(scenario, name)
                    if value is None or abs(value - expected) > tolerance:
                        failures += 1
                        print(f"  ❌ {phase} {pair}: {name}={value} expected {expected}")
                        break

    mark = "✅" if failures == 0 else "❌"
    print(f"  {mark} {checked - failures}/{checked} pair solves recovered")
    return failures == 0


def test_trajectory():
    """Sample a trajectory for playback."""
    print("\nTesting trajectory sampling...")

    from kinematics.session import solve_motion, MotionInputs
    from kinematics.simulator import sample_trajectory, pause_schedule

    result = solve_motion(MotionInputs(vi=15.0, t=1.0, g=9.8, initial_y=10.0, query_time=0.5))
    traj = sample_trajectory(result)
    events = pause_schedule(result)

    print(f"  ✅ Sampled {traj.num_points} points")
    print(f"  ✅ Pauses: {', '.join(f'{e.label}@{e.time:.2f}s' for e in events)}")
    return True


def parse_args():
    parser = argparse.ArgumentParser(description='Verify the KinematicsForge solver')
    parser.add_argument('--samples', type=int, default=500,
                        help='Random scenarios per phase')
    parser.add_argument('--seed', type=int, default=42,
                        help='Random seed')
    return parser.parse_args()


def main():
    """Run all checks."""
    args = parse_args()

    print("=" * 50)
    print("KinematicsForge Setup Verification")
    print("=" * 50)

    all_passed = True

    if not test_imports():
        all_passed = False

    if not test_worked_example():
        all_passed = False

    if not test_closure(args.samples, args.seed):
        all_passed = False

    if not test_trajectory():
        all_passed = False

    print("\n" + "=" * 50)
    if all_passed:
        print("✅ All checks passed! KinematicsForge is ready to use.")
    else:
        print("❌ Some checks failed. Please check the errors above.")
    print("=" * 50)

    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(main())
