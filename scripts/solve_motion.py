#!/usr/bin/env python3
"""
KinematicsForge Command Line Solver

Solve a vertical launch or free fall from two known quantities.

Usage:
    python scripts/solve_motion.py --vi 20 --t 3 --g 9.8
    python scripts/solve_motion.py --motion freeFall --vi 0 --h -45 --g 9.8
    python scripts/solve_motion.py --vi 20 --vf -20 --g 9.8 --query-height 15
    python scripts/solve_motion.py --vi 20 --t 3 --g 9.8 --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from kinematics.errors import MotionInputError
from kinematics.formatting import result_lines
from kinematics.session import MotionInputs, solve_motion
from kinematics.state import LaunchDirection, MotionKind


logger = logging.getLogger("kinematics.cli")


def add_motion_arguments(parser: argparse.ArgumentParser) -> None:
    """Arguments shared by every script that solves a motion."""
    known = parser.add_argument_group('known quantities (give exactly two)')
    known.add_argument('--vi', type=float, default=None, help='Initial velocity [m/s]')
    known.add_argument('--vf', type=float, default=None, help='Final velocity [m/s]')
    known.add_argument('--h', type=float, default=None, help='Displacement [m]')
    known.add_argument('--t', type=float, default=None, help='Time [s]')

    parser.add_argument('--g', type=float, default=None,
                        help='Gravity magnitude [m/s^2] (required)')
    parser.add_argument('--initial-y', type=float, default=None,
                        help='Starting height above the ground [m]')
    parser.add_argument('--motion', type=str, default=MotionKind.VERTICAL_LAUNCH.value,
                        choices=[kind.value for kind in MotionKind],
                        help='Scenario type')
    parser.add_argument('--direction', type=str, default=LaunchDirection.UPWARDS.value,
                        choices=[d.value for d in LaunchDirection],
                        help='Launch direction (vertical launch only)')
    parser.add_argument('--query-time', type=float, default=None,
                        help='Report velocity and height at this time [s]')
    parser.add_argument('--query-height', type=float, default=None,
                        help='Report times and velocities at this height [m]')
    parser.add_argument('--verbose', action='store_true',
                        help='Log solver passes')


def inputs_from_args(args: argparse.Namespace) -> MotionInputs:
    return MotionInputs(
        vi=args.vi,
        vf=args.vf,
        h=args.h,
        t=args.t,
        g=args.g,
        initial_y=args.initial_y,
        motion_kind=args.motion,
        direction=args.direction,
        query_time=args.query_time,
        query_height=args.query_height,
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Solve one-dimensional constant-acceleration motion')
    add_motion_arguments(parser)
    parser.add_argument('--json', action='store_true',
                        help='Print raw and formatted results as JSON')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    try:
        result = solve_motion(inputs_from_args(args))
    except MotionInputError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    logger.info("solved %s request", result.motion_kind.value)

    if args.json:
        print(json.dumps({'result': result.to_dict(), 'display': result.display()}, indent=2))
        return 0

    print("=" * 50)
    print(f"Motion: {result.motion_kind.value}  (start at {result.initial_y:.2f} m)")
    print("=" * 50)
    for line in result_lines(result):
        print(f"  {line}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
