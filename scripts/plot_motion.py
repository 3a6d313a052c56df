#!/usr/bin/env python3
"""
Plot a solved motion.

Draws the height over time and the display path of the object, with the
peak, the landing point and any queried instants marked.

Usage:
    python scripts/plot_motion.py --vi 20 --vf -20 --g 9.8 --query-height 15
    python scripts/plot_motion.py --motion freeFall --vi 0 --h -45 --g 9.8 --output fall.png
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import numpy as np
import matplotlib.pyplot as plt

from kinematics.errors import MotionInputError
from kinematics.formatting import format_compact
from kinematics.session import solve_motion
from kinematics.simulator import (
    pause_schedule,
    positions_at,
    sample_trajectory,
    simulation_duration,
    simulation_scale,
)
from scripts.solve_motion import add_motion_arguments, inputs_from_args


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Plot a vertical launch or free fall')
    add_motion_arguments(parser)
    parser.add_argument('--points', type=int, default=201,
                        help='Number of samples along the trajectory')
    parser.add_argument('--output', type=str, default=None,
                        help='Save the figure here instead of showing it')
    return parser.parse_args(argv)


def plot_result(result, num_points=201):
    """Build the two-panel figure for a solved motion."""
    duration = simulation_duration(result)
    scale = simulation_scale(result, duration)
    traj = sample_trajectory(result, duration, num_points)
    times = np.asarray(traj.times)
    positions = np.asarray(traj.positions)
    events = pause_schedule(result, duration)

    fig, axes = plt.subplots(1, 2, figsize=(12, 5))

    # Height over time
    ax = axes[0]
    ax.plot(times, positions[:, 1], 'b-', linewidth=2, label='Height')
    ax.axhline(0.0, color='saddlebrown', linewidth=2)
    if result.t_max is not None and result.h_max is not None:
        ax.plot(result.t_max, result.h_max, 'r^', markersize=10, zorder=5,
                label=f'Peak {format_compact(result.h_max)} m')
    for event in events:
        y = float(positions_at(result, np.array([event.time]), scale)[0, 1])
        ax.plot(event.time, y, 'ko', markersize=6, zorder=5)
        ax.annotate(event.label, (event.time, y), textcoords='offset points',
                    xytext=(5, 5), fontsize=8)
    ax.set_xlabel('Time [s]')
    ax.set_ylabel('Height [m]')
    ax.set_ylim(scale.min_y, scale.max_y)
    ax.set_title('Height vs Time')
    ax.legend(loc='upper right', fontsize=8)
    ax.grid(True, alpha=0.3)

    # Display path
    ax = axes[1]
    ax.plot(positions[:, 0], positions[:, 1], 'b-', linewidth=2, alpha=0.8)
    ax.plot(positions[0, 0], positions[0, 1], 'go', markersize=10, zorder=5)
    ax.plot(positions[-1, 0], positions[-1, 1], 'b^', markersize=8, zorder=5)
    ax.axhline(0.0, color='saddlebrown', linewidth=2)
    ax.axhline(result.initial_y, color='gray', linestyle='--', linewidth=1,
               label=f'Y_ini {format_compact(result.initial_y)} m')
    if result.h_max is not None:
        ax.axhline(result.h_max, color='red', linestyle='--', linewidth=1,
                   label=f'Y_max {format_compact(result.h_max)} m')
    ax.set_ylim(scale.min_y, scale.max_y)
    ax.set_xticks([])
    ax.set_ylabel('Height [m]')
    ax.set_title(f'{result.motion_kind.value} path')
    ax.legend(loc='upper right', fontsize=8)
    ax.grid(True, alpha=0.3)

    plt.suptitle(f'vi = {format_compact(result.vi)} m/s, a = {format_compact(result.a)} m/s²,'
                 f' t_flight = {format_compact(result.t_flight)} s', fontsize=12)
    plt.tight_layout()
    return fig


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        result = solve_motion(inputs_from_args(args))
    except MotionInputError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    fig = plot_result(result, args.points)
    if args.output:
        fig.savefig(args.output, dpi=150, bbox_inches='tight')
        print(f"  Saved: {args.output}")
    else:
        plt.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
