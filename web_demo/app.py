#!/usr/bin/env python3
"""
KinematicsForge Web Demo
Send two known quantities, get the whole motion back, ready to animate.
"""

import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from flask import Flask, request, jsonify
from flask_cors import CORS
import numpy as np

from kinematics.errors import MotionInputError
from kinematics.session import MotionInputs, solve_motion
from kinematics.simulator import (
    pause_schedule,
    sample_trajectory,
    simulation_duration,
    simulation_scale,
)

app = Flask(__name__)
CORS(app)

logger = logging.getLogger("kinematics.web")


# =============================================================================
# Serialisation
# =============================================================================

def playback_payload(result):
    """Everything the browser needs to draw and animate a result."""
    duration = simulation_duration(result)
    scale = simulation_scale(result, duration)
    traj = sample_trajectory(result, duration)
    return {
        'duration': duration,
        'scale': scale._asdict(),
        'times': np.asarray(traj.times).tolist(),
        'positions': np.asarray(traj.positions).tolist(),
        'pauses': [event._asdict() for event in pause_schedule(result, duration)],
    }


# =============================================================================
# Routes
# =============================================================================

@app.route('/health')
def health():
    return jsonify({'status': 'ok'})


@app.route('/solve', methods=['POST'])
def solve():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Expected a JSON object'}), 400

    try:
        result = solve_motion(MotionInputs.from_mapping(data))
    except MotionInputError as e:
        return jsonify({'error': str(e)}), 400

    logger.info("solved %s request", result.motion_kind.value)

    return jsonify({
        'result': result.to_dict(),
        'display': result.display(),
        'playback': playback_payload(result),
    })


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    print("\n🚀 Starting KinematicsForge Demo Server...")
    print("   POST a motion to http://localhost:5000/solve\n")
    app.run(debug=True, port=5000)
