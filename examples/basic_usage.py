#!/usr/bin/env python3
"""
Basic usage example of the UKF tracker.

This example feeds simulated lidar and radar measurements of a turning
target into the filter and prints the estimate against the ground truth.
"""

import sys
import os
import numpy as np

# Add package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ukf_tracking import UnscentedKalmanFilter, TargetState, Config, setup_logging
from ukf_tracking.sensors import TargetTruth, SensorSimulator

def main():
    """Main example function."""
    print("UKF Tracker - Basic Usage Example")
    print("=" * 50)

    config = Config()
    setup_logging(config)

    ukf = UnscentedKalmanFilter.from_config(config)

    # Target circling at 5 m/s, starting away from the sensor origin
    truth = TargetTruth(x=10.0, y=5.0, v=5.0, yaw=0.0, yaw_rate=0.2)
    simulator = SensorSimulator(random_state=np.random.default_rng(42))

    print("Starting simulation (turning target, 30 seconds)...")

    last_print_us = None
    print_interval_us = 5_000_000  # Print status every 5 seconds
    errors = []

    for measurement, true_state in simulator.simulate(truth, duration_s=30.0):
        state = ukf.process_measurement(measurement)
        errors.append(np.linalg.norm(state.position - true_state[:2]))

        if last_print_us is None or measurement.timestamp - last_print_us >= print_interval_us:
            print_status(state, true_state, ukf)
            last_print_us = measurement.timestamp

    print("\nSimulation completed!")

    # Final statistics
    final_stats = ukf.get_statistics()
    print("\n=== Final Statistics ===")
    print(f"UKF Predictions: {final_stats['predictions']}")
    print(f"Lidar Updates: {final_stats['lidar_updates']}")
    print(f"Radar Updates: {final_stats['radar_updates']}")
    print(f"Mean Position Error: {np.mean(errors[-100:]):.3f} m (last 100)")
    print(f"Final Position Uncertainty: {final_stats['position_uncertainty']:.3f} m")

def print_status(state: TargetState, true_state: np.ndarray, ukf: UnscentedKalmanFilter):
    """Print current estimate and truth."""
    uncertainty = ukf.get_position_uncertainty()

    print(f"Time: {state.timestamp / 1e6:.1f}s")
    print(f"  Position: [{state.x:7.2f}, {state.y:7.2f}] m  (true [{true_state[0]:7.2f}, {true_state[1]:7.2f}])")
    print(f"  Speed:    {state.v:5.2f} m/s (true {true_state[2]:5.2f})")
    print(f"  Yaw rate: {state.yaw_rate:6.3f} rad/s (true {true_state[4]:6.3f})")
    print(f"  Uncertainty: {uncertainty:5.3f} m")
    print()

if __name__ == "__main__":
    main()
