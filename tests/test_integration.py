#!/usr/bin/env python3
"""
Integration tests for the complete tracking system.
"""

import unittest
import json
import math
import numpy as np
import sys
import os
import tempfile
import time

# Add package to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ukf_tracking import UnscentedKalmanFilter, Config
from ukf_tracking.sensors import SensorType, MeasurementPackage, TargetTruth, SensorSimulator

class TestSensorFusion(unittest.TestCase):
    """Test the filter on simulated lidar and radar data."""

    def _run(self, ukf, truth, duration_s, seed):
        simulator = SensorSimulator(random_state=np.random.default_rng(seed))
        estimates = []
        truths = []
        for measurement, true_state in simulator.simulate(truth, duration_s=duration_s):
            state = ukf.process_measurement(measurement)
            estimates.append(state.state_vector)
            truths.append(true_state)
        return np.array(estimates), np.array(truths)

    def test_constant_velocity_convergence(self):
        """Test speed and position converge for a straight-line target."""
        ukf = UnscentedKalmanFilter(process_noise={'std_a': 0.5, 'std_yawdd': 0.3})
        truth = TargetTruth(x=4.0, y=1.0, v=5.0, yaw=0.2, yaw_rate=0.0)

        estimates, truths = self._run(ukf, truth, duration_s=15.0, seed=7)

        # Last 100 cycles, after convergence
        tail_est = estimates[-100:]
        tail_true = truths[-100:]

        speed_error = np.mean(np.abs(tail_est[:, 2] - tail_true[:, 2]))
        self.assertLess(speed_error, 0.05 * 5.0)

        position_rmse = np.sqrt(np.mean(np.sum((tail_est[:, :2] - tail_true[:, :2]) ** 2, axis=1)))
        self.assertLess(position_rmse, 0.5)

        final_error = np.linalg.norm(tail_est[-1, :2] - tail_true[-1, :2])
        self.assertLess(final_error, 0.5)

        self.assertTrue(ukf.is_finite())

    def test_turning_target(self):
        """Test the filter follows a target on a circular path."""
        ukf = UnscentedKalmanFilter(process_noise={'std_a': 1.0, 'std_yawdd': 0.5})
        truth = TargetTruth(x=10.0, y=5.0, v=5.0, yaw=0.0, yaw_rate=0.2)

        estimates, truths = self._run(ukf, truth, duration_s=20.0, seed=11)

        position_rmse = np.sqrt(np.mean(np.sum((estimates[-100:, :2] - truths[-100:, :2]) ** 2, axis=1)))
        self.assertLess(position_rmse, 0.5)

        speed_error = np.mean(np.abs(estimates[-100:, 2] - truths[-100:, 2]))
        self.assertLess(speed_error, 0.5)

    def test_covariance_stays_valid(self):
        """Test covariance is symmetric positive semi-definite every cycle."""
        ukf = UnscentedKalmanFilter()
        truth = TargetTruth(x=6.0, y=-3.0, v=3.0, yaw=1.0, yaw_rate=-0.1)
        simulator = SensorSimulator(random_state=np.random.default_rng(3))

        for measurement, _ in simulator.simulate(truth, duration_s=5.0):
            ukf.process_measurement(measurement)
            P = ukf.P
            np.testing.assert_allclose(P, P.T, atol=1e-8)
            self.assertGreater(np.min(np.linalg.eigvalsh((P + P.T) / 2)), -1e-9)

    def test_lidar_only(self):
        """Test tracking with radar updates disabled."""
        ukf = UnscentedKalmanFilter(process_noise={'std_a': 0.5, 'std_yawdd': 0.3}, use_radar=False)
        truth = TargetTruth(x=4.0, y=1.0, v=5.0, yaw=0.2, yaw_rate=0.0)

        estimates, truths = self._run(ukf, truth, duration_s=15.0, seed=5)

        stats = ukf.get_statistics()
        self.assertEqual(stats['radar_updates'], 0)
        self.assertGreater(stats['lidar_updates'], 0)
        self.assertEqual(stats['predictions'], len(estimates) - 1)

        position_rmse = np.sqrt(np.mean(np.sum((estimates[-100:, :2] - truths[-100:, :2]) ** 2, axis=1)))
        self.assertLess(position_rmse, 0.5)

    def test_radar_first_then_lidar(self):
        """Test radar before lidar is dropped and lidar bootstraps the filter."""
        ukf = UnscentedKalmanFilter()

        ukf.process_measurement(MeasurementPackage(SensorType.RADAR, 0, [5.0, 0.2, 1.0]))
        self.assertFalse(ukf.is_initialized)

        ukf.process_measurement(MeasurementPackage(SensorType.LIDAR, 50000, [4.9, 1.0]))
        self.assertTrue(ukf.is_initialized)

        ukf.process_measurement(MeasurementPackage(SensorType.RADAR, 100000, [5.0, 0.2, 1.0]))

        stats = ukf.get_statistics()
        self.assertEqual(stats['discarded'], 1)
        self.assertEqual(stats['radar_updates'], 1)
        self.assertEqual(stats['predictions'], 1)

class TestConfiguration(unittest.TestCase):
    """Test configuration loading and filter construction."""

    def test_defaults(self):
        """Test default configuration values."""
        config = Config()

        self.assertTrue(config.use_lidar)
        self.assertTrue(config.use_radar)
        self.assertEqual(config.process_noise['std_a'], 3.0)
        self.assertEqual(config.process_noise['std_yawdd'], 1.0)
        self.assertEqual(config.measurement_noise['std_radphi'], 0.03)
        self.assertEqual(config.log_level, "INFO")
        self.assertIsNone(config.log_file)

    def test_defaults_not_shared(self):
        """Test changing one config does not leak into the defaults."""
        config = Config()
        config.set('process_noise.std_a', 9.0)

        self.assertEqual(Config().process_noise['std_a'], 3.0)

    def test_load_and_merge(self):
        """Test file values override defaults and missing keys keep defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'config.json')
            with open(path, 'w') as f:
                json.dump({"use_radar": False, "process_noise": {"std_a": 1.5}}, f)

            config = Config(path)

        self.assertFalse(config.use_radar)
        self.assertEqual(config.process_noise['std_a'], 1.5)
        self.assertEqual(config.process_noise['std_yawdd'], 1.0)

    def test_invalid_file(self):
        """Test malformed JSON is reported and defaults are kept."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'config.json')
            with open(path, 'w') as f:
                f.write("{not json")

            config = Config(path)
            self.assertFalse(config.load_config())

        self.assertTrue(config.use_radar)

    def test_missing_file(self):
        """Test a missing file falls back to defaults."""
        config = Config('/nonexistent/ukf_config.json')
        self.assertEqual(config.process_noise['std_a'], 3.0)

    def test_get_set(self):
        """Test dotted key access."""
        config = Config()

        self.assertEqual(config.get('measurement_noise.std_radr'), 0.3)
        self.assertIsNone(config.get('measurement_noise.missing'))
        self.assertEqual(config.get('missing.key', 'fallback'), 'fallback')

        config.set('filter.extra', 1)
        self.assertEqual(config.get('filter.extra'), 1)

    def test_save_round_trip(self):
        """Test saved configuration loads back."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'config.json')
            config = Config()
            config.set('use_lidar', False)
            self.assertTrue(config.save_config(path))

            loaded = Config(path)

        self.assertFalse(loaded.use_lidar)

    def test_filter_from_config(self):
        """Test filter picks up noise and sensor switches."""
        config = Config()
        config.set('use_radar', False)
        config.set('process_noise.std_a', 2.0)
        config.set('measurement_noise.std_laspx', 0.2)

        ukf = UnscentedKalmanFilter.from_config(config)

        self.assertFalse(ukf.use_radar)
        self.assertTrue(ukf.use_lidar)
        self.assertEqual(ukf.std_a, 2.0)
        self.assertAlmostEqual(ukf.R_lidar[0, 0], 0.04)
        self.assertAlmostEqual(ukf.R_lidar[1, 1], 0.0225)

class TestPerformance(unittest.TestCase):
    """Test system performance characteristics."""

    def test_cycle_performance(self):
        """Test predict/update cycle performance."""
        ukf = UnscentedKalmanFilter()
        truth = TargetTruth(x=5.0, y=5.0, v=2.0, yaw=0.5, yaw_rate=0.05)
        simulator = SensorSimulator(random_state=np.random.default_rng(1))
        measurements = [m for m, _ in simulator.simulate(truth, duration_s=50.0)]

        start_time = time.time()
        for measurement in measurements:
            ukf.process_measurement(measurement)
        elapsed = time.time() - start_time

        # 1000 cycles in reasonable time
        self.assertLess(elapsed, 5.0,
                        f"Cycles too slow: {elapsed:.3f}s for {len(measurements)} measurements")
        self.assertTrue(math.isfinite(ukf.get_position_uncertainty()))

if __name__ == '__main__':
    # Run tests with verbose output
    unittest.main(verbosity=2)
