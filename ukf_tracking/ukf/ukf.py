"""
Unscented Kalman Filter implementation for lidar/radar target tracking.
"""

import logging
import numpy as np
from typing import Optional, Dict, Any

from .errors import UnknownSensorError, TimestampError
from .state import TargetState
from .models import ProcessModel, MeasurementModel
from .sigma_points import SigmaPointGenerator, predict_mean_and_covariance
from ..sensors.measurement import SensorType, MeasurementPackage
from ..math.utils import normalize_angle, normalize_component
from ..math.constants import *

logger = logging.getLogger(__name__)


class UnscentedKalmanFilter:
    """
    Unscented Kalman Filter for a CTRV target observed by lidar and radar.

    The filter starts uninitialized; the first lidar measurement seeds the
    position. Radar measurements that arrive earlier are discarded.
    One instance tracks one target and is not safe for concurrent use.
    """

    def __init__(self,
                 process_noise: Dict[str, float] = None,
                 measurement_noise: Dict[str, float] = None,
                 use_lidar: bool = True,
                 use_radar: bool = True):
        """
        Initialize the Unscented Kalman Filter.

        Args:
            process_noise: Process noise std-devs ('std_a', 'std_yawdd')
            measurement_noise: Measurement noise std-devs ('std_laspx',
                'std_laspy', 'std_radr', 'std_radphi', 'std_radrd')
            use_lidar: If False, lidar measurements only initialize the filter
            use_radar: If False, radar measurements are ignored
        """
        # Sensor switches
        self.use_lidar = use_lidar
        self.use_radar = use_radar

        # Models
        self.sigma_generator = SigmaPointGenerator()
        self.process_model = ProcessModel()
        self.measurement_model = MeasurementModel()
        self.weights = self.sigma_generator.weights

        # Noise parameters
        process_noise = process_noise or {}
        self.std_a = process_noise.get('std_a', STD_A)
        self.std_yawdd = process_noise.get('std_yawdd', STD_YAWDD)

        self.R_params = {
            'std_laspx': STD_LASPX,
            'std_laspy': STD_LASPY,
            'std_radr': STD_RADR,
            'std_radphi': STD_RADPHI,
            'std_radrd': STD_RADRD
        }
        self.R_params.update(measurement_noise or {})

        self.H_lidar = self.measurement_model.lidar_matrix()
        self.R_lidar = self.measurement_model.measurement_noise_matrix(self.R_params, SensorType.LIDAR)
        self.R_radar = self.measurement_model.measurement_noise_matrix(self.R_params, SensorType.RADAR)

        self.reset()

    @classmethod
    def from_config(cls, config) -> 'UnscentedKalmanFilter':
        """Create a filter from a Config instance."""
        return cls(
            process_noise=config.process_noise,
            measurement_noise=config.measurement_noise,
            use_lidar=config.use_lidar,
            use_radar=config.use_radar
        )

    def _initialize_covariance(self) -> np.ndarray:
        """Initialize state covariance matrix."""
        return np.eye(STATE_SIZE) * INITIAL_COVARIANCE_SCALE

    def reset(self):
        """Return the filter to the uninitialized state."""
        self.x = np.zeros(STATE_SIZE)
        self.P = self._initialize_covariance()
        self.Xsig_pred = np.zeros((STATE_SIZE, self.sigma_generator.n_sigma))

        self.is_initialized = False
        self.time_us: Optional[int] = None

        # Statistics
        self.prediction_count = 0
        self.lidar_update_count = 0
        self.radar_update_count = 0
        self.discarded_count = 0
        self.nis_lidar: Optional[float] = None
        self.nis_radar: Optional[float] = None

    def process_measurement(self, measurement: MeasurementPackage) -> TargetState:
        """
        Run one predict/update cycle for a measurement.

        Args:
            measurement: Timestamped lidar or radar measurement

        Returns:
            Estimated target state after the cycle

        Raises:
            UnknownSensorError: If the sensor type is not lidar or radar
            TimestampError: If the timestamp is earlier than the last one
            ValueError: If the measurement has the wrong dimension
        """
        sensor_type = measurement.sensor_type
        if not isinstance(sensor_type, SensorType):
            raise UnknownSensorError(f"Unknown measurement source: {sensor_type!r}")

        z = measurement.raw_measurements
        if len(z) != sensor_type.measurement_size:
            raise ValueError(
                f"{sensor_type.value} measurement must have "
                f"{sensor_type.measurement_size} elements, got {len(z)}"
            )

        if not self.is_initialized:
            if sensor_type is SensorType.LIDAR:
                self._initialize(measurement)
            else:
                self.discarded_count += 1
                logger.debug("Discarding %s before initialization", measurement)
            return self.get_current_state()

        if measurement.timestamp < self.time_us:
            raise TimestampError(
                f"Timestamp {measurement.timestamp} is earlier than "
                f"last processed timestamp {self.time_us}"
            )

        dt = (measurement.timestamp - self.time_us) / MICROSECONDS_PER_SECOND
        self.time_us = measurement.timestamp
        logger.debug("Cycle %s, dt=%.6f s", sensor_type.value, dt)

        self.predict(dt)

        if sensor_type is SensorType.LIDAR:
            if self.use_lidar:
                self.update_lidar(z)
        elif self.use_radar:
            self.update_radar(z)

        if not self.is_finite():
            logger.warning("Filter state is no longer finite; reset required")

        return self.get_current_state()

    def _initialize(self, measurement: MeasurementPackage):
        """Seed position from the first lidar measurement."""
        self.x = np.zeros(STATE_SIZE)
        self.x[:2] = measurement.raw_measurements
        self.time_us = measurement.timestamp
        self.is_initialized = True
        logger.info("Filter initialized at [%.3f, %.3f]", self.x[0], self.x[1])

    def predict(self, dt: float) -> TargetState:
        """
        Prediction step of the Kalman filter.

        Args:
            dt: Time step in seconds

        Returns:
            Predicted target state
        """
        Xsig_aug = self.sigma_generator.augmented_sigma_points(
            self.x, self.P, self.std_a, self.std_yawdd
        )

        self.Xsig_pred = self.process_model.predict_sigma_points(Xsig_aug, dt)

        self.x, self.P = predict_mean_and_covariance(self.Xsig_pred, self.weights, YAW_INDEX)

        self.prediction_count += 1

        return self.get_current_state()

    def update_lidar(self, lidar_measurement: np.ndarray) -> TargetState:
        """
        Linear Kalman update with a lidar measurement.

        Args:
            lidar_measurement: Lidar position measurement [x, y]

        Returns:
            Updated target state
        """
        H = self.H_lidar

        # Innovation (measurement residual)
        y = np.asarray(lidar_measurement, dtype=float) - self.measurement_model.lidar_measurement(self.x)

        # Innovation covariance
        S = H @ self.P @ H.T + self.R_lidar
        S_inv = np.linalg.inv(S)

        # Kalman gain
        K = self.P @ H.T @ S_inv

        # Update state and covariance
        self.x = self.x + K @ y
        I = np.eye(STATE_SIZE)
        self.P = (I - K @ H) @ self.P

        self.nis_lidar = float(y @ S_inv @ y)
        self.lidar_update_count += 1
        logger.debug("Lidar NIS %.3f", self.nis_lidar)

        return self.get_current_state()

    def update_radar(self, radar_measurement: np.ndarray) -> TargetState:
        """
        Unscented update with a radar measurement.

        Uses the sigma points from the last prediction.

        Args:
            radar_measurement: Radar measurement [range, bearing, range_rate]

        Returns:
            Updated target state
        """
        # Sigma points in measurement space
        Zsig = self.measurement_model.radar_sigma_points(self.Xsig_pred)

        # Predicted measurement mean and innovation covariance
        z_pred, S = predict_mean_and_covariance(Zsig, self.weights, BEARING_INDEX)
        S = S + self.R_radar

        # Cross correlation between state and measurement space
        z_diff = Zsig - z_pred[:, np.newaxis]
        z_diff[BEARING_INDEX] = normalize_angle(z_diff[BEARING_INDEX])

        x_diff = self.Xsig_pred - self.x[:, np.newaxis]
        x_diff[YAW_INDEX] = normalize_angle(x_diff[YAW_INDEX])

        Tc = (self.weights * x_diff) @ z_diff.T

        # Kalman gain
        S_inv = np.linalg.inv(S)
        K = Tc @ S_inv

        # Innovation
        y = normalize_component(np.asarray(radar_measurement, dtype=float) - z_pred, BEARING_INDEX)

        # Update state and covariance
        self.x = self.x + K @ y
        self.P = self.P - K @ S @ K.T

        self.nis_radar = float(y @ S_inv @ y)
        self.radar_update_count += 1
        logger.debug("Radar NIS %.3f", self.nis_radar)

        return self.get_current_state()

    def is_finite(self) -> bool:
        """True if state and covariance contain no NaN or Inf."""
        return bool(np.all(np.isfinite(self.x)) and np.all(np.isfinite(self.P)))

    def get_current_state(self) -> TargetState:
        """Get current estimated state."""
        current_state = TargetState(timestamp=self.time_us)
        current_state.state_vector = self.x
        return current_state

    def get_uncertainty(self) -> np.ndarray:
        """Get current state uncertainty (square root of covariance diagonal)."""
        return np.sqrt(np.diag(self.P))

    def get_position_uncertainty(self) -> float:
        """Get position uncertainty (2D RMS error)."""
        pos_var = self.P[0, 0] + self.P[1, 1]
        return float(np.sqrt(pos_var))

    def get_statistics(self) -> Dict[str, Any]:
        """Get filter statistics."""
        return {
            'predictions': self.prediction_count,
            'lidar_updates': self.lidar_update_count,
            'radar_updates': self.radar_update_count,
            'discarded': self.discarded_count,
            'nis_lidar': self.nis_lidar,
            'nis_radar': self.nis_radar,
            'position_uncertainty': self.get_position_uncertainty(),
            'state_uncertainty': self.get_uncertainty().tolist()
        }
