"""
Motion and measurement models for the Unscented Kalman Filter.
"""

import numpy as np
import math

from ..math.constants import (
    STATE_SIZE, YAW_RATE_EPSILON,
    STD_LASPX, STD_LASPY, STD_RADR, STD_RADPHI, STD_RADRD
)
from ..sensors.measurement import SensorType


class ProcessModel:
    """
    Constant turn rate and velocity (CTRV) motion model.

    Augmented sigma point: [x, y, v, yaw, yaw_rate, nu_a, nu_yawdd]
    """

    @staticmethod
    def predict_point(point: np.ndarray, dt: float) -> np.ndarray:
        """
        Propagate one augmented sigma point through the CTRV model.

        Args:
            point: Augmented sigma point (7,)
            dt: Time step in seconds

        Returns:
            Predicted state [x, y, v, yaw, yaw_rate]
        """
        p_x, p_y, v, yaw, yaw_rate, nu_a, nu_yawdd = point

        # Straight line when yaw rate is near zero (avoid dividing by it)
        if abs(yaw_rate) > YAW_RATE_EPSILON:
            px_p = p_x + v / yaw_rate * (math.sin(yaw + yaw_rate * dt) - math.sin(yaw))
            py_p = p_y + v / yaw_rate * (math.cos(yaw) - math.cos(yaw + yaw_rate * dt))
        else:
            px_p = p_x + v * dt * math.cos(yaw)
            py_p = p_y + v * dt * math.sin(yaw)

        v_p = v
        yaw_p = yaw + yaw_rate * dt
        yaw_rate_p = yaw_rate

        # Process noise
        px_p += 0.5 * nu_a * dt**2 * math.cos(yaw)
        py_p += 0.5 * nu_a * dt**2 * math.sin(yaw)
        v_p += nu_a * dt

        yaw_p += 0.5 * nu_yawdd * dt**2
        yaw_rate_p += nu_yawdd * dt

        return np.array([px_p, py_p, v_p, yaw_p, yaw_rate_p])

    @staticmethod
    def predict_sigma_points(sigma_points: np.ndarray, dt: float) -> np.ndarray:
        """
        Propagate every augmented sigma point.

        Args:
            sigma_points: 7xN augmented sigma points
            dt: Time step in seconds

        Returns:
            5xN predicted sigma points (noise rows dropped)
        """
        Xsig_pred = np.empty((STATE_SIZE, sigma_points.shape[1]))
        for i in range(sigma_points.shape[1]):
            Xsig_pred[:, i] = ProcessModel.predict_point(sigma_points[:, i], dt)
        return Xsig_pred


class MeasurementModel:
    """
    Measurement models for the lidar and radar sensors.
    """

    @staticmethod
    def lidar_matrix() -> np.ndarray:
        """
        Lidar observation matrix - selects position.

        Returns:
            2x5 matrix H
        """
        H = np.zeros((2, STATE_SIZE))
        H[0, 0] = 1.0
        H[1, 1] = 1.0
        return H

    @staticmethod
    def lidar_measurement(state: np.ndarray) -> np.ndarray:
        """Expected lidar measurement [x, y]."""
        return MeasurementModel.lidar_matrix() @ state

    @staticmethod
    def radar_measurement(state: np.ndarray) -> np.ndarray:
        """
        Radar measurement model.

        The target must not sit at the sensor origin: range is zero there and
        bearing and range rate are undefined.

        Args:
            state: State vector [x, y, v, yaw, yaw_rate]

        Returns:
            Expected radar measurement [range, bearing, range_rate]
        """
        return MeasurementModel.radar_sigma_points(
            np.asarray(state, dtype=float).reshape(-1, 1)
        )[:, 0]

    @staticmethod
    def radar_sigma_points(Xsig_pred: np.ndarray) -> np.ndarray:
        """
        Map predicted sigma points into radar measurement space.

        Args:
            Xsig_pred: 5xN predicted sigma points

        Returns:
            3xN sigma points [range, bearing, range_rate]
        """
        p_x = Xsig_pred[0]
        p_y = Xsig_pred[1]
        v = Xsig_pred[2]
        yaw = Xsig_pred[3]

        v1 = np.cos(yaw) * v
        v2 = np.sin(yaw) * v

        rho = np.sqrt(p_x**2 + p_y**2)
        phi = np.arctan2(p_y, p_x)
        rho_dot = (p_x * v1 + p_y * v2) / rho

        return np.vstack([rho, phi, rho_dot])

    @staticmethod
    def measurement_noise_matrix(R_params: dict, sensor_type: SensorType) -> np.ndarray:
        """
        Get measurement noise covariance matrix.

        Args:
            R_params: Dictionary with noise standard deviations
            sensor_type: SensorType.LIDAR or SensorType.RADAR

        Returns:
            Measurement noise covariance matrix R
        """
        if sensor_type is SensorType.LIDAR:
            std_px = R_params.get('std_laspx', STD_LASPX)
            std_py = R_params.get('std_laspy', STD_LASPY)
            return np.diag([std_px**2, std_py**2])

        elif sensor_type is SensorType.RADAR:
            std_r = R_params.get('std_radr', STD_RADR)
            std_phi = R_params.get('std_radphi', STD_RADPHI)
            std_rd = R_params.get('std_radrd', STD_RADRD)
            return np.diag([std_r**2, std_phi**2, std_rd**2])

        else:
            raise ValueError(f"Unknown sensor type: {sensor_type}")
