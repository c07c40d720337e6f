"""
Unscented Kalman Filter implementation for lidar/radar target tracking.
"""

from .ukf import UnscentedKalmanFilter
from .state import TargetState
from .models import ProcessModel, MeasurementModel
from .sigma_points import SigmaPointGenerator, predict_mean_and_covariance
from .errors import UKFError, UnknownSensorError, TimestampError, CovarianceError

__all__ = [
    "UnscentedKalmanFilter",
    "TargetState",
    "ProcessModel",
    "MeasurementModel",
    "SigmaPointGenerator",
    "predict_mean_and_covariance",
    "UKFError",
    "UnknownSensorError",
    "TimestampError",
    "CovarianceError"
]
