"""
Lidar/radar target tracking with an Unscented Kalman Filter.

This package provides:
- Unscented Kalman Filter over a CTRV motion model
- Measurement package types and a sensor simulator
- Angle utilities and configuration
"""

__version__ = "1.0.0"
__author__ = "UKF Tracking Team"

from .ukf import UnscentedKalmanFilter, TargetState
from .sensors import SensorType, MeasurementPackage
from .math import normalize_angle
from .config import Config, setup_logging

__all__ = [
    "UnscentedKalmanFilter",
    "TargetState",
    "SensorType",
    "MeasurementPackage",
    "normalize_angle",
    "Config",
    "setup_logging"
]
