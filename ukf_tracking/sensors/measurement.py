"""
Measurement packages delivered to the unscented Kalman filter.
"""

import numpy as np
from dataclasses import dataclass
from enum import Enum

from ..math.constants import LIDAR_SIZE, RADAR_SIZE


class SensorType(Enum):
    """Sensor that produced a measurement."""

    LIDAR = "lidar"   # Linear: Cartesian position [px, py]
    RADAR = "radar"   # Nonlinear: [range, bearing, range_rate]

    @property
    def measurement_size(self) -> int:
        """Expected length of the raw measurement vector."""
        if self is SensorType.LIDAR:
            return LIDAR_SIZE
        return RADAR_SIZE


@dataclass
class MeasurementPackage:
    """
    A single timestamped sensor measurement.

    Attributes:
        sensor_type: Sensor that produced the measurement
        timestamp: Measurement time in integer microseconds (monotonic)
        raw_measurements: [px, py] for lidar, [range, bearing, range_rate]
            for radar (bearing in radians)
    """

    sensor_type: SensorType
    timestamp: int
    raw_measurements: np.ndarray

    def __post_init__(self):
        self.timestamp = int(self.timestamp)
        self.raw_measurements = np.asarray(self.raw_measurements, dtype=float).reshape(-1)

    def __str__(self) -> str:
        sensor = getattr(self.sensor_type, "value", self.sensor_type)
        values = ", ".join(f"{v:.3f}" for v in self.raw_measurements)
        return f"MeasurementPackage({sensor}, t={self.timestamp}, z=[{values}])"
