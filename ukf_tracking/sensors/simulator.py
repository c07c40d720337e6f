"""
simulator.py

Synthetic ground truth and sensor measurements for exercising the filter.
The target follows the CTRV model exactly; lidar reports noisy Cartesian
position and radar reports noisy range, bearing and range rate as seen from
a sensor at the origin.

Classes:
TargetTruth:
    Ground truth CTRV target.
SensorSimulator:
    Produces lidar and radar MeasurementPackages from the ground truth.
"""

from __future__ import annotations

import math
import numpy as np
from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from .measurement import SensorType, MeasurementPackage
from ..math.constants import (
    STD_LASPX, STD_LASPY, STD_RADR, STD_RADPHI, STD_RADRD, YAW_RATE_EPSILON,
    MICROSECONDS_PER_SECOND
)
from ..math.utils import normalize_angle


@dataclass
class TargetTruth:
    """Ground truth state of a target moving with constant turn rate and speed.

    Attributes:
        x (float): X position in meters.
        y (float): Y position in meters.
        v (float): Speed in meters per second.
        yaw (float): Heading in radians.
        yaw_rate (float): Turn rate in radians per second.
    """
    x: float = 0.0
    y: float = 0.0
    v: float = 0.0
    yaw: float = 0.0
    yaw_rate: float = 0.0

    def update(self, dt: float) -> None:
        """Advance the target by dt seconds."""
        if abs(self.yaw_rate) > YAW_RATE_EPSILON:
            new_yaw = self.yaw + self.yaw_rate * dt
            self.x += self.v / self.yaw_rate * (math.sin(new_yaw) - math.sin(self.yaw))
            self.y += self.v / self.yaw_rate * (math.cos(self.yaw) - math.cos(new_yaw))
            self.yaw = new_yaw
        else:
            self.x += self.v * dt * math.cos(self.yaw)
            self.y += self.v * dt * math.sin(self.yaw)
            self.yaw += self.yaw_rate * dt

    @property
    def state_vector(self) -> np.ndarray:
        """True state as [x, y, v, yaw, yaw_rate]."""
        return np.array([self.x, self.y, self.v, self.yaw, self.yaw_rate])


@dataclass
class SensorSimulator:
    """Simulate lidar and radar measurements of a target.

    Parameters:
        std_laspx (float): Lidar x noise std-dev (m).
        std_laspy (float): Lidar y noise std-dev (m).
        std_radr (float): Radar range noise std-dev (m).
        std_radphi (float): Radar bearing noise std-dev (rad).
        std_radrd (float): Radar range rate noise std-dev (m/s).
        random_state (Optional[np.random.Generator]): Random number generator for
            reproducibility. If None, a new default generator is created.
    """
    std_laspx: float = STD_LASPX
    std_laspy: float = STD_LASPY
    std_radr: float = STD_RADR
    std_radphi: float = STD_RADPHI
    std_radrd: float = STD_RADRD
    random_state: Optional[np.random.Generator] = field(default=None)

    def __post_init__(self):
        if self.random_state is None:
            self.rng = np.random.default_rng()
        else:
            self.rng = self.random_state

    def measure_lidar(self, truth: TargetTruth, timestamp: int) -> MeasurementPackage:
        """Noisy Cartesian position of the target."""
        z = np.array([
            truth.x + self.rng.normal(scale=self.std_laspx),
            truth.y + self.rng.normal(scale=self.std_laspy)
        ])
        return MeasurementPackage(SensorType.LIDAR, timestamp, z)

    def measure_radar(self, truth: TargetTruth, timestamp: int) -> MeasurementPackage:
        """Noisy range, bearing and range rate of the target."""
        rho = math.hypot(truth.x, truth.y)
        phi = math.atan2(truth.y, truth.x)
        rho_dot = truth.v * (truth.x * math.cos(truth.yaw) + truth.y * math.sin(truth.yaw)) / rho

        z = np.array([
            rho + self.rng.normal(scale=self.std_radr),
            normalize_angle(phi + self.rng.normal(scale=self.std_radphi)),
            rho_dot + self.rng.normal(scale=self.std_radrd)
        ])
        return MeasurementPackage(SensorType.RADAR, timestamp, z)

    def simulate(self, truth: TargetTruth, duration_s: float, interval_us: int = 50000,
                 start_us: int = 0) -> Iterator[Tuple[MeasurementPackage, np.ndarray]]:
        """Yield alternating lidar and radar measurements.

        The first measurement is lidar so the filter can initialize.

        Args:
            truth (TargetTruth): Target to observe; advanced in place.
            duration_s (float): Simulated duration in seconds.
            interval_us (int): Time between measurements in microseconds.
            start_us (int): Timestamp of the first measurement.

        Yields:
            (measurement, true state vector at the measurement time)
        """
        dt = interval_us / MICROSECONDS_PER_SECOND
        steps = int(duration_s / dt)
        timestamp = start_us
        for step in range(steps):
            if step > 0:
                truth.update(dt)
                timestamp += interval_us
            if step % 2 == 0:
                measurement = self.measure_lidar(truth, timestamp)
            else:
                measurement = self.measure_radar(truth, timestamp)
            yield measurement, truth.state_vector
