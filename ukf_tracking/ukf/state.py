"""
Target state representation for the UKF.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional


@dataclass
class TargetState:
    """
    Represents the tracked target state.

    State vector: [x, y, v, yaw, yaw_rate]
    - x, y: Position in meters
    - v: Speed along the heading in m/s
    - yaw: Heading in radians
    - yaw_rate: Angular velocity in rad/s
    """

    # Position (meters)
    x: float = 0.0
    y: float = 0.0

    # Speed (m/s)
    v: float = 0.0

    # Orientation (radians)
    yaw: float = 0.0
    yaw_rate: float = 0.0

    # Timestamp (microseconds)
    timestamp: Optional[int] = None

    @property
    def state_vector(self) -> np.ndarray:
        """Get state as numpy vector."""
        return np.array([
            self.x,
            self.y,
            self.v,
            self.yaw,
            self.yaw_rate
        ])

    @state_vector.setter
    def state_vector(self, vector: np.ndarray):
        """Set state from numpy vector."""
        if len(vector) != 5:
            raise ValueError("State vector must have 5 elements")

        self.x = float(vector[0])
        self.y = float(vector[1])
        self.v = float(vector[2])
        self.yaw = float(vector[3])
        self.yaw_rate = float(vector[4])

    @property
    def position(self) -> np.ndarray:
        """Get position as [x, y] vector."""
        return np.array([self.x, self.y])

    @property
    def velocity(self) -> np.ndarray:
        """Get Cartesian velocity as [vx, vy] vector."""
        return np.array([
            self.v * np.cos(self.yaw),
            self.v * np.sin(self.yaw)
        ])

    def copy(self) -> 'TargetState':
        """Create a copy of the state."""
        return TargetState(
            x=self.x,
            y=self.y,
            v=self.v,
            yaw=self.yaw,
            yaw_rate=self.yaw_rate,
            timestamp=self.timestamp
        )

    def __str__(self) -> str:
        return (
            f"TargetState(pos=[{self.x:.2f}, {self.y:.2f}], "
            f"v={self.v:.2f}, "
            f"yaw={self.yaw:.3f}, "
            f"yaw_rate={self.yaw_rate:.3f})"
        )
