"""
Sensor measurement types and simulation.
"""

from .measurement import SensorType, MeasurementPackage
from .simulator import TargetTruth, SensorSimulator

__all__ = ["SensorType", "MeasurementPackage", "TargetTruth", "SensorSimulator"]
