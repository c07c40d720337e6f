"""
Mathematical utilities for target tracking.
"""

from .utils import normalize_angle, normalize_component
from .constants import *

__all__ = ["normalize_angle", "normalize_component"]
