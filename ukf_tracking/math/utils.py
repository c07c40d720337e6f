"""
Mathematical utility functions for target tracking.
"""

import numpy as np
import math


def normalize_angle(angle):
    """
    Normalize angle to the (-pi, pi] range.

    Closed-form wrap, equivalent to repeatedly adding or subtracting 2*pi.
    Angles already in range are returned unchanged. Works on floats and
    numpy arrays.

    Args:
        angle (float or np.ndarray): Angle(s) in radians

    Returns:
        float or np.ndarray: Normalized angle(s) in (-pi, pi]
    """
    angle = np.asarray(angle, dtype=float)
    wrapped = math.pi - np.mod(math.pi - angle, 2 * math.pi)
    # np.mod can round up to exactly 2*pi for tiny negative inputs
    wrapped = np.where(wrapped <= -math.pi, wrapped + 2 * math.pi, wrapped)
    wrapped = np.where((angle > -math.pi) & (angle <= math.pi), angle, wrapped)

    if np.ndim(wrapped) == 0:
        return float(wrapped)
    return wrapped


def normalize_component(vector, index):
    """
    Return a copy of vector with vector[index] normalized to (-pi, pi].

    Args:
        vector (np.ndarray): Residual vector
        index (int): Position of the angular component

    Returns:
        np.ndarray: Copy with the angle wrapped
    """
    result = np.array(vector, dtype=float)
    result[index] = normalize_angle(result[index])
    return result
