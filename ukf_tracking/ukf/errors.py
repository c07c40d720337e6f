"""
Exceptions raised by the unscented Kalman filter.
"""


class UKFError(Exception):
    """Base class for filter errors."""


class UnknownSensorError(UKFError, ValueError):
    """Measurement came from a sensor the filter does not model."""


class TimestampError(UKFError, ValueError):
    """Measurement timestamp is earlier than the previous one."""


class CovarianceError(UKFError):
    """Augmented covariance is not positive definite.

    The filter has diverged and must be reset by the caller.
    """
