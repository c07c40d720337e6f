"""
Sigma point generation and recombination for the unscented transform.
"""

import numpy as np
import math
from typing import Tuple

from .errors import CovarianceError
from ..math.constants import STATE_SIZE, AUGMENTED_SIZE
from ..math.utils import normalize_angle


class SigmaPointGenerator:
    """
    Builds augmented sigma points for the CTRV state.

    The augmented state appends the longitudinal and yaw acceleration noise
    to [x, y, v, yaw, yaw_rate], giving 2 * n_aug + 1 = 15 sigma points.
    """

    def __init__(self, n_x: int = STATE_SIZE, n_aug: int = AUGMENTED_SIZE):
        self.n_x = n_x
        self.n_aug = n_aug
        self.n_sigma = 2 * n_aug + 1
        self.lambda_ = 3.0 - n_aug
        self.weights = self._compute_weights()

    def _compute_weights(self) -> np.ndarray:
        """Sigma point weights; fixed for the lifetime of the filter."""
        weights = np.full(self.n_sigma, 0.5 / (self.lambda_ + self.n_aug))
        weights[0] = self.lambda_ / (self.lambda_ + self.n_aug)
        return weights

    def augmented_sigma_points(self, x: np.ndarray, P: np.ndarray,
                               std_a: float, std_yawdd: float) -> np.ndarray:
        """
        Generate augmented sigma points.

        Args:
            x: State mean (5,)
            P: State covariance (5, 5)
            std_a: Longitudinal acceleration noise std-dev (m/s^2)
            std_yawdd: Yaw acceleration noise std-dev (rad/s^2)

        Returns:
            7x15 matrix, one sigma point per column

        Raises:
            CovarianceError: If the augmented covariance is not positive definite
        """
        x_aug = np.zeros(self.n_aug)
        x_aug[:self.n_x] = x

        P_aug = np.zeros((self.n_aug, self.n_aug))
        P_aug[:self.n_x, :self.n_x] = P
        P_aug[self.n_x, self.n_x] = std_a ** 2
        P_aug[self.n_x + 1, self.n_x + 1] = std_yawdd ** 2

        try:
            L = np.linalg.cholesky(P_aug)
        except np.linalg.LinAlgError as e:
            raise CovarianceError(
                "Augmented covariance is not positive definite; filter diverged"
            ) from e

        spread = math.sqrt(self.lambda_ + self.n_aug) * L

        Xsig_aug = np.empty((self.n_aug, self.n_sigma))
        Xsig_aug[:, 0] = x_aug
        Xsig_aug[:, 1:self.n_aug + 1] = x_aug[:, np.newaxis] + spread
        Xsig_aug[:, self.n_aug + 1:] = x_aug[:, np.newaxis] - spread

        return Xsig_aug


def predict_mean_and_covariance(sigma_points: np.ndarray, weights: np.ndarray,
                                angle_index: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Recombine sigma points into a mean and covariance.

    The angular component of every residual is normalized before the
    outer product.

    Args:
        sigma_points: n x 15 matrix of sigma points
        weights: Sigma point weights (15,)
        angle_index: Row holding an angle (yaw in state space,
            bearing in radar space)

    Returns:
        (mean, covariance)
    """
    mean = sigma_points @ weights

    residuals = sigma_points - mean[:, np.newaxis]
    residuals[angle_index] = normalize_angle(residuals[angle_index])

    covariance = (weights * residuals) @ residuals.T

    return mean, covariance
