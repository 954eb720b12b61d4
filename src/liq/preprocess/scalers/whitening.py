"""PCA and ZCA whitening.

Both decorrelate features and rescale them to unit variance using the
eigendecomposition of the training covariance matrix. ``epsilon`` is added
to every eigenvalue before the rescale, which bounds the gain applied to
low-variance directions.
"""

from __future__ import annotations

import numpy as np

from liq.preprocess.config import DEFAULT_EPSILON, ScalerType, validate_epsilon
from liq.preprocess.exceptions import InvalidInputError
from liq.preprocess.logging_config import get_logger
from liq.preprocess.scalers.base import BaseScaler
from liq.preprocess.scalers.registry import register_scaler

logger = get_logger("scalers.whitening")


@register_scaler
class PcaWhitening(BaseScaler):
    """Project onto principal components and scale them to unit variance.

    Attributes:
        epsilon: Regularization constant added to each eigenvalue.
        mean_: Per-feature training mean.
        eigenvalues_: Regularized covariance eigenvalues (ascending).
        eigenvectors_: Covariance eigenvectors, one per column.
    """

    kind = ScalerType.PCA
    config_fields = ("epsilon",)
    state_arrays = {"mean_": 1, "eigenvalues_": 1, "eigenvectors_": 2}

    def __init__(self, epsilon: float = DEFAULT_EPSILON) -> None:
        super().__init__()
        validate_epsilon(epsilon)
        self.epsilon = epsilon

    def _fit(self, X: np.ndarray) -> None:
        if X.shape[0] < 2:
            raise InvalidInputError(
                "Whitening needs at least two samples to estimate a covariance",
                reason="too few samples",
                shape=tuple(X.shape),
            )
        self.mean_ = X.mean(axis=0)
        covariance = np.atleast_2d(np.cov(X - self.mean_, rowvar=False))
        eigenvalues, self.eigenvectors_ = np.linalg.eigh(covariance)
        # eigenvalues below round-off level are zero (rank-deficient data)
        noise_floor = np.finfo(np.float64).eps * X.shape[1] * max(eigenvalues.max(), 0.0)
        eigenvalues = np.where(eigenvalues <= noise_floor, 0.0, eigenvalues)
        self.eigenvalues_ = eigenvalues + self.epsilon
        if (self.eigenvalues_ <= 0).any():
            raise InvalidInputError(
                "Covariance matrix is singular; use a positive epsilon",
                reason="singular covariance",
                shape=tuple(X.shape),
                context={"epsilon": self.epsilon},
            )
        logger.debug(
            f"Fitted {type(self).__name__}: n_features={X.shape[1]}, "
            f"min_eigenvalue={self.eigenvalues_.min():.3g}"
        )

    def _whiten(self, X: np.ndarray) -> np.ndarray:
        return ((X - self.mean_) @ self.eigenvectors_) / np.sqrt(self.eigenvalues_)

    def _unwhiten(self, X: np.ndarray) -> np.ndarray:
        return (X * np.sqrt(self.eigenvalues_)) @ self.eigenvectors_.T + self.mean_

    def _transform(self, X: np.ndarray) -> np.ndarray:
        return self._whiten(X)

    def _inverse_transform(self, X: np.ndarray) -> np.ndarray:
        return self._unwhiten(X)

    def _validate_state(self) -> None:
        if (self.eigenvalues_ <= 0).any():
            raise ValueError("eigenvalues_ must be positive")


@register_scaler
class ZcaWhitening(PcaWhitening):
    """PCA whitening rotated back into the original feature basis."""

    kind = ScalerType.ZCA

    def _transform(self, X: np.ndarray) -> np.ndarray:
        return self._whiten(X) @ self.eigenvectors_.T

    def _inverse_transform(self, X: np.ndarray) -> np.ndarray:
        return self._unwhiten(X @ self.eigenvectors_)
