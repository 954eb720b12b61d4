"""Per-feature linear scalers.

Each scaler maps every feature column independently through
``y = (x - center) / scale`` (or the equivalent affine form) and inverts
it exactly. Zero-width features keep a scale of 1.
"""

from __future__ import annotations

import numpy as np

from liq.preprocess.config import (
    DEFAULT_MAX_VALUE,
    DEFAULT_MIN_VALUE,
    ScalerType,
    validate_range,
)
from liq.preprocess.scalers.base import BaseScaler
from liq.preprocess.scalers.registry import register_scaler


@register_scaler
class MinMaxScaler(BaseScaler):
    """Rescale each feature to [min_value, max_value] using the observed range."""

    kind = ScalerType.MINMAX
    config_fields = ("min_value", "max_value")
    state_arrays = {"data_min_": 1, "data_max_": 1, "scale_": 1, "offset_": 1}

    def __init__(self, min_value: int = DEFAULT_MIN_VALUE, max_value: int = DEFAULT_MAX_VALUE) -> None:
        super().__init__()
        validate_range(min_value, max_value)
        self.min_value = min_value
        self.max_value = max_value

    def _fit(self, X: np.ndarray) -> None:
        self.data_min_ = X.min(axis=0)
        self.data_max_ = X.max(axis=0)
        span = self._handle_zeros(self.data_max_ - self.data_min_, "range")
        self.scale_ = (self.max_value - self.min_value) / span
        self.offset_ = self.min_value - self.data_min_ * self.scale_

    def _transform(self, X: np.ndarray) -> np.ndarray:
        return X * self.scale_ + self.offset_

    def _inverse_transform(self, X: np.ndarray) -> np.ndarray:
        return (X - self.offset_) / self.scale_

    def _validate_state(self) -> None:
        self._require_nonzero(self.scale_, "scale_")


@register_scaler
class MaxAbsScaler(BaseScaler):
    """Divide each feature by its maximum absolute value."""

    kind = ScalerType.MAXABS
    state_arrays = {"scale_": 1}

    def _fit(self, X: np.ndarray) -> None:
        self.scale_ = self._handle_zeros(np.abs(X).max(axis=0), "max_abs")

    def _transform(self, X: np.ndarray) -> np.ndarray:
        return X / self.scale_

    def _inverse_transform(self, X: np.ndarray) -> np.ndarray:
        return X * self.scale_

    def _validate_state(self) -> None:
        self._require_nonzero(self.scale_, "scale_")


@register_scaler
class MeanNormalization(BaseScaler):
    """Center each feature on its mean and divide by its range."""

    kind = ScalerType.MEAN
    state_arrays = {"mean_": 1, "scale_": 1}

    def _fit(self, X: np.ndarray) -> None:
        self.mean_ = X.mean(axis=0)
        self.scale_ = self._handle_zeros(X.max(axis=0) - X.min(axis=0), "range")

    def _transform(self, X: np.ndarray) -> np.ndarray:
        return (X - self.mean_) / self.scale_

    def _inverse_transform(self, X: np.ndarray) -> np.ndarray:
        return X * self.scale_ + self.mean_

    def _validate_state(self) -> None:
        self._require_nonzero(self.scale_, "scale_")


@register_scaler
class StandardScaler(BaseScaler):
    """Center each feature on its mean and divide by its population std."""

    kind = ScalerType.STANDARD
    state_arrays = {"mean_": 1, "scale_": 1}

    def _fit(self, X: np.ndarray) -> None:
        self.mean_ = X.mean(axis=0)
        self.scale_ = self._handle_zeros(X.std(axis=0), "std")

    def _transform(self, X: np.ndarray) -> np.ndarray:
        return (X - self.mean_) / self.scale_

    def _inverse_transform(self, X: np.ndarray) -> np.ndarray:
        return X * self.scale_ + self.mean_

    def _validate_state(self) -> None:
        self._require_nonzero(self.scale_, "scale_")
