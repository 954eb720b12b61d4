"""Base scaler abstract class.

This module provides the abstract base class for all scaling strategies,
implementing the Template Method pattern for consistent scaler behavior.

Design Principles:
    - SRP: Base class handles input conversion, fit checks and persistence
    - OCP: New scalers extend without modifying base
    - Template Method: Defines fit/transform skeleton, subclasses implement
      _fit, _transform and _inverse_transform

Example:
    >>> class MyScaler(BaseScaler):
    ...     kind = ScalerType.STANDARD
    ...     state_arrays = {"center_": 1}
    ...
    ...     def _fit(self, X: np.ndarray) -> None:
    ...         self.center_ = X.mean(axis=0)
    ...
    ...     def _transform(self, X: np.ndarray) -> np.ndarray:
    ...         return X - self.center_
    ...
    ...     def _inverse_transform(self, X: np.ndarray) -> np.ndarray:
    ...         return X + self.center_
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

import numpy as np

from liq.preprocess.config import ScalerType
from liq.preprocess.exceptions import (
    DimensionMismatchError,
    NotFittedError,
    ScalerConfigurationError,
    SerializationError,
)
from liq.preprocess.logging_config import get_logger, log_function_entry, log_warning
from liq.preprocess.numpy_utils import ArrayLike, as_2d, restore_shape

logger = get_logger("scalers")


class BaseScaler(ABC):
    """Abstract base class for scaling strategies.

    Class Attributes:
        kind: Scaler type this class implements (registry key)
        config_fields: Constructor arguments taken from the scaling model
        state_arrays: Fitted arrays persisted by get_state, mapped to their ndim

    Instance Attributes:
        n_features_: Number of features seen during fit (None until fitted)

    Subclasses must implement:
        - kind: Class attribute with the scaler type
        - _fit, _transform, _inverse_transform on 2-D float64 matrices
    """

    kind: ClassVar[ScalerType]
    config_fields: ClassVar[tuple[str, ...]] = ()
    state_arrays: ClassVar[dict[str, int]] = {}

    def __init__(self) -> None:
        self.n_features_: int | None = None

    @property
    def is_fitted(self) -> bool:
        """Whether fit() has completed on this instance."""
        return self.n_features_ is not None

    def get_config(self) -> dict[str, Any]:
        """Get the constructor arguments of this scaler."""
        return {name: getattr(self, name) for name in self.config_fields}

    def fit(self, data: ArrayLike) -> BaseScaler:
        """Compute scaling parameters from training data.

        Args:
            data: Matrix of shape (n_samples, n_features), or a 1-D series.

        Returns:
            self

        Raises:
            InvalidInputError: If data is empty, non-finite or not 1-D/2-D.
        """
        X, _ = as_2d(data)
        log_function_entry(logger, f"{type(self).__name__}.fit", data=X)
        self._fit(X)
        self.n_features_ = X.shape[1]
        return self

    def transform(self, data: ArrayLike) -> np.ndarray:
        """Apply the fitted forward transform.

        Raises:
            NotFittedError: If called before fit().
            DimensionMismatchError: If the feature count differs from fit.
        """
        X, was_1d = self._check_input(data, "transform")
        return restore_shape(self._transform(X), was_1d)

    def inverse_transform(self, data: ArrayLike) -> np.ndarray:
        """Map scaled data back to the original feature space.

        Raises:
            NotFittedError: If called before fit().
            DimensionMismatchError: If the feature count differs from fit.
        """
        X, was_1d = self._check_input(data, "inverse_transform")
        return restore_shape(self._inverse_transform(X), was_1d)

    def fit_transform(self, data: ArrayLike) -> np.ndarray:
        """Fit on data, then transform it."""
        return self.fit(data).transform(data)

    def _check_input(self, data: ArrayLike, operation: str) -> tuple[np.ndarray, bool]:
        if not self.is_fitted:
            raise NotFittedError(
                f"{type(self).__name__} must be fit before {operation}",
                operation=operation,
                scaler_type=self.kind.value,
            )
        X, was_1d = as_2d(data)
        if X.shape[1] != self.n_features_:
            raise DimensionMismatchError(
                f"{type(self).__name__} was fit on a different number of features",
                expected=self.n_features_,
                actual=X.shape[1],
                context={"operation": operation},
            )
        return X, was_1d

    @staticmethod
    def _handle_zeros(scale: np.ndarray, name: str) -> np.ndarray:
        """Replace zero entries of a per-feature scale with 1."""
        zero = scale == 0
        if zero.any():
            log_warning(
                logger,
                "Constant features left unscaled",
                parameter=name,
                features=np.flatnonzero(zero).tolist(),
            )
            scale = np.where(zero, 1.0, scale)
        return scale

    @abstractmethod
    def _fit(self, X: np.ndarray) -> None:
        """Compute parameters from a validated 2-D matrix."""

    @abstractmethod
    def _transform(self, X: np.ndarray) -> np.ndarray:
        """Forward transform of a validated 2-D matrix."""

    @abstractmethod
    def _inverse_transform(self, X: np.ndarray) -> np.ndarray:
        """Inverse transform of a validated 2-D matrix."""

    def _validate_state(self) -> None:
        """Check restored parameters; raise ValueError if they are unusable."""

    @staticmethod
    def _require_nonzero(value: np.ndarray, name: str) -> None:
        if (value == 0).any():
            raise ValueError(f"{name} contains zeros")

    def get_state(self) -> dict[str, Any]:
        """Serialize configuration and fitted parameters to plain Python types.

        Raises:
            NotFittedError: If called before fit().
        """
        if not self.is_fitted:
            raise NotFittedError(
                f"Cannot serialize unfitted {type(self).__name__}",
                operation="get_state",
                scaler_type=self.kind.value,
            )
        return {
            "config": self.get_config(),
            "n_features": self.n_features_,
            "arrays": {name: getattr(self, name).tolist() for name in self.state_arrays},
        }

    @classmethod
    def from_state(cls, state: dict[str, Any]) -> BaseScaler:
        """Rebuild a fitted scaler from get_state() output.

        Raises:
            SerializationError: If the state is missing fields, has arrays
                of the wrong shape, or holds parameters the scaler cannot use.
        """
        try:
            scaler = cls(**state.get("config", {}))
            n_features = int(state["n_features"])
            if n_features < 1:
                raise ValueError(f"n_features must be positive, got {n_features}")
            arrays = state["arrays"]
            for name, ndim in cls.state_arrays.items():
                value = np.asarray(arrays[name], dtype=np.float64)
                expected = (n_features,) * ndim
                if value.shape != expected:
                    raise ValueError(f"{name} has shape {value.shape}, expected {expected}")
                if not np.isfinite(value).all():
                    raise ValueError(f"{name} contains non-finite values")
                setattr(scaler, name, value)
            scaler._validate_state()
        except (AttributeError, KeyError, TypeError, ValueError, ScalerConfigurationError) as exc:
            raise SerializationError(
                f"Malformed {cls.__name__} state",
                reason=str(exc),
                context={"kind": cls.kind.value},
            ) from exc
        scaler.n_features_ = n_features
        return scaler

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.get_config().items())
        return f"{type(self).__name__}({params})"
