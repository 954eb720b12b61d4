"""ScalingModel: a serializable selector over the built-in scalers.

A ScalingModel holds the scaling configuration (min-max bounds and the
whitening epsilon), the selected scaler type, and at most one fitted scaler
of that type. Fitting builds a fresh scaler through the registry and
replaces the previous one; transforms delegate to whichever scaler is owned.

Example:
    >>> import numpy as np
    >>> from liq.preprocess import ScalingModel, ScalerType
    >>>
    >>> model = ScalingModel(min_value=0, max_value=1, scaler_type=ScalerType.MINMAX)
    >>> model.fit(np.array([2.0, 4.0, 6.0]))
    >>> model.transform(np.array([2.0, 4.0, 6.0]))
    array([0. , 0.5, 1. ])
    >>>
    >>> model.save("scaler.json")
    >>> restored = ScalingModel.load("scaler.json")
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import numpy as np
from pydantic import ValidationError

from liq.preprocess.config import ScalerType, get_defaults
from liq.preprocess.exceptions import NoScalerSelectedError, NotFittedError, SerializationError
from liq.preprocess.logging_config import get_logger, log_function_entry, log_result
from liq.preprocess.numpy_utils import ArrayLike
from liq.preprocess.scalers import BaseScaler, create_scaler, get_scaler_class
from liq.preprocess.state import ScalerState, ScalingModelState

logger = get_logger("model")


class ScalingModel:
    """Selects, fits and applies one scaling strategy.

    The owned scaler lives in a single slot, so at most one scaler exists per
    model and its kind always equals ``scaler_type``. Assigning a different
    ``scaler_type`` releases the owned scaler; the next ``fit`` builds a new
    one.

    If ``fit`` fails, the model keeps whatever scaler it owned before the
    call and the error propagates unchanged.

    Attributes:
        min_value: Lower bound of the min-max target range.
        max_value: Upper bound of the min-max target range.
        epsilon: Regularization constant for PCA/ZCA whitening.
    """

    def __init__(
        self,
        min_value: int | None = None,
        max_value: int | None = None,
        epsilon: float | None = None,
        scaler_type: ScalerType | str = ScalerType.NONE,
    ) -> None:
        """Initialize an unfitted scaling model.

        Args:
            min_value: Lower bound for min-max scaling (default from config).
            max_value: Upper bound for min-max scaling (default from config).
            epsilon: Whitening regularization constant (default from config).
            scaler_type: Scaler type or name; NONE selects nothing.
        """
        defaults = get_defaults()
        self.min_value = defaults["min_value"] if min_value is None else min_value
        self.max_value = defaults["max_value"] if max_value is None else max_value
        self.epsilon = defaults["epsilon"] if epsilon is None else epsilon
        self._scaler_type = ScalerType.from_name(scaler_type)
        self._scaler: BaseScaler | None = None

    @property
    def scaler_type(self) -> ScalerType:
        """Selected scaler type."""
        return self._scaler_type

    @scaler_type.setter
    def scaler_type(self, value: ScalerType | str) -> None:
        new_type = ScalerType.from_name(value)
        if new_type is self._scaler_type:
            return
        if self._scaler is not None:
            logger.debug(
                f"Releasing {self._scaler.kind.value} scaler after type change to {new_type.value}"
            )
        self._scaler = None
        self._scaler_type = new_type

    @property
    def scaler(self) -> BaseScaler | None:
        """The owned fitted scaler, or None."""
        return self._scaler

    @property
    def is_fitted(self) -> bool:
        """Whether a fitted scaler for the current scaler type is owned."""
        return self._scaler is not None

    @property
    def fitted_kind(self) -> ScalerType | None:
        """Kind of the owned scaler, or None when nothing is owned."""
        return self._scaler.kind if self._scaler is not None else None

    def fit(self, data: ArrayLike) -> ScalingModel:
        """Fit a new scaler of the selected type and install it.

        Args:
            data: Training matrix of shape (n_samples, n_features), or a
                1-D series of one feature.

        Returns:
            self

        Raises:
            NoScalerSelectedError: If scaler_type is NONE.
            ScalingError: Any scaler configuration or input error,
                propagated unchanged.
        """
        log_function_entry(logger, "ScalingModel.fit", scaler_type=self._scaler_type.value, data=data)
        if self._scaler_type is ScalerType.NONE:
            raise NoScalerSelectedError(
                "No scaler type selected; set scaler_type before fit",
                operation="fit",
                scaler_type=self._scaler_type.value,
            )
        scaler = create_scaler(
            self._scaler_type,
            min_value=self.min_value,
            max_value=self.max_value,
            epsilon=self.epsilon,
        )
        scaler.fit(data)

        replaced = self._scaler
        self._scaler = scaler
        log_result(
            logger,
            "Installed scaler",
            kind=scaler.kind.value,
            n_features=scaler.n_features_,
            replaced=replaced.kind.value if replaced is not None else None,
        )
        return self

    def transform(self, data: ArrayLike) -> np.ndarray:
        """Scale data with the owned scaler.

        Raises:
            NotFittedError: If no scaler has been fit for the current type.
        """
        return self._require_scaler("transform").transform(data)

    def inverse_transform(self, data: ArrayLike) -> np.ndarray:
        """Map scaled data back to the original scale with the owned scaler.

        Raises:
            NotFittedError: If no scaler has been fit for the current type.
        """
        return self._require_scaler("inverse_transform").inverse_transform(data)

    def fit_transform(self, data: ArrayLike) -> np.ndarray:
        """Fit on data, then transform it."""
        return self.fit(data).transform(data)

    def _require_scaler(self, operation: str) -> BaseScaler:
        if self._scaler_type is ScalerType.NONE:
            raise NoScalerSelectedError(
                f"No scaler type selected; cannot {operation}",
                operation=operation,
                scaler_type=self._scaler_type.value,
            )
        if self._scaler is None:
            raise NotFittedError(
                f"ScalingModel must be fit before {operation}",
                operation=operation,
                scaler_type=self._scaler_type.value,
            )
        return self._scaler

    # ------------------------------------------------------------------
    # Ownership: copy, assignment, move, reset
    # ------------------------------------------------------------------

    def copy(self) -> ScalingModel:
        """Return an independent model holding a deep copy of the owned scaler."""
        return copy.deepcopy(self)

    def __copy__(self) -> ScalingModel:
        return self.__deepcopy__({})

    def __deepcopy__(self, memo: dict[int, Any]) -> ScalingModel:
        clone = type(self)(
            min_value=self.min_value,
            max_value=self.max_value,
            epsilon=self.epsilon,
            scaler_type=self._scaler_type,
        )
        memo[id(self)] = clone
        clone._scaler = copy.deepcopy(self._scaler, memo)
        return clone

    def assign(self, other: ScalingModel) -> ScalingModel:
        """Replace this model's configuration and scaler with copies of other's.

        Assigning a model to itself leaves it unchanged.
        """
        if other is self:
            return self
        self.min_value = other.min_value
        self.max_value = other.max_value
        self.epsilon = other.epsilon
        self._scaler_type = other._scaler_type
        self._scaler = copy.deepcopy(other._scaler)
        return self

    def move_from(self, other: ScalingModel) -> ScalingModel:
        """Take over other's configuration and scaler, leaving other empty.

        The scaler object itself is transferred (its arrays are not copied).
        ``other`` is reset to the default empty state. Moving a model into
        itself leaves it unchanged.
        """
        if other is self:
            return self
        self.min_value = other.min_value
        self.max_value = other.max_value
        self.epsilon = other.epsilon
        self._scaler_type = other._scaler_type
        self._scaler = other._scaler
        other._clear()
        return self

    def move(self) -> ScalingModel:
        """Return a new model owning this model's scaler; this model is emptied."""
        return type(self).take(self)

    @classmethod
    def take(cls, other: ScalingModel) -> ScalingModel:
        """Build a model by moving other into it."""
        return cls().move_from(other)

    def reset(self) -> None:
        """Release the owned scaler, if any. Safe to call repeatedly."""
        if self._scaler is not None:
            logger.debug(f"Released {self._scaler.kind.value} scaler")
        self._scaler = None

    def _clear(self) -> None:
        defaults = get_defaults()
        self.min_value = defaults["min_value"]
        self.max_value = defaults["max_value"]
        self.epsilon = defaults["epsilon"]
        self._scaler_type = ScalerType.NONE
        self._scaler = None

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def to_state(self) -> ScalingModelState:
        """Build the validated persisted form of this model.

        Raises:
            SerializationError: If the configuration cannot be persisted, or
                was changed after the owned scaler was fit.
        """
        scaler_state = None
        if self._scaler is not None:
            mismatched = _mismatched_config(self, self._scaler)
            if mismatched:
                raise SerializationError(
                    "Configuration changed since the scaler was fit; refit before saving",
                    reason=f"mismatched fields: {', '.join(mismatched)}",
                    context={"kind": self._scaler.kind.value},
                )
            scaler_state = ScalerState(kind=self._scaler.kind, params=self._scaler.get_state())
        try:
            return ScalingModelState(
                scaler_type=self._scaler_type,
                min_value=self.min_value,
                max_value=self.max_value,
                epsilon=self.epsilon,
                scaler=scaler_state,
            )
        except ValidationError as exc:
            raise SerializationError(
                "Scaling model configuration cannot be persisted", reason=_summarise_errors(exc)
            ) from exc

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return self.to_state().model_dump(mode="json")

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to a JSON string."""
        return self.to_state().model_dump_json(indent=indent)

    @classmethod
    def from_state(cls, state: ScalingModelState) -> ScalingModel:
        """Rebuild a model from its validated persisted form.

        Raises:
            SerializationError: If the stored scaler parameters are malformed
                or its configuration disagrees with the model's.
        """
        model = cls(
            min_value=state.min_value,
            max_value=state.max_value,
            epsilon=state.epsilon,
            scaler_type=state.scaler_type,
        )
        if state.scaler is not None:
            scaler = get_scaler_class(state.scaler.kind).from_state(state.scaler.params)
            mismatched = _mismatched_config(model, scaler)
            if mismatched:
                raise SerializationError(
                    "Stored scaler configuration does not match the model",
                    reason=f"mismatched fields: {', '.join(mismatched)}",
                    context={"kind": scaler.kind.value},
                )
            model._scaler = scaler
        log_result(
            logger,
            "Loaded scaling model",
            scaler_type=model.scaler_type.value,
            fitted=model.is_fitted,
        )
        return model

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScalingModel:
        """Deserialize from to_dict() output.

        Raises:
            SerializationError: If the payload is malformed or inconsistent.
        """
        try:
            state = ScalingModelState.model_validate(data)
        except ValidationError as exc:
            raise SerializationError("Invalid scaling model state", reason=_summarise_errors(exc)) from exc
        return cls.from_state(state)

    @classmethod
    def from_json(cls, text: str | bytes) -> ScalingModel:
        """Deserialize from to_json() output.

        Raises:
            SerializationError: If the text is not valid JSON or is inconsistent.
        """
        try:
            state = ScalingModelState.model_validate_json(text)
        except ValidationError as exc:
            raise SerializationError("Invalid scaling model state", reason=_summarise_errors(exc)) from exc
        return cls.from_state(state)

    def save(self, path: Path | str) -> Path:
        """Write the model as JSON to path.

        Returns:
            The path written.
        """
        path = Path(path)
        try:
            path.write_text(self.to_json(indent=2))
        except OSError as exc:
            raise SerializationError("Could not write scaling model", reason=str(exc), path=path) from exc
        logger.info(f"Saved {self._scaler_type.value} scaling model to {path}")
        return path

    @classmethod
    def load(cls, path: Path | str) -> ScalingModel:
        """Read a model previously written by save().

        Raises:
            SerializationError: If the file cannot be read or parsed.
        """
        path = Path(path)
        try:
            text = path.read_text()
        except OSError as exc:
            raise SerializationError("Could not read scaling model", reason=str(exc), path=path) from exc
        try:
            return cls.from_json(text)
        except SerializationError as exc:
            raise SerializationError(exc.message, reason=exc.reason, path=path) from exc

    def __repr__(self) -> str:
        return (
            f"ScalingModel(scaler_type={self._scaler_type.value!r}, min_value={self.min_value}, "
            f"max_value={self.max_value}, epsilon={self.epsilon}, fitted={self.is_fitted})"
        )


def _summarise_errors(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in exc.errors()
    )


def _mismatched_config(model: ScalingModel, scaler: BaseScaler) -> list[str]:
    return sorted(name for name, value in scaler.get_config().items() if value != getattr(model, name))
