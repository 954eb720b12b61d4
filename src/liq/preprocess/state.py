"""Persisted state models for scaling models.

Provides Pydantic models describing the serialized form of a ScalingModel.
These models validate payloads before any scaler is rebuilt, so a loaded
model always owns at most one scaler whose kind matches its scaler type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from liq.preprocess.config import DEFAULT_EPSILON, DEFAULT_MAX_VALUE, DEFAULT_MIN_VALUE, ScalerType

FORMAT_VERSION = 1


class ScalerState(BaseModel):
    """Serialized form of one fitted scaler.

    Attributes:
        kind: Scaler type of the stored scaler.
        params: Output of BaseScaler.get_state().
    """

    kind: ScalerType
    params: dict[str, Any]


class ScalingModelState(BaseModel):
    """Serialized form of a ScalingModel.

    Attributes:
        format_version: Payload layout version.
        scaler_type: Selected scaler type.
        min_value: Lower bound for min-max scaling.
        max_value: Upper bound for min-max scaling.
        epsilon: Whitening regularization constant.
        scaler: Fitted scaler, or None for an unfitted model.
    """

    format_version: int = FORMAT_VERSION
    scaler_type: ScalerType = ScalerType.NONE
    min_value: int = DEFAULT_MIN_VALUE
    max_value: int = DEFAULT_MAX_VALUE
    epsilon: float = Field(default=DEFAULT_EPSILON, ge=0)
    scaler: ScalerState | None = None

    @model_validator(mode="after")
    def _check_consistency(self) -> ScalingModelState:
        if self.format_version != FORMAT_VERSION:
            raise ValueError(f"Unsupported format_version {self.format_version}")
        if self.scaler is not None and self.scaler.kind != self.scaler_type:
            raise ValueError(
                f"Stored scaler kind {self.scaler.kind.value} does not match "
                f"scaler_type {self.scaler_type.value}"
            )
        if self.scaler is not None and self.scaler_type is ScalerType.NONE:
            raise ValueError("A scaler payload requires a scaler_type other than none")
        return self
