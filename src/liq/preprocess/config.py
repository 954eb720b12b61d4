"""Scaler type identifiers and global construction defaults.

Design Principles:
    - SRP: Only handles scaler naming and default configuration
    - KISS: Module-level defaults with explicit configure/reset

Example:
    >>> from liq.preprocess.config import ScalerType, configure_defaults
    >>> ScalerType.from_name("minmax")
    <ScalerType.MINMAX: 'min_max_scaler'>
    >>> configure_defaults(epsilon=1e-5)
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from liq.preprocess.exceptions import ScalerConfigurationError

DEFAULT_MIN_VALUE = 0
DEFAULT_MAX_VALUE = 1
DEFAULT_EPSILON = 0.00005


class ScalerType(str, Enum):
    """Scaling strategy selected by a ScalingModel."""

    NONE = "none"
    STANDARD = "standard_scaler"
    MINMAX = "min_max_scaler"
    MEAN = "mean_normalization"
    MAXABS = "max_abs_scaler"
    PCA = "pca_whitening"
    ZCA = "zca_whitening"

    @classmethod
    def from_name(cls, name: ScalerType | str | None) -> ScalerType:
        """Resolve a scaler type from an enum member, value, or short alias.

        Args:
            name: ScalerType, its value (e.g. "min_max_scaler") or an alias
                such as "minmax", "zca" (case-insensitive). None means NONE.

        Returns:
            Matching ScalerType.

        Raises:
            ScalerConfigurationError: If the name is not recognised.
        """
        if name is None:
            return cls.NONE
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("-", "_")
        if key in _ALIASES:
            return _ALIASES[key]
        raise ScalerConfigurationError(
            f"Unknown scaler type: {name}",
            parameter="scaler_type",
            value=name,
            valid_range=", ".join(member.value for member in cls),
        )


_ALIASES: dict[str, ScalerType] = {
    **{member.value: member for member in ScalerType},
    **{member.name.lower(): member for member in ScalerType},
    "min_max": ScalerType.MINMAX,
    "max_abs": ScalerType.MAXABS,
    "zscore": ScalerType.STANDARD,
    "z_score": ScalerType.STANDARD,
}

_ORIGINAL_DEFAULTS: dict[str, Any] = {
    "min_value": DEFAULT_MIN_VALUE,
    "max_value": DEFAULT_MAX_VALUE,
    "epsilon": DEFAULT_EPSILON,
}

_defaults: dict[str, Any] = dict(_ORIGINAL_DEFAULTS)


def validate_range(min_value: int, max_value: int) -> None:
    """Check that a min-max target range is non-empty.

    Raises:
        ScalerConfigurationError: If min_value >= max_value.
    """
    if min_value >= max_value:
        raise ScalerConfigurationError(
            "Range is not valid: min_value must be less than max_value",
            parameter="min_value",
            value=min_value,
            valid_range=f"< {max_value}",
        )


def validate_epsilon(epsilon: float) -> None:
    """Check that a whitening regularization constant is non-negative.

    Raises:
        ScalerConfigurationError: If epsilon < 0.
    """
    if epsilon < 0:
        raise ScalerConfigurationError(
            "Regularization parameter is not correct",
            parameter="epsilon",
            value=epsilon,
            valid_range=">= 0",
        )


def get_defaults() -> dict[str, Any]:
    """Return a copy of the current construction defaults."""
    return dict(_defaults)


def configure_defaults(
    min_value: int | None = None,
    max_value: int | None = None,
    epsilon: float | None = None,
) -> None:
    """Override construction defaults globally.

    Affects ScalingModel instances created afterwards (and the state a model
    is reset to after a move).

    Args:
        min_value: Default lower bound for min-max scaling.
        max_value: Default upper bound for min-max scaling.
        epsilon: Default whitening regularization constant.

    Raises:
        ScalerConfigurationError: If the resulting defaults are invalid.

    Example:
        >>> configure_defaults(min_value=-1, max_value=1)
        >>> ScalingModel().min_value
        -1
    """
    candidate = dict(_defaults)
    if min_value is not None:
        candidate["min_value"] = min_value
    if max_value is not None:
        candidate["max_value"] = max_value
    if epsilon is not None:
        candidate["epsilon"] = epsilon
    validate_range(candidate["min_value"], candidate["max_value"])
    validate_epsilon(candidate["epsilon"])
    _defaults.update(candidate)


def reset_defaults() -> None:
    """Restore the original construction defaults.

    This undoes any changes made by configure_defaults().
    """
    _defaults.clear()
    _defaults.update(_ORIGINAL_DEFAULTS)
