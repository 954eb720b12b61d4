"""Scaler registry for looking up and instantiating scaling strategies.

This module is the single dispatch point from a ScalerType to a
configured, unfitted scaler.

Design Principles:
    - SRP: Only handles scaler discovery and instantiation
    - OCP: New scalers can be added without modifying existing code

Example:
    >>> from liq.preprocess.scalers.registry import create_scaler
    >>> scaler = create_scaler("minmax", min_value=0, max_value=1, epsilon=5e-5)
    >>> scaler.fit([[2.0], [4.0], [6.0]])
"""

from __future__ import annotations

from typing import Any

from liq.preprocess.config import ScalerType
from liq.preprocess.exceptions import NoScalerSelectedError, ScalerConfigurationError
from liq.preprocess.scalers.base import BaseScaler

# Registry of scaler classes keyed by scaler type
_SCALERS: dict[ScalerType, type[BaseScaler]] = {}


def register_scaler(cls: type[BaseScaler]) -> type[BaseScaler]:
    """Decorator to register a scaler class.

    Args:
        cls: Scaler class to register

    Returns:
        The same class (for use as decorator)
    """
    _SCALERS[cls.kind] = cls
    return cls


def get_scaler_class(kind: ScalerType | str) -> type[BaseScaler]:
    """Get a scaler class by type or name.

    Raises:
        NoScalerSelectedError: If kind is ScalerType.NONE.
        ScalerConfigurationError: If no scaler is registered for kind.
    """
    scaler_type = ScalerType.from_name(kind)
    if scaler_type is ScalerType.NONE:
        raise NoScalerSelectedError(
            "No scaler type selected",
            operation="get_scaler_class",
            scaler_type=scaler_type.value,
        )
    if scaler_type not in _SCALERS:
        raise ScalerConfigurationError(
            f"No scaler registered for {scaler_type.value}",
            parameter="scaler_type",
            value=scaler_type.value,
            valid_range=", ".join(k.value for k in _SCALERS),
        )
    return _SCALERS[scaler_type]


def create_scaler(kind: ScalerType | str, **config: Any) -> BaseScaler:
    """Instantiate an unfitted scaler for kind.

    Only the configuration fields the scaler declares are passed on, so
    callers may hand over the full model configuration.

    Args:
        kind: Scaler type or name.
        **config: Candidate constructor arguments (min_value, max_value, epsilon).

    Returns:
        Configured, unfitted scaler.
    """
    cls = get_scaler_class(kind)
    return cls(**{name: config[name] for name in cls.config_fields if name in config})


def list_scalers() -> list[dict[str, Any]]:
    """List all registered scalers with metadata.

    Returns:
        List of dicts with keys name, class_name and config_fields.
    """
    return [
        {
            "name": kind.value,
            "class_name": cls.__name__,
            "config_fields": list(cls.config_fields),
        }
        for kind, cls in _SCALERS.items()
    ]
