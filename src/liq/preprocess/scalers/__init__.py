"""Scaling strategies and their registry.

Importing this package registers every built-in scaler.
"""

from liq.preprocess.scalers.base import BaseScaler
from liq.preprocess.scalers.linear import (
    MaxAbsScaler,
    MeanNormalization,
    MinMaxScaler,
    StandardScaler,
)
from liq.preprocess.scalers.registry import (
    create_scaler,
    get_scaler_class,
    list_scalers,
    register_scaler,
)
from liq.preprocess.scalers.whitening import PcaWhitening, ZcaWhitening

__all__ = [
    # Base class
    "BaseScaler",
    # Scalers
    "MinMaxScaler",
    "MaxAbsScaler",
    "MeanNormalization",
    "StandardScaler",
    "PcaWhitening",
    "ZcaWhitening",
    # Registry
    "register_scaler",
    "get_scaler_class",
    "create_scaler",
    "list_scalers",
]
