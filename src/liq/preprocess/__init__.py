"""Feature scaling for the LIQ stack.

This package provides:
- A ScalingModel selecting one of six scalers (min-max, max-abs, mean
  normalization, standard, PCA whitening, ZCA whitening)
- Fit / transform / inverse transform on numpy or polars data
- JSON persistence of fitted models
- Global default configuration for scaling bounds and epsilon

Example:
    >>> import polars as pl
    >>> from liq.preprocess import ScalingModel, ScalerType
    >>>
    >>> model = ScalingModel(epsilon=1e-5, scaler_type=ScalerType.ZCA)
    >>> whitened = model.fit_transform(train_df)
    >>> restored = model.inverse_transform(whitened)
    >>>
    >>> model.save("zca.json")
    >>> model = ScalingModel.load("zca.json")
"""

from liq.preprocess.config import (
    DEFAULT_EPSILON,
    DEFAULT_MAX_VALUE,
    DEFAULT_MIN_VALUE,
    ScalerType,
    configure_defaults,
    get_defaults,
    reset_defaults,
)
from liq.preprocess.exceptions import (
    DimensionMismatchError,
    InvalidInputError,
    NoScalerSelectedError,
    NotFittedError,
    ScalerConfigurationError,
    ScalingError,
    SerializationError,
)
from liq.preprocess.model import ScalingModel
from liq.preprocess.scalers import (
    BaseScaler,
    MaxAbsScaler,
    MeanNormalization,
    MinMaxScaler,
    PcaWhitening,
    StandardScaler,
    ZcaWhitening,
    create_scaler,
    list_scalers,
)
from liq.preprocess.state import ScalerState, ScalingModelState

__all__ = [
    # Model
    "ScalingModel",
    "ScalerType",
    # Scalers
    "BaseScaler",
    "MinMaxScaler",
    "MaxAbsScaler",
    "MeanNormalization",
    "StandardScaler",
    "PcaWhitening",
    "ZcaWhitening",
    "create_scaler",
    "list_scalers",
    # Persistence
    "ScalerState",
    "ScalingModelState",
    # Configuration
    "DEFAULT_MIN_VALUE",
    "DEFAULT_MAX_VALUE",
    "DEFAULT_EPSILON",
    "configure_defaults",
    "get_defaults",
    "reset_defaults",
    # Exceptions
    "ScalingError",
    "NotFittedError",
    "NoScalerSelectedError",
    "ScalerConfigurationError",
    "InvalidInputError",
    "DimensionMismatchError",
    "SerializationError",
]
