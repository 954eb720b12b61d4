"""NumPy conversion helpers for scaler inputs.

These helpers aim to minimize unnecessary copies while enforcing float64
for every matrix handed to a scaler. Polars frames and series, numpy
arrays and nested sequences are accepted.
"""

from __future__ import annotations

from typing import Any, Union

import numpy as np
import polars as pl

from liq.preprocess.exceptions import InvalidInputError

ArrayLike = Union[np.ndarray, pl.DataFrame, pl.Series, list, tuple]


def to_numpy_float64(
    data: Any,
    *,
    allow_copy: bool = True,
) -> np.ndarray:
    """Convert scaler input to a float64 numpy array with minimal copying."""
    if isinstance(data, pl.Series):
        try:
            arr = data.to_numpy(writable=False, allow_copy=allow_copy)
        except Exception:
            arr = data.to_numpy(writable=False, allow_copy=True)
    elif isinstance(data, pl.DataFrame):
        try:
            arr = data.to_numpy(order="c", writable=False, allow_copy=allow_copy)
        except Exception:
            arr = data.to_numpy(order="c", writable=False, allow_copy=True)
    else:
        try:
            arr = np.asarray(data)
        except ValueError as exc:
            raise InvalidInputError("Input is not a rectangular matrix", reason=str(exc)) from exc

    if arr.dtype != np.float64:
        try:
            arr = arr.astype(np.float64, copy=False)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(
                "Input must be numeric", reason=str(exc), shape=tuple(arr.shape)
            ) from exc
    return arr


def as_2d(data: Any) -> tuple[np.ndarray, bool]:
    """Convert input to a finite ``(n_samples, n_features)`` float64 matrix.

    A 1-D input is one feature observed over many samples and becomes a
    single column.

    Returns:
        Tuple of (matrix, was_1d).

    Raises:
        InvalidInputError: If the input is empty, not 1-D/2-D, or not finite.
    """
    arr = to_numpy_float64(data)
    was_1d = arr.ndim == 1
    if was_1d:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise InvalidInputError(
            "Input must be a 1-D or 2-D matrix", reason="bad ndim", shape=tuple(arr.shape)
        )
    if arr.size == 0:
        raise InvalidInputError("Input is empty", reason="empty", shape=tuple(arr.shape))
    if not np.isfinite(arr).all():
        raise InvalidInputError(
            "Input contains NaN or infinite values", reason="non-finite", shape=tuple(arr.shape)
        )
    return arr, was_1d


def restore_shape(result: np.ndarray, was_1d: bool) -> np.ndarray:
    """Undo the column reshape applied by as_2d for 1-D inputs."""
    if was_1d:
        return result.ravel()
    return result
