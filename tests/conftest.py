"""Pytest configuration and shared fixtures for liq-preprocess tests."""

from collections.abc import Iterator

import numpy as np
import polars as pl
import pytest

from liq.preprocess.config import reset_defaults


@pytest.fixture(autouse=True)
def _restore_defaults() -> Iterator[None]:
    """Undo configure_defaults() calls made by a test."""
    yield
    reset_defaults()


@pytest.fixture
def train_matrix() -> np.ndarray:
    """Correlated 3-feature matrix with distinct per-direction variances."""
    rng = np.random.default_rng(42)
    mixing = np.array([
        [2.0, 0.0, 0.0],
        [0.5, 1.0, 0.0],
        [0.3, 0.2, 0.5],
    ])
    return rng.normal(size=(200, 3)) @ mixing + np.array([1.0, -2.0, 3.0])


@pytest.fixture
def other_matrix() -> np.ndarray:
    """A second dataset with the same feature count but different statistics."""
    rng = np.random.default_rng(7)
    return rng.normal(loc=10.0, scale=4.0, size=(50, 3))


@pytest.fixture
def train_frame(train_matrix: np.ndarray) -> pl.DataFrame:
    """train_matrix as a polars DataFrame."""
    return pl.DataFrame(train_matrix, schema=["a", "b", "c"], orient="row")
