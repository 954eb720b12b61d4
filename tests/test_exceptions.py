"""Tests for scaling exception hierarchy."""

from pathlib import Path

import pytest

from liq.preprocess.exceptions import (
    DimensionMismatchError,
    InvalidInputError,
    NoScalerSelectedError,
    NotFittedError,
    ScalerConfigurationError,
    ScalingError,
    SerializationError,
)


class TestScalingError:
    """Tests for base ScalingError."""

    def test_basic_message(self) -> None:
        """Test basic error message."""
        error = ScalingError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.context == {}

    def test_message_with_context(self) -> None:
        """Test error message with context."""
        error = ScalingError("Failed", context={"kind": "pca_whitening", "rows": 3})
        assert "kind=pca_whitening" in str(error)
        assert "rows=3" in str(error)

    def test_inheritance(self) -> None:
        """Test that ScalingError is an Exception."""
        assert isinstance(ScalingError("test"), Exception)


class TestNotFittedError:
    """Tests for NotFittedError and NoScalerSelectedError."""

    def test_basic(self) -> None:
        """Operation and scaler type are recorded."""
        error = NotFittedError("not fitted", operation="transform", scaler_type="min_max_scaler")
        assert error.operation == "transform"
        assert error.scaler_type == "min_max_scaler"
        assert "operation=transform" in str(error)
        assert "scaler_type=min_max_scaler" in str(error)

    def test_without_scaler_type(self) -> None:
        """scaler_type is omitted from the message when unknown."""
        error = NotFittedError("not fitted", operation="inverse_transform")
        assert "scaler_type" not in str(error)

    def test_no_scaler_selected_is_not_fitted(self) -> None:
        """NoScalerSelectedError can be caught as NotFittedError."""
        with pytest.raises(NotFittedError):
            raise NoScalerSelectedError("none", operation="fit", scaler_type="none")


class TestScalerConfigurationError:
    """Tests for ScalerConfigurationError."""

    def test_basic(self) -> None:
        """Parameter, value and valid range are recorded."""
        error = ScalerConfigurationError("bad eps", parameter="epsilon", value=-1.0, valid_range=">= 0")
        assert error.parameter == "epsilon"
        assert error.value == -1.0
        assert error.valid_range == ">= 0"
        assert "parameter=epsilon" in str(error)
        assert "valid_range=>= 0" in str(error)
        assert isinstance(error, ScalingError)


class TestInvalidInputError:
    """Tests for InvalidInputError and DimensionMismatchError."""

    def test_reason_and_shape(self) -> None:
        """Reason and shape appear in the message."""
        error = InvalidInputError("bad input", reason="empty", shape=(0, 3))
        assert error.reason == "empty"
        assert error.shape == (0, 3)
        assert "reason=empty" in str(error)
        assert "shape=(0, 3)" in str(error)

    def test_dimension_mismatch(self) -> None:
        """DimensionMismatchError records expected and actual feature counts."""
        error = DimensionMismatchError("mismatch", expected=3, actual=2)
        assert error.expected == 3
        assert error.actual == 2
        assert "expected=3" in str(error)
        assert "actual=2" in str(error)
        assert isinstance(error, InvalidInputError)


class TestSerializationError:
    """Tests for SerializationError."""

    def test_string_path_converted(self) -> None:
        """String paths are converted to Path."""
        error = SerializationError("unreadable", reason="truncated", path="/tmp/model.json")
        assert error.path == Path("/tmp/model.json")
        assert "path=/tmp/model.json" in str(error)
        assert "reason=truncated" in str(error)

    def test_catch_as_scaling_error(self) -> None:
        """SerializationError can be caught as ScalingError."""
        with pytest.raises(ScalingError):
            raise SerializationError("bad")
