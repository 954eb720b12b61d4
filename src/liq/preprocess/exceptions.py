"""Custom exceptions for scaling operations.

Provides a hierarchy of exceptions for handling scaler errors
with contextual information for debugging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ScalingError(Exception):
    """Base exception for scaling operations.

    All scaling-specific exceptions inherit from this class,
    allowing callers to catch all scaling errors with a single except.

    Attributes:
        message: Human-readable error message.
        context: Additional context dictionary.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize scaling error.

        Args:
            message: Human-readable error message.
            context: Additional context for debugging.
        """
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context."""
        if not self.context:
            return self.message
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} ({context_str})"


class NotFittedError(ScalingError):
    """Raised when a transform is requested before a successful fit.

    This occurs when:
    - transform/inverse_transform is called on a fresh scaler
    - The scaler type was changed after the last fit
    - The model was reset or moved from

    Attributes:
        operation: The operation that was attempted.
        scaler_type: The selected scaler type, if any.
    """

    def __init__(
        self,
        message: str,
        operation: str,
        scaler_type: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize not fitted error.

        Args:
            message: Human-readable error message.
            operation: Operation that was attempted.
            scaler_type: Selected scaler type.
            context: Additional context for debugging.
        """
        self.operation = operation
        self.scaler_type = scaler_type
        full_context: dict[str, Any] = {"operation": operation}
        if scaler_type is not None:
            full_context["scaler_type"] = scaler_type
        if context:
            full_context.update(context)
        super().__init__(message, full_context)


class NoScalerSelectedError(NotFittedError):
    """Raised when fitting or transforming with scaler type ``none``."""


class ScalerConfigurationError(ScalingError):
    """Raised when scaler configuration is invalid.

    This occurs when:
    - min_value is not below max_value
    - epsilon is negative
    - An unknown scaler name is requested

    Attributes:
        parameter: The parameter that is invalid.
        value: The invalid value.
        valid_range: Description of valid values.
    """

    def __init__(
        self,
        message: str,
        parameter: str,
        value: Any,
        valid_range: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize scaler configuration error.

        Args:
            message: Human-readable error message.
            parameter: Parameter name that is invalid.
            value: Invalid value provided.
            valid_range: Description of valid values.
            context: Additional context for debugging.
        """
        self.parameter = parameter
        self.value = value
        self.valid_range = valid_range
        full_context = {"parameter": parameter, "value": value}
        if valid_range is not None:
            full_context["valid_range"] = valid_range
        if context:
            full_context.update(context)
        super().__init__(message, full_context)


class InvalidInputError(ScalingError):
    """Raised when input data cannot be scaled.

    This occurs when:
    - The input is empty or has more than two dimensions
    - The input contains NaN or infinite values
    - Too few samples to estimate a covariance

    Attributes:
        reason: Description of the problem.
        shape: Shape of the offending input, if known.
    """

    def __init__(
        self,
        message: str,
        reason: str | None = None,
        shape: tuple[int, ...] | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid input error.

        Args:
            message: Human-readable error message.
            reason: Description of the problem.
            shape: Shape of the offending input.
            context: Additional context for debugging.
        """
        self.reason = reason
        self.shape = shape
        full_context: dict[str, Any] = {}
        if reason is not None:
            full_context["reason"] = reason
        if shape is not None:
            full_context["shape"] = shape
        if context:
            full_context.update(context)
        super().__init__(message, full_context)


class DimensionMismatchError(InvalidInputError):
    """Raised when input feature count differs from the fitted feature count.

    Attributes:
        expected: Number of features seen during fit.
        actual: Number of features in the input.
    """

    def __init__(
        self,
        message: str,
        expected: int,
        actual: int,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dimension mismatch error.

        Args:
            message: Human-readable error message.
            expected: Number of features seen during fit.
            actual: Number of features in the input.
            context: Additional context for debugging.
        """
        self.expected = expected
        self.actual = actual
        full_context: dict[str, Any] = {"expected": expected, "actual": actual}
        if context:
            full_context.update(context)
        super().__init__(message, context=full_context)


class SerializationError(ScalingError):
    """Raised when persisted scaling state cannot be read or written.

    This occurs when:
    - The payload is not valid JSON or is truncated
    - Required fields are missing or have the wrong type
    - The stored scaler kind does not match the stored scaler type

    Attributes:
        reason: Description of the problem.
        path: File path if known.
    """

    def __init__(
        self,
        message: str,
        reason: str | None = None,
        path: Path | str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize serialization error.

        Args:
            message: Human-readable error message.
            reason: Description of the problem.
            path: File path if known.
            context: Additional context for debugging.
        """
        self.reason = reason
        self.path = Path(path) if isinstance(path, str) else path
        full_context: dict[str, Any] = {}
        if path is not None:
            full_context["path"] = str(path)
        if reason is not None:
            full_context["reason"] = reason
        if context:
            full_context.update(context)
        super().__init__(message, full_context)
