"""Logging configuration for the preprocessing package.

Provides structured logging with:
- Module-specific loggers
- Consistent format across scalers and the scaling model
- Arrays summarised by shape, never dumped
"""

from __future__ import annotations

import logging
from typing import Any

# Package logger
logger = logging.getLogger("liq.preprocess")


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a specific submodule.

    Args:
        name: Submodule name (e.g., "model", "scalers.whitening").

    Returns:
        Logger configured for the submodule.
    """
    return logging.getLogger(f"liq.preprocess.{name}")


def _summarise(value: Any) -> Any:
    shape = getattr(value, "shape", None)
    if shape is not None:
        return f"<{type(value).__name__} shape={tuple(shape)}>"
    if isinstance(value, (int, float, str, bool, type(None))):
        return value
    if hasattr(value, "__len__") and not isinstance(value, dict):
        return f"<{type(value).__name__} len={len(value)}>"
    return f"<{type(value).__name__}>"


def log_function_entry(
    logger: logging.Logger,
    func_name: str,
    **params: Any,
) -> None:
    """Log function entry with parameters.

    Args:
        logger: Logger instance.
        func_name: Name of the function.
        **params: Key parameters to log (summarised).
    """
    if not logger.isEnabledFor(logging.DEBUG):
        return
    param_str = ", ".join(f"{k}={_summarise(v)}" for k, v in params.items())
    logger.debug(f"Entering {func_name}({param_str})")


def log_result(
    logger: logging.Logger,
    message: str,
    **metrics: Any,
) -> None:
    """Log a result or key event at INFO level.

    Args:
        logger: Logger instance.
        message: Description of the result.
        **metrics: Key values to include.
    """
    if metrics:
        metric_str = ", ".join(f"{k}={v}" for k, v in metrics.items())
        logger.info(f"{message}: {metric_str}")
    else:
        logger.info(message)


def log_warning(
    logger: logging.Logger,
    message: str,
    **context: Any,
) -> None:
    """Log a warning with context.

    Args:
        logger: Logger instance.
        message: Warning message.
        **context: Additional context.
    """
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        logger.warning(f"{message} ({context_str})")
    else:
        logger.warning(message)
