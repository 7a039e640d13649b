"""
Error handling utilities and boundaries for hostdash.

Provides the exception hierarchy shared by the widget builders, the
metrics services and the rendering sink, plus a decorator used by the
dashboard loop to keep one failing widget from stopping the others.
"""

import logging
from functools import wraps
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

# Type variable for generic function decoration
F = TypeVar("F", bound=Callable[..., Any])


def error_boundary(
    *,
    default_return: Any = None,
    log_level: int = logging.ERROR,
) -> Callable[[F], F]:
    """
    Keep a failure of one dashboard step from ending the refresh cycle.

    The wrapped call's exception is logged with its traceback and
    default_return is handed back instead. hostdash errors (a widget that
    cannot be fetched or drawn) are expected while a host is unreachable
    and are logged at log_level; anything else is logged as an error.

    Args:
        default_return: Value returned when the wrapped call fails
        log_level: Logging level of hostdash errors (default: ERROR)

    Example:
        >>> @error_boundary(default_return=False)
        ... def paint_job(job):
        ...     job()
        ...     return True
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except HostDashError as e:
                logger.log(log_level, f"{func.__name__} skipped: {e}", exc_info=True)
            except Exception as e:
                logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            return default_return

        return wrapper  # type: ignore

    return decorator


class HostDashError(Exception):
    """Base exception for all hostdash-specific errors."""

    pass


class ConfigurationError(HostDashError):
    """Raised when there's an issue with configuration."""

    pass


class UnknownWidgetKind(HostDashError):
    """Raised when a widget name matches no known widget kind."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"can't find the widget {name}")


class MetricFetchFailure(HostDashError):
    """Raised when the metrics service fails while a widget is being built."""

    def __init__(self, kind: str, cause: Exception):
        self.kind = kind
        self.cause = cause
        super().__init__(f"failed to fetch metrics for widget {kind}: {cause}")


class RenderFailure(HostDashError):
    """Raised when the rendering sink cannot paint a widget."""

    pass


class HostError(HostDashError):
    """Raised when a host cannot provide a metric or a command fails on it."""

    def __init__(self, message: str, command: Optional[str] = None):
        self.command = command
        super().__init__(message)
