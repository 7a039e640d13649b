"""
Utility modules for hostdash.
"""

from .errors import (
    ConfigurationError,
    HostError,
    HostDashError,
    MetricFetchFailure,
    RenderFailure,
    UnknownWidgetKind,
    error_boundary,
)

__all__ = [
    "HostDashError",
    "ConfigurationError",
    "UnknownWidgetKind",
    "MetricFetchFailure",
    "RenderFailure",
    "HostError",
    "error_boundary",
]
