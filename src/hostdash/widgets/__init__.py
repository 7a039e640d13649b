"""
Host widgets for the terminal dashboard.

A widget spec names one of the host widgets and carries its options.
The dispatcher resolves the spec to a builder, the builder fetches the
metrics once and returns a render job that paints them on the sink.
"""

from .base import BaseBuilder, RenderJob, WidgetSpec
from .dispatcher import WidgetDispatcher
from .kinds import WidgetKind, list_kinds, parse_kind

__all__ = [
    "BaseBuilder",
    "RenderJob",
    "WidgetSpec",
    "WidgetDispatcher",
    "WidgetKind",
    "list_kinds",
    "parse_kind",
]
