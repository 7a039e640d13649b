"""
Configuration loading for hostdash
"""

from .loader import ConfigLoader, widget_specs

__all__ = ["ConfigLoader", "widget_specs"]
