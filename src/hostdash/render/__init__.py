"""
Rendering sinks for dashboard widgets
"""

from .base import RenderSink
from .terminal import TerminalSink

__all__ = ["RenderSink", "TerminalSink"]
