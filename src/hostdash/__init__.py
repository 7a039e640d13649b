"""
hostdash - A YAML-driven terminal dashboard of local and remote host metrics
"""

__version__ = "0.1.0"

from .dashboard import Dashboard

__all__ = ["Dashboard"]
