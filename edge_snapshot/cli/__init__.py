"""Command line interface for edge-snapshot"""

from .main import app

__all__ = ["app"]
