"""Utility helpers."""

from .profiling import timed
from .terminal import query_surface_size

__all__ = ["timed", "query_surface_size"]
