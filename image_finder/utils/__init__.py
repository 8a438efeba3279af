"""Utility functions for the Image Finder tool."""

from .time import utc_now_str
from .path import ensure_dir, namespaced_name

__all__ = ['utc_now_str', 'ensure_dir', 'namespaced_name']
