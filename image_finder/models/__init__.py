"""Data models for the Image Finder tool."""

from .preference import ImagePreference, OutputFormat
from .criteria import FilterCriteria
from .results import (
    FilterStatus, FilterResult, CopyStatus, CopyResult, ItemState, ItemOutcome, RunStats
)

__all__ = [
    'ImagePreference',
    'OutputFormat',
    'FilterCriteria',
    'FilterStatus',
    'FilterResult',
    'CopyStatus',
    'CopyResult',
    'ItemState',
    'ItemOutcome',
    'RunStats',
]
