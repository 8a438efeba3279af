#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Filter criteria shared read-only by every filter task of a run.
"""

from dataclasses import dataclass

from .preference import ImagePreference


@dataclass(frozen=True)
class FilterCriteria:
    """Minimum pixel size and aspect preference for accepted images."""
    min_width: int = 0
    min_height: int = 0
    preference: ImagePreference = ImagePreference.NONE

    def __post_init__(self):
        if self.min_width < 0 or self.min_height < 0:
            raise ValueError(
                f"Minimum dimensions must be non-negative, got {self.min_width}x{self.min_height}"
            )
