#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Dimension and aspect-ratio filtering for the Image Finder tool.
"""

import logging
import warnings
from pathlib import Path

from PIL import Image

from ..errors import DecodeError
from ..models.criteria import FilterCriteria
from ..models.preference import ImagePreference
from ..models.results import FilterResult, FilterStatus

logger = logging.getLogger(__name__)

# Suppress PIL warnings
warnings.filterwarnings("ignore", category=UserWarning,
                        message=".*Palette images with Transparency expressed in bytes.*")

# Errors Pillow raises while opening or decoding a file
DECODE_ERRORS = (OSError, SyntaxError, ValueError, TypeError, EOFError,
                 Image.DecompressionBombError)


def evaluate_dimensions(width: int, height: int, criteria: FilterCriteria) -> FilterResult:
    """Apply the minimum-size check, then the aspect preference. Squares pass both biases."""
    if width < criteria.min_width or height < criteria.min_height:
        return FilterResult(FilterStatus.REJECTED, reason="too small", width=width, height=height)

    if criteria.preference is ImagePreference.TALL and width > height:
        return FilterResult(FilterStatus.REJECTED, reason="wider than tall", width=width, height=height)
    if criteria.preference is ImagePreference.WIDE and width < height:
        return FilterResult(FilterStatus.REJECTED, reason="taller than wide", width=width, height=height)

    return FilterResult(FilterStatus.PASS, width=width, height=height)


class ImageFilter:
    """Decides whether one image satisfies the run's filter criteria."""

    def __init__(self, criteria: FilterCriteria):
        self.criteria = criteria

    def read_dimensions(self, path: Path):
        """Decode the image and return (width, height).

        Raises:
            DecodeError: If Pillow cannot open or decode the file.
        """
        try:
            with Image.open(path) as img:
                img.load()
                return img.size
        except DECODE_ERRORS as e:
            raise DecodeError(path, e) from e

    def accepts(self, path: Path) -> FilterResult:
        """Evaluate a single image. Decode failures are reported, not raised."""
        try:
            width, height = self.read_dimensions(path)
        except DecodeError as e:
            logger.warning("Failed to open image %s. Reason: %s", path, e.cause)
            return FilterResult(FilterStatus.OPEN_FAILED, reason="decode failed", error=e)

        result = evaluate_dimensions(width, height, self.criteria)
        if not result.passed:
            logger.debug("Rejected %s (%dx%d): %s", path, width, height, result.reason)
        return result
