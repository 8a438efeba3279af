#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Exception types for the Image Finder tool.

Only StructuralError ever propagates out of a run; the others are caught
inside the task that produced them and travel as part of a tagged result.
"""

from pathlib import Path
from typing import Optional


class ImageFinderError(Exception):
    """Base class for all Image Finder errors."""


class StructuralError(ImageFinderError):
    """Invalid or unreadable run configuration. Aborts before discovery."""


class ItemError(ImageFinderError):
    """Failure tied to a single filesystem path."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None, message: str = ""):
        self.path = path
        self.cause = cause
        super().__init__(message or f"{path}: {cause!r}")


class TraversalError(ItemError):
    """A directory could not be listed."""


class DecodeError(ItemError):
    """An image-candidate could not be opened or decoded."""


class MissingFileNameError(ItemError):
    """A path has no file name component to copy under."""


class CopyError(ItemError):
    """I/O failure while copying into the destination directory."""
