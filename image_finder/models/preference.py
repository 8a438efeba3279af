#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Enumerations parsed from user-editable configuration values.
"""

from enum import Enum


class ImagePreference(Enum):
    """Orientation bias applied after the minimum-size check."""
    NONE = "none"
    WIDE = "wide"
    TALL = "tall"

    @classmethod
    def parse(cls, value) -> 'ImagePreference':
        """Parse a config value; None and empty-ish spellings mean NONE.

        Raises:
            ValueError: If the value names no known preference.
        """
        if value is None or isinstance(value, cls):
            return value or cls.NONE
        text = str(value).strip().lower()
        if text in ("", "none", "nothing", "nil", "null", "nul"):
            return cls.NONE
        if text == "wide":
            return cls.WIDE
        if text == "tall":
            return cls.TALL
        raise ValueError(f"Unknown image preference: {value!r}")


class OutputFormat(Enum):
    """What a run produces for each passing image."""
    COPIES = "copies"  # copy the file into the destination
    NAMES = "names"    # list the source path in the destination's names file

    @classmethod
    def parse(cls, value) -> 'OutputFormat':
        if value is None or isinstance(value, cls):
            return value or cls.COPIES
        text = str(value).strip().lower()
        if text in ("copies", "copy"):
            return cls.COPIES
        if text in ("names", "name"):
            return cls.NAMES
        raise ValueError(f"Unknown output format: {value!r}")
