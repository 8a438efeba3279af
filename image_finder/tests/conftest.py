#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Shared fixtures for the Image Finder test suite.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image

from image_finder.models.criteria import FilterCriteria
from image_finder.models.preference import ImagePreference, OutputFormat
from image_finder.settings import ResolvedConfig


def write_image(path: Path, size, color=(200, 30, 30)) -> Path:
    """Save a solid-colour image; the format follows the file extension."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path)
    return path


def write_bytes(path: Path, data: bytes = b"definitely not an image") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path


@pytest.fixture
def make_image():
    """Factory fixture: make_image(path, (width, height))."""
    return write_image


@pytest.fixture
def make_file():
    """Factory fixture for arbitrary (non-image) file contents."""
    return write_bytes


@pytest.fixture
def make_config(tmp_path):
    """Factory fixture for a ResolvedConfig rooted in the test's tmp_path."""
    def _make(roots, min_width=0, min_height=0, preference=ImagePreference.NONE,
              destination=None, workers=4, output_format=OutputFormat.COPIES,
              collision_policy="overwrite"):
        return ResolvedConfig(
            roots=tuple(Path(r) for r in roots),
            criteria=FilterCriteria(min_width, min_height, preference),
            destination=Path(destination) if destination else tmp_path / "out",
            workers=workers,
            output_format=output_format,
            collision_policy=collision_policy,
        )
    return _make


@pytest.fixture
def deny_listing():
    """Make os.scandir fail with PermissionError for every path added to the yielded set.

    Works regardless of the user the tests run as, unlike chmod.
    """
    real_scandir = os.scandir
    denied = set()

    def fake_scandir(path="."):
        if Path(path) in denied:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    with patch("image_finder.scanning.walker.os.scandir", side_effect=fake_scandir):
        yield denied
