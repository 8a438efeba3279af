#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Path utility functions for the Image Finder tool.
"""

import hashlib
import os
from pathlib import Path

from ..config import NAMESPACE_DIGEST_CHARS


def ensure_dir(p: Path) -> None:
    """Ensure directory exists, creating it if necessary.

    Safe to call concurrently: an already existing directory is not an error.
    """
    p.mkdir(parents=True, exist_ok=True)


def namespaced_name(source: Path) -> str:
    """Return the file name of `source` tagged with a digest of its parent directory."""
    digest = hashlib.sha1(os.fsencode(source.parent)).hexdigest()[:NAMESPACE_DIGEST_CHARS]
    return f"{source.stem}_{digest}{source.suffix}"
