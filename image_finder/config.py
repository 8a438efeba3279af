#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Global configuration and constants for the Image Finder tool.
"""

from typing import List, Set

# Transient configuration file written by the `run` workflow
CONFIG_FILE_NAME = "image_finder_config.json"

# Filter defaults
DEFAULT_MIN_WIDTH = 0
DEFAULT_MIN_HEIGHT = 0
DEFAULT_PREFERENCE = "none"

# Output defaults
DEFAULT_COPY_DESTINATION = "image_data"
DEFAULT_OUTPUT_FORMAT = "copies"
DEFAULT_COLLISION_POLICY = "overwrite"
NAMES_FILE_NAME = "image_names.txt"

# Placeholder list written into a fresh config file; the user is expected to edit it
DEFAULT_DIRECTORIES: List[str] = ["First", "second", "the third"]

# Processing defaults
DEFAULT_WORKERS = 6

COLLISION_POLICIES: Set[str] = {"overwrite", "namespace"}

# Length of the source-directory digest used by the "namespace" collision policy
NAMESPACE_DIGEST_CHARS = 8
