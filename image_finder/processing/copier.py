#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Copying of accepted images into the flat destination directory.
"""

import logging
import shutil
from pathlib import Path

from ..config import DEFAULT_COLLISION_POLICY, COLLISION_POLICIES
from ..errors import CopyError, MissingFileNameError
from ..models.results import CopyResult, CopyStatus
from ..utils.path import namespaced_name

logger = logging.getLogger(__name__)


class CopyExecutor:
    """
    Copies source files into one destination directory.

    With the "overwrite" policy an existing file of the same name is replaced
    (last writer wins). With "namespace" the destination name carries a digest
    of the source directory, so same-named files from different folders land
    side by side and re-copying the same source still hits the same target.
    """

    def __init__(self, destination: Path, collision_policy: str = DEFAULT_COLLISION_POLICY):
        if collision_policy not in COLLISION_POLICIES:
            raise ValueError(f"Unknown collision policy: {collision_policy!r}")
        self.destination = Path(destination)
        self.collision_policy = collision_policy

    def target_for(self, source: Path) -> Path:
        """Compute the destination path for `source`.

        Raises:
            MissingFileNameError: If `source` has no file name component.
        """
        if not source.name:
            raise MissingFileNameError(source, message=f"Failed to get file name of {source}")
        if self.collision_policy == "namespace":
            return self.destination / namespaced_name(source)
        return self.destination / source.name

    def copy(self, source: Path) -> CopyResult:
        """Copy one file. Failures are logged and returned, never raised."""
        source = Path(source)
        try:
            target = self.target_for(source)
        except MissingFileNameError as e:
            logger.error(str(e))
            return CopyResult(CopyStatus.FAILED, error=e)

        try:
            shutil.copyfile(source, target)
        except OSError as e:
            logger.error("Failed to copy file %s to %s. Reason: %s", source, target, e)
            return CopyResult(CopyStatus.FAILED, destination=target, error=CopyError(source, e))

        logger.debug("Copied to %s", target)
        return CopyResult(CopyStatus.COPIED, destination=target)
