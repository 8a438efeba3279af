#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Concurrent directory discovery for the Image Finder tool.

Every directory is listed by its own task on a bounded thread pool. The
coordinating loop in `discover` schedules one new task per subdirectory as
listings come back and joins every task it submitted before returning.
The coordinator alone tracks which directories were already scheduled.
"""

import logging
import os
import stat
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple, Union

from ..config import DEFAULT_WORKERS
from ..errors import TraversalError
from .classifier import is_image

logger = logging.getLogger(__name__)

DirectoryKey = Tuple[int, int]


@dataclass
class DirectoryListing:
    """Result of listing a single directory level."""
    directory: Path
    images: List[Path] = field(default_factory=list)
    subdirectories: Dict[Path, DirectoryKey] = field(default_factory=dict)


class DirectoryWalker:
    """Recursively finds image-candidate paths under a set of root directories."""

    def __init__(self, workers: int = DEFAULT_WORKERS,
                 classifier: Callable[[Union[str, Path]], bool] = is_image):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers
        self.classifier = classifier
        self.failed_directories = 0

    def discover(self, roots: Iterable[Union[str, Path]],
                 exclude: Iterable[Union[str, Path]] = ()) -> Set[Path]:
        """
        Discover image-candidate files reachable from the given roots.

        Roots that are missing, unreadable or not directories are skipped
        with a warning. Directories that cannot be listed are skipped with an
        error; their siblings are still scanned. Symlinked directories are
        followed, but every physical directory is listed at most once, so
        link cycles terminate.

        Args:
            roots: Root directories to scan.
            exclude: Directories never descended into (e.g. the copy
                destination). Ones that don't exist yet are ignored.

        Returns:
            Set of discovered image-candidate paths (unordered).
        """
        found: Set[Path] = set()
        visited: Set[DirectoryKey] = set()
        self.failed_directories = 0

        for directory in exclude:
            key = _directory_key(Path(directory))
            if key is not None:
                visited.add(key)

        with ThreadPoolExecutor(max_workers=self.workers,
                                thread_name_prefix="walker") as executor:
            pending: Set[Future] = set()

            for root in roots:
                root = Path(root)
                key = _directory_key(root)
                if key is None:
                    logger.warning(
                        "Attempted to read a path that doesn't exist or isn't a directory: %s", root
                    )
                    continue
                if key in visited:
                    logger.debug("Skipping already visited directory %s", root)
                    continue
                visited.add(key)
                pending.add(executor.submit(self.scan_directory, root))

            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    listing = self._join(future)
                    if listing is None:
                        continue
                    found.update(listing.images)
                    for subdirectory, key in listing.subdirectories.items():
                        if key in visited:
                            logger.debug("Skipping already visited directory %s", subdirectory)
                            continue
                        visited.add(key)
                        logger.debug("Reading directory %s", subdirectory)
                        pending.add(executor.submit(self.scan_directory, subdirectory))

        logger.info("Discovery complete: %d image candidate(s), %d unreadable director%s",
                    len(found), self.failed_directories,
                    "y" if self.failed_directories == 1 else "ies")
        return found

    def _join(self, future: Future):
        """Collect one listing task; failures are logged and yield None."""
        try:
            return future.result()
        except TraversalError as e:
            logger.error("Failed to read directory %s. Reason: %s", e.path, e.cause)
        except Exception as e:
            logger.error("Failed to get contents of a directory. Reason: %r", e)
        self.failed_directories += 1
        return None

    def scan_directory(self, directory: Path) -> DirectoryListing:
        """
        List one directory level.

        Subdirectories, including symlinked ones, are returned with the
        (device, inode) identity of the directory they resolve to.

        Raises:
            TraversalError: If the directory cannot be listed.
        """
        listing = DirectoryListing(directory)
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    try:
                        if entry.is_dir():
                            st = entry.stat()
                            listing.subdirectories[Path(entry.path)] = (st.st_dev, st.st_ino)
                        elif entry.is_file() and self.classifier(entry.path):
                            listing.images.append(Path(entry.path))
                    except OSError as e:
                        logger.error("Failed to read path %s. Reason: %s", entry.path, e)
        except OSError as e:
            raise TraversalError(directory, e) from e
        return listing


def _directory_key(path: Path) -> Optional[DirectoryKey]:
    """Return the (device, inode) identity of a directory, or None if it isn't one."""
    try:
        st = path.stat()
    except OSError as e:
        logger.debug("Cannot stat %s: %s", path, e)
        return None
    if not stat.S_ISDIR(st.st_mode):
        return None
    return st.st_dev, st.st_ino


def discover_images(roots: Iterable[Union[str, Path]], workers: int = DEFAULT_WORKERS) -> Set[Path]:
    """Convenience function for one-off discovery."""
    return DirectoryWalker(workers=workers).discover(roots)
