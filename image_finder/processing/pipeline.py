#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pipeline orchestrator for the Image Finder tool.

Coordinates the run stages:
1. Discovery of image candidates under the root directories, skipping the
   destination so earlier copies are not picked up again
2. Destination directory preparation
3. One filter+copy task per candidate, joined before returning
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Optional

from tqdm import tqdm

from ..config import NAMES_FILE_NAME
from ..errors import CopyError
from ..models.preference import OutputFormat
from ..models.results import CopyResult, CopyStatus, ItemOutcome, ItemState, RunStats
from ..scanning.walker import DirectoryWalker
from ..settings import ResolvedConfig
from ..utils.path import ensure_dir
from ..utils.time import utc_now_str
from .copier import CopyExecutor
from .image_filter import ImageFilter

logger = logging.getLogger(__name__)


class ImagePipeline:
    """
    Runs discovery, filtering and copying for one resolved configuration.

    Individual file and directory failures never abort the run; they are
    logged and counted in the returned RunStats.
    """

    def __init__(self, config: ResolvedConfig, walker: Optional[DirectoryWalker] = None,
                 show_progress: bool = False):
        self.config = config
        self.walker = walker or DirectoryWalker(workers=config.workers)
        self.image_filter = ImageFilter(config.criteria)
        self.copier = CopyExecutor(config.destination, config.collision_policy)
        self.show_progress = show_progress
        self._copy_enabled = False

    def run(self) -> RunStats:
        """Execute the complete pipeline and return the run statistics."""
        config = self.config
        stats = RunStats(destination=config.destination)

        logger.info("Beginning image search in %d root director%s.",
                    len(config.roots), "y" if len(config.roots) == 1 else "ies")
        candidates = self.walker.discover(config.roots, exclude=(config.destination,))
        stats.discovered = len(candidates)
        stats.failed_directories = self.walker.failed_directories

        stats.destination_ready = self._prepare_destination()
        self._copy_enabled = stats.destination_ready

        if candidates:
            self._process_candidates(candidates, stats)
        else:
            logger.info("No images found.")

        if config.output_format is OutputFormat.NAMES:
            self._write_names_file(stats)

        stats.end_time = utc_now_str()
        logger.info("Process finished.")
        return stats

    def _prepare_destination(self) -> bool:
        """Create the destination directory; failure is logged, not raised."""
        try:
            ensure_dir(self.config.destination)
        except OSError as e:
            logger.error(
                "Error creating image copy destination %s: %s. Operation will still continue.",
                self.config.destination, e
            )
            return False
        return True

    def _process_candidates(self, candidates, stats: RunStats) -> None:
        """Fan out one task per candidate and join them all."""
        with ThreadPoolExecutor(max_workers=self.config.workers,
                                thread_name_prefix="filter") as executor:
            futures: Dict[Future, Path] = {
                executor.submit(self.process_path, path): path for path in candidates
            }
            progress = tqdm(as_completed(futures), total=len(futures), desc="Filtering",
                            unit="img", disable=not self.show_progress)
            for future in progress:
                stats.record(self._join(future, futures[future]))

    def _join(self, future: Future, path: Path) -> ItemOutcome:
        try:
            return future.result()
        except Exception as e:
            logger.error("An error occurred when handling %s: %r", path, e)
            return ItemOutcome(path, error=e)

    def process_path(self, path: Path) -> ItemOutcome:
        """Filter one candidate and, if it passes, copy it."""
        filter_result = self.image_filter.accepts(path)
        if not filter_result.passed:
            return ItemOutcome(path, filter_result=filter_result)

        if self.config.output_format is OutputFormat.NAMES:
            return ItemOutcome(path, filter_result=filter_result)

        if not self._copy_enabled:
            error = CopyError(path, message=f"Destination {self.config.destination} is unavailable")
            logger.debug("Skipping copy of %s: %s", path, error)
            return ItemOutcome(path, filter_result=filter_result,
                               copy_result=CopyResult(CopyStatus.FAILED, error=error))

        return ItemOutcome(path, filter_result=filter_result,
                           copy_result=self.copier.copy(path))

    def _write_names_file(self, stats: RunStats) -> Optional[Path]:
        """Write accepted source paths, one per line, into the destination."""
        if not stats.destination_ready:
            logger.error("Cannot write %s: destination %s is unavailable.",
                         NAMES_FILE_NAME, self.config.destination)
            return None

        names_path = self.config.destination / NAMES_FILE_NAME
        listed = sorted(str(p) for p in stats.paths_in(ItemState.LISTED))
        try:
            # Undecodable file names are written back as their original bytes
            with names_path.open("w", encoding="utf-8", errors="surrogateescape") as f:
                for line in listed:
                    f.write(line + "\n")
        except (OSError, UnicodeError) as e:
            logger.error("Failed to write %s. Reason: %s", names_path, e)
            return None

        logger.info("Wrote %d image name(s) to %s", len(listed), names_path)
        return names_path


def run_pipeline(config: ResolvedConfig, show_progress: bool = False) -> RunStats:
    """Convenience function for running the pipeline once."""
    return ImagePipeline(config, show_progress=show_progress).run()
