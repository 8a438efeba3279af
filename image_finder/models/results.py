#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Tagged results produced by pipeline tasks and the aggregate for one run.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from ..utils.time import utc_now_str


class FilterStatus(Enum):
    PASS = "pass"
    REJECTED = "rejected"
    OPEN_FAILED = "open_failed"


@dataclass(frozen=True)
class FilterResult:
    """Outcome of evaluating one image against the filter criteria."""
    status: FilterStatus
    reason: Optional[str] = None
    error: Optional[Exception] = None
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def passed(self) -> bool:
        return self.status is FilterStatus.PASS


class CopyStatus(Enum):
    COPIED = "copied"
    FAILED = "failed"


@dataclass(frozen=True)
class CopyResult:
    """Outcome of copying one file into the destination directory."""
    status: CopyStatus
    destination: Optional[Path] = None
    error: Optional[Exception] = None

    @property
    def copied(self) -> bool:
        return self.status is CopyStatus.COPIED


class ItemState(Enum):
    """Terminal state of a discovered path after the filter and copy stage."""
    OPEN_FAILED = "open_failed"
    REJECTED = "rejected"
    COPIED = "copied"
    COPY_FAILED = "copy_failed"
    LISTED = "listed"   # passed, recorded by name instead of copied
    ERROR = "error"     # unexpected failure inside the task


@dataclass(frozen=True)
class ItemOutcome:
    """Everything a single filter+copy task reports back to the join point."""
    path: Path
    filter_result: Optional[FilterResult] = None
    copy_result: Optional[CopyResult] = None
    error: Optional[BaseException] = None

    @property
    def state(self) -> ItemState:
        if self.error is not None or self.filter_result is None:
            return ItemState.ERROR
        if self.filter_result.status is FilterStatus.OPEN_FAILED:
            return ItemState.OPEN_FAILED
        if self.filter_result.status is FilterStatus.REJECTED:
            return ItemState.REJECTED
        if self.copy_result is None:
            return ItemState.LISTED
        return ItemState.COPIED if self.copy_result.copied else ItemState.COPY_FAILED


@dataclass
class RunStats:
    """Statistics for a pipeline run. Only touched by the coordinating thread."""
    discovered: int = 0
    failed_directories: int = 0
    destination: Optional[Path] = None
    destination_ready: bool = False
    start_time: str = field(default_factory=utc_now_str)
    end_time: Optional[str] = None
    outcomes: List[ItemOutcome] = field(default_factory=list)

    def record(self, outcome: ItemOutcome) -> None:
        self.outcomes.append(outcome)

    def counts(self) -> Dict[str, int]:
        """Number of outcomes per terminal state, including zero counts."""
        tally = Counter(outcome.state for outcome in self.outcomes)
        return {state.value: tally.get(state, 0) for state in ItemState}

    def paths_in(self, state: ItemState) -> List[Path]:
        return [o.path for o in self.outcomes if o.state is state]

    def to_dict(self) -> Dict[str, object]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "discovered": self.discovered,
            "failed_directories": self.failed_directories,
            "destination": str(self.destination) if self.destination else None,
            "destination_ready": self.destination_ready,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "counts": self.counts(),
        }

    def summary(self) -> str:
        """Generate summary string."""
        counts = self.counts()
        lines = [
            "=" * 50,
            "Image search complete",
            "=" * 50,
            f"Images discovered: {self.discovered}",
            f"Unreadable directories: {self.failed_directories}",
            f"Copied: {counts['copied']}",
            f"Listed: {counts['listed']}",
            f"Rejected: {counts['rejected']}",
            f"Failed to open: {counts['open_failed']}",
            f"Failed to copy: {counts['copy_failed']}",
            f"Errors: {counts['error']}",
        ]
        return "\n".join(lines)
