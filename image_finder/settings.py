#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
User-editable run settings for the Image Finder tool.

`Settings` mirrors the JSON file the user edits; every field may be null.
`Settings.resolve()` validates it and fills in defaults, producing the
immutable `ResolvedConfig` that the pipeline runs with.
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .config import (
    COLLISION_POLICIES, DEFAULT_COLLISION_POLICY, DEFAULT_COPY_DESTINATION, DEFAULT_DIRECTORIES,
    DEFAULT_MIN_HEIGHT, DEFAULT_MIN_WIDTH, DEFAULT_OUTPUT_FORMAT, DEFAULT_PREFERENCE,
    DEFAULT_WORKERS
)
from .errors import StructuralError
from .models.criteria import FilterCriteria
from .models.preference import ImagePreference, OutputFormat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedConfig:
    """Fully populated configuration for one run."""
    roots: Tuple[Path, ...]
    criteria: FilterCriteria
    destination: Path
    workers: int = DEFAULT_WORKERS
    output_format: OutputFormat = OutputFormat.COPIES
    collision_policy: str = DEFAULT_COLLISION_POLICY


@dataclass
class Settings:
    """Raw settings as stored in the configuration file."""
    min_width: Optional[int] = DEFAULT_MIN_WIDTH
    min_height: Optional[int] = DEFAULT_MIN_HEIGHT
    copy_destination: Optional[str] = DEFAULT_COPY_DESTINATION
    preference: Optional[str] = DEFAULT_PREFERENCE
    directories: Optional[List[str]] = field(default_factory=lambda: list(DEFAULT_DIRECTORIES))
    workers: Optional[int] = DEFAULT_WORKERS
    output_format: Optional[str] = DEFAULT_OUTPUT_FORMAT
    collision_policy: Optional[str] = DEFAULT_COLLISION_POLICY

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """Create settings from a dictionary. Missing keys become null."""
        if not isinstance(data, dict):
            raise StructuralError(f"Configuration must be a JSON object, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))

        return cls(**{name: data.get(name) for name in known})

    def with_overrides(self, **overrides: Any) -> 'Settings':
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def resolve(self, cwd: Optional[Path] = None) -> ResolvedConfig:
        """
        Validate settings and substitute defaults.

        An absent or empty directory list resolves to the current working
        directory.

        Raises:
            StructuralError: If any value is invalid.
        """
        min_width = _non_negative_int("min_width", self.min_width, DEFAULT_MIN_WIDTH)
        min_height = _non_negative_int("min_height", self.min_height, DEFAULT_MIN_HEIGHT)

        try:
            preference = ImagePreference.parse(self.preference)
            output_format = OutputFormat.parse(self.output_format)
        except ValueError as e:
            raise StructuralError(str(e)) from e

        collision_policy = self.collision_policy or DEFAULT_COLLISION_POLICY
        if collision_policy not in COLLISION_POLICIES:
            raise StructuralError(
                f"Unknown collision_policy {collision_policy!r}; "
                f"expected one of {sorted(COLLISION_POLICIES)}"
            )

        workers = DEFAULT_WORKERS if self.workers is None else self.workers
        if isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
            raise StructuralError(f"workers must be a positive integer, got {workers!r}")

        if self.directories is not None and (
                not isinstance(self.directories, list)
                or not all(isinstance(d, str) for d in self.directories)):
            raise StructuralError("directories must be a list of path strings")
        if self.directories:
            roots = tuple(Path(d) for d in self.directories)
        else:
            roots = (cwd or Path.cwd(),)

        if self.copy_destination is not None and not isinstance(self.copy_destination, str):
            raise StructuralError("copy_destination must be a path string")
        destination = Path(self.copy_destination or DEFAULT_COPY_DESTINATION)

        return ResolvedConfig(
            roots=roots,
            criteria=FilterCriteria(min_width, min_height, preference),
            destination=destination,
            workers=workers,
            output_format=output_format,
            collision_policy=collision_policy,
        )


def _non_negative_int(name: str, value: Any, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise StructuralError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def write_default_settings(path: Path, settings: Optional[Settings] = None) -> Path:
    """Write settings (defaults unless given) to `path` as JSON."""
    settings = settings or Settings()
    try:
        with path.open("w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)
            f.write("\n")
    except OSError as e:
        raise StructuralError(f"Could not write configuration {path}: {e}") from e
    return path


def load_settings(path: Path) -> Settings:
    """Read settings from a JSON file.

    Raises:
        StructuralError: If the file is unreadable or not a valid configuration.
    """
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise StructuralError(f"Could not read configuration {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise StructuralError(f"Invalid JSON in configuration {path}: {e}") from e
    return Settings.from_dict(data)
