#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Log setup and run reporting for the Image Finder tool.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict, Optional

from .models.results import RunStats

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Configure process-wide logging once, before any pipeline thread starts."""
    level = logging.DEBUG if verbose else logging.INFO

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    logging.getLogger("PIL").setLevel(logging.WARNING)
    logging.debug("Verbose logging enabled (DEBUG level).")


def enable_json_logging(log_file: Optional[str] = None) -> None:
    """Send logs to stderr at ERROR level so stdout carries only the JSON payload."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT, handlers=handlers, force=True)


def emit_json(command: str, result: str, data: Optional[Dict[str, Any]] = None,
              message: Optional[str] = None) -> None:
    payload: Dict[str, Any] = {"result": result, "command": command}
    if data is not None:
        payload["data"] = data
    if message is not None:
        payload["error"] = message
    print(json.dumps(payload, ensure_ascii=False), file=sys.stdout)
    sys.stdout.flush()


def report_stats(stats: RunStats, as_json: bool = False) -> None:
    """Log the run summary, or print it as JSON."""
    if as_json:
        emit_json("run", "success", data=stats.to_dict())
        return
    for line in stats.summary().splitlines():
        logging.info(line)
