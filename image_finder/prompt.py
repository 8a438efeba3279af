#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Interactive confirm/cancel prompt shown before a run.
"""

import sys
from pathlib import Path
from typing import Callable

PROMPT_DESCRIPTION = """\
Image resolution finder config prompt.

A configuration file has been written to: {config_path}

Edit it to set:
  min_width / min_height   minimum pixel size of images to keep
  preference               "wide", "tall" or "none"
  copy_destination         directory the accepted images are copied into
  directories              directories to search (empty list = current directory)
  output_format            "copies" to copy images, "names" to only list them

Save the file, then continue.
"""

_PROCEED = {"", "y", "yes", "ok"}
_CANCEL = {"n", "no", "c", "cancel", "q", "quit"}


def confirm(config_path: Path, input_fn: Callable[[str], str] = input,
            output_fn: Callable[[str], None] = print) -> bool:
    """Ask the user to proceed. Returns False on cancel, end of input or Ctrl-C."""
    output_fn(PROMPT_DESCRIPTION.format(config_path=config_path))
    while True:
        try:
            answer = input_fn("Proceed? [Y/n] ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            return False
        if answer in _PROCEED:
            return True
        if answer in _CANCEL:
            return False
        output_fn(f"Unrecognized answer {answer!r}; type 'y' to proceed or 'n' to cancel.")


def stderr_input(prompt: str) -> str:
    """`input()` that shows its prompt on stderr, keeping stdout clean."""
    sys.stderr.write(prompt)
    sys.stderr.flush()
    return input()


def stderr_print(text: str) -> None:
    print(text, file=sys.stderr)
