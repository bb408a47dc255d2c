# Cliffgen: Geometric Algebra Code Generator
# Copyright (C) 2026 Eunkyum Kim <nemonanconcode@gmail.com>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
#
# This project is fully open-source, including for commercial use.
# We believe Geometric Algebra is the future of AI, and we want 
# the industry to build upon this "unbending" paradigm.


"""Cliffgen logging system.

Provides structured logging under the ``cliffgen`` hierarchy.  Generated
code goes to stdout or a file; everything else (task progress, algebra and
cancellation statistics) goes through :func:`get_logger`.

Environment variables:
    CLIFFGEN_LOG_LEVEL  DEBUG / INFO (default) / WARNING / ERROR
    CLIFFGEN_LOG_FILE   optional path; appends plain-text log lines
"""

import logging
import os
import sys
from typing import Optional

ROOT_NAME = "cliffgen"

_CONFIGURED = False

# ANSI colour codes (used only when stderr is a TTY)
_COLORS = {
    logging.DEBUG: "\033[36m",     # cyan
    logging.INFO: "\033[32m",      # green
    logging.WARNING: "\033[33m",   # yellow
    logging.ERROR: "\033[31m",     # red
    logging.CRITICAL: "\033[35m",  # magenta
}
_RESET = "\033[0m"


class _ColorFormatter(logging.Formatter):
    """Adds ANSI colour to level names when writing to a TTY."""

    def __init__(self, fmt: str, use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if self.use_color:
            color = _COLORS.get(record.levelno, "")
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{_RESET}"
        return super().format(record)


def _parse_level(level_name: Optional[str], default: int = logging.INFO) -> int:
    if not level_name:
        return default
    return getattr(logging, str(level_name).upper(), default)


def _configure_once() -> None:
    """One-time lazy init of the ``cliffgen`` root logger."""
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True

    root = logging.getLogger(ROOT_NAME)
    root.setLevel(_parse_level(os.environ.get("CLIFFGEN_LOG_LEVEL")))

    # stderr keeps stdout free for generated code
    fmt = "%(levelname)s %(name)s: %(message)s"
    use_color = hasattr(sys.stderr, "isatty") and sys.stderr.isatty()
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_ColorFormatter(fmt, use_color=use_color))
    root.addHandler(console)

    log_file = os.environ.get("CLIFFGEN_LOG_FILE")
    if log_file:
        fh = logging.FileHandler(log_file, mode="a")
        fh.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s"
        ))
        root.addHandler(fh)


def set_level(level_name: Optional[str]) -> None:
    """Overrides the level of the ``cliffgen`` root logger (e.g. from the CLI config).

    ``None`` keeps the current level.
    """
    _configure_once()
    if level_name is not None:
        logging.getLogger(ROOT_NAME).setLevel(_parse_level(level_name))


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``cliffgen`` hierarchy.

    Args:
        name: Typically ``__name__`` of the calling module.

    Returns:
        A :class:`logging.Logger` instance.
    """
    _configure_once()
    return logging.getLogger(f"{ROOT_NAME}.{name}")
