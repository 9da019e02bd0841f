"""Logging setup: stdout plus a daily file under ``logs/``."""
from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from pathlib import Path

_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_console: logging.Handler | None = None
_configured = False


def _default_log_dir() -> Path:
    return Path(os.environ.get("GIGFEED_LOG_DIR") or Path(__file__).resolve().parent.parent / "logs")


def _resolve_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    name = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()
    return getattr(logging, name, logging.INFO)


def configure(level: str | int | None = None) -> None:
    """Install handlers once; later calls only change the level.

    The file handler always logs DEBUG. Set ``GIGFEED_LOG_FILE=0`` to skip it.
    """
    global _configured, _console
    resolved = _resolve_level(level)
    root = logging.getLogger()
    root.setLevel(resolved)

    if _configured:
        if _console is not None:
            _console.setLevel(resolved)
        return
    _configured = True

    # embedding apps that already set up logging keep their handlers
    if root.handlers:
        return

    _console = logging.StreamHandler(sys.stdout)
    _console.setLevel(resolved)
    _console.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
    root.addHandler(_console)

    if os.environ.get("GIGFEED_LOG_FILE", "1") == "0":
        return
    try:
        log_dir = _default_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / f"gigfeed_{datetime.now():%Y-%m-%d}.log", encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FMT))
        root.addHandler(fh)
    except OSError:
        pass


def get_logger(name: str) -> logging.Logger:
    if not _configured:
        configure()
    return logging.getLogger(name)
