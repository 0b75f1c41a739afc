"""Logging setup utilities for screenmatch.

Provides a single setup function to configure application-wide logging with:
- Session-based file handler next to config.ini
- Console handler for quick inspection during development
- Configurable log level via config.ini (DEFAULT.log_level)
- Automatic retention of the last 3 sessions

Usage:
    from screenmatch.core.logging_setup import setup_logging
    setup_logging(config_manager)

This will create logs/session-YYYYmmdd_HHMMSS/screenmatch.log next to config.ini.
"""
from __future__ import annotations

import logging
import platform
import shutil
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

SESSION_KEEP = 3


def _level_from_str(value: Optional[str]) -> int:
    if not value:
        return logging.INFO
    v = str(value).strip().upper()
    mapping = {
        "CRITICAL": logging.CRITICAL,
        "ERROR": logging.ERROR,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
        "NOTSET": logging.NOTSET,
    }
    return mapping.get(v, logging.INFO)


def get_log_dir(config_manager) -> Path:
    """Return directory path for logs next to the config.ini."""
    base_dir = Path(getattr(config_manager, "config_path")).parent
    log_dir = base_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_session_dir(config_manager) -> Path:
    """Create and return a new session directory under logs/."""
    base = get_log_dir(config_manager)
    ts = datetime.now().strftime("session-%Y%m%d_%H%M%S")
    session = base / ts
    session.mkdir(parents=True, exist_ok=True)
    return session


def prune_old_sessions(log_dir: Path, keep: int = SESSION_KEEP) -> None:
    """Keep only the most recent 'keep' session directories inside log_dir."""
    entries = [p for p in log_dir.iterdir() if p.is_dir() and p.name.startswith("session-")]
    entries.sort(key=lambda p: p.stat().st_mtime, reverse=True)
    for old in entries[keep:]:
        shutil.rmtree(old, ignore_errors=True)


def _create_session_info(session_dir: Path, config_manager) -> None:
    """Write session_info.txt with interpreter, library and config details."""
    try:
        import cv2
        import numpy as np
        libs = f"opencv {cv2.__version__}, numpy {np.__version__}"
    except ImportError as exc:  # pragma: no cover - both are hard dependencies
        libs = f"<unavailable: {exc}>"

    info_file = session_dir / "session_info.txt"
    with open(info_file, "w", encoding="utf-8") as f:
        f.write("SCREENMATCH SESSION INFORMATION\n")
        f.write("=" * 40 + "\n\n")
        f.write(f"Session Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write(f"Operating System: {platform.system()} {platform.release()}\n")
        f.write(f"Python Version: {sys.version}\n")
        f.write(f"Libraries: {libs}\n\n")
        f.write(f"Config File: {getattr(config_manager, 'config_path', 'Unknown')}\n")
        for setting in ("log_level", "strategy", "capture_monitor", "slow_match_threshold_ms"):
            f.write(f"{setting}: {config_manager.get(setting)}\n")


def setup_logging(config_manager, level: Optional[Union[str, int]] = None) -> Path:
    """Configure root logger with a session-based file and console handler.

    Returns the created session directory Path.

    - File: logs/session-YYYYmmdd_HHMMSS/screenmatch.log (keep last 3 sessions)
    - Console: INFO+ by default
    - Level: from parameter if provided, else DEFAULT.log_level in config, else INFO
    """
    if isinstance(level, str):
        lvl = _level_from_str(level)
    elif isinstance(level, int):
        lvl = level
    else:
        lvl = _level_from_str(config_manager.get("log_level"))

    logger = logging.getLogger()
    logger.setLevel(lvl)

    # Clear existing handlers to avoid duplicates on re-run
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    log_dir = get_log_dir(config_manager)
    session_dir = get_session_dir(config_manager)

    file_path = session_dir / "screenmatch.log"
    fh = logging.FileHandler(file_path, encoding="utf-8", delay=True)
    fh.setLevel(lvl)
    fh.setFormatter(fmt)
    logger.addHandler(fh)
    prune_old_sessions(log_dir, keep=SESSION_KEEP)

    try:
        _create_session_info(session_dir, config_manager)
    except OSError:
        logger.warning("Could not write session_info.txt in %s", session_dir)

    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO if lvl < logging.INFO else lvl)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    logger.info("Logging initialized: level=%s, file=%s", logging.getLevelName(lvl), str(file_path))
    return session_dir
