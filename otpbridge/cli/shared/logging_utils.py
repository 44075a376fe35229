"""Loguru helpers: stderr plus an optional rotating file, never stdout."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

from otpbridge.config.schema import LoggingConfig

_SINK_IDS: dict[str, int] = {}


def ensure_rotating_log_file(name: str, settings: LoggingConfig) -> Path:
    """Ensure a rotating log sink for the given command name."""
    log_path = settings.log_dir / f"{name}.log"
    if name in _SINK_IDS:
        return log_path
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    sink_id = logger.add(
        str(log_path),
        level=settings.level,
        rotation=settings.rotation,
        retention=settings.retention,
        encoding="utf-8",
        backtrace=False,
        diagnose=False,
    )
    _SINK_IDS[name] = sink_id
    return log_path


def configure_logging(settings: LoggingConfig, name: str = "host") -> Path | None:
    """Replace loguru's default sink; return the log file path when enabled."""
    logger.remove()
    _SINK_IDS.clear()
    logger.add(sys.stderr, level=settings.stderr_level, backtrace=False, diagnose=False)
    if not settings.file_enabled:
        return None
    try:
        return ensure_rotating_log_file(name, settings)
    except OSError as exc:
        logger.warning("File logging disabled, cannot use {}: {}", settings.log_dir, exc)
        return None
