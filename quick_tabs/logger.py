"""Loguru logger configuration for the application."""

import sys
from pathlib import Path

from loguru import logger


def setup_logger(log_dir: Path | None = None, level: str = "WARNING") -> None:
    """Configure loguru with console and file sinks.

    Parameters
    ----------
    log_dir : Path, optional
        Directory for log files.  Defaults to ``<config_dir>/logs``.
    level : str
        Console level.  The file sink always records DEBUG.
    """
    # Remove default handler
    logger.remove()

    # Console handler: coloured, on stderr
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{module}</cyan>:<cyan>{function}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if log_dir is None:
        from quick_tabs.config import Config
        log_dir = Config().log_dir
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Log directory {} unavailable, file logging disabled: {}", log_dir, e)
        return
    log_file = log_dir / "quick_tabs.log"

    logger.add(
        str(log_file),
        level="DEBUG",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {module}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="7 days",
        encoding="utf-8",
        enqueue=True,  # thread-safe
    )

    logger.debug("Logger initialized, file output: {}", log_file)
