"""Executable version probing."""

from __future__ import annotations

import subprocess
from typing import Callable

from loguru import logger

DEFAULT_VERSION_TIMEOUT = 5.0
VERSION_FLAG = "--version"

VersionProbeFn = Callable[[str], "str | None"]


def version_of(path: str, timeout: float = DEFAULT_VERSION_TIMEOUT) -> str | None:
    """Run ``<path> --version`` and return the first output line.

    Returns ``None`` if the process cannot be spawned, times out, exits
    non-zero or prints nothing.  Never raises.
    """
    try:
        completed = subprocess.run(
            [path, VERSION_FLAG],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            stdin=subprocess.DEVNULL,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        logger.debug("Version check timed out after {}s: {}", timeout, path)
        return None
    except (OSError, ValueError, subprocess.SubprocessError) as e:
        logger.debug("Version check failed for {}: {}", path, e)
        return None

    if completed.returncode != 0:
        logger.debug("Version check for {} exited with {}", path, completed.returncode)
        return None

    output = completed.stdout.decode("utf-8", errors="replace") if completed.stdout else ""
    lines = output.strip().splitlines()
    if not lines:
        return None
    first = lines[0].strip()
    return first or None


class VersionProbe:
    """``version_of`` bound to a timeout, usable as a plain callable."""

    def __init__(self, timeout: float = DEFAULT_VERSION_TIMEOUT) -> None:
        self.timeout = timeout

    def __call__(self, path: str) -> str | None:
        return version_of(path, self.timeout)

    def version_of(self, path: str) -> str | None:
        return version_of(path, self.timeout)
