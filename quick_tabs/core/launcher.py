"""Opening URLs in the chosen browser."""

from __future__ import annotations

import subprocess
from enum import Enum
from typing import Callable, Sequence

from loguru import logger

from quick_tabs.models.browser import Browser


class LaunchMode(str, Enum):
    """How the browser window is opened."""

    NORMAL = "normal"
    PRIVATE = "private"


# (substring of executable name, private-mode flags); first match wins
PRIVATE_FLAGS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("firefox", ("-private-window",)),
    ("msedge", ("--inprivate",)),
    ("microsoft-edge", ("--inprivate",)),
    ("brave", ("--incognito",)),
    ("chrome", ("--incognito",)),
    ("chromium", ("--incognito",)),
    ("vivaldi", ("--incognito",)),
    ("opera", ("--incognito",)),
)


def private_flags(browser: Browser) -> list[str]:
    """Return the private-browsing flags for *browser*, or ``[]`` if unknown."""
    exe = browser.executable_name
    for needle, flags in PRIVATE_FLAGS:
        if needle in exe:
            return list(flags)
    return []


def build_command(browser: Browser, urls: Sequence[str], mode: LaunchMode) -> list[str]:
    """Command line that opens every URL in one browser process."""
    args = [browser.path]
    if mode is LaunchMode.PRIVATE:
        flags = private_flags(browser)
        if flags:
            args.extend(flags)
        else:
            logger.warning(
                "Private mode flags unknown for {}; launching normally", browser.executable_name
            )
    args.extend(urls)
    return args


def launch(
    browser: Browser,
    urls: str | Sequence[str],
    mode: LaunchMode = LaunchMode.NORMAL,
    popen: Callable[..., object] = subprocess.Popen,
) -> bool:
    """Spawn *browser* with *urls*.  Returns ``False`` if the spawn failed."""
    if isinstance(urls, str):
        urls = [urls]
    args = build_command(browser, urls, mode)
    logger.info("Launching {} link(s) in {} ({})", len(urls), browser.path, mode.value)
    try:
        popen(
            args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except (OSError, ValueError) as e:
        logger.error("Failed to launch browser {}: {}", browser.path, e)
        return False
    return True
