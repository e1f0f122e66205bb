"""Persistence of the preferred browser.

File format::

    {
        "browser": {"name": "Mozilla Firefox", "path": "/usr/bin/firefox", "version": "Mozilla Firefox 128.0"}
    }
"""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from quick_tabs.core.jsonfile import read_json, write_json_atomic
from quick_tabs.errors import StoreError
from quick_tabs.models.browser import Browser


class BrowserStore:
    """Loads and saves the user's chosen browser."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Browser | None:
        """Return the saved browser, or ``None`` if there is no usable one.

        A missing, unreadable or malformed file, and a saved path that no
        longer exists on disk, all count as "no saved browser".
        """
        try:
            data = read_json(self._path)
        except FileNotFoundError:
            return None
        except StoreError as e:
            logger.warning("Ignoring browser config: {}", e)
            return None

        try:
            if not isinstance(data, dict):
                raise ValueError("top level must be an object")
            browser = Browser.from_dict(data.get("browser"))
        except ValueError as e:
            logger.warning("Ignoring malformed browser config {}: {}", self._path, e)
            return None

        if not os.path.exists(browser.path):
            logger.info("Saved browser no longer exists: {}", browser.path)
            return None

        logger.debug("Loaded saved browser {} from {}", browser.path, self._path)
        return browser

    def save(self, browser: Browser) -> bool:
        """Overwrite the config with *browser*.

        Returns ``False`` (after logging) when the file cannot be written;
        the caller keeps using *browser* for the current run.
        """
        try:
            write_json_atomic(self._path, {"browser": browser.to_dict()})
        except StoreError as e:
            logger.error("Could not save browser config: {}", e)
            return False
        logger.info("Saved preferred browser to {}", self._path)
        return True

    def clear(self) -> None:
        """Delete the saved browser, if any."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove {}: {}", self._path, e)
