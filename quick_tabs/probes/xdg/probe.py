"""Default-browser probe for freedesktop systems (``xdg-settings``)."""

from __future__ import annotations

import shutil
import subprocess
from typing import TYPE_CHECKING, Callable

from loguru import logger

from quick_tabs.core.path_resolver import current_system
from quick_tabs.core.version import VersionProbe, VersionProbeFn
from quick_tabs.models.browser import Browser, canonical_path, logical_browser_for
from quick_tabs.probes.base import BrowserProbe

if TYPE_CHECKING:
    from quick_tabs.config import Config

XDG_SETTINGS = "xdg-settings"
_QUERY_TIMEOUT = 5.0


def desktop_id_to_executable(desktop_id: str) -> str:
    """``firefox.desktop`` → ``firefox``; ``google-chrome.desktop`` → ``google-chrome``."""
    desktop_id = desktop_id.strip()
    if desktop_id.endswith(".desktop"):
        desktop_id = desktop_id[: -len(".desktop")]
    # Reverse-DNS ids (org.mozilla.firefox) name the executable last
    if "." in desktop_id:
        desktop_id = desktop_id.rsplit(".", 1)[-1]
    return desktop_id


class XdgDefaultBrowserProbe(BrowserProbe):
    """Reports the desktop's default web browser on Linux."""

    priority = 30

    def __init__(
        self,
        version_probe: VersionProbeFn | None = None,
        system: str | None = None,
        which: Callable[[str], str | None] = shutil.which,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
    ) -> None:
        self._version_probe = version_probe or VersionProbe()
        self._system = current_system(system)
        self._which = which
        self._run = runner

    @classmethod
    def from_config(cls, config: "Config") -> "XdgDefaultBrowserProbe":
        return cls(version_probe=VersionProbe(config.version_timeout))

    @property
    def name(self) -> str:
        return "xdg-default"

    @property
    def available(self) -> bool:
        return self._system == "Linux" and self._which(XDG_SETTINGS) is not None

    def probe(self) -> list[Browser]:
        if not self.available:
            return []

        desktop_id = self._query_default()
        if not desktop_id:
            return []

        exe = desktop_id_to_executable(desktop_id)
        hit = self._which(exe) if exe else None
        if not hit:
            logger.debug("Default browser {} has no executable on PATH", desktop_id)
            return []

        logical = logical_browser_for(exe)
        name = logical.display_name if logical else exe
        return [Browser(name=name, path=canonical_path(hit), version=self._version_probe(hit))]

    def _query_default(self) -> str | None:
        try:
            completed = self._run(
                [XDG_SETTINGS, "get", "default-web-browser"],
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                timeout=_QUERY_TIMEOUT,
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("xdg-settings query failed: {}", e)
            return None
        if completed.returncode != 0 or not completed.stdout:
            return None
        output = completed.stdout
        if isinstance(output, bytes):
            output = output.decode("utf-8", errors="replace")
        return output.strip() or None
