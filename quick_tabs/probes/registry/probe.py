"""Registry probe: browsers registered under ``Clients\\StartMenuInternet``.

Windows lists every installed browser that can be the system default as a
subkey of ``SOFTWARE\\Clients\\StartMenuInternet`` (machine-wide under
HKLM, per-user under HKCU).  Each entry carries an open command::

    StartMenuInternet\\Firefox-308046B0AF4A39CB\\shell\\open\\command
        (Default) = "C:\\Program Files\\Mozilla Firefox\\firefox.exe"

On other platforms ``winreg`` does not exist and the probe is a no-op.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any, Callable, Iterator

from loguru import logger

from quick_tabs.core.version import VersionProbe, VersionProbeFn
from quick_tabs.models.browser import Browser, canonical_path
from quick_tabs.probes.base import BrowserProbe

if TYPE_CHECKING:
    from quick_tabs.config import Config

START_MENU_INTERNET = "SOFTWARE\\Clients\\StartMenuInternet"
OPEN_COMMAND = "shell\\open\\command"


def _load_winreg() -> Any | None:
    try:
        import winreg
    except ImportError:
        return None
    return winreg


def parse_open_command(command: str) -> str:
    """Strip quoting and arguments from a registry open command.

    ``"C:\\Program Files\\App\\app.exe" --flag "%1"`` → ``C:\\Program Files\\App\\app.exe``
    """
    command = command.strip()
    if not command:
        return ""
    if command[0] == '"':
        end = command.find('"', 1)
        return command[1:end] if end > 0 else command[1:]
    # Unquoted paths may still contain spaces; cut after the executable.
    lowered = command.lower()
    exe_end = lowered.find(".exe")
    if exe_end >= 0:
        return command[: exe_end + 4]
    return command.split()[0]


class RegistryProbe(BrowserProbe):
    """Enumerates browsers from the Windows registry (HKLM, then HKCU)."""

    priority = 20

    def __init__(
        self,
        version_probe: VersionProbeFn | None = None,
        winreg_module: Any | None = None,
        path_exists: Callable[[str], bool] = os.path.exists,
    ) -> None:
        self._version_probe = version_probe or VersionProbe()
        self._winreg = winreg_module if winreg_module is not None else _load_winreg()
        self._exists = path_exists

    @classmethod
    def from_config(cls, config: "Config") -> "RegistryProbe":
        return cls(version_probe=VersionProbe(config.version_timeout))

    @property
    def name(self) -> str:
        return "registry"

    @property
    def available(self) -> bool:
        return self._winreg is not None

    def probe(self) -> list[Browser]:
        if self._winreg is None:
            return []

        found: list[Browser] = []
        for entry_name, command in self._iter_open_commands():
            exe_path = parse_open_command(command)
            if not exe_path or not self._exists(exe_path):
                logger.debug("Skipping registry entry {}: {!r}", entry_name, command)
                continue
            stem = os.path.splitext(os.path.basename(exe_path.replace("\\", os.sep)))[0]
            found.append(Browser(
                name=stem or entry_name,
                path=canonical_path(exe_path),
                version=self._version_probe(exe_path),
            ))

        logger.debug("Registry probe found {} candidate(s)", len(found))
        return found

    def _iter_open_commands(self) -> Iterator[tuple[str, str]]:
        winreg = self._winreg
        for hive in (winreg.HKEY_LOCAL_MACHINE, winreg.HKEY_CURRENT_USER):
            try:
                root = winreg.OpenKey(hive, START_MENU_INTERNET)
            except OSError:
                continue
            with root:
                for entry_name in self._subkeys(root):
                    try:
                        with winreg.OpenKey(root, f"{entry_name}\\{OPEN_COMMAND}") as cmd_key:
                            value, _ = winreg.QueryValueEx(cmd_key, "")
                    except OSError:
                        continue
                    if isinstance(value, str) and value:
                        yield entry_name, value

    def _subkeys(self, key: Any) -> Iterator[str]:
        index = 0
        while True:
            try:
                yield self._winreg.EnumKey(key, index)
            except OSError:
                return
            index += 1
