"""Per-platform directory lookups used by detection and configuration.

On Windows the well-known roots (``Program Files``, ``%APPDATA%`` …) are
read from the environment first.  When a variable is missing we ask the
Windows Shell API, which also reflects folders the user has relocated.

Other platforms only have the home directory as a root; every lookup
returns ``None`` there so callers can skip the corresponding candidates.

Usage::

    from quick_tabs.core.path_resolver import get_program_files_dir, executable_name

    root = get_program_files_dir()          # Path("C:/Program Files") or None
    exe = executable_name("chrome")         # "chrome.exe" on Windows
"""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Mapping

from loguru import logger

# SHGetFolderPath CSIDL constants
_CSIDL = {
    "RoamingAppData": 0x001A,   # CSIDL_APPDATA
    "LocalAppData": 0x001C,     # CSIDL_LOCAL_APPDATA
    "ProgramFiles": 0x0026,     # CSIDL_PROGRAM_FILES
    "ProgramFilesX86": 0x002A,  # CSIDL_PROGRAM_FILESX86
}


def current_system(system: str | None = None) -> str:
    """Return *system* or ``platform.system()`` ('Windows', 'Darwin', 'Linux' …)."""
    return system or platform.system()


def _get_windows_known_folder(folder_id: str) -> Path | None:
    """Use the Windows Shell API to retrieve a known-folder path."""
    csidl = _CSIDL.get(folder_id)
    if csidl is None:
        return None
    try:
        import ctypes
        import ctypes.wintypes  # noqa: F401

        buf = ctypes.create_unicode_buffer(1024)
        # SHGetFolderPathW(hwnd, nFolder, hToken, dwFlags, pszPath)
        result = ctypes.windll.shell32.SHGetFolderPathW(  # type: ignore[attr-defined]
            0, csidl, 0, 0, buf
        )
        if result == 0:  # S_OK
            return Path(buf.value)
    except (AttributeError, OSError, ValueError) as e:
        logger.debug("SHGetFolderPathW failed for {}: {}", folder_id, e)
    return None


def _windows_dir(
    variable: str,
    folder_id: str,
    env: Mapping[str, str] | None,
    system: str | None,
) -> Path | None:
    if current_system(system) != "Windows":
        return None
    environ = os.environ if env is None else env
    value = environ.get(variable)
    if value:
        return Path(value)
    # Only consult the shell when reading the live environment
    if env is None:
        return _get_windows_known_folder(folder_id)
    return None


def get_program_files_dir(
    env: Mapping[str, str] | None = None, system: str | None = None
) -> Path | None:
    """Return ``%ProgramFiles%`` on Windows, ``None`` elsewhere."""
    return _windows_dir("ProgramFiles", "ProgramFiles", env, system)


def get_program_files_x86_dir(
    env: Mapping[str, str] | None = None, system: str | None = None
) -> Path | None:
    """Return ``%ProgramFiles(x86)%`` on Windows, ``None`` elsewhere."""
    return _windows_dir("ProgramFiles(x86)", "ProgramFilesX86", env, system)


def get_localappdata_dir(
    env: Mapping[str, str] | None = None, system: str | None = None
) -> Path | None:
    """Return ``%LOCALAPPDATA%`` on Windows, ``None`` elsewhere."""
    return _windows_dir("LOCALAPPDATA", "LocalAppData", env, system)


def get_appdata_dir(
    env: Mapping[str, str] | None = None, system: str | None = None
) -> Path | None:
    """Return ``%APPDATA%`` (Roaming) on Windows, ``None`` elsewhere."""
    return _windows_dir("APPDATA", "RoamingAppData", env, system)


def get_home_dir() -> Path:
    """Return the user home directory."""
    return Path.home()


def executable_name(base: str, system: str | None = None) -> str:
    """Append the platform executable suffix to *base* where required."""
    if current_system(system) == "Windows" and not base.lower().endswith(".exe"):
        return f"{base}.exe"
    return base
