"""Search-path probe: finds known browsers on PATH and in install directories."""

from __future__ import annotations

import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Mapping, Sequence

from loguru import logger

from quick_tabs.core.path_resolver import (
    current_system,
    executable_name,
    get_home_dir,
    get_localappdata_dir,
    get_program_files_dir,
    get_program_files_x86_dir,
)
from quick_tabs.core.version import VersionProbe, VersionProbeFn
from quick_tabs.models.browser import KNOWN_BROWSERS, Browser, LogicalBrowser, canonical_path
from quick_tabs.probes.base import BrowserProbe

if TYPE_CHECKING:
    from quick_tabs.config import Config

# Install directories relative to Windows roots; every executable is
# looked up under every entry.
_WINDOWS_INSTALL_DIRS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("ProgramFiles", ("Google", "Chrome", "Application")),
    ("ProgramFiles(x86)", ("Google", "Chrome", "Application")),
    ("ProgramFiles", ("Mozilla Firefox",)),
    ("ProgramFiles(x86)", ("Microsoft", "Edge", "Application")),
    ("ProgramFiles", ("BraveSoftware", "Brave-Browser", "Application")),
    ("LOCALAPPDATA", ("Programs",)),
)

_UNIX_INSTALL_DIRS: tuple[str, ...] = ("/usr/bin", "/usr/local/bin", "/snap/bin")
_UNIX_OPT_DIR = "/opt"


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


class PathProbe(BrowserProbe):
    """Finds known browsers on the executable search path and in the
    well-known install locations of the current platform.

    For each logical browser the search-path hit comes first, followed by
    any install-directory hit with a different path.  Output follows the
    order of the logical-browser table even though browsers are probed
    concurrently.
    """

    priority = 10

    def __init__(
        self,
        logical_browsers: Sequence[LogicalBrowser] = KNOWN_BROWSERS,
        version_probe: VersionProbeFn | None = None,
        max_workers: int = 8,
        system: str | None = None,
        env: Mapping[str, str] | None = None,
        search_path: str | None = None,
        unix_install_dirs: Sequence[str] = _UNIX_INSTALL_DIRS,
        opt_dir: str = _UNIX_OPT_DIR,
    ) -> None:
        self._logical = tuple(logical_browsers)
        self._version_probe = version_probe or VersionProbe()
        self._max_workers = max(1, max_workers)
        self._system = current_system(system)
        self._env = env
        # None means the live PATH
        self._search_path = search_path
        self._unix_install_dirs = tuple(unix_install_dirs)
        self._opt_dir = opt_dir

    @classmethod
    def from_config(cls, config: "Config") -> "PathProbe":
        return cls(
            version_probe=VersionProbe(config.version_timeout),
            max_workers=config.max_workers,
        )

    @property
    def name(self) -> str:
        return "search-path"

    def probe(self) -> list[Browser]:
        return self.find(self._logical)

    def find(self, logical_browsers: Iterable[LogicalBrowser]) -> list[Browser]:
        """Locate every browser in *logical_browsers* and probe its version."""
        logical = list(logical_browsers)
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            located = list(pool.map(self.locate, logical))
            hits = [(lb, path) for lb, paths in zip(logical, located) for path in paths]
            versions = list(pool.map(self._version_probe, [path for _, path in hits]))

        found = [
            Browser(name=lb.display_name, path=path, version=version)
            for (lb, path), version in zip(hits, versions)
        ]
        logger.debug("Search-path probe found {} candidate(s)", len(found))
        return found

    def locate(self, logical: LogicalBrowser) -> list[str]:
        """Return canonical paths of *logical*, search-path hits first."""
        paths: list[str] = []
        names = [
            executable_name(n, self._system)
            for n in logical.executable_names(include_aliases=self._system != "Windows")
        ]

        for exe in names:
            hit = shutil.which(exe, path=self._search_path)
            if hit:
                path = canonical_path(hit)
                if path not in paths:
                    paths.append(path)

        for exe in names:
            for candidate in self.install_candidates(exe, logical):
                if not _is_file(candidate):
                    continue
                path = canonical_path(candidate)
                if path not in paths:
                    paths.append(path)

        if paths:
            logger.debug("Located {}: {}", logical.display_name, paths)
        return paths

    def install_candidates(self, exe: str, logical: LogicalBrowser | None = None) -> list[Path]:
        """Well-known install locations of *exe* on this platform."""
        candidates: list[Path] = []

        if self._system == "Windows":
            roots = {
                "ProgramFiles": get_program_files_dir(self._env, self._system),
                "ProgramFiles(x86)": get_program_files_x86_dir(self._env, self._system),
                "LOCALAPPDATA": get_localappdata_dir(self._env, self._system),
            }
            for root_var, parts in _WINDOWS_INSTALL_DIRS:
                root = roots.get(root_var)
                if root is None:
                    continue
                candidates.append(root.joinpath(*parts, exe))

        elif self._system == "Darwin":
            candidates.append(Path("/Applications") / f"{exe}.app" / "Contents" / "MacOS" / exe)
            if logical is not None and logical.mac_bundle and exe == logical.executable:
                bundle = logical.mac_bundle
                for apps in (Path("/Applications"), get_home_dir() / "Applications"):
                    candidates.append(apps / f"{bundle}.app" / "Contents" / "MacOS" / bundle)

        else:
            for directory in self._unix_install_dirs:
                candidates.append(Path(directory) / exe)
            candidates.append(Path(self._opt_dir) / exe / exe)

        return candidates

