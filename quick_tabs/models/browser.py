"""Data model for detected browsers."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence


def canonical_path(path: str | os.PathLike[str]) -> str:
    """Return the identity form of *path*.

    Existing files have their symlinks resolved, so distribution aliases
    (``google-chrome-stable`` → ``/opt/google/chrome/google-chrome``) share
    one identity.  A link whose target is not a known browser executable is
    kept as is (absolute): multi-call launchers such as ``/usr/bin/snap``
    dispatch on ``argv[0]``.
    """
    absolute = os.path.abspath(os.path.expanduser(os.fspath(path)))
    if not os.path.exists(absolute):
        return absolute
    resolved = os.path.realpath(absolute)
    target = os.path.basename(resolved)
    if (
        target.lower() != os.path.basename(absolute).lower()
        and logical_browser_for(target) is None
    ):
        return absolute
    return resolved


@dataclass(frozen=True)
class Browser:
    """A browser executable found on this machine.

    Equality and hashing use ``path`` only; ``name`` and ``version`` are
    descriptive.
    """

    name: str = field(compare=False)
    """Human-readable name (e.g. 'Google Chrome', 'Custom Browser')."""

    path: str
    """Absolute, canonicalised path to the executable."""

    version: str | None = field(default=None, compare=False)
    """First line of ``<path> --version``, or None when unknown."""

    @property
    def executable_name(self) -> str:
        """Lower-cased base file name of the executable."""
        return os.path.basename(self.path).lower()

    @property
    def display_version(self) -> str:
        return self.version or "unknown"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "path": self.path, "version": self.version}

    @classmethod
    def from_dict(cls, data: Any) -> Browser:
        if not isinstance(data, dict):
            raise ValueError(f"browser entry must be an object, got {type(data).__name__}")
        name = data.get("name", "")
        path = data.get("path")
        version = data.get("version")
        if not isinstance(path, str) or not path:
            raise ValueError("browser entry has no path")
        if not isinstance(name, str):
            raise ValueError("browser name must be a string")
        if version is not None and not isinstance(version, str):
            raise ValueError("browser version must be a string or null")
        return cls(name=name, path=path, version=version)


class DetectionResult(Sequence[Browser]):
    """Ordered browsers from one detection run, unique by ``path``."""

    __slots__ = ("_browsers",)

    def __init__(self, browsers: Sequence[Browser] = ()) -> None:
        paths = [b.path for b in browsers]
        if len(paths) != len(set(paths)):
            raise ValueError("DetectionResult entries must have unique paths")
        self._browsers: tuple[Browser, ...] = tuple(browsers)

    def __getitem__(self, index):  # type: ignore[override]
        return self._browsers[index]

    def __len__(self) -> int:
        return len(self._browsers)

    def __iter__(self) -> Iterator[Browser]:
        return iter(self._browsers)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DetectionResult):
            return self._browsers == other._browsers
        return NotImplemented

    def __repr__(self) -> str:
        return f"DetectionResult({list(self._browsers)!r})"

    @property
    def is_empty(self) -> bool:
        return not self._browsers

    def to_list(self) -> list[dict[str, Any]]:
        return [b.to_dict() for b in self._browsers]


@dataclass(frozen=True)
class LogicalBrowser:
    """A browser identity independent of where it is installed."""

    display_name: str
    """Name shown to the user, e.g. 'Mozilla Firefox'."""

    executable: str
    """Executable base name without platform suffix, e.g. 'firefox'."""

    aliases: tuple[str, ...] = ()
    """Extra executable names used by Linux distributions."""

    mac_bundle: str = ""
    """macOS ``.app`` bundle name, e.g. 'Google Chrome'."""

    def executable_names(self, include_aliases: bool = True) -> list[str]:
        names = [self.executable]
        if include_aliases:
            names.extend(a for a in self.aliases if a not in names)
        return names


KNOWN_BROWSERS: tuple[LogicalBrowser, ...] = (
    LogicalBrowser(
        "Google Chrome", "chrome",
        aliases=("google-chrome", "google-chrome-stable"),
        mac_bundle="Google Chrome",
    ),
    LogicalBrowser("Mozilla Firefox", "firefox", mac_bundle="Firefox"),
    LogicalBrowser("Brave", "brave", aliases=("brave-browser",), mac_bundle="Brave Browser"),
    LogicalBrowser(
        "Microsoft Edge", "msedge",
        aliases=("microsoft-edge", "microsoft-edge-stable"),
        mac_bundle="Microsoft Edge",
    ),
    LogicalBrowser("Opera", "opera", mac_bundle="Opera"),
    LogicalBrowser("Chromium", "chromium", aliases=("chromium-browser",), mac_bundle="Chromium"),
    LogicalBrowser("Vivaldi", "vivaldi", aliases=("vivaldi-stable",), mac_bundle="Vivaldi"),
)


def logical_browser_for(executable: str) -> LogicalBrowser | None:
    """Find the known browser whose executable or alias is *executable*."""
    stem = executable.lower()
    if stem.endswith(".exe"):
        stem = stem[:-4]
    for logical in KNOWN_BROWSERS:
        if stem in logical.executable_names():
            return logical
    return None
