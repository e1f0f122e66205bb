"""Application configuration management."""

import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from loguru import logger

from quick_tabs.core.path_resolver import current_system, get_appdata_dir, get_home_dir

APP_NAME = "quick_tabs"
CONFIG_DIR_ENV = "QUICK_TABS_CONFIG_DIR"
LOG_LEVEL_ENV = "QUICK_TABS_LOG_LEVEL"

BROWSER_CONFIG_FILENAME = "browser_config.json"
LINKS_FILENAME = "links.json"
ALIASES_FILENAME = "aliases.json"
SETTINGS_FILENAME = "settings.json"


def _default_config_dir(
    env: Optional[Mapping[str, str]] = None,
    system: Optional[str] = None,
) -> Path:
    """Return the per-user configuration directory for the application."""
    environ = os.environ if env is None else env
    override = environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override).expanduser()

    system = current_system(system)
    if system == "Windows":
        appdata = get_appdata_dir(env, system)
        base = appdata if appdata is not None else get_home_dir() / "AppData" / "Roaming"
        return base / APP_NAME
    elif system == "Darwin":
        return get_home_dir() / "Library" / "Application Support" / APP_NAME
    else:
        xdg = environ.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else get_home_dir() / ".config"
        return base / APP_NAME


_DEFAULT_CONFIG: dict[str, Any] = {
    "version_timeout": 5.0,
    "max_workers": 8,
    "write_reports": True,
    "report_dir": "",
    "log_level": "WARNING",
}


class Config:
    """Application configuration.

    Built once at start-up and passed explicitly to whatever needs it;
    tests create one per ``tmp_path``.

    If the configuration directory cannot be created, stores fall back to
    dotfiles in the home directory (``~/.quick_tabs_browser.json`` …).
    """

    def __init__(
        self,
        config_dir: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._env: Mapping[str, str] = os.environ if env is None else env
        self._config_dir = config_dir or _default_config_dir(env)
        self._use_dotfiles = False
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(
                "Cannot create config directory {} ({}); using dotfiles in home", self._config_dir, e
            )
            self._use_dotfiles = True
        self._data = dict(_DEFAULT_CONFIG)
        self._load()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def config_dir(self) -> Path:
        return self._config_dir

    @property
    def uses_dotfiles(self) -> bool:
        return self._use_dotfiles

    @property
    def browser_config_path(self) -> Path:
        if self._use_dotfiles:
            return get_home_dir() / f".{APP_NAME}_browser.json"
        return self._config_dir / BROWSER_CONFIG_FILENAME

    @property
    def links_path(self) -> Path:
        if self._use_dotfiles:
            return get_home_dir() / f".{APP_NAME}_links.json"
        return self._config_dir / LINKS_FILENAME

    @property
    def aliases_path(self) -> Path:
        if self._use_dotfiles:
            return get_home_dir() / f".{APP_NAME}_aliases.json"
        return self._config_dir / ALIASES_FILENAME

    @property
    def settings_path(self) -> Path:
        return self._config_dir / SETTINGS_FILENAME

    @property
    def log_dir(self) -> Path:
        return self._config_dir / "logs"

    @property
    def report_dir(self) -> Path:
        p = self._data.get("report_dir", "")
        return Path(p).expanduser() if p else Path.cwd()

    @property
    def write_reports(self) -> bool:
        return bool(self._data.get("write_reports", True))

    @property
    def version_timeout(self) -> float:
        try:
            value = float(self._data.get("version_timeout", 5.0))
        except (TypeError, ValueError):
            return 5.0
        return value if value > 0 else 5.0

    @property
    def max_workers(self) -> int:
        try:
            value = int(self._data.get("max_workers", 8))
        except (TypeError, ValueError):
            return 8
        return max(1, value)

    @property
    def log_level(self) -> str:
        level = self._env.get(LOG_LEVEL_ENV) or self._data.get("log_level", "WARNING")
        return str(level).upper()

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load(self) -> None:
        if self._use_dotfiles or not self.settings_path.exists():
            return
        try:
            with open(self.settings_path, "r", encoding="utf-8") as f:
                saved = json.load(f)
            if not isinstance(saved, dict):
                raise ValueError("settings must be a JSON object")
            self._data.update(saved)
            logger.debug("Settings loaded from {}", self.settings_path)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load settings, using defaults: {}", e)
