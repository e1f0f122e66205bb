"""Probe discovery and management."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from quick_tabs.probes.base import BrowserProbe

if TYPE_CHECKING:
    from quick_tabs.config import Config


class ProbeManager:
    """Discovers and manages detection probes."""

    def __init__(self) -> None:
        self._probes: dict[str, BrowserProbe] = {}

    def discover(self, config: "Config") -> None:
        """Auto-discover all probes in the ``quick_tabs.probes`` package.

        Scans sub-packages for ``probe`` modules holding ``BrowserProbe``
        subclasses and registers one instance of each, built with
        :meth:`BrowserProbe.from_config`.
        """
        probes_dir = Path(__file__).parent
        for _finder, module_name, is_pkg in sorted(
            pkgutil.iter_modules([str(probes_dir)]), key=lambda m: m[1]
        ):
            if not is_pkg:
                continue
            full_module = f"quick_tabs.probes.{module_name}.probe"
            try:
                mod = importlib.import_module(full_module)
                for attr_name in dir(mod):
                    attr = getattr(mod, attr_name)
                    if (
                        isinstance(attr, type)
                        and issubclass(attr, BrowserProbe)
                        and attr is not BrowserProbe
                        and attr.__module__ == mod.__name__
                    ):
                        instance = attr.from_config(config)
                        self.register(instance)
                        logger.debug(
                            "Discovered probe: {} ({})", instance.name, full_module
                        )
            except Exception as e:
                logger.warning("Failed to load probe {}: {}", full_module, e)

    def register(self, probe: BrowserProbe) -> None:
        """Manually register a probe instance (replaces one with the same name)."""
        self._probes[probe.name] = probe

    def get_probe(self, name: str) -> BrowserProbe | None:
        """Get a registered probe by name."""
        return self._probes.get(name)

    def get_all_probes(self) -> list[BrowserProbe]:
        """Return all registered probes by priority, then registration order."""
        ordered = list(self._probes.values())
        return sorted(ordered, key=lambda p: p.priority)

    def get_probe_names(self) -> list[str]:
        """Return names of all registered probes in run order."""
        return [p.name for p in self.get_all_probes()]
