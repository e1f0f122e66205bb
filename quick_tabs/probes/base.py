"""Abstract base class for browser detection probes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from quick_tabs.models.browser import Browser

if TYPE_CHECKING:
    from quick_tabs.config import Config


class BrowserProbe(ABC):
    """Base class that every detection source must implement.

    Probes are interchangeable: a probe whose platform capability is
    missing (no registry, no ``xdg-settings`` …) reports
    ``available = False`` and returns an empty list from :meth:`probe`.
    The detector merges every probe's output, so probes never
    de-duplicate against each other.
    """

    priority: int = 100
    """Lower runs first; also fixes the order of results in the merge."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name of the probe (e.g. 'search-path')."""
        ...

    @property
    def available(self) -> bool:
        """Whether the platform capability this probe relies on exists."""
        return True

    @abstractmethod
    def probe(self) -> list[Browser]:
        """Return the browsers this source can see, in emission order.

        Absence of data is an empty list, never an exception.
        """
        ...

    @classmethod
    def from_config(cls, config: "Config") -> "BrowserProbe":
        """Build the probe from application settings.

        Override in subclasses that take constructor arguments.
        """
        return cls()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.name!r} available={self.available}>"
