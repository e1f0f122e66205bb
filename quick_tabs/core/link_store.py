"""Saved links (tag → URL, ordered) and aliases (tag → URL shortcuts).

    links.json    {"links": [{"tag": "news", "url": "https://..."}, ...]}
    aliases.json  {"aliases": {"gh": "https://github.com"}}

Both stores load leniently: a missing file is empty, an unreadable or
malformed one is logged and treated as empty.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from quick_tabs.core.jsonfile import read_json, write_json_atomic
from quick_tabs.errors import StoreError


@dataclass
class Link:
    """One saved link."""

    tag: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"tag": self.tag, "url": self.url}


class _JsonStore(ABC):
    """Load-on-construct JSON document with atomic save."""

    kind = "store"

    def __init__(self, path: Path) -> None:
        self._path = path
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def save(self) -> bool:
        try:
            write_json_atomic(self._path, self._to_document())
        except StoreError as e:
            logger.error("Failed to save {}: {}", self.kind, e)
            return False
        logger.debug("Saved {} to {}", self.kind, self._path)
        return True

    def _load(self) -> None:
        try:
            data = read_json(self._path)
        except FileNotFoundError:
            self._from_document(None)
            return
        except StoreError as e:
            logger.warning("Failed to read {}, starting empty: {}", self.kind, e)
            self._from_document(None)
            return
        try:
            self._from_document(data)
        except (TypeError, ValueError, KeyError) as e:
            logger.warning("Failed to parse {} {}, starting empty: {}", self.kind, self._path, e)
            self._from_document(None)

    @abstractmethod
    def _to_document(self) -> Any:
        """Return the JSON document to save."""
        ...

    @abstractmethod
    def _from_document(self, data: Any) -> None:
        """Replace the contents with *data*; ``None`` means empty."""
        ...


class LinkStore(_JsonStore):
    """Ordered tag → URL links."""

    kind = "links"

    @property
    def links(self) -> list[Link]:
        return list(self._links)

    def add_link(self, tag: str, url: str) -> bool:
        """Add a link; an existing tag is replaced and moved to the end.

        Returns ``True`` if a previous link was replaced.
        """
        replaced = self.remove_link(tag)
        self._links.append(Link(tag, url))
        return replaced

    def remove_link(self, tag: str) -> bool:
        for i, link in enumerate(self._links):
            if link.tag == tag:
                del self._links[i]
                return True
        return False

    def get_url(self, tag: str) -> str | None:
        for link in self._links:
            if link.tag == tag:
                return link.url
        return None

    def urls(self) -> list[str]:
        return [link.url for link in self._links]

    def _to_document(self) -> Any:
        return {"links": [link.to_dict() for link in self._links]}

    def _from_document(self, data: Any) -> None:
        self._links: list[Link] = []
        if data is None:
            return
        for entry in data["links"]:
            tag, url = entry["tag"], entry["url"]
            if not isinstance(tag, str) or not isinstance(url, str):
                raise ValueError(f"link entry must hold strings: {entry!r}")
            self._links.append(Link(tag, url))


class AliasStore(_JsonStore):
    """Tag → URL shortcuts checked before links when launching."""

    kind = "aliases"

    @property
    def aliases(self) -> dict[str, str]:
        return dict(self._aliases)

    def add_alias(self, tag: str, url: str) -> None:
        self._aliases[tag] = url

    def remove_alias(self, tag: str) -> bool:
        return self._aliases.pop(tag, None) is not None

    def resolve(self, tag: str) -> str | None:
        return self._aliases.get(tag)

    def urls(self) -> list[str]:
        return list(self._aliases.values())

    def _to_document(self) -> Any:
        return {"aliases": dict(self._aliases)}

    def _from_document(self, data: Any) -> None:
        self._aliases: dict[str, str] = {}
        if data is None:
            return
        aliases = data["aliases"]
        if not isinstance(aliases, dict):
            raise ValueError("aliases must be an object")
        for tag, url in aliases.items():
            if not isinstance(url, str):
                raise ValueError(f"alias {tag!r} must map to a string")
            self._aliases[tag] = url
