"""Merging of probe outputs into a single detection result."""

from __future__ import annotations

from typing import Iterable

from quick_tabs.models.browser import Browser, DetectionResult


def merge(*sources: Iterable[Browser]) -> DetectionResult:
    """Concatenate *sources* in order, keeping the first Browser per path.

    Later entries with an already-seen path are dropped whatever their
    name or version.
    """
    seen: set[str] = set()
    unique: list[Browser] = []
    for source in sources:
        for browser in source:
            if browser.path in seen:
                continue
            seen.add(browser.path)
            unique.append(browser)
    return DetectionResult(unique)
