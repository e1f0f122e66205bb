"""Choosing one browser out of the detected candidates.

    0 candidates  → manual entry
    1 candidate   → auto-selected, no prompt
    N candidates  → numbered menu with an ``M`` (manual entry) escape;
                    anything that is not ``M`` or an index in range is
                    reported and routed to manual entry
"""

from __future__ import annotations

import os
from typing import Callable, Sequence

from loguru import logger

from quick_tabs.core.version import VersionProbe, VersionProbeFn
from quick_tabs.models.browser import Browser

CUSTOM_BROWSER_NAME = "Custom Browser"
MANUAL_ENTRY_MARKER = "m"

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


class SelectionPolicy:
    """Interactive browser selection.

    ``input_fn`` and ``output_fn`` default to :func:`input` and :func:`print`;
    tests pass scripted replacements.
    """

    def __init__(
        self,
        version_probe: VersionProbeFn | None = None,
        input_fn: InputFn = input,
        output_fn: OutputFn = print,
    ) -> None:
        self._version_probe = version_probe or VersionProbe()
        self._input = input_fn
        self._output = output_fn

    def select(self, candidates: Sequence[Browser]) -> Browser | None:
        """Return the chosen browser or ``None`` when nothing was selected."""
        if len(candidates) == 0:
            self._output("No browsers detected. Please enter one manually.")
            return self.manual_entry()

        if len(candidates) == 1:
            browser = candidates[0]
            self._output(f"Auto-selected: {browser.name} ({browser.path})")
            logger.info("Auto-selected only candidate {}", browser.path)
            return browser

        return self._choose(candidates)

    def manual_entry(self) -> Browser | None:
        """Prompt for an executable path and wrap it as a custom browser."""
        self._output("Enter the full path to a browser executable.")
        raw = self._read("Path: ")
        if raw is None:
            self._output("Could not read input; no browser selected.")
            return None

        entered = raw.strip().strip('"').strip("'")
        if not entered:
            self._output("No path entered; no browser selected.")
            return None

        path = os.path.abspath(os.path.expanduser(entered))
        if not os.path.exists(path):
            self._output(f"Invalid path, it does not exist: {path}")
            logger.info("Manual entry rejected, missing path {}", path)
            return None

        browser = Browser(name=CUSTOM_BROWSER_NAME, path=path, version=self._version_probe(path))
        self._output(f"Browser added: {browser.path}")
        return browser

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _choose(self, candidates: Sequence[Browser]) -> Browser | None:
        self._output("Select a browser:")
        for i, b in enumerate(candidates, start=1):
            self._output(f"  [{i}] {b.name} (version: {b.display_version}, path: {b.path})")
        self._output("  [M] Manual entry")

        raw = self._read(f"Enter choice [1-{len(candidates)} or M]: ")
        if raw is None:
            self._output("Could not read input; no browser selected.")
            return None

        choice = raw.strip()
        if choice.lower() == MANUAL_ENTRY_MARKER:
            return self.manual_entry()

        try:
            index = int(choice)
        except ValueError:
            self._output(f"Invalid choice '{choice}': not a number. Switching to manual entry.")
            return self.manual_entry()

        if not 1 <= index <= len(candidates):
            self._output(
                f"Invalid choice {index}: expected 1-{len(candidates)}. Switching to manual entry."
            )
            return self.manual_entry()

        browser = candidates[index - 1]
        self._output(f"Selected: {browser.name}")
        return browser

    def _read(self, prompt: str) -> str | None:
        try:
            return self._input(prompt)
        except (EOFError, KeyboardInterrupt, OSError) as e:
            logger.debug("Input aborted: {!r}", e)
            return None
