"""Detection dispatcher: runs the probes, merges their output and asks the
user to pick a browser when no saved choice is usable."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Sequence

from loguru import logger

from quick_tabs.config import Config
from quick_tabs.core.browser_store import BrowserStore
from quick_tabs.core.dedup import merge
from quick_tabs.core.report import write_detection_report
from quick_tabs.core.selection import OutputFn, SelectionPolicy
from quick_tabs.core.version import VersionProbe
from quick_tabs.models.browser import Browser, DetectionResult
from quick_tabs.probes.base import BrowserProbe
from quick_tabs.probes.probe_manager import ProbeManager

ReporterFn = Callable[[DetectionResult], bool]


class Detector:
    """High-level browser discovery.

    ``resolve()`` is the entry point used by commands that need a browser:
    a valid saved browser short-circuits everything, otherwise all probes
    run, the merged result is written to the report files, the selection
    policy picks one, and the pick is saved.
    """

    def __init__(
        self,
        config: Config,
        store: BrowserStore,
        probes: Sequence[BrowserProbe],
        selector: SelectionPolicy,
        reporter: ReporterFn | None = None,
        output_fn: OutputFn = print,
    ) -> None:
        self._cfg = config
        self._store = store
        self._probes = list(probes)
        self._selector = selector
        self._reporter = reporter
        self._output = output_fn
        self._last_result: DetectionResult | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def last_result(self) -> DetectionResult | None:
        return self._last_result

    def resolve(self, force: bool = False) -> Browser | None:
        """Return the browser to launch with, or ``None`` if none was chosen.

        With *force* the saved browser is ignored and re-selected.
        """
        if not force:
            saved = self._store.load()
            if saved is not None:
                self._output(f"Using saved browser: {saved.path}")
                return saved

        result = self.detect_all()
        self._write_report(result)

        # Detection is finished before the user is prompted.
        selected = self._selector.select(result)
        if selected is None:
            logger.info("No browser selected")
            return None

        if self._store.save(selected):
            self._output(f"Saved preferred browser to config: {self._store.path}")
        else:
            self._output(f"Could not save browser config to {self._store.path}")
        return selected

    def detect_all(self) -> DetectionResult:
        """Run every probe concurrently and merge the results in probe order."""
        self._output("Searching for installed browsers...")
        workers = max(1, min(self._cfg.max_workers, len(self._probes) or 1))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            outputs = list(pool.map(self._run_probe, self._probes))

        result = merge(*outputs)
        self._last_result = result

        if result.is_empty:
            self._output("Did not find any known browsers.")
        else:
            self._output(f"Found {len(result)} unique browser(s):")
            for i, b in enumerate(result, start=1):
                self._output(f"  [{i}] {b.name} (version: {b.display_version}, path: {b.path})")
        logger.info("Total browsers detected: {}", len(result))
        return result

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run_probe(self, probe: BrowserProbe) -> list[Browser]:
        if not probe.available:
            logger.debug("Probe {} unavailable on this platform", probe.name)
            return []
        try:
            found = probe.probe()
        except Exception as e:
            logger.error("Error in probe {}: {}", probe.name, e)
            return []
        logger.debug("Probe {} returned {} candidate(s)", probe.name, len(found))
        return found

    def _write_report(self, result: DetectionResult) -> None:
        if self._reporter is not None:
            self._reporter(result)
        elif self._cfg.write_reports:
            write_detection_report(result, self._cfg.report_dir)


def create_detector(
    config: Config,
    input_fn: Callable[[str], str] = input,
    output_fn: OutputFn = print,
) -> Detector:
    """Wire a :class:`Detector` with every discovered probe."""
    pm = ProbeManager()
    pm.discover(config)
    logger.debug("Probes loaded: {}", pm.get_probe_names())

    selector = SelectionPolicy(
        version_probe=VersionProbe(config.version_timeout),
        input_fn=input_fn,
        output_fn=output_fn,
    )
    return Detector(
        config,
        BrowserStore(config.browser_config_path),
        pm.get_all_probes(),
        selector,
        output_fn=output_fn,
    )
