"""Detection report files written after a fresh detection.

    browsers.json   JSON array of {name, path, version}
    browsers.txt    one ``name = path`` line per browser
"""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger

from quick_tabs.models.browser import DetectionResult

JSON_REPORT = "browsers.json"
TEXT_REPORT = "browsers.txt"


def write_detection_report(result: DetectionResult, directory: Path) -> bool:
    """Write both report files into *directory*.

    Best-effort: failures are logged and reported as ``False``.
    """
    json_path = directory / JSON_REPORT
    text_path = directory / TEXT_REPORT
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with open(json_path, "w", encoding="utf-8") as f:
            json.dump(result.to_list(), f, indent=4, ensure_ascii=False)
        logger.info("Saved full browser list to {}", json_path)

        with open(text_path, "w", encoding="utf-8") as f:
            for b in result:
                f.write(f"{b.name} = {b.path}\n")
        logger.info("Saved full browser list to {}", text_path)
    except OSError as e:
        logger.warning("Could not write detection report to {}: {}", directory, e)
        return False
    return True
