import json
import stat
import sys
from pathlib import Path

import pytest

from quick_tabs.config import Config

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses /bin/sh scripts")


@pytest.fixture
def config(tmp_path):
    """Config rooted in a temporary directory; reports go to tmp/reports."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "settings.json").write_text(
        json.dumps({"report_dir": str(tmp_path / "reports"), "version_timeout": 2.0}),
        encoding="utf-8",
    )
    return Config(config_dir, env={})


@pytest.fixture
def make_exe():
    """Create an executable shell script and return its path."""

    def _make(path: Path, body: str = "exit 0\n") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("#!/bin/sh\n" + body, encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make
