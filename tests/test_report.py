"""Tests for detection report files."""

import json

from quick_tabs.core.report import JSON_REPORT, TEXT_REPORT, write_detection_report
from quick_tabs.models import Browser, DetectionResult


def test_writes_json_and_text(tmp_path):
    result = DetectionResult([
        Browser("Google Chrome", "/usr/bin/chrome", "Chrome 126"),
        Browser("Mozilla Firefox", "/usr/bin/firefox"),
    ])
    out = tmp_path / "reports"
    assert write_detection_report(result, out) is True

    data = json.loads((out / JSON_REPORT).read_text(encoding="utf-8"))
    assert data == [
        {"name": "Google Chrome", "path": "/usr/bin/chrome", "version": "Chrome 126"},
        {"name": "Mozilla Firefox", "path": "/usr/bin/firefox", "version": None},
    ]
    assert (out / TEXT_REPORT).read_text(encoding="utf-8") == (
        "Google Chrome = /usr/bin/chrome\n"
        "Mozilla Firefox = /usr/bin/firefox\n"
    )


def test_empty_result(tmp_path):
    assert write_detection_report(DetectionResult(), tmp_path) is True
    assert json.loads((tmp_path / JSON_REPORT).read_text(encoding="utf-8")) == []
    assert (tmp_path / TEXT_REPORT).read_text(encoding="utf-8") == ""


def test_unwritable_directory_returns_false(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    assert write_detection_report(DetectionResult(), blocker / "reports") is False
