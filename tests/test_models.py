"""Tests for the browser data model."""

import os

import pytest

from conftest import posix_only
from quick_tabs.models import (
    KNOWN_BROWSERS,
    Browser,
    DetectionResult,
    LogicalBrowser,
    canonical_path,
    logical_browser_for,
)


class TestBrowser:
    def test_equality_uses_path_only(self):
        a = Browser("Firefox", "/usr/bin/firefox", "Mozilla Firefox 128.0")
        b = Browser("Custom Browser", "/usr/bin/firefox", None)
        assert a == b
        assert hash(a) == hash(b)
        assert a != Browser("Firefox", "/usr/local/bin/firefox")

    def test_display_version(self):
        assert Browser("X", "/x").display_version == "unknown"
        assert Browser("X", "/x", "X 1.0").display_version == "X 1.0"

    def test_executable_name_is_lowercase_basename(self):
        assert Browser("Edge", "/opt/Edge/MSEdge.EXE").executable_name == "msedge.exe"

    def test_dict_round_trip_keeps_fields(self):
        b = Browser("Brave", "/usr/bin/brave", None)
        restored = Browser.from_dict(b.to_dict())
        assert restored.name == "Brave"
        assert restored.path == "/usr/bin/brave"
        assert restored.version is None

    @pytest.mark.parametrize("data", [
        None,
        [],
        {"name": "X"},
        {"name": "X", "path": ""},
        {"name": 3, "path": "/x"},
        {"name": "X", "path": "/x", "version": 12},
    ])
    def test_from_dict_rejects_bad_shapes(self, data):
        with pytest.raises(ValueError):
            Browser.from_dict(data)


class TestDetectionResult:
    def test_duplicate_paths_rejected(self):
        with pytest.raises(ValueError):
            DetectionResult([Browser("A", "/x"), Browser("B", "/x")])

    def test_sequence_behaviour(self):
        result = DetectionResult([Browser("A", "/a"), Browser("B", "/b")])
        assert len(result) == 2
        assert result[1].name == "B"
        assert [b.path for b in result] == ["/a", "/b"]
        assert not result.is_empty
        assert DetectionResult().is_empty

    def test_to_list(self):
        result = DetectionResult([Browser("A", "/a", "1")])
        assert result.to_list() == [{"name": "A", "path": "/a", "version": "1"}]


class TestCanonicalPath:
    def test_missing_path_is_made_absolute(self, tmp_path):
        missing = tmp_path / "sub" / ".." / "nothing"
        assert canonical_path(missing) == os.path.abspath(str(missing))

    @posix_only
    def test_symlink_with_same_name_is_resolved(self, tmp_path):
        real = tmp_path / "opt" / "chrome"
        real.parent.mkdir()
        real.write_text("")
        link = tmp_path / "bin" / "chrome"
        link.parent.mkdir()
        link.symlink_to(real)
        assert canonical_path(link) == os.path.realpath(str(real))

    @posix_only
    def test_link_to_unknown_launcher_is_kept(self, tmp_path):
        launcher = tmp_path / "snap"
        launcher.write_text("")
        link = tmp_path / "firefox"
        link.symlink_to(launcher)
        assert canonical_path(link) == str(link)

    @posix_only
    @pytest.mark.parametrize("link_name, target_name", [
        ("google-chrome-stable", "google-chrome"),
        ("chromium-browser", "chromium"),
        ("x-www-browser", "firefox"),
    ])
    def test_link_to_known_browser_is_resolved(self, tmp_path, link_name, target_name):
        real = tmp_path / "opt" / target_name
        real.parent.mkdir()
        real.write_text("")
        link = tmp_path / link_name
        link.symlink_to(real)
        assert canonical_path(link) == os.path.realpath(str(real))


class TestLogicalBrowsers:
    def test_known_table_order(self):
        assert [lb.executable for lb in KNOWN_BROWSERS] == [
            "chrome", "firefox", "brave", "msedge", "opera", "chromium", "vivaldi",
        ]

    def test_executable_names(self):
        lb = LogicalBrowser("Chrome", "chrome", aliases=("google-chrome", "chrome"))
        assert lb.executable_names() == ["chrome", "google-chrome"]
        assert lb.executable_names(include_aliases=False) == ["chrome"]

    @pytest.mark.parametrize("exe, expected", [
        ("google-chrome", "Google Chrome"),
        ("msedge.exe", "Microsoft Edge"),
        ("FIREFOX", "Mozilla Firefox"),
        ("chromium-browser", "Chromium"),
        ("vivaldi.exe", "Vivaldi"),
    ])
    def test_lookup(self, exe, expected):
        assert logical_browser_for(exe).display_name == expected

    def test_unknown_executable(self):
        assert logical_browser_for("lynx") is None
