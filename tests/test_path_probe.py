"""Tests for the search-path probe.

Search paths and install directories point into ``tmp_path`` so the
results do not depend on the browsers installed on the test machine.
"""

import os
from pathlib import Path

from conftest import posix_only
from quick_tabs.core.dedup import merge
from quick_tabs.models import KNOWN_BROWSERS, LogicalBrowser
from quick_tabs.probes.searchpath.probe import PathProbe

FIREFOX = LogicalBrowser("Mozilla Firefox", "firefox", mac_bundle="Firefox")
CHROME = LogicalBrowser(
    "Google Chrome", "chrome", aliases=("google-chrome", "google-chrome-stable"),
    mac_bundle="Google Chrome",
)


def linux_probe(tmp_path, logical, install_dirs=()):
    return PathProbe(
        logical_browsers=logical,
        version_probe=lambda path: f"{os.path.basename(path)} 1.0",
        max_workers=4,
        system="Linux",
        search_path=str(tmp_path / "bin"),
        unix_install_dirs=[str(d) for d in install_dirs],
        opt_dir=str(tmp_path / "opt"),
    )


@posix_only
class TestLinuxDiscovery:
    def test_nothing_installed(self, tmp_path):
        (tmp_path / "bin").mkdir()
        assert linux_probe(tmp_path, [FIREFOX, CHROME]).probe() == []

    def test_search_path_hit(self, tmp_path, make_exe):
        exe = make_exe(tmp_path / "bin" / "firefox")
        found = linux_probe(tmp_path, [FIREFOX]).probe()
        assert len(found) == 1
        assert found[0].name == "Mozilla Firefox"
        assert found[0].path == os.path.realpath(str(exe))
        assert found[0].version == "firefox 1.0"

    def test_alias_executable_found(self, tmp_path, make_exe):
        make_exe(tmp_path / "bin" / "google-chrome-stable")
        found = linux_probe(tmp_path, [CHROME]).probe()
        assert [b.name for b in found] == ["Google Chrome"]
        assert found[0].executable_name == "google-chrome-stable"

    def test_search_path_before_install_dir(self, tmp_path, make_exe):
        on_path = make_exe(tmp_path / "bin" / "firefox")
        installed = make_exe(tmp_path / "usr-local" / "firefox")
        found = linux_probe(tmp_path, [FIREFOX], install_dirs=[tmp_path / "usr-local"]).probe()
        assert [b.path for b in found] == [
            os.path.realpath(str(on_path)),
            os.path.realpath(str(installed)),
        ]

    def test_opt_layout(self, tmp_path, make_exe):
        (tmp_path / "bin").mkdir()
        exe = make_exe(tmp_path / "opt" / "firefox" / "firefox")
        found = linux_probe(tmp_path, [FIREFOX]).probe()
        assert [b.path for b in found] == [os.path.realpath(str(exe))]

    def test_symlink_and_target_collapse(self, tmp_path, make_exe):
        target = make_exe(tmp_path / "opt" / "firefox" / "firefox")
        (tmp_path / "bin").mkdir()
        (tmp_path / "bin" / "firefox").symlink_to(target)
        found = linux_probe(tmp_path, [FIREFOX]).probe()
        assert [b.path for b in found] == [os.path.realpath(str(target))]

    def test_output_follows_table_order(self, tmp_path, make_exe):
        for lb in reversed(KNOWN_BROWSERS):
            make_exe(tmp_path / "bin" / lb.executable)
        found = linux_probe(tmp_path, KNOWN_BROWSERS).probe()
        assert [b.name for b in found] == [lb.display_name for lb in KNOWN_BROWSERS]

    def test_distribution_alias_links_collapse(self, tmp_path, make_exe):
        # Debian layout: both names link to one binary under /opt
        chrome = make_exe(tmp_path / "opt" / "google" / "chrome" / "google-chrome")
        chromium = make_exe(tmp_path / "lib" / "chromium" / "chromium")
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        (bin_dir / "google-chrome").symlink_to(chrome)
        (bin_dir / "google-chrome-stable").symlink_to(chrome)
        (bin_dir / "chromium").symlink_to(chromium)
        (bin_dir / "chromium-browser").symlink_to(chromium)

        found = merge(linux_probe(tmp_path, KNOWN_BROWSERS).probe())
        assert [(b.name, b.path) for b in found] == [
            ("Google Chrome", os.path.realpath(str(chrome))),
            ("Chromium", os.path.realpath(str(chromium))),
        ]

    def test_snap_launcher_links_stay_distinct(self, tmp_path, make_exe):
        snap = make_exe(tmp_path / "usr" / "snap")
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        (bin_dir / "firefox").symlink_to(snap)
        (bin_dir / "chromium").symlink_to(snap)

        found = linux_probe(tmp_path, KNOWN_BROWSERS).probe()
        assert [b.path for b in found] == [str(bin_dir / "firefox"), str(bin_dir / "chromium")]

    def test_non_executable_on_path_is_ignored(self, tmp_path):
        plain = tmp_path / "bin" / "firefox"
        plain.parent.mkdir()
        plain.write_text("")
        assert linux_probe(tmp_path, [FIREFOX]).probe() == []


class TestInstallCandidates:
    def test_linux(self):
        probe = PathProbe(
            system="Linux", unix_install_dirs=["/usr/bin", "/snap/bin"], opt_dir="/opt"
        )
        assert probe.install_candidates("firefox", FIREFOX) == [
            Path("/usr/bin/firefox"),
            Path("/snap/bin/firefox"),
            Path("/opt/firefox/firefox"),
        ]

    def test_linux_default_dirs(self):
        probe = PathProbe(system="Linux")
        candidates = probe.install_candidates("brave", None)
        assert Path("/usr/bin/brave") in candidates
        assert Path("/usr/local/bin/brave") in candidates
        assert Path("/snap/bin/brave") in candidates
        assert Path("/opt/brave/brave") in candidates

    def test_windows_uses_environment_roots(self):
        env = {"ProgramFiles": "C:/PF", "LOCALAPPDATA": "C:/Local"}
        probe = PathProbe(system="Windows", env=env)
        assert probe.install_candidates("chrome.exe", CHROME) == [
            Path("C:/PF") / "Google" / "Chrome" / "Application" / "chrome.exe",
            Path("C:/PF") / "Mozilla Firefox" / "chrome.exe",
            Path("C:/PF") / "BraveSoftware" / "Brave-Browser" / "Application" / "chrome.exe",
            Path("C:/Local") / "Programs" / "chrome.exe",
        ]

    def test_windows_x86_root(self):
        probe = PathProbe(system="Windows", env={"ProgramFiles(x86)": "C:/PF86"})
        assert probe.install_candidates("msedge.exe") == [
            Path("C:/PF86") / "Google" / "Chrome" / "Application" / "msedge.exe",
            Path("C:/PF86") / "Microsoft" / "Edge" / "Application" / "msedge.exe",
        ]

    def test_darwin_bundles(self, monkeypatch, tmp_path):
        monkeypatch.setattr("quick_tabs.probes.searchpath.probe.get_home_dir", lambda: tmp_path)
        probe = PathProbe(system="Darwin")
        assert probe.install_candidates("chrome", CHROME) == [
            Path("/Applications/chrome.app/Contents/MacOS/chrome"),
            Path("/Applications/Google Chrome.app/Contents/MacOS/Google Chrome"),
            tmp_path / "Applications" / "Google Chrome.app" / "Contents" / "MacOS" / "Google Chrome",
        ]

    def test_darwin_alias_has_no_bundle(self):
        probe = PathProbe(system="Darwin")
        assert probe.install_candidates("google-chrome", CHROME) == [
            Path("/Applications/google-chrome.app/Contents/MacOS/google-chrome"),
        ]


def test_windows_locate_skips_aliases(monkeypatch):
    looked_up = []

    def fake_which(name, path=None):
        looked_up.append(name)
        return None

    monkeypatch.setattr("quick_tabs.probes.searchpath.probe.shutil.which", fake_which)
    probe = PathProbe(system="Windows", env={})
    assert probe.locate(CHROME) == []
    assert looked_up == ["chrome.exe"]


def test_probe_metadata(config):
    probe = PathProbe.from_config(config)
    assert probe.name == "search-path"
    assert probe.available is True
    assert probe.priority == 10

