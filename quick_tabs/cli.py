"""Command-line interface.

    quick-tabs launch TAG_OR_URL [--incognito]
    quick-tabs add-link TAG URL        quick-tabs add-alias TAG URL
    quick-tabs remove-link TAG         quick-tabs remove-alias TAG
    quick-tabs list-links
    quick-tabs open-all-links [--incognito]
    quick-tabs open-all-aliases [--incognito]
    quick-tabs detect
"""

from __future__ import annotations

import argparse
from typing import Callable, Optional, Sequence

from loguru import logger

from quick_tabs import __version__
from quick_tabs.config import Config
from quick_tabs.core.detector import create_detector
from quick_tabs.core.launcher import LaunchMode, launch
from quick_tabs.core.link_store import AliasStore, LinkStore
from quick_tabs.logger import setup_logger
from quick_tabs.models.browser import Browser

NO_BROWSER_MESSAGE = "Error: no browser configured. Run 'quick-tabs detect' or enter one manually."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quick-tabs",
        description="Open saved links in a detected browser.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    p = sub.add_parser("launch", help="Launch a tag or URL in the detected browser")
    p.add_argument("target", help="Alias, link tag or literal URL")
    p.add_argument("-i", "--incognito", action="store_true", help="Open in private mode")

    p = sub.add_parser("add-link", help="Add a new link tag")
    p.add_argument("tag")
    p.add_argument("url")

    p = sub.add_parser("add-alias", help="Add a new alias shortcut")
    p.add_argument("tag")
    p.add_argument("url")

    p = sub.add_parser("remove-link", help="Remove a saved link")
    p.add_argument("tag")

    p = sub.add_parser("remove-alias", help="Remove a saved alias")
    p.add_argument("tag")

    sub.add_parser("list-links", help="List saved links and aliases")

    p = sub.add_parser("open-all-links", help="Open all saved links")
    p.add_argument("-i", "--incognito", action="store_true", help="Open in private mode")

    p = sub.add_parser("open-all-aliases", help="Open all saved aliases")
    p.add_argument("-i", "--incognito", action="store_true", help="Open in private mode")

    sub.add_parser("detect", help="Re-detect and select the preferred browser")
    sub.add_parser("help", help="Print help information")
    return parser


class _App:
    """State shared by the command handlers of one invocation."""

    def __init__(
        self,
        config: Config,
        input_fn: Callable[[str], str],
        output_fn: Callable[[str], None],
    ) -> None:
        self.config = config
        self.input = input_fn
        self.output = output_fn

    def links(self) -> LinkStore:
        return LinkStore(self.config.links_path)

    def aliases(self) -> AliasStore:
        return AliasStore(self.config.aliases_path)

    def browser(self, force: bool = False) -> Optional[Browser]:
        detector = create_detector(self.config, self.input, self.output)
        return detector.resolve(force=force)

    def open_urls(self, urls: Sequence[str], incognito: bool, empty_message: str) -> int:
        if not urls:
            self.output(empty_message)
            return 0
        browser = self.browser()
        if browser is None:
            self.output(NO_BROWSER_MESSAGE)
            return 1
        mode = LaunchMode.PRIVATE if incognito else LaunchMode.NORMAL
        self.output(f"Launching {len(urls)} link(s) in {browser.path} ({mode.value} mode)")
        return 0 if launch(browser, urls, mode) else 1


def _cmd_launch(app: _App, args: argparse.Namespace) -> int:
    browser = app.browser()
    if browser is None:
        app.output(NO_BROWSER_MESSAGE)
        return 1
    url = app.aliases().resolve(args.target) or app.links().get_url(args.target) or args.target
    mode = LaunchMode.PRIVATE if args.incognito else LaunchMode.NORMAL
    app.output(f"Launching {url} in {browser.path} ({mode.value} mode)")
    return 0 if launch(browser, url, mode) else 1


def _cmd_add_link(app: _App, args: argparse.Namespace) -> int:
    store = app.links()
    if store.add_link(args.tag, args.url):
        app.output(f"Replacing existing link for tag: {args.tag}")
    if not store.save():
        app.output(f"Could not save links to {store.path}")
        return 1
    app.output("Link saved!")
    return 0


def _cmd_add_alias(app: _App, args: argparse.Namespace) -> int:
    store = app.aliases()
    store.add_alias(args.tag, args.url)
    if not store.save():
        app.output(f"Could not save aliases to {store.path}")
        return 1
    app.output("Alias saved!")
    return 0


def _cmd_remove_link(app: _App, args: argparse.Namespace) -> int:
    store = app.links()
    if not store.remove_link(args.tag):
        app.output(f"Link tag '{args.tag}' not found.")
        return 1
    if not store.save():
        return 1
    app.output("Link removed!")
    return 0


def _cmd_remove_alias(app: _App, args: argparse.Namespace) -> int:
    store = app.aliases()
    if not store.remove_alias(args.tag):
        app.output(f"Alias tag '{args.tag}' not found.")
        return 1
    if not store.save():
        return 1
    app.output("Alias removed!")
    return 0


def _cmd_list_links(app: _App, args: argparse.Namespace) -> int:
    links = app.links().links
    if links:
        app.output("Saved links:")
        for link in links:
            app.output(f"  [{link.tag}] {link.url}")
    else:
        app.output("No links saved.")

    aliases = app.aliases().aliases
    if aliases:
        app.output("Saved aliases:")
        for tag, url in aliases.items():
            app.output(f"  [{tag}] -> {url}")
    else:
        app.output("No aliases saved.")
    return 0


def _cmd_open_all_links(app: _App, args: argparse.Namespace) -> int:
    return app.open_urls(app.links().urls(), args.incognito, "No links to open.")


def _cmd_open_all_aliases(app: _App, args: argparse.Namespace) -> int:
    return app.open_urls(app.aliases().urls(), args.incognito, "No aliases to open.")


def _cmd_detect(app: _App, args: argparse.Namespace) -> int:
    browser = app.browser(force=True)
    if browser is None:
        app.output("No browser selected.")
        return 1
    app.output(f"Preferred browser: {browser.name} ({browser.path})")
    return 0


_COMMANDS: dict[str, Callable[[_App, argparse.Namespace], int]] = {
    "launch": _cmd_launch,
    "add-link": _cmd_add_link,
    "add-alias": _cmd_add_alias,
    "remove-link": _cmd_remove_link,
    "remove-alias": _cmd_remove_alias,
    "list-links": _cmd_list_links,
    "open-all-links": _cmd_open_all_links,
    "open-all-aliases": _cmd_open_all_aliases,
    "detect": _cmd_detect,
}


def main(
    argv: Optional[Sequence[str]] = None,
    config: Optional[Config] = None,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in (None, "help"):
        parser.print_help()
        return 0

    # ---- 1. Config ----
    config = config or Config()

    # ---- 2. Logger ----
    setup_logger(config.log_dir, "DEBUG" if args.verbose else config.log_level)
    logger.debug("quick-tabs {} running '{}'", __version__, args.command)

    # ---- 3. Command ----
    app = _App(config, input_fn, output_fn)
    return _COMMANDS[args.command](app, args)
