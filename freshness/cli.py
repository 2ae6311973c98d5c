#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
CLI for the report viewer.

The launcher stands in for the browser tab: it owns the session storage,
so demo mode survives reloads, and it restarts the viewer whenever the
viewer exits asking for a full reload.

Usage:
    report-viewer watch                               # Normal session
    report-viewer watch --url "/reports/7?demo=true"  # Demo session
    report-viewer watch --interval 30 --locale en
"""

import argparse
import sys
from typing import Callable, List, Optional

from freshness._version import __version__
from freshness.config import ViewerSettings
from freshness.debug_logger import get_logger
from freshness.models import Locale
from freshness.reload import RELOAD_RESULT
from freshness.storage import SessionStorage


def run_session(
    app_factory: Callable[..., object],
    url: Optional[str],
    settings: ViewerSettings,
    storage: Optional[SessionStorage] = None,
) -> int:
    """Run viewer instances until one exits without requesting a reload.

    Args:
        app_factory: Builds a viewer app from (url=, storage=, settings=)
        url: Navigation URL for every load in this session
        settings: Viewer settings
        storage: Session storage (a fresh one per tab session by default)

    Returns:
        Number of page loads performed.
    """
    storage = storage if storage is not None else SessionStorage()
    loads = 0
    while True:
        app = app_factory(url=url, storage=storage, settings=settings)
        loads += 1
        result = app.run()
        if result != RELOAD_RESULT:
            return loads


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Report Viewer - freshness-aware report shell")
    parser.add_argument(
        "--version", action="version", version=f"report-freshness {__version__}"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    watch_parser = subparsers.add_parser("watch", help="Launch the report viewer")
    watch_parser.add_argument("--url", "-u", help="Navigation URL or query string")
    watch_parser.add_argument(
        "--interval", "-i", type=float, help="Seconds between timed refreshes"
    )
    watch_parser.add_argument(
        "--locale", "-l", choices=[loc.value for loc in Locale], help="Initial display language"
    )
    watch_parser.add_argument(
        "--refresh-on-focus", action="store_true", help="Also refresh when the viewer gains focus"
    )
    watch_parser.add_argument(
        "--reload-on-restore",
        action="store_true",
        help="Hard-reload instead of refreshing after a history restore",
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> ViewerSettings:
    """Settings file values, overridden by explicit command-line flags."""
    settings = ViewerSettings.load()
    if getattr(args, "interval", None) is not None:
        if not args.interval > 0:
            raise ValueError(f"--interval must be positive, got {args.interval}")
        settings.refresh_interval = args.interval
    if getattr(args, "locale", None):
        settings.default_locale = Locale(args.locale)
    if getattr(args, "refresh_on_focus", False):
        settings.refresh_on_focus = True
    if getattr(args, "reload_on_restore", False):
        settings.reload_on_restore = True
    return settings


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Default to watch when no subcommand given
    if not args.command:
        args.command = "watch"
        args.url = None

    if args.command != "watch":
        print(f"Unknown command: {args.command}", file=sys.stderr)
        sys.exit(1)

    try:
        settings = settings_from_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    try:
        from freshness.tui.app import ReportViewerApp
    except ImportError as e:
        get_logger().error("import_tui", str(e))
        print(f"Error: viewer requires textual package: {e}", file=sys.stderr)
        print("Install with: pip install textual", file=sys.stderr)
        sys.exit(1)

    run_session(ReportViewerApp, args.url, settings)


if __name__ == "__main__":
    main()
