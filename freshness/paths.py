# SPDX-License-Identifier: MIT
"""Centralized path resolution for the report viewer.

All path resolution should go through this module to ensure consistency.
"""
import os
from pathlib import Path


class PathResolver:
    """Resolves paths for report viewer components."""

    @staticmethod
    def config_dir() -> Path:
        """Get the directory holding settings.json.

        Resolution order:
        1. REPORT_VIEWER_CONFIG env var
        2. XDG_CONFIG_HOME/report-viewer
        3. ~/.config/report-viewer
        """
        config = os.environ.get("REPORT_VIEWER_CONFIG")
        if config:
            return Path(config)
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / "report-viewer"
        return Path.home() / ".config" / "report-viewer"

    @staticmethod
    def state_dir() -> Path:
        """Get the state directory for mutable data (debug log).

        Resolution order:
        1. REPORT_VIEWER_STATE env var
        2. XDG_STATE_HOME/report-viewer
        3. ~/.local/state/report-viewer
        """
        state = os.environ.get("REPORT_VIEWER_STATE")
        if state:
            return Path(state)
        xdg_state = os.environ.get("XDG_STATE_HOME")
        if xdg_state:
            return Path(xdg_state) / "report-viewer"
        return Path.home() / ".local" / "state" / "report-viewer"

    @staticmethod
    def debug_log() -> Path:
        """Get the path of the JSON-lines debug log."""
        return PathResolver.state_dir() / "debug.log"
