#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Structured debug logging for the freshness core.

Every event is appended to ``<state_dir>/debug.log`` as one JSON object per
line with common fields (event, level, timestamp, session_id, pid) plus
event-specific fields.

Debug levels:
    0 - disabled
    1 - lifecycle decisions (mount/unmount, bootstrap, reload, locale)
    2 - also every refresh increment
"""

import json
import os
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from freshness.config import get_int_setting
from freshness.paths import PathResolver

DEFAULT_DEBUG_LEVEL = 1


def _resolve_level() -> int:
    env_level = os.environ.get("REPORT_VIEWER_DEBUG")
    if env_level is not None:
        try:
            return int(env_level)
        except ValueError:
            return DEFAULT_DEBUG_LEVEL
    return get_int_setting("reportViewer.debugLevel", DEFAULT_DEBUG_LEVEL)


class DebugLogger:
    """JSON-lines event logger.

    The level and log path are resolved once at construction time; call
    reset_logger() after changing the environment.
    """

    def __init__(self, log_path: Optional[Path] = None) -> None:
        self.level = _resolve_level()
        self.log_path = log_path or PathResolver.debug_log()
        self.session_id = os.environ.get("REPORT_VIEWER_SESSION") or uuid.uuid4().hex[:8]

    @property
    def enabled(self) -> bool:
        return self.level > 0

    def _write(self, event: str, min_level: int = 1, level: str = "info", **fields: Any) -> None:
        if self.level < min_level:
            return
        entry: Dict[str, Any] = {
            "event": event,
            "level": level,
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ"),
            "session_id": self.session_id,
            "pid": os.getpid(),
        }
        entry.update(fields)
        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError:
            # Logging is best-effort
            pass

    # -------------------------------------------------------------------------
    # Refresh coordinator
    # -------------------------------------------------------------------------

    def coordinator_mounted(self, triggers: List[str], inert: List[str], interval: float) -> None:
        self._write(
            "coordinator_mounted",
            triggers=triggers,
            inert=inert,
            interval_s=interval,
        )

    def coordinator_unmounted(self, generation: int, counts: Dict[str, int]) -> None:
        self._write("coordinator_unmounted", generation=generation, counts=counts)

    def refresh_triggered(self, trigger: str, generation: int) -> None:
        self._write("refresh_triggered", min_level=2, trigger=trigger, generation=generation)

    def restore_detected(self, hard_reload: bool) -> None:
        """History-cache restore seen; records whether a hard reload follows."""
        self._write(
            "restore_detected",
            level="warning" if not hard_reload else "info",
            hard_reload=hard_reload,
        )

    # -------------------------------------------------------------------------
    # Session mode / reload
    # -------------------------------------------------------------------------

    def bootstrap_decision(self, state: str, demo_requested: bool, had_record: bool) -> None:
        self._write(
            "bootstrap_decision",
            state=state,
            demo_requested=demo_requested,
            had_record=had_record,
        )

    def reload_requested(self, reason: str, count: int) -> None:
        self._write("reload_requested", reason=reason, count=count)

    # -------------------------------------------------------------------------
    # Locale / errors
    # -------------------------------------------------------------------------

    def locale_changed(self, old: str, new: str) -> None:
        self._write("locale_changed", old=old, new=new)

    def error(self, op: str, err: str) -> None:
        self._write("error", level="error", op=op, err=err)


_logger: Optional[DebugLogger] = None


def get_logger() -> DebugLogger:
    """Get or create the process-wide debug logger."""
    global _logger
    if _logger is None:
        _logger = DebugLogger()
    return _logger


def reset_logger() -> None:
    """Drop the cached logger so the next get_logger() re-reads the environment."""
    global _logger
    _logger = None
