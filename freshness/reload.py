# SPDX-License-Identifier: MIT
"""Full page reload primitive.

A reload replaces the whole page: every module re-initializes from scratch.
PageReloader only records the request and hands it to the host action; in
the Textual viewer that action exits the app with RELOAD_RESULT and the
launcher starts a fresh instance.
"""
from typing import Callable, Optional

from freshness.debug_logger import get_logger

RELOAD_RESULT = "reload"


class PageReloader:
    """Requests full reloads and counts them."""

    def __init__(self, action: Optional[Callable[[], None]] = None) -> None:
        self.action = action
        self.count = 0
        self.last_reason: Optional[str] = None

    def request(self, reason: str) -> None:
        self.count += 1
        self.last_reason = reason
        get_logger().reload_requested(reason, self.count)
        if self.action is not None:
            self.action()
