# SPDX-License-Identifier: MIT
"""
Freshness and session-mode coordination for the report viewer.

- RefreshCoordinator: turns lifecycle signals into a refresh generation
- SessionModeBootstrapper: decides demo vs normal mode once per session
- LocaleContext: shared active display language
- PageReloader: the full-reload primitive used by both
"""

from freshness._version import __version__
from freshness.bootstrap import SessionModeBootstrapper
from freshness.coordinator import RefreshCoordinator, Subscription
from freshness.events import LifecycleHost, ManualScheduler
from freshness.locale import LocaleContext
from freshness.models import (
    BootstrapState,
    LifecycleEvent,
    LifecycleEventType,
    Locale,
    RefreshTrigger,
    SessionMode,
    Visibility,
)
from freshness.reload import PageReloader
from freshness.storage import SessionStorage

__all__ = [
    "__version__",
    "BootstrapState",
    "LifecycleEvent",
    "LifecycleEventType",
    "LifecycleHost",
    "Locale",
    "LocaleContext",
    "ManualScheduler",
    "PageReloader",
    "RefreshCoordinator",
    "RefreshTrigger",
    "SessionMode",
    "SessionModeBootstrapper",
    "SessionStorage",
    "Subscription",
    "Visibility",
]
