#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Data models for the freshness core.

Contains the enums, event dataclass, and constants shared by the
coordinator, bootstrapper, and locale context.
"""

from dataclasses import dataclass
from enum import Enum


# =============================================================================
# Constants
# =============================================================================

DEFAULT_REFRESH_INTERVAL_SECONDS = 60.0

# Session storage record written when demo mode is chosen
DEMO_MODE_STORAGE_KEY = "DEMO_MODE"
DEMO_MODE_STORAGE_VALUE = "true"

# Query parameter (and the exact value) that requests demo mode
DEFAULT_DEMO_PARAM = "demo"
DEMO_PARAM_VALUE = "true"


# =============================================================================
# Enums
# =============================================================================


class SessionMode(str, Enum):
    """Data mode for the whole browser session."""
    NORMAL = "normal"
    DEMO = "demo"


class Locale(str, Enum):
    """Supported display languages."""
    JA = "ja"
    EN = "en"


DEFAULT_LOCALE = Locale.JA


class Visibility(str, Enum):
    """Host visibility state (mirrors document.visibilityState)."""
    VISIBLE = "visible"
    HIDDEN = "hidden"


class LifecycleEventType(str, Enum):
    """Platform lifecycle notifications a host can dispatch."""
    VISIBILITY_CHANGE = "visibilitychange"
    PAGE_SHOW = "pageshow"
    ONLINE = "online"
    FOCUS = "focus"


class RefreshTrigger(str, Enum):
    """Sources that advance the refresh generation."""
    VISIBILITY = "visibility"
    PAGE_SHOW = "pageshow"
    ONLINE = "online"
    INTERVAL = "interval"
    FOCUS = "focus"


class BootstrapState(str, Enum):
    """Session mode bootstrap states.

    unchecked -> decided-normal
    unchecked -> decided-demo-pending-reload -> (after reload) decided-demo
    """
    UNCHECKED = "unchecked"
    DECIDED_NORMAL = "decided-normal"
    DEMO_PENDING_RELOAD = "decided-demo-pending-reload"
    DECIDED_DEMO = "decided-demo"

    @property
    def is_decided(self) -> bool:
        return self is not BootstrapState.UNCHECKED


# =============================================================================
# Dataclasses
# =============================================================================


@dataclass(frozen=True)
class LifecycleEvent:
    """A single dispatched lifecycle notification.

    ``persisted`` is only meaningful for PAGE_SHOW: True when the page was
    restored from the history cache rather than freshly loaded.
    """

    type: LifecycleEventType
    persisted: bool = False
