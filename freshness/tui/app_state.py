# SPDX-License-Identifier: MIT
"""State management dataclasses for the viewer app.

- RefreshRecord: one observed refresh generation
- ViewerState: top-level container for what the viewer displays
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from freshness.models import BootstrapState, SessionMode

MAX_REFRESH_HISTORY = 20


@dataclass
class RefreshRecord:
    """A refresh generation and when the viewer saw it."""

    generation: int
    at: datetime


@dataclass
class ViewerState:
    """Top-level viewer state.

    Mirrors the core's signals for rendering; the core objects stay the
    owners of the values.
    """

    bootstrap_state: BootstrapState = BootstrapState.UNCHECKED
    session_mode: SessionMode = SessionMode.NORMAL
    generation: int = 0
    last_refresh: Optional[datetime] = None
    history: List[RefreshRecord] = field(default_factory=list)

    def record_refresh(self, generation: int, at: Optional[datetime] = None) -> RefreshRecord:
        record = RefreshRecord(generation=generation, at=at or datetime.now())
        self.generation = generation
        self.last_refresh = record.at
        self.history.append(record)
        # Keep only the most recent entries
        del self.history[:-MAX_REFRESH_HISTORY]
        return record
