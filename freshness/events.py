#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Lifecycle host and timer facilities consumed by the refresh coordinator.

LifecycleHost plays the role of the browser's document/window pair: it keeps
the current visibility state and dispatches lifecycle events to listeners in
registration order. Schedulers provide the repeating timer; a Textual App
satisfies the same ``set_interval(interval, callback) -> timer`` shape, and
ManualScheduler advances time explicitly for headless hosts and tests.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Protocol

from freshness.models import LifecycleEvent, LifecycleEventType, Visibility

EventHandler = Callable[[LifecycleEvent], None]


class TimerHandle(Protocol):
    def stop(self) -> None: ...


class Scheduler(Protocol):
    def set_interval(self, interval: float, callback: Callable[[], None]) -> TimerHandle: ...


class LifecycleHost:
    """Event target for lifecycle notifications.

    A host constructed with ``supported`` only accepts listeners for those
    event types; listeners for anything else are refused so callers can treat
    the source as missing.
    """

    def __init__(
        self,
        supported: Optional[Iterable[LifecycleEventType]] = None,
        visibility: Visibility = Visibility.VISIBLE,
    ) -> None:
        self.supported: FrozenSet[LifecycleEventType] = frozenset(
            supported if supported is not None else LifecycleEventType
        )
        self.visibility_state = visibility
        self._listeners: Dict[LifecycleEventType, List[EventHandler]] = {}

    def supports(self, event_type: LifecycleEventType) -> bool:
        return event_type in self.supported

    def add_listener(self, event_type: LifecycleEventType, handler: EventHandler) -> bool:
        """Register handler for event_type. Returns False if unsupported."""
        if not self.supports(event_type):
            return False
        handlers = self._listeners.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
        return True

    def remove_listener(self, event_type: LifecycleEventType, handler: EventHandler) -> None:
        handlers = self._listeners.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event_type: Optional[LifecycleEventType] = None) -> int:
        if event_type is not None:
            return len(self._listeners.get(event_type, []))
        return sum(len(h) for h in self._listeners.values())

    def dispatch(self, event: LifecycleEvent) -> int:
        """Deliver event to its listeners. Returns the number of handlers run."""
        # Copy so a handler that unsubscribes doesn't skip its neighbours
        handlers = list(self._listeners.get(event.type, []))
        for handler in handlers:
            handler(event)
        return len(handlers)

    # Convenience dispatchers matching the platform notifications

    def set_visibility(self, visibility: Visibility) -> int:
        """Update visibility state and fire visibilitychange if it changed."""
        if visibility == self.visibility_state:
            return 0
        self.visibility_state = visibility
        return self.dispatch(LifecycleEvent(LifecycleEventType.VISIBILITY_CHANGE))

    def page_show(self, persisted: bool) -> int:
        return self.dispatch(LifecycleEvent(LifecycleEventType.PAGE_SHOW, persisted=persisted))

    def go_online(self) -> int:
        return self.dispatch(LifecycleEvent(LifecycleEventType.ONLINE))

    def focus(self) -> int:
        return self.dispatch(LifecycleEvent(LifecycleEventType.FOCUS))


@dataclass
class ManualTimer:
    """Interval timer owned by a ManualScheduler."""

    interval: float
    callback: Callable[[], None]
    next_due: float
    active: bool = True

    def stop(self) -> None:
        self.active = False


@dataclass
class ManualScheduler:
    """Deterministic scheduler: time only moves when advance() is called."""

    now: float = 0.0
    timers: List[ManualTimer] = field(default_factory=list)

    def set_interval(self, interval: float, callback: Callable[[], None]) -> ManualTimer:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        timer = ManualTimer(interval=interval, callback=callback, next_due=self.now + interval)
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self) -> List[ManualTimer]:
        return [t for t in self.timers if t.active]

    def advance(self, seconds: float) -> int:
        """Move time forward, firing due timers in due order. Returns fire count."""
        target = self.now + seconds
        fired = 0
        while True:
            due = [t for t in self.timers if t.active and t.next_due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.next_due)
            self.now = timer.next_due
            timer.next_due += timer.interval
            timer.callback()
            fired += 1
        self.now = target
        self.timers = self.active_timers
        return fired
