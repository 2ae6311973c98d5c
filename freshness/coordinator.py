#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Lifecycle refresh coordinator.

Translates heterogeneous lifecycle signals into one refresh generation
counter. Consumers treat any change of ``generation`` as "data may be
stale, re-fetch". Triggers are neither debounced nor coalesced: two
signals in the same tick give two increments.

Default triggers:
- visibilitychange that leaves the host visible
- pageshow with persisted=True (history-cache restore)
- online
- a repeating interval timer (60 s)

All subscriptions are described by one list of Subscription records that is
registered and torn down as a unit, so unmount can never miss a source.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from freshness.debug_logger import get_logger
from freshness.events import LifecycleHost, Scheduler, TimerHandle
from freshness.models import (
    DEFAULT_REFRESH_INTERVAL_SECONDS,
    LifecycleEvent,
    LifecycleEventType,
    RefreshTrigger,
    Visibility,
)
from freshness.reload import PageReloader

GenerationWatcher = Callable[[int], None]


@dataclass(frozen=True)
class Subscription:
    """One event source feeding the coordinator.

    ``event_type`` is None for the interval timer, which is owned by the
    scheduler rather than the lifecycle host; its handler is called with
    no arguments.
    """

    trigger: RefreshTrigger
    event_type: Optional[LifecycleEventType]
    handler: Callable[..., None]


class RefreshCoordinator:
    """Owns the refresh generation for one mounted view."""

    def __init__(
        self,
        host: LifecycleHost,
        scheduler: Optional[Scheduler] = None,
        interval: float = DEFAULT_REFRESH_INTERVAL_SECONDS,
        include_focus: bool = False,
        reloader: Optional[PageReloader] = None,
        reload_on_restore: bool = False,
    ) -> None:
        """
        Args:
            host: Lifecycle event source
            scheduler: Repeating timer facility; None leaves the interval
                trigger inert
            interval: Seconds between interval refreshes
            include_focus: Also refresh whenever the host gains focus
            reloader: Full-reload primitive, used only with reload_on_restore
            reload_on_restore: Hard-reload on history-cache restore instead of
                relying on the generation bump alone

        Raises:
            ValueError: If interval is not positive
        """
        if not interval > 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.host = host
        self.scheduler = scheduler
        self.interval = interval
        self.include_focus = include_focus
        self.reloader = reloader
        self.reload_on_restore = reload_on_restore

        self._generation = 0
        self._active = False
        self._subscriptions: List[Subscription] = []
        self._timer: Optional[TimerHandle] = None
        self._watchers: List[GenerationWatcher] = []
        self.trigger_counts: Dict[RefreshTrigger, int] = {}

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def subscriptions(self) -> List[Subscription]:
        return list(self._subscriptions)

    def watch(self, callback: GenerationWatcher) -> Callable[[], None]:
        """Call ``callback(generation)`` after every increment.

        Returns:
            A function that removes the watcher.
        """
        self._watchers.append(callback)

        def unwatch() -> None:
            if callback in self._watchers:
                self._watchers.remove(callback)

        return unwatch

    def mount(self) -> None:
        """Start listening. The generation restarts at 0.

        Either every available source is attached or, if one raises, none
        stay attached and the coordinator remains unmounted.
        """
        if self._active:
            raise RuntimeError("RefreshCoordinator is already mounted")

        attached: List[Subscription] = []
        inert: List[str] = []
        try:
            for sub in self._build_subscriptions():
                if self._register(sub):
                    attached.append(sub)
                else:
                    inert.append(sub.trigger.value)
        except Exception as e:
            for sub in attached:
                self._unregister(sub)
            get_logger().error("coordinator_mount", str(e))
            raise

        self._generation = 0
        self.trigger_counts = {}
        self._subscriptions = attached
        self._active = True

        get_logger().coordinator_mounted(
            [s.trigger.value for s in self._subscriptions], inert, self.interval
        )

    def unmount(self) -> None:
        """Stop listening. Safe to call more than once."""
        if not self._active:
            return
        self._active = False

        for sub in self._subscriptions:
            self._unregister(sub)
        self._subscriptions = []

        get_logger().coordinator_unmounted(
            self._generation, {t.value: n for t, n in self.trigger_counts.items()}
        )

    def __enter__(self) -> "RefreshCoordinator":
        self.mount()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unmount()

    # -------------------------------------------------------------------------
    # Triggers
    # -------------------------------------------------------------------------

    def _build_subscriptions(self) -> List[Subscription]:
        subs = [
            Subscription(
                RefreshTrigger.VISIBILITY,
                LifecycleEventType.VISIBILITY_CHANGE,
                self._on_visibility_change,
            ),
            Subscription(RefreshTrigger.PAGE_SHOW, LifecycleEventType.PAGE_SHOW, self._on_page_show),
            Subscription(RefreshTrigger.ONLINE, LifecycleEventType.ONLINE, self._on_online),
        ]
        if self.include_focus:
            subs.append(Subscription(RefreshTrigger.FOCUS, LifecycleEventType.FOCUS, self._on_focus))
        subs.append(Subscription(RefreshTrigger.INTERVAL, None, self._on_interval))
        return subs

    def _register(self, sub: Subscription) -> bool:
        """Attach one subscription. False means the source is unavailable."""
        if sub.event_type is None:
            if self.scheduler is None:
                return False
            self._timer = self.scheduler.set_interval(self.interval, sub.handler)
            return True
        return self.host.add_listener(sub.event_type, sub.handler)

    def _unregister(self, sub: Subscription) -> None:
        if sub.event_type is None:
            if self._timer is not None:
                self._timer.stop()
                self._timer = None
            return
        self.host.remove_listener(sub.event_type, sub.handler)

    def _on_visibility_change(self, event: LifecycleEvent) -> None:
        if self.host.visibility_state == Visibility.VISIBLE:
            self._trigger(RefreshTrigger.VISIBILITY)

    def _on_page_show(self, event: LifecycleEvent) -> None:
        if not event.persisted:
            return
        if not self._active:
            return
        hard_reload = self.reload_on_restore and self.reloader is not None
        get_logger().restore_detected(hard_reload)
        self._trigger(RefreshTrigger.PAGE_SHOW)
        if hard_reload:
            self.reloader.request("history-cache restore")

    def _on_online(self, event: LifecycleEvent) -> None:
        self._trigger(RefreshTrigger.ONLINE)

    def _on_focus(self, event: LifecycleEvent) -> None:
        self._trigger(RefreshTrigger.FOCUS)

    def _on_interval(self, event: Optional[LifecycleEvent] = None) -> None:
        self._trigger(RefreshTrigger.INTERVAL)

    def _trigger(self, trigger: RefreshTrigger) -> None:
        # Leaked handler references must not mutate after unmount
        if not self._active:
            return
        self._generation += 1
        self.trigger_counts[trigger] = self.trigger_counts.get(trigger, 0) + 1
        get_logger().refresh_triggered(trigger.value, self._generation)
        for watcher in list(self._watchers):
            watcher(self._generation)
