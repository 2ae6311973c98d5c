# SPDX-License-Identifier: MIT
"""Tests for the lifecycle host, schedulers, storage, and reload primitive."""

import pytest

from freshness.events import LifecycleHost, ManualScheduler
from freshness.models import LifecycleEvent, LifecycleEventType, Visibility
from freshness.reload import PageReloader
from freshness.storage import SessionStorage


class TestLifecycleHost:
    """Listener registration and dispatch."""

    def test_dispatch_in_registration_order(self):
        host = LifecycleHost()
        calls = []
        host.add_listener(LifecycleEventType.ONLINE, lambda e: calls.append("a"))
        host.add_listener(LifecycleEventType.ONLINE, lambda e: calls.append("b"))

        assert host.go_online() == 2
        assert calls == ["a", "b"]

    def test_same_handler_registered_once(self):
        host = LifecycleHost()
        calls = []
        handler = calls.append
        host.add_listener(LifecycleEventType.ONLINE, handler)
        host.add_listener(LifecycleEventType.ONLINE, handler)

        host.go_online()
        assert len(calls) == 1

    def test_remove_listener(self):
        host = LifecycleHost()
        calls = []
        host.add_listener(LifecycleEventType.FOCUS, calls.append)
        host.remove_listener(LifecycleEventType.FOCUS, calls.append)
        host.remove_listener(LifecycleEventType.FOCUS, calls.append)

        assert host.focus() == 0
        assert calls == []

    def test_handler_removing_itself_does_not_skip_others(self):
        host = LifecycleHost()
        calls = []

        def once(event):
            calls.append("once")
            host.remove_listener(LifecycleEventType.ONLINE, once)

        host.add_listener(LifecycleEventType.ONLINE, once)
        host.add_listener(LifecycleEventType.ONLINE, lambda e: calls.append("always"))

        host.go_online()
        host.go_online()
        assert calls == ["once", "always", "always"]

    def test_unsupported_type_refused(self):
        host = LifecycleHost(supported=[LifecycleEventType.PAGE_SHOW])
        assert host.add_listener(LifecycleEventType.ONLINE, lambda e: None) is False
        assert host.listener_count() == 0

    def test_pageshow_carries_persisted(self):
        host = LifecycleHost()
        seen = []
        host.add_listener(LifecycleEventType.PAGE_SHOW, seen.append)

        host.page_show(persisted=True)
        host.page_show(persisted=False)

        assert seen == [
            LifecycleEvent(LifecycleEventType.PAGE_SHOW, persisted=True),
            LifecycleEvent(LifecycleEventType.PAGE_SHOW, persisted=False),
        ]

    def test_set_visibility_only_fires_on_change(self):
        host = LifecycleHost(visibility=Visibility.VISIBLE)
        seen = []
        host.add_listener(LifecycleEventType.VISIBILITY_CHANGE, seen.append)

        assert host.set_visibility(Visibility.VISIBLE) == 0
        assert host.set_visibility(Visibility.HIDDEN) == 1
        assert host.visibility_state is Visibility.HIDDEN
        assert len(seen) == 1


class TestManualScheduler:
    """Deterministic interval timers."""

    def test_fires_at_each_interval(self):
        scheduler = ManualScheduler()
        ticks = []
        scheduler.set_interval(10, lambda: ticks.append(scheduler.now))

        assert scheduler.advance(35) == 3
        assert ticks == [10, 20, 30]
        assert scheduler.now == 35

    def test_stopped_timer_never_fires(self):
        scheduler = ManualScheduler()
        ticks = []
        timer = scheduler.set_interval(10, lambda: ticks.append(1))
        timer.stop()

        assert scheduler.advance(100) == 0
        assert ticks == []
        assert scheduler.active_timers == []

    def test_timer_stopping_itself(self):
        scheduler = ManualScheduler()
        ticks = []

        def tick():
            ticks.append(scheduler.now)
            timer.stop()

        timer = scheduler.set_interval(5, tick)
        scheduler.advance(50)
        assert ticks == [5]

    def test_interleaves_timers_by_due_time(self):
        scheduler = ManualScheduler()
        order = []
        scheduler.set_interval(3, lambda: order.append("a"))
        scheduler.set_interval(5, lambda: order.append("b"))

        scheduler.advance(10)
        assert order == ["a", "b", "a", "a", "b"]

    def test_rejects_non_positive_interval(self):
        with pytest.raises(ValueError):
            ManualScheduler().set_interval(0, lambda: None)


class TestSessionStorage:
    """sessionStorage-like behavior."""

    def test_get_missing_is_none(self):
        assert SessionStorage().get_item("nope") is None

    def test_values_are_strings(self):
        storage = SessionStorage()
        storage.set_item("n", 5)
        assert storage.get_item("n") == "5"

    def test_remove_and_clear(self):
        storage = SessionStorage({"a": "1", "b": "2"})
        storage.remove_item("a")
        storage.remove_item("a")
        assert "a" not in storage
        assert list(storage) == ["b"]
        storage.clear()
        assert len(storage) == 0


class TestPageReloader:
    """Full reload primitive."""

    def test_counts_and_runs_action(self):
        calls = []
        reloader = PageReloader(action=lambda: calls.append("reload"))

        reloader.request("first")
        reloader.request("second")

        assert reloader.count == 2
        assert reloader.last_reason == "second"
        assert calls == ["reload", "reload"]

    def test_without_action_only_records(self, debug_log):
        reloader = PageReloader()
        reloader.request("demo mode requested")
        assert reloader.count == 1
        assert '"reload_requested"' in debug_log.read_text()
