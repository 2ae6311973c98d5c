#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Textual report viewer hosting the freshness core.

Maps terminal lifecycle to the core's browser-style signals:
- AppFocus / AppBlur         -> visibility visible / hidden (and focus)
- HistoryScreen closed       -> pageshow with persisted=True
- Reconnected message        -> online
- App.set_interval           -> the coordinator's repeating timer
- exit(RELOAD_RESULT)        -> full page reload (the launcher restarts us)

Data-fetching widgets listen for RefreshRequested and re-run their query
whenever the generation changes.
"""

from datetime import datetime
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.message import Message
from textual.screen import ModalScreen, Screen
from textual.widgets import Button, Footer, Header, Static

from freshness.bootstrap import QueryParams, SessionModeBootstrapper
from freshness.config import ViewerSettings
from freshness.coordinator import RefreshCoordinator
from freshness.events import LifecycleHost
from freshness.locale import LocaleContext
from freshness.models import BootstrapState, Locale, SessionMode, Visibility
from freshness.reload import RELOAD_RESULT, PageReloader
from freshness.storage import SessionStorage
from freshness.tui.app_state import ViewerState


# Viewer chrome only; report strings come from the rendering layer's tables
VIEWER_STRINGS = {
    "title": {"ja": "レポートビューア", "en": "Report Viewer"},
    "sessionMode": {"ja": "モード", "en": "Mode"},
    "normal": {"ja": "通常", "en": "Normal"},
    "demo": {"ja": "デモ", "en": "Demo"},
    "generation": {"ja": "更新世代", "en": "Refresh generation"},
    "lastRefresh": {"ja": "最終更新", "en": "Last refresh"},
    "never": {"ja": "未更新", "en": "Never"},
    "history": {"ja": "更新履歴", "en": "Refresh History"},
    "noHistory": {"ja": "履歴はありません", "en": "No refreshes yet"},
    "close": {"ja": "閉じる", "en": "Close"},
    "language": {"ja": "言語", "en": "Language"},
}


class Reconnected(Message):
    """Network connectivity came back (posted by the data client)."""


class RefreshRequested(Message):
    """The refresh generation changed; consumers should re-fetch."""

    def __init__(self, generation: int) -> None:
        super().__init__()
        self.generation = generation


class HistoryScreen(ModalScreen):
    """Refresh history. Closing it restores the report screen from cache."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close"),
        Binding("h", "dismiss", "Close", show=False),
    ]

    def compose(self) -> ComposeResult:
        app = self.app
        t = app.locale_context.t
        with Vertical(id="history-modal"):
            yield Static(f"[bold]{t('history')}[/bold]", classes="modal-title")
            with VerticalScroll(id="history-content"):
                if not app.state.history:
                    yield Static(f"[dim]{t('noHistory')}[/dim]")
                for record in reversed(app.state.history):
                    yield Static(f"#{record.generation}  {record.at.strftime('%H:%M:%S')}")
            yield Button(t("close"), id="close-history", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "close-history":
            self.dismiss()


class ReportScreen(Screen):
    """Main report screen; resuming it from the history screen is a restore."""

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="status-panel"):
            yield Static("", id="session-mode")
            yield Static("", id="generation")
            yield Static("", id="last-refresh")
            yield Static("", id="language")
        yield Footer()

    def on_mount(self) -> None:
        self.app.update_status()

    def on_screen_resume(self, event: events.ScreenResume) -> None:
        self.app.report_resumed()


class ReportViewerApp(App):
    """
    Report viewer shell around the freshness core.

    Bootstraps the session mode first; if that requests a reload the app
    exits with RELOAD_RESULT before the coordinator is ever mounted.
    """

    CSS_PATH = "styles/app.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("l", "toggle_language", "Language"),
        Binding("h", "show_history", "History"),
    ]

    def __init__(
        self,
        url: Optional[QueryParams] = None,
        storage: Optional[SessionStorage] = None,
        settings: Optional[ViewerSettings] = None,
    ) -> None:
        """
        Initialize the app.

        Args:
            url: Navigation URL, query string, or query mapping for this load
            storage: Session storage shared across reloads (owned by the launcher)
            settings: Viewer settings (default: read from settings.json)
        """
        super().__init__()
        self.url = url
        self.settings = settings or ViewerSettings.load()
        self.storage = storage if storage is not None else SessionStorage()
        self.state = ViewerState()

        self.host = LifecycleHost()
        self.reloader = PageReloader(action=self._exit_for_reload)
        self.bootstrapper = SessionModeBootstrapper(
            self.storage, self.reloader, param=self.settings.demo_param
        )
        self.locale_context = LocaleContext(
            default=self.settings.default_locale, translations=VIEWER_STRINGS
        )
        self.coordinator = RefreshCoordinator(
            self.host,
            scheduler=self,
            interval=self.settings.refresh_interval,
            include_focus=self.settings.refresh_on_focus,
            reloader=self.reloader,
            reload_on_restore=self.settings.reload_on_restore,
        )
        self.report_screen = ReportScreen()
        self._restore_pending = False
        self._unwatch = None
        self._unsubscribe_locale = None

    def get_default_screen(self) -> Screen:
        return self.report_screen

    def on_mount(self) -> None:
        """Run the session bootstrap, then start the coordinator."""
        self.state.bootstrap_state = self.bootstrapper.run(self.url)
        if self.state.bootstrap_state is BootstrapState.DEMO_PENDING_RELOAD:
            return

        self.state.session_mode = self.bootstrapper.session_mode
        self._unwatch = self.coordinator.watch(self._on_generation)
        self._unsubscribe_locale = self.locale_context.subscribe(self._on_locale_changed)
        self.coordinator.mount()
        self.update_status()
        self.call_after_refresh(self.update_status)

    def on_unmount(self) -> None:
        self.teardown()

    def teardown(self) -> None:
        """Detach from the core. Safe to call more than once."""
        self.coordinator.unmount()
        if self._unwatch is not None:
            self._unwatch()
            self._unwatch = None
        if self._unsubscribe_locale is not None:
            self._unsubscribe_locale()
            self._unsubscribe_locale = None

    def _exit_for_reload(self) -> None:
        self.teardown()
        self.exit(RELOAD_RESULT)

    # -------------------------------------------------------------------------
    # Lifecycle signals
    # -------------------------------------------------------------------------

    def on_app_focus(self, event: events.AppFocus) -> None:
        self.host.set_visibility(Visibility.VISIBLE)
        self.host.focus()

    def on_app_blur(self, event: events.AppBlur) -> None:
        self.host.set_visibility(Visibility.HIDDEN)

    def on_reconnected(self, message: Reconnected) -> None:
        self.host.go_online()

    def report_resumed(self) -> None:
        """Called by ReportScreen; only leaving the history screen is a restore."""
        persisted = self._restore_pending
        self._restore_pending = False
        self.host.page_show(persisted=persisted)

    # -------------------------------------------------------------------------
    # Core callbacks
    # -------------------------------------------------------------------------

    def _on_generation(self, generation: int) -> None:
        self.state.record_refresh(generation, datetime.now())
        self.post_message(RefreshRequested(generation))
        self.update_status()

    def _on_locale_changed(self, locale: Locale) -> None:
        self.update_status()

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def action_toggle_language(self) -> None:
        locale = self.locale_context.toggle()
        self.notify(f"{self.locale_context.t('language')}: {locale.value}")

    def action_show_history(self) -> None:
        self._restore_pending = True
        self.push_screen(HistoryScreen())

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def update_status(self) -> None:
        t = self.locale_context.t
        self.title = t("title")
        mode_key = "demo" if self.state.session_mode is SessionMode.DEMO else "normal"
        last = (
            self.state.last_refresh.strftime("%H:%M:%S")
            if self.state.last_refresh
            else t("never")
        )
        try:
            screen = self.report_screen
            screen.query_one("#session-mode", Static).update(
                f"[bold]{t('sessionMode')}:[/bold] {t(mode_key)}"
            )
            screen.query_one("#generation", Static).update(
                f"[bold]{t('generation')}:[/bold] {self.state.generation}"
            )
            screen.query_one("#last-refresh", Static).update(
                f"[bold]{t('lastRefresh')}:[/bold] {last}"
            )
            screen.query_one("#language", Static).update(
                f"[bold]{t('language')}:[/bold] {self.locale_context.locale.value}"
            )
        except NoMatches:
            # Report screen not composed yet; the next update catches up
            pass
