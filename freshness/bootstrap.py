#!/usr/bin/env python3
# SPDX-License-Identifier: MIT
"""
Session mode bootstrapper.

Runs once per page load, before anything else, to decide whether the
session uses demo data. The first load that carries ``?demo=true`` records
the choice in session storage and forces a full reload so every module
initializes under the same mode. The reloaded page finds the record and
takes no further action, so the reload fires at most once per transition
into demo mode.

States:
    unchecked -> decided-normal
    unchecked -> decided-demo-pending-reload -> (after reload) decided-demo

A load without the query signal never writes or clears the record; leaving
demo mode is not handled here.
"""

from typing import Mapping, Optional, Sequence, Union
from urllib.parse import parse_qs, urlsplit

from freshness.debug_logger import get_logger
from freshness.models import (
    DEFAULT_DEMO_PARAM,
    DEMO_MODE_STORAGE_KEY,
    DEMO_MODE_STORAGE_VALUE,
    DEMO_PARAM_VALUE,
    BootstrapState,
    SessionMode,
)
from freshness.reload import PageReloader
from freshness.storage import SessionStorage

QueryParams = Union[str, Mapping[str, Union[str, Sequence[str]]]]


def parse_query(query: Optional[QueryParams]) -> dict:
    """Normalize a URL, raw query string, or mapping to ``{name: first_value}``."""
    if query is None:
        return {}
    if isinstance(query, str):
        text = query
        if "?" in text or "://" in text:
            text = urlsplit(text).query
        return {k: v[0] for k, v in parse_qs(text.lstrip("?"), keep_blank_values=True).items()}

    params = {}
    for key, value in query.items():
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            value = value[0]
        params[key] = value
    return params


class SessionModeBootstrapper:
    """Decides and records the session mode for one page load."""

    def __init__(
        self,
        storage: SessionStorage,
        reloader: PageReloader,
        param: str = DEFAULT_DEMO_PARAM,
    ) -> None:
        self.storage = storage
        self.reloader = reloader
        self.param = param
        self.state = BootstrapState.UNCHECKED

    @property
    def session_mode(self) -> SessionMode:
        """Mode recorded for this session (demo once the record exists)."""
        if self.storage.get_item(DEMO_MODE_STORAGE_KEY) == DEMO_MODE_STORAGE_VALUE:
            return SessionMode.DEMO
        return SessionMode.NORMAL

    def demo_requested(self, query: Optional[QueryParams]) -> bool:
        return parse_query(query).get(self.param) == DEMO_PARAM_VALUE

    def run(self, query: Optional[QueryParams]) -> BootstrapState:
        """Inspect the navigation query and settle the session mode.

        Returns:
            The resulting state. DEMO_PENDING_RELOAD means a reload was
            requested and the caller must not continue initializing.
        """
        requested = self.demo_requested(query)
        had_record = bool(self.storage.get_item(DEMO_MODE_STORAGE_KEY))

        if requested and not had_record:
            self.storage.set_item(DEMO_MODE_STORAGE_KEY, DEMO_MODE_STORAGE_VALUE)
            self.state = BootstrapState.DEMO_PENDING_RELOAD
            get_logger().bootstrap_decision(self.state.value, requested, had_record)
            self.reloader.request("demo mode requested")
            return self.state

        if self.session_mode is SessionMode.DEMO:
            self.state = BootstrapState.DECIDED_DEMO
        else:
            self.state = BootstrapState.DECIDED_NORMAL
        get_logger().bootstrap_decision(self.state.value, requested, had_record)
        return self.state
