# SPDX-License-Identifier: MIT
"""Session-scoped key/value storage.

One SessionStorage instance stands for one browser tab session: it survives
page reloads (the launcher keeps it across app restarts) and disappears when
the session ends. Keys and values are strings, as in sessionStorage.
"""
from typing import Dict, Iterator, Optional


class SessionStorage:
    """In-memory string store whose lifetime is the tab session."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)
