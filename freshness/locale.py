# SPDX-License-Identifier: MIT
"""Locale context: the single active display language.

Any number of readers may subscribe; the user toggle is the only writer.
Writes happen on the UI thread, so the last write wins and subscribers are
notified synchronously before set_locale() returns.
"""
from typing import Callable, Iterable, List, Mapping, Optional, Tuple, Union

from freshness.debug_logger import get_logger
from freshness.models import DEFAULT_LOCALE, Locale

LocaleListener = Callable[[Locale], None]
Translations = Mapping[str, Mapping[str, str]]


class LocaleContext:
    """Holds the active locale and an optional string table for t()."""

    def __init__(
        self,
        default: Union[Locale, str] = DEFAULT_LOCALE,
        supported: Iterable[Locale] = tuple(Locale),
        translations: Optional[Translations] = None,
    ) -> None:
        self.supported: Tuple[Locale, ...] = tuple(supported)
        if not self.supported:
            raise ValueError("LocaleContext needs at least one supported locale")
        self._locale = self._coerce(default)
        self.translations: Translations = translations or {}
        self._listeners: List[LocaleListener] = []

    def _coerce(self, value: Union[Locale, str]) -> Locale:
        try:
            locale = Locale(value)
        except ValueError:
            raise ValueError(f"Unsupported locale: {value!r}") from None
        if locale not in self.supported:
            raise ValueError(f"Unsupported locale: {value!r}")
        return locale

    @property
    def locale(self) -> Locale:
        return self._locale

    def set_locale(self, value: Union[Locale, str]) -> bool:
        """Replace the active locale.

        Returns:
            True if the value changed (and listeners were notified).
        """
        locale = self._coerce(value)
        if locale == self._locale:
            return False
        old = self._locale
        self._locale = locale
        get_logger().locale_changed(old.value, locale.value)
        for listener in list(self._listeners):
            listener(locale)
        return True

    def toggle(self) -> Locale:
        """Switch to the next supported locale (the language toggle action)."""
        index = self.supported.index(self._locale)
        self.set_locale(self.supported[(index + 1) % len(self.supported)])
        return self._locale

    def subscribe(self, listener: LocaleListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def t(self, key: str) -> str:
        """Translate key for the active locale; unknown keys come back as-is."""
        entry = self.translations.get(key)
        if not entry:
            return key
        return entry.get(self._locale.value, key)

