"""Presentation Preferences: explicit process-wide theme state.

Invariants:
    - PreferenceState is initialized once, from the persisted preference if it
      is a valid theme, else from the system signal, else LIGHT
    - set_theme() is the only mutation entry point; readers use .theme
    - Persistence is delegated to the injected `persist` callable
"""

from collections.abc import Callable

from scholar.core.domain_types import Theme


def resolve_initial_theme(persisted: str | None, system_theme: str | None) -> Theme:
    """Persisted preference wins, then the system signal, then LIGHT."""
    for candidate in (persisted, system_theme):
        if candidate in (Theme.LIGHT.value, Theme.DARK.value):
            return Theme(candidate)
    return Theme.LIGHT


class PreferenceState:
    """Holds the current theme; written only through set_theme()."""

    def __init__(
        self, theme: Theme, persist: Callable[[Theme], None] | None = None,
    ) -> None:
        self._theme = theme
        self._persist = persist

    @property
    def theme(self) -> Theme:
        return self._theme

    def set_theme(self, theme: Theme) -> Theme:
        self._theme = Theme(theme)
        if self._persist is not None:
            self._persist(self._theme)
        return self._theme

    def toggle(self) -> Theme:
        return self.set_theme(
            Theme.LIGHT if self._theme == Theme.DARK else Theme.DARK,
        )
