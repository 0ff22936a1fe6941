"""Presentation Preferences: verifies theme resolution and the single setter.

Tests:
    - Persisted theme wins over the system signal; LIGHT is the last resort
    - Invalid persisted values are ignored
    - set_theme/toggle persist through the injected callable
"""

import pytest

from scholar.core.domain_types import Theme
from scholar.core.preferences import PreferenceState, resolve_initial_theme


@pytest.mark.parametrize("persisted, system, expected", [
    ("dark", "light", Theme.DARK),
    ("light", "dark", Theme.LIGHT),
    (None, "dark", Theme.DARK),
    ("purple", "dark", Theme.DARK),
    (None, None, Theme.LIGHT),
    ("", "sepia", Theme.LIGHT),
])
def test_resolve_initial_theme(persisted, system, expected):
    assert resolve_initial_theme(persisted, system) == expected


def test_set_theme_persists():
    saved = []
    state = PreferenceState(Theme.LIGHT, persist=saved.append)
    assert state.set_theme(Theme.DARK) == Theme.DARK
    assert state.theme == Theme.DARK
    assert saved == [Theme.DARK]


def test_set_theme_accepts_raw_value():
    state = PreferenceState(Theme.LIGHT)
    assert state.set_theme("dark") == Theme.DARK


def test_toggle_flips_theme():
    saved = []
    state = PreferenceState(Theme.DARK, persist=saved.append)
    assert state.toggle() == Theme.LIGHT
    assert state.toggle() == Theme.DARK
    assert saved == [Theme.LIGHT, Theme.DARK]
