"""Preference Store: JSON file persistence of the theme.

Tests:
    - Missing, corrupt or non-object files load as "no preference"
    - save_theme writes the theme and keeps unrelated keys
    - init_preferences resolves persisted > system > light, and persists changes
"""

import json

from scholar.core.domain_types import Theme
from scholar.infrastructure.preference_store import JsonPreferenceStore, init_preferences


def test_missing_file_loads_empty(tmp_path):
    assert JsonPreferenceStore(tmp_path / "prefs.json").load() == {}


def test_corrupt_file_loads_empty(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonPreferenceStore(path).load() == {}


def test_non_object_file_loads_empty(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text('["dark"]', encoding="utf-8")
    assert JsonPreferenceStore(path).load() == {}


def test_save_theme_keeps_other_keys(tmp_path):
    path = tmp_path / "nested" / "prefs.json"
    path.parent.mkdir()
    path.write_text('{"font": "large"}', encoding="utf-8")

    JsonPreferenceStore(path).save_theme(Theme.DARK)
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "font": "large", "theme": "dark",
    }


def test_init_prefers_persisted_theme(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text('{"theme": "dark"}', encoding="utf-8")
    assert init_preferences(path, "light").theme == Theme.DARK


def test_init_uses_system_theme_without_persisted(tmp_path):
    assert init_preferences(tmp_path / "prefs.json", "dark").theme == Theme.DARK


def test_init_defaults_to_light(tmp_path):
    assert init_preferences(tmp_path / "prefs.json", None).theme == Theme.LIGHT


def test_set_theme_persists_across_restarts(tmp_path):
    path = tmp_path / "state" / "prefs.json"
    init_preferences(path, None).set_theme(Theme.DARK)
    assert init_preferences(path, "light").theme == Theme.DARK
