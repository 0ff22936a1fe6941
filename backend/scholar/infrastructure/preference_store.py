"""Preference Store: JSON file persistence for presentation preferences.

Invariants:
    - load() never raises: a missing or unreadable file means "no preference"
    - save() writes the whole document (currently only "theme")
"""

import json
import logging
from pathlib import Path

from scholar.core.domain_types import Theme
from scholar.core.preferences import PreferenceState, resolve_initial_theme

logger = logging.getLogger(__name__)


class JsonPreferenceStore:
    """Reads and writes preferences.json."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable preferences at %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def save_theme(self, theme: Theme) -> None:
        data = self.load()
        data["theme"] = theme.value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def init_preferences(path: str | Path, system_theme: str | None) -> PreferenceState:
    """Build the process-wide PreferenceState (called once at startup)."""
    store = JsonPreferenceStore(path)
    theme = resolve_initial_theme(store.load().get("theme"), system_theme)
    logger.info("Preferences initialized (theme=%s)", theme.value)
    return PreferenceState(theme, persist=store.save_theme)
