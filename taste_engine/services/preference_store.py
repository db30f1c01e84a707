"""
Preference store: explicit user preferences (dietary restrictions, favorite
cuisines, cooking skill). Owned by the profile/settings service; the engine
only reads it.
"""

import threading
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from ..models.preferences import UserPreferences
from .json_file import read_json


class PreferenceStore(Protocol):
    """Protocol for preference reads."""

    def get_user_preferences(self, user_id: str) -> Optional[UserPreferences]:
        """Return the user's preferences, or None when they never set any."""
        ...


class InMemoryPreferenceStore:
    def __init__(self, preferences: Optional[Dict[str, Union[Dict, UserPreferences]]] = None):
        self._prefs: Dict[str, UserPreferences] = {}
        self._lock = threading.Lock()
        for user_id, prefs in (preferences or {}).items():
            self.set_user_preferences(user_id, prefs)

    def set_user_preferences(self, user_id: str, prefs: Union[Dict, UserPreferences]) -> None:
        model = UserPreferences.model_validate(prefs) if isinstance(prefs, dict) else prefs
        with self._lock:
            self._prefs[user_id] = model

    def get_user_preferences(self, user_id: str) -> Optional[UserPreferences]:
        with self._lock:
            return self._prefs.get(user_id)


class JsonPreferenceStore(InMemoryPreferenceStore):
    """Preferences loaded from {"preferences": {user_id: {...}}}."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        data = read_json(self._path, default={})
        prefs = data.get("preferences", data) if isinstance(data, dict) else {}
        super().__init__(prefs)
