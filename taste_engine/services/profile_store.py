"""
Taste profile store: one TasteProfile per user, replaced wholesale on upsert.

Concurrent upserts on the same user are last-writer-wins.
"""

import threading
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from ..models.profile import TasteProfile
from .json_file import read_json, write_json_atomic


class ProfileStore(Protocol):
    """Protocol for taste profile persistence."""

    def get_taste_profile(self, user_id: str) -> Optional[TasteProfile]:
        ...

    def upsert_taste_profile(self, profile: TasteProfile) -> None:
        """Insert or replace the profile keyed by profile.user_id. Raise StorageError on failure."""
        ...


class InMemoryProfileStore:
    def __init__(self):
        self._profiles: Dict[str, TasteProfile] = {}
        self._lock = threading.Lock()

    def _persist(self) -> None:
        """Hook for file-backed subclasses; called with the lock held."""

    def get_taste_profile(self, user_id: str) -> Optional[TasteProfile]:
        with self._lock:
            profile = self._profiles.get(user_id)
        return profile.model_copy(deep=True) if profile is not None else None

    def upsert_taste_profile(self, profile: TasteProfile) -> None:
        with self._lock:
            previous = self._profiles.get(profile.user_id)
            self._profiles[profile.user_id] = profile.model_copy(deep=True)
            try:
                self._persist()
            except Exception:
                if previous is None:
                    self._profiles.pop(profile.user_id, None)
                else:
                    self._profiles[profile.user_id] = previous
                raise


class JsonProfileStore(InMemoryProfileStore):
    """Profiles persisted as {"profiles": {user_id: {...}}}."""

    def __init__(self, path: Union[Path, str]):
        super().__init__()
        self._path = Path(path)
        data = read_json(self._path, default={"profiles": {}})
        for user_id, row in (data.get("profiles") or {}).items():
            row = dict(row)
            row.setdefault("user_id", user_id)
            self._profiles[user_id] = TasteProfile.model_validate(row)

    def _persist(self) -> None:
        write_json_atomic(
            self._path,
            {"profiles": {uid: p.model_dump(mode="json") for uid, p in self._profiles.items()}},
        )
