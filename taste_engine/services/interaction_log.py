"""
Interaction Log abstraction.

Append-only log of user interactions with recipes. The engine reads a user's
recent events for profiling and behavior scoring, reads per-recipe counts for
social and trending scores, and appends on the tracking write path.
Implementations: in-memory and JSON file.
"""

import threading
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Collection, Dict, Iterable, List, Optional, Protocol, Union

from ..models.interaction import InteractionEvent, ensure_interactions
from ..utils.scores import ensure_utc
from .json_file import read_json, write_json_atomic


class InteractionLog(Protocol):
    """Protocol for interaction reads and appends."""

    def get_user_interactions(
        self,
        user_id: str,
        since: Optional[datetime] = None,
    ) -> List[InteractionEvent]:
        """Events for the user created at or after since, most recent first."""
        ...

    def record_interaction(self, event: InteractionEvent) -> None:
        """Append one event."""
        ...

    def count_recipe_interactions(
        self,
        recipe_id: str,
        interaction_types: Collection[str],
        since: Optional[datetime] = None,
    ) -> int:
        """Number of events (all users) on recipe_id with a type in interaction_types."""
        ...

    def count_interactions_by_recipe(
        self,
        interaction_types: Collection[str],
        since: Optional[datetime] = None,
    ) -> Dict[str, int]:
        """recipe_id -> event count (all users) for matching types."""
        ...


def _after(event: InteractionEvent, since: Optional[datetime]) -> bool:
    return since is None or ensure_utc(event.created_at) >= ensure_utc(since)


class InMemoryInteractionLog:
    """Interaction log held in a list (append order)."""

    def __init__(self, events: Optional[Iterable[Union[Dict, InteractionEvent]]] = None):
        self._events: List[InteractionEvent] = []
        self._lock = threading.Lock()
        if events:
            self._events.extend(ensure_interactions(list(events)))

    def _snapshot(self) -> List[InteractionEvent]:
        with self._lock:
            return list(self._events)

    def _persist(self) -> None:
        """Hook for file-backed subclasses; called with the lock held."""

    def get_user_interactions(
        self,
        user_id: str,
        since: Optional[datetime] = None,
    ) -> List[InteractionEvent]:
        events = [
            e for e in self._snapshot()
            if e.user_id == user_id and _after(e, since)
        ]
        events.sort(key=lambda e: ensure_utc(e.created_at), reverse=True)
        return events

    def record_interaction(self, event: InteractionEvent) -> None:
        # Recipe attributes are a read-time join, never stored
        stored = event.model_copy(update={"recipe": None}) if event.recipe is not None else event
        with self._lock:
            self._events.append(stored)
            try:
                self._persist()
            except Exception:
                self._events.pop()
                raise

    def count_recipe_interactions(
        self,
        recipe_id: str,
        interaction_types: Collection[str],
        since: Optional[datetime] = None,
    ) -> int:
        types = set(interaction_types)
        return sum(
            1 for e in self._snapshot()
            if e.recipe_id == recipe_id and e.interaction_type in types and _after(e, since)
        )

    def count_interactions_by_recipe(
        self,
        interaction_types: Collection[str],
        since: Optional[datetime] = None,
    ) -> Dict[str, int]:
        types = set(interaction_types)
        counts = Counter(
            e.recipe_id for e in self._snapshot()
            if e.interaction_type in types and _after(e, since)
        )
        return dict(counts)

    def __len__(self) -> int:
        return len(self._events)


class JsonInteractionLog(InMemoryInteractionLog):
    """Interaction log persisted as {"interactions": [...]} in a JSON file."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        data = read_json(self._path, default={"interactions": []})
        events = data.get("interactions", []) if isinstance(data, dict) else data
        super().__init__(events)

    def _persist(self) -> None:
        write_json_atomic(
            self._path,
            {"interactions": [e.model_dump(mode="json", exclude={"recipe"}) for e in self._events]},
        )
