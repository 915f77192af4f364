from __future__ import annotations

from threading import RLock
from typing import Dict, List, Optional, Protocol

from ..models import PlaybackSession


class PlaybackSessionRepository(Protocol):
    """Lookup interface for playback sessions started via the API."""

    def get(self, session_id: str) -> Optional[PlaybackSession]:
        ...

    def save(self, session: PlaybackSession) -> None:
        ...

    def list_sessions(self) -> List[PlaybackSession]:
        ...


class InMemoryPlaybackSessionRepository(PlaybackSessionRepository):
    """In-memory store, bounded to the most recent ``max_items`` sessions.

    Sessions are stored by reference, so state changes made by the scheduler
    are visible through ``get`` without an explicit update.
    """

    def __init__(self, max_items: int = 256) -> None:
        self._items: Dict[str, PlaybackSession] = {}
        self._max_items = max_items
        self._lock = RLock()

    def get(self, session_id: str) -> Optional[PlaybackSession]:
        with self._lock:
            return self._items.get(session_id)

    def save(self, session: PlaybackSession) -> None:
        with self._lock:
            self._items[session.id] = session
            while len(self._items) > self._max_items:
                oldest = next(iter(self._items))
                del self._items[oldest]

    def list_sessions(self) -> List[PlaybackSession]:
        with self._lock:
            return list(self._items.values())
