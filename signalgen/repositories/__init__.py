from .sessions import PlaybackSessionRepository, InMemoryPlaybackSessionRepository

__all__ = [
    "PlaybackSessionRepository",
    "InMemoryPlaybackSessionRepository",
]
