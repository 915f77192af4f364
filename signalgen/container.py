from __future__ import annotations

from functools import lru_cache

from signalgen.config import settings
from signalgen.repositories import InMemoryPlaybackSessionRepository
from signalgen.services import CycleScheduler, ExportService
from signalgen.sinks import RecordingAudioSink


@lru_cache(maxsize=1)
def get_audio_sink() -> RecordingAudioSink:
    return RecordingAudioSink()


@lru_cache(maxsize=1)
def get_cycle_scheduler() -> CycleScheduler:
    """Return the process-wide scheduler.

    The loop is resolved on each ``start`` call, so the scheduler must be
    driven from async endpoints.
    """
    return CycleScheduler(
        get_audio_sink(),
        lead_time_sec=settings.playback_lead_seconds,
        watchdog_grace_sec=settings.watchdog_grace_seconds,
    )


@lru_cache(maxsize=1)
def get_session_repo() -> InMemoryPlaybackSessionRepository:
    return InMemoryPlaybackSessionRepository(max_items=settings.session_history_size)


@lru_cache(maxsize=1)
def get_export_service() -> ExportService:
    return ExportService()


def reset_container() -> None:
    """Drop all cached singletons (used by tests)."""
    for factory in (
        get_audio_sink,
        get_cycle_scheduler,
        get_session_repo,
        get_export_service,
    ):
        factory.cache_clear()
