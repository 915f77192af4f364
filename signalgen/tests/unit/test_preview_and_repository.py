from __future__ import annotations

from signalgen.models import Burst, PlaybackSession
from signalgen.repositories import InMemoryPlaybackSessionRepository
from signalgen.services import waveform_envelope


def test_envelope_tracks_min_max_per_column() -> None:
    burst = Burst(samples=[0.1, -0.4, 0.9, 0.2, -1.0, 0.0], sample_rate=6)

    columns = waveform_envelope(burst, width=3)

    assert columns == [(-0.4, 0.1), (0.2, 0.9), (-1.0, 0.0)]


def test_envelope_pads_short_bursts_with_silence() -> None:
    burst = Burst(samples=[0.5, -0.5], sample_rate=2)

    columns = waveform_envelope(burst, width=4)

    assert columns == [(0.5, 0.5), (-0.5, -0.5), (0.0, 0.0), (0.0, 0.0)]
    assert waveform_envelope(burst, width=0) == []


def _session(session_id: str) -> PlaybackSession:
    return PlaybackSession(
        id=session_id,
        cycle_period_sec=1.0,
        num_cycles=1,
        start_time=0.1,
        anchor_times=[0.1],
        watchdog_deadline=1.2,
    )


def test_repository_keeps_most_recent_sessions() -> None:
    repo = InMemoryPlaybackSessionRepository(max_items=2)
    for sid in ("a", "b", "c"):
        repo.save(_session(sid))

    assert repo.get("a") is None
    assert repo.get("c") is not None
    assert [s.id for s in repo.list_sessions()] == ["b", "c"]
