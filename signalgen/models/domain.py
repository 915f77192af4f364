from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional


DEFAULT_SAMPLE_RATE_HZ = 44100


class WaveformType(str, Enum):
    CW = "CW"
    LFM_UP = "LFM Up"
    LFM_DOWN = "LFM Down"


@dataclass(frozen=True)
class SignalDescriptor:
    """Parameters for a single pulse.

    ``bandwidth_hz`` is kept for CW pulses but has no effect on them.
    """

    active: bool
    type: WaveformType
    center_freq_hz: float
    bandwidth_hz: float
    pulse_width_sec: float
    amplitude: float


@dataclass
class Burst:
    """Concatenated pulses and gaps at a single sample rate."""

    samples: List[float]
    sample_rate: int = DEFAULT_SAMPLE_RATE_HZ

    @property
    def num_samples(self) -> int:
        return len(self.samples)

    @property
    def duration_sec(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return len(self.samples) / self.sample_rate


@dataclass
class TransmissionConfig:
    """Repetition settings shared by live playback and file export."""

    GAP_BETWEEN_PULSES_SEC = 0.05

    inter_sequence_interval_sec: float = 1.0
    total_duration_sec: float = 5.0

    def cycle_period_sec(self, burst: Burst) -> float:
        return burst.duration_sec + self.inter_sequence_interval_sec


class PlaybackState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    STOPPED = "stopped"
    COMPLETED = "completed"


@dataclass
class PlaybackSession:
    """A single run of the cycle scheduler.

    ``anchor_times`` holds the absolute start time of every cycle on the
    sink clock and is fixed when the session starts.
    """

    id: str
    cycle_period_sec: float
    num_cycles: int
    start_time: float
    anchor_times: List[float]
    watchdog_deadline: float
    state: PlaybackState = PlaybackState.PLAYING
    cycles_dispatched: int = 0
    cycles_skipped: int = 0
    created_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    finished_at: Optional[datetime] = None

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING


def default_signals() -> list[SignalDescriptor]:
    return [
        SignalDescriptor(
            active=True,
            type=WaveformType.LFM_UP,
            center_freq_hz=5000.0,
            bandwidth_hz=4000.0,
            pulse_width_sec=0.5,
            amplitude=0.8,
        ),
        SignalDescriptor(
            active=False,
            type=WaveformType.CW,
            center_freq_hz=2000.0,
            bandwidth_hz=0.0,
            pulse_width_sec=0.5,
            amplitude=0.8,
        ),
        SignalDescriptor(
            active=False,
            type=WaveformType.LFM_DOWN,
            center_freq_hz=8000.0,
            bandwidth_hz=3000.0,
            pulse_width_sec=0.5,
            amplitude=0.8,
        ),
    ]
