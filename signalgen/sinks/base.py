from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence


@dataclass(frozen=True)
class AudioBuffer:
    """A playable mono buffer handed out by a sink."""

    samples: tuple[float, ...]
    sample_rate: int

    @property
    def duration_sec(self) -> float:
        if self.sample_rate <= 0:
            return 0.0
        return len(self.samples) / self.sample_rate


@dataclass(frozen=True)
class ScheduledBuffer:
    buffer: AudioBuffer
    at: float


class AudioSink(Protocol):
    """Output collaborator used by the cycle scheduler.

    ``schedule`` and ``now`` share one monotonic clock, in seconds.
    """

    def create_buffer(self, samples: Sequence[float], sample_rate: int) -> AudioBuffer:
        """Wrap samples in a buffer the sink can play."""

    def schedule(self, buffer: AudioBuffer, at: float) -> None:
        """Start playing ``buffer`` at absolute time ``at``."""

    def now(self) -> float:
        """Current time on the sink clock."""


ScheduledBuffers = List[ScheduledBuffer]
