from __future__ import annotations

import time
from threading import RLock
from typing import Callable, Sequence

from signalgen.logging_utils import get_logger
from .base import AudioBuffer, AudioSink, ScheduledBuffer, ScheduledBuffers


logger = get_logger(__name__)


class RecordingAudioSink(AudioSink):
    """In-process sink that records scheduled buffers instead of playing them.

    Used by the HTTP service, which has no audio device, and by tests. The
    clock defaults to ``time.monotonic`` so it lines up with the asyncio loop.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        max_history: int = 1024,
    ) -> None:
        self._clock = clock
        self._max_history = max_history
        self._lock = RLock()
        self._scheduled: ScheduledBuffers = []

    def create_buffer(self, samples: Sequence[float], sample_rate: int) -> AudioBuffer:
        return AudioBuffer(samples=tuple(samples), sample_rate=sample_rate)

    def schedule(self, buffer: AudioBuffer, at: float) -> None:
        with self._lock:
            self._scheduled.append(ScheduledBuffer(buffer=buffer, at=at))
            if len(self._scheduled) > self._max_history:
                del self._scheduled[: len(self._scheduled) - self._max_history]
        logger.debug(
            "Scheduled %d samples @%dHz at t=%.6f (now=%.6f)",
            len(buffer.samples),
            buffer.sample_rate,
            at,
            self.now(),
        )

    def now(self) -> float:
        return self._clock()

    @property
    def scheduled(self) -> ScheduledBuffers:
        with self._lock:
            return list(self._scheduled)

    def clear(self) -> None:
        with self._lock:
            self._scheduled.clear()
