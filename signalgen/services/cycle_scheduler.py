from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from signalgen.logging_utils import get_logger
from signalgen.models.domain import (
    Burst,
    PlaybackSession,
    PlaybackState,
    TransmissionConfig,
)
from signalgen.sinks import AudioBuffer, AudioSink
from signalgen import metrics as app_metrics


logger = get_logger(__name__)


DEFAULT_LEAD_TIME_SEC = 0.1
DEFAULT_WATCHDOG_GRACE_SEC = 0.2


@dataclass
class _ActiveRun:
    """Mutable scheduling state for the session currently playing."""

    session: PlaybackSession
    loop: asyncio.AbstractEventLoop
    buffer: AudioBuffer
    # loop.time() - sink.now(), sampled once at start
    clock_offset: float
    pending: List[asyncio.TimerHandle] = field(default_factory=list)
    watchdog: Optional[asyncio.TimerHandle] = None

    def loop_time(self, sink_time: float) -> float:
        return sink_time + self.clock_offset


class CycleScheduler:
    """Repeats a burst at a fixed period for a bounded duration.

    All cycle start times are computed once, as absolute times on the sink
    clock, when a session starts. Each cycle is handed to the sink a little
    ahead of its anchor (``lead_time_sec``), so timer jitter only affects when
    a buffer is submitted, never when it plays. A cycle whose anchor has
    already passed by the time its timer runs is skipped, not replayed.

    The scheduler runs on one asyncio loop and owns at most one playing
    session. ``start`` while playing is a no-op returning ``None``.
    """

    def __init__(
        self,
        sink: AudioSink,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        lead_time_sec: float = DEFAULT_LEAD_TIME_SEC,
        watchdog_grace_sec: float = DEFAULT_WATCHDOG_GRACE_SEC,
    ) -> None:
        self._sink = sink
        self._loop = loop
        self._lead_time_sec = lead_time_sec
        self._watchdog_grace_sec = watchdog_grace_sec
        self._active: Optional[_ActiveRun] = None

    @property
    def active_session(self) -> Optional[PlaybackSession]:
        return self._active.session if self._active else None

    @property
    def is_playing(self) -> bool:
        return self._active is not None

    def start(
        self,
        burst: Optional[Burst],
        config: TransmissionConfig,
    ) -> Optional[PlaybackSession]:
        if self._active is not None:
            logger.warning(
                "Ignoring start: session %s is already playing",
                self._active.session.id,
            )
            app_metrics.record_playback_rejected("already_playing")
            return None
        if burst is None or not burst.samples:
            logger.warning("Ignoring start: no burst available")
            app_metrics.record_playback_rejected("no_burst")
            return None

        cycle_period = config.cycle_period_sec(burst)
        if cycle_period <= 0:
            logger.warning("Ignoring start: non-positive cycle period %.6fs", cycle_period)
            app_metrics.record_playback_rejected("invalid_period")
            return None
        num_cycles = math.ceil(config.total_duration_sec / cycle_period)
        if num_cycles < 1:
            logger.warning(
                "Ignoring start: total duration %.3fs yields no cycles",
                config.total_duration_sec,
            )
            app_metrics.record_playback_rejected("no_cycles")
            return None

        loop = self._loop or asyncio.get_running_loop()
        sink_now = self._sink.now()
        clock_offset = loop.time() - sink_now
        start_time = sink_now + self._lead_time_sec
        anchor_times = [start_time + i * cycle_period for i in range(num_cycles)]
        watchdog_deadline = sink_now + config.total_duration_sec + self._watchdog_grace_sec

        session = PlaybackSession(
            id=str(uuid4()),
            cycle_period_sec=cycle_period,
            num_cycles=num_cycles,
            start_time=start_time,
            anchor_times=anchor_times,
            watchdog_deadline=watchdog_deadline,
        )
        run = _ActiveRun(
            session=session,
            loop=loop,
            buffer=self._sink.create_buffer(burst.samples, burst.sample_rate),
            clock_offset=clock_offset,
        )
        self._active = run
        app_metrics.record_playback_started()
        logger.info(
            "Playback %s started: cycles=%d period=%.4fs start=%.4f",
            session.id,
            num_cycles,
            cycle_period,
            start_time,
        )

        for index in range(1, num_cycles):
            when = run.loop_time(anchor_times[index] - self._lead_time_sec)
            run.pending.append(loop.call_at(when, self._dispatch, run, index))
        run.watchdog = loop.call_at(
            run.loop_time(watchdog_deadline), self._on_watchdog, run
        )

        # Cycle 0 is submitted right away, already lead_time_sec ahead.
        self._dispatch(run, 0)
        return session

    def stop(self, session: Optional[PlaybackSession] = None) -> None:
        """Cancel all future cycles. Safe to call repeatedly.

        Buffers already handed to the sink keep playing.
        """
        run = self._active
        if run is None:
            return
        if session is not None and session.id != run.session.id:
            logger.debug("Ignoring stop for inactive session %s", session.id)
            return
        self._finish(run, PlaybackState.STOPPED)

    def _dispatch(self, run: _ActiveRun, index: int) -> None:
        if self._active is not run:
            return

        session = run.session
        anchor = session.anchor_times[index]
        now = self._sink.now()
        if now > anchor:
            session.cycles_skipped += 1
            app_metrics.record_cycle("skipped")
            logger.warning(
                "Playback %s: skipping cycle %d, %.4fs late",
                session.id,
                index,
                now - anchor,
            )
        else:
            try:
                self._sink.schedule(run.buffer, anchor)
            except Exception:
                logger.error(
                    "Playback %s: sink failed on cycle %d", session.id, index,
                    exc_info=True,
                )
                self._finish(run, PlaybackState.STOPPED)
                raise
            session.cycles_dispatched += 1
            app_metrics.record_cycle("dispatched")

        if index == session.num_cycles - 1:
            # Every cycle has been handed over; the sink plays out the rest.
            self._finish(run, PlaybackState.COMPLETED)

    def _on_watchdog(self, run: _ActiveRun) -> None:
        if self._active is not run:
            return
        logger.info("Playback %s: watchdog deadline reached", run.session.id)
        self._finish(run, PlaybackState.COMPLETED)

    def _finish(self, run: _ActiveRun, state: PlaybackState) -> None:
        if self._active is not run:
            return
        for handle in run.pending:
            handle.cancel()
        run.pending.clear()
        if run.watchdog is not None:
            run.watchdog.cancel()
            run.watchdog = None

        run.session.state = state
        run.session.finished_at = datetime.now(timezone.utc)
        self._active = None
        app_metrics.record_playback_finished(state.value)
        logger.info(
            "Playback %s %s (dispatched=%d skipped=%d)",
            run.session.id,
            state.value,
            run.session.cycles_dispatched,
            run.session.cycles_skipped,
        )
