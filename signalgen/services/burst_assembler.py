from __future__ import annotations

import math
from typing import Iterable

from signalgen.logging_utils import get_logger
from signalgen.models.domain import (
    DEFAULT_SAMPLE_RATE_HZ,
    Burst,
    SignalDescriptor,
    TransmissionConfig,
)
from signalgen import metrics as app_metrics
from .synthesizer import round_half_up, synthesize_pulse


logger = get_logger(__name__)


EMPTY_BURST_SAMPLES = 1000


class InsufficientDurationError(ValueError):
    """Raised when the total duration cannot hold a single burst cycle."""

    def __init__(self, total_duration_sec: float, cycle_period_sec: float) -> None:
        self.total_duration_sec = total_duration_sec
        self.cycle_period_sec = cycle_period_sec
        super().__init__(
            f"Total duration {total_duration_sec:g}s is too short for one cycle "
            f"of {cycle_period_sec:g}s"
        )


def gap_length(sample_rate: int) -> int:
    return max(0, round_half_up(TransmissionConfig.GAP_BETWEEN_PULSES_SEC * sample_rate))


def assemble_burst(
    descriptors: Iterable[SignalDescriptor],
    sample_rate: int = DEFAULT_SAMPLE_RATE_HZ,
) -> Burst:
    """Concatenate the active pulses, separated by fixed silent gaps.

    Inactive descriptors are skipped entirely. Gaps go between pulses only.
    When nothing is active the burst is ``EMPTY_BURST_SAMPLES`` zeros so that
    period arithmetic downstream never sees a zero-length burst.
    """
    gap = [0.0] * gap_length(sample_rate)
    samples: list[float] = []
    active_count = 0

    for descriptor in descriptors:
        if not descriptor.active:
            continue
        if active_count:
            samples.extend(gap)
        samples.extend(synthesize_pulse(descriptor, sample_rate))
        active_count += 1

    if not samples:
        samples = [0.0] * EMPTY_BURST_SAMPLES

    logger.info(
        "Assembled burst: active=%d samples=%d rate=%dHz",
        active_count,
        len(samples),
        sample_rate,
    )
    app_metrics.record_burst_assembled(active_count)
    return Burst(samples=samples, sample_rate=sample_rate)


def tile_burst(burst: Burst, config: TransmissionConfig) -> list[float]:
    """Repeat ``burst`` at the cycle period for as many whole cycles as fit.

    Each cycle slot starts with the burst and is padded with silence. Raises
    :class:`InsufficientDurationError` when not even one cycle fits.
    """
    cycle_period = config.cycle_period_sec(burst)
    if cycle_period <= 0:
        raise InsufficientDurationError(config.total_duration_sec, cycle_period)

    num_cycles = math.floor(config.total_duration_sec / cycle_period)
    if num_cycles < 1:
        raise InsufficientDurationError(config.total_duration_sec, cycle_period)

    cycle_samples = round_half_up(cycle_period * burst.sample_rate)
    head = burst.samples[:cycle_samples]

    out = [0.0] * (cycle_samples * num_cycles)
    for i in range(num_cycles):
        offset = i * cycle_samples
        out[offset : offset + len(head)] = head

    logger.info(
        "Tiled burst: cycles=%d cycle_samples=%d total_samples=%d",
        num_cycles,
        cycle_samples,
        len(out),
    )
    return out
