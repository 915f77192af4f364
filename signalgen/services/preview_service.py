from __future__ import annotations

from signalgen.models.domain import Burst


def waveform_envelope(burst: Burst, width: int = 1200) -> list[tuple[float, float]]:
    """Per-column (min, max) pairs for drawing a burst ``width`` columns wide.

    Each column covers ``max(1, len // width)`` samples; positions past the
    end of the burst read as silence.
    """
    if width <= 0:
        return []
    samples = burst.samples
    n = len(samples)
    step = max(1, n // width)

    columns: list[tuple[float, float]] = []
    for i in range(width):
        lo, hi = 1.0, -1.0
        for j in range(i * step, i * step + step):
            val = samples[j] if j < n else 0.0
            if val < lo:
                lo = val
            if val > hi:
                hi = val
        columns.append((lo, hi))
    return columns
