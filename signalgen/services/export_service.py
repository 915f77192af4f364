from __future__ import annotations

import time
from typing import Optional

from signalgen.audio import encode_wav
from signalgen.logging_utils import get_logger
from signalgen.models.domain import Burst, TransmissionConfig
from signalgen import metrics as app_metrics
from .burst_assembler import InsufficientDurationError, tile_burst


logger = get_logger(__name__)


def export_filename(now: Optional[float] = None) -> str:
    """Suggested artifact name, ``intermittent_signal_<epoch-ms>.wav``."""
    ts = time.time() if now is None else now
    return f"intermittent_signal_{int(ts * 1000)}.wav"


class ExportService:
    """Turns a burst plus transmission settings into a WAV container.

    Filesystem and naming decisions are left to the caller.
    """

    def export_wav(self, burst: Burst, config: TransmissionConfig) -> bytes:
        logger.info(
            "[START] export_wav burst=%d samples @%dHz interval=%.3fs total=%.3fs",
            burst.num_samples,
            burst.sample_rate,
            config.inter_sequence_interval_sec,
            config.total_duration_sec,
        )
        try:
            samples = tile_burst(burst, config)
        except InsufficientDurationError as exc:
            logger.warning("[FAIL] export_wav: %s", exc)
            app_metrics.record_export("insufficient_duration")
            raise

        data = encode_wav(samples, burst.sample_rate)
        app_metrics.record_export("ok", len(data))
        logger.info("[DONE] export_wav produced %d bytes", len(data))
        return data
