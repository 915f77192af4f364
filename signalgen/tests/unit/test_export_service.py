from __future__ import annotations

import struct

import pytest

from signalgen.audio import WAV_HEADER_SIZE, decode_wav
from signalgen.metrics import SIGNALGEN_EXPORTS_TOTAL
from signalgen.models import Burst, TransmissionConfig
from signalgen.services import ExportService, InsufficientDurationError, export_filename


def _exports_metric_value(status: str) -> float:
    for metric in SIGNALGEN_EXPORTS_TOTAL.collect():
        for sample in metric.samples:
            if (
                sample.name == "signalgen_exports_total"
                and sample.labels.get("status") == status
            ):
                return float(sample.value)
    return 0.0


def test_export_wav_tiles_and_encodes() -> None:
    burst = Burst(samples=[0.5] * 100, sample_rate=1000)  # 0.1 s
    config = TransmissionConfig(inter_sequence_interval_sec=0.4, total_duration_sec=1.2)
    before = _exports_metric_value("ok")

    data = ExportService().export_wav(burst, config)

    # period 0.5 s -> 2 whole cycles of 500 samples
    assert len(data) == WAV_HEADER_SIZE + 2 * 1000
    assert struct.unpack_from("<I", data, 24)[0] == 1000
    samples, rate = decode_wav(data)
    assert rate == 1000
    assert samples[0] == pytest.approx(0.5, abs=1 / 32767)
    assert samples[100:500] == [0.0] * 400
    assert samples[500] == pytest.approx(0.5, abs=1 / 32767)
    assert _exports_metric_value("ok") == before + 1.0


def test_export_wav_is_idempotent() -> None:
    burst = Burst(samples=[0.1, -0.2, 0.3], sample_rate=100)
    config = TransmissionConfig(inter_sequence_interval_sec=0.07, total_duration_sec=1.0)
    service = ExportService()

    assert service.export_wav(burst, config) == service.export_wav(burst, config)


def test_export_wav_surfaces_insufficient_duration() -> None:
    burst = Burst(samples=[0.5] * 100, sample_rate=1000)
    config = TransmissionConfig(inter_sequence_interval_sec=1.0, total_duration_sec=1.0)
    before = _exports_metric_value("insufficient_duration")

    with pytest.raises(InsufficientDurationError):
        ExportService().export_wav(burst, config)

    assert _exports_metric_value("insufficient_duration") == before + 1.0


def test_export_filename_uses_epoch_milliseconds() -> None:
    assert export_filename(1700000000.5) == "intermittent_signal_1700000000500.wav"
    assert export_filename().startswith("intermittent_signal_")
