from __future__ import annotations

import pytest

from signalgen.models import Burst, SignalDescriptor, TransmissionConfig, WaveformType
from signalgen.services import (
    EMPTY_BURST_SAMPLES,
    InsufficientDurationError,
    assemble_burst,
    synthesize_pulse,
    tile_burst,
)
from signalgen.services.burst_assembler import gap_length


def _signal(
    kind: WaveformType = WaveformType.CW,
    freq: float = 2000.0,
    *,
    active: bool = True,
    bw: float = 0.0,
    pw: float = 0.5,
    amp: float = 0.8,
) -> SignalDescriptor:
    return SignalDescriptor(
        active=active,
        type=kind,
        center_freq_hz=freq,
        bandwidth_hz=bw,
        pulse_width_sec=pw,
        amplitude=amp,
    )


def test_single_cw_burst_has_pulse_length() -> None:
    burst = assemble_burst([_signal()], 44100)

    assert burst.sample_rate == 44100
    assert burst.num_samples == 22050
    assert burst.samples == synthesize_pulse(_signal(), 44100)


def test_two_pulses_are_separated_by_fixed_gap() -> None:
    first = _signal(WaveformType.LFM_UP, 5000.0, bw=4000.0)
    second = _signal(WaveformType.CW, 2000.0)

    burst = assemble_burst([first, second], 44100)

    assert burst.num_samples == 2 * 22050 + 2205 == 46305
    assert burst.samples[:22050] == synthesize_pulse(first, 44100)
    assert burst.samples[22050 + 2205 :] == synthesize_pulse(second, 44100)

    # The zero run between the pulses is exactly the gap.
    assert burst.samples[22049] != 0.0
    assert all(s == 0.0 for s in burst.samples[22050 : 22050 + 2205])
    assert burst.samples[22050 + 2205] != 0.0


def test_gap_only_between_pulses() -> None:
    pulses = [_signal(freq=1000.0, pw=0.01) for _ in range(3)]
    burst = assemble_burst(pulses, 8000)

    pulse_len = 80
    gap = gap_length(8000)
    assert gap == 400
    assert burst.num_samples == 3 * pulse_len + 2 * gap
    assert burst.samples[0] != 0.0
    assert burst.samples[-1] != 0.0


def test_inactive_descriptors_are_skipped_not_zeroed() -> None:
    a = _signal(WaveformType.CW, 1000.0, pw=0.1)
    skipped = _signal(WaveformType.LFM_DOWN, 8000.0, bw=3000.0, active=False)
    b = _signal(WaveformType.LFM_UP, 3000.0, bw=1000.0, pw=0.1)

    with_inactive = assemble_burst([a, skipped, b], 44100)
    without = assemble_burst([a, b], 44100)

    assert with_inactive.samples == without.samples
    assert with_inactive.num_samples == 4410 + 2205 + 4410


def test_order_is_preserved() -> None:
    a = _signal(WaveformType.CW, 1000.0, pw=0.1)
    b = _signal(WaveformType.LFM_UP, 3000.0, bw=1000.0, pw=0.2)

    burst = assemble_burst([b, a], 44100)

    assert burst.samples[: 8820] == synthesize_pulse(b, 44100)


@pytest.mark.parametrize("descriptors", [[], [_signal(active=False), _signal(active=False)]])
def test_no_active_descriptors_gives_fixed_silence(descriptors: list[SignalDescriptor]) -> None:
    burst = assemble_burst(descriptors, 44100)

    assert burst.num_samples == EMPTY_BURST_SAMPLES == 1000
    assert all(s == 0.0 for s in burst.samples)


def test_default_sample_rate() -> None:
    assert assemble_burst([_signal(pw=0.01)]).sample_rate == 44100


def test_tile_burst_places_burst_at_head_of_each_cycle() -> None:
    burst = Burst(samples=[0.5] * 10, sample_rate=100)  # 0.1 s
    config = TransmissionConfig(inter_sequence_interval_sec=0.4, total_duration_sec=2.0)

    out = tile_burst(burst, config)

    # cycle = 0.5 s -> 50 samples, floor(2.0 / 0.5) = 4 cycles
    assert len(out) == 200
    for i in range(4):
        slot = out[i * 50 : (i + 1) * 50]
        assert slot[:10] == [0.5] * 10
        assert slot[10:] == [0.0] * 40


def test_tile_burst_drops_partial_cycles() -> None:
    burst = Burst(samples=[0.1] * 50, sample_rate=100)  # 0.5 s
    config = TransmissionConfig(inter_sequence_interval_sec=1.0, total_duration_sec=5.0)

    out = tile_burst(burst, config)

    # period 1.5 s -> floor(5 / 1.5) = 3 cycles of 150 samples
    assert len(out) == 450


def test_tile_burst_rejects_duration_shorter_than_one_cycle() -> None:
    burst = Burst(samples=[0.1] * 50, sample_rate=100)
    config = TransmissionConfig(inter_sequence_interval_sec=1.0, total_duration_sec=1.49)

    with pytest.raises(InsufficientDurationError) as exc_info:
        tile_burst(burst, config)

    assert exc_info.value.cycle_period_sec == pytest.approx(1.5)
    assert exc_info.value.total_duration_sec == pytest.approx(1.49)
    assert "too short" in str(exc_info.value)


def test_tile_burst_rejects_non_positive_period() -> None:
    burst = Burst(samples=[], sample_rate=100)
    config = TransmissionConfig(inter_sequence_interval_sec=0.0, total_duration_sec=1.0)

    with pytest.raises(InsufficientDurationError):
        tile_burst(burst, config)
