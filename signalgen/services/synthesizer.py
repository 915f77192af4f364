from __future__ import annotations

import math

from signalgen.models.domain import (
    DEFAULT_SAMPLE_RATE_HZ,
    SignalDescriptor,
    WaveformType,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +inf."""
    return int(math.floor(value + 0.5))


def chirp_parameters(descriptor: SignalDescriptor) -> tuple[float, float]:
    """Return ``(start_frequency_hz, chirp_rate_hz_per_s)`` for a pulse.

    CW pulses have a zero chirp rate. The caller must ensure the pulse width
    is non-zero for LFM pulses.
    """
    f = descriptor.center_freq_hz
    bw = descriptor.bandwidth_hz
    if descriptor.type is WaveformType.CW:
        return f, 0.0
    if descriptor.type is WaveformType.LFM_UP:
        return f - bw / 2.0, bw / descriptor.pulse_width_sec
    if descriptor.type is WaveformType.LFM_DOWN:
        return f + bw / 2.0, -bw / descriptor.pulse_width_sec
    raise ValueError(f"Unsupported waveform type '{descriptor.type}'")


def instantaneous_frequency(descriptor: SignalDescriptor, t: float) -> float:
    f_start, k = chirp_parameters(descriptor)
    return f_start + k * t


def pulse_length(descriptor: SignalDescriptor, sample_rate: int) -> int:
    return max(0, round_half_up(descriptor.pulse_width_sec * sample_rate))


def synthesize_pulse(
    descriptor: SignalDescriptor,
    sample_rate: int = DEFAULT_SAMPLE_RATE_HZ,
) -> list[float]:
    """Generate the samples of one pulse.

    Sample ``n`` is taken at ``t = n / sample_rate``. A zero or negative pulse
    width yields an empty list; nothing is validated here.
    """
    num_samples = pulse_length(descriptor, sample_rate)
    if num_samples == 0:
        return []

    amp = descriptor.amplitude
    two_pi = 2.0 * math.pi

    if descriptor.type is WaveformType.CW:
        two_pi_f = two_pi * descriptor.center_freq_hz
        return [amp * math.cos(two_pi_f * (n / sample_rate)) for n in range(num_samples)]

    f_start, k = chirp_parameters(descriptor)
    out: list[float] = []
    for n in range(num_samples):
        t = n / sample_rate
        phase = two_pi * (f_start * t + 0.5 * k * t * t)
        out.append(amp * math.cos(phase))
    return out
