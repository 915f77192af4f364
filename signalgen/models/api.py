from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from .domain import (
    PlaybackSession,
    SignalDescriptor,
    TransmissionConfig,
    WaveformType,
    default_signals,
)


class SignalDescriptorModel(BaseModel):
    """One pulse as edited in the parameter panel."""

    active: bool = True
    type: WaveformType = Field(..., description="'CW', 'LFM Up' or 'LFM Down'")
    center_freq_hz: float = Field(..., gt=0, description="Centre frequency in Hz")
    bandwidth_hz: float = Field(0.0, ge=0, description="Sweep bandwidth; ignored for CW")
    pulse_width_sec: float = Field(..., gt=0, description="Pulse duration in seconds")
    amplitude: float = Field(0.8, ge=0, le=1)

    def to_domain(self) -> SignalDescriptor:
        return SignalDescriptor(
            active=self.active,
            type=self.type,
            center_freq_hz=self.center_freq_hz,
            bandwidth_hz=self.bandwidth_hz,
            pulse_width_sec=self.pulse_width_sec,
            amplitude=self.amplitude,
        )

    @classmethod
    def from_domain(cls, d: SignalDescriptor) -> "SignalDescriptorModel":
        return cls(
            active=d.active,
            type=d.type,
            center_freq_hz=d.center_freq_hz,
            bandwidth_hz=d.bandwidth_hz,
            pulse_width_sec=d.pulse_width_sec,
            amplitude=d.amplitude,
        )


class TransmissionConfigModel(BaseModel):
    inter_sequence_interval_sec: float = Field(1.0, ge=0)
    total_duration_sec: float = Field(5.0, gt=0)

    def to_domain(self) -> TransmissionConfig:
        return TransmissionConfig(
            inter_sequence_interval_sec=self.inter_sequence_interval_sec,
            total_duration_sec=self.total_duration_sec,
        )


def _default_signal_models() -> List[SignalDescriptorModel]:
    return [SignalDescriptorModel.from_domain(d) for d in default_signals()]


class BurstRequest(BaseModel):
    """Descriptor set shared by burst, export and playback requests."""

    signals: List[SignalDescriptorModel] = Field(default_factory=_default_signal_models)
    sample_rate_hz: Optional[int] = Field(
        None, gt=0, description="Output sample rate; server default when omitted"
    )

    def descriptors(self) -> list[SignalDescriptor]:
        return [s.to_domain() for s in self.signals]


class BurstPreviewRequest(BurstRequest):
    preview_width: Optional[int] = Field(
        None,
        ge=0,
        le=10000,
        description="Columns in the envelope preview; server default when omitted, 0 for none",
    )


class BurstSummaryResponse(BaseModel):
    num_samples: int
    sample_rate_hz: int
    duration_sec: float
    active_count: int
    envelope: Optional[List[Tuple[float, float]]] = None


class ExportRequest(BurstRequest):
    transmission: TransmissionConfigModel = Field(default_factory=TransmissionConfigModel)


class PlaybackRequest(BurstRequest):
    transmission: TransmissionConfigModel = Field(default_factory=TransmissionConfigModel)


class DefaultsResponse(BaseModel):
    signals: List[SignalDescriptorModel]
    transmission: TransmissionConfigModel
    sample_rate_hz: int
    gap_between_pulses_sec: float = TransmissionConfig.GAP_BETWEEN_PULSES_SEC


class PlaybackStatusResponse(BaseModel):
    session_id: str
    state: Literal["idle", "playing", "stopped", "completed"]
    is_playing: bool
    num_cycles: int
    cycle_period_sec: float
    start_time: float
    anchor_times: List[float]
    cycles_dispatched: int
    cycles_skipped: int
    created_at: datetime
    finished_at: Optional[datetime] = None

    @classmethod
    def from_session(cls, session: PlaybackSession) -> "PlaybackStatusResponse":
        return cls(
            session_id=session.id,
            state=session.state.value,
            is_playing=session.is_playing,
            num_cycles=session.num_cycles,
            cycle_period_sec=session.cycle_period_sec,
            start_time=session.start_time,
            anchor_times=session.anchor_times,
            cycles_dispatched=session.cycles_dispatched,
            cycles_skipped=session.cycles_skipped,
            created_at=session.created_at,
            finished_at=session.finished_at,
        )


class HealthResponse(BaseModel):
    status: Literal["ok"]
