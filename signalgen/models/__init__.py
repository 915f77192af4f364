from .api import (
    SignalDescriptorModel,
    TransmissionConfigModel,
    BurstRequest,
    BurstPreviewRequest,
    BurstSummaryResponse,
    DefaultsResponse,
    ExportRequest,
    PlaybackRequest,
    PlaybackStatusResponse,
    HealthResponse,
)
from .domain import (
    Burst,
    PlaybackSession,
    PlaybackState,
    SignalDescriptor,
    TransmissionConfig,
    WaveformType,
    default_signals,
)

__all__ = [
    "SignalDescriptorModel",
    "TransmissionConfigModel",
    "BurstRequest",
    "BurstPreviewRequest",
    "BurstSummaryResponse",
    "DefaultsResponse",
    "ExportRequest",
    "PlaybackRequest",
    "PlaybackStatusResponse",
    "HealthResponse",
    "Burst",
    "PlaybackSession",
    "PlaybackState",
    "SignalDescriptor",
    "TransmissionConfig",
    "WaveformType",
    "default_signals",
]
