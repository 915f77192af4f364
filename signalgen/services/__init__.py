from .burst_assembler import (
    EMPTY_BURST_SAMPLES,
    InsufficientDurationError,
    assemble_burst,
    tile_burst,
)
from .cycle_scheduler import CycleScheduler
from .export_service import ExportService, export_filename
from .preview_service import waveform_envelope
from .synthesizer import instantaneous_frequency, synthesize_pulse

__all__ = [
    "EMPTY_BURST_SAMPLES",
    "InsufficientDurationError",
    "assemble_burst",
    "tile_burst",
    "CycleScheduler",
    "ExportService",
    "export_filename",
    "waveform_envelope",
    "instantaneous_frequency",
    "synthesize_pulse",
]
