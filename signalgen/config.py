from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class AppConfig:
    """Service configuration loaded from environment.

    Only the HTTP service and CLI read these; the synthesis and scheduling
    modules take every parameter explicitly.
    """

    sample_rate_hz: int = int(os.getenv("SIGNALGEN_SAMPLE_RATE_HZ", "44100"))

    # Cycle scheduler timing.
    playback_lead_seconds: float = float(
        os.getenv("SIGNALGEN_PLAYBACK_LEAD_SECONDS", "0.1")
    )
    watchdog_grace_seconds: float = float(
        os.getenv("SIGNALGEN_WATCHDOG_GRACE_SECONDS", "0.2")
    )

    preview_width: int = int(os.getenv("SIGNALGEN_PREVIEW_WIDTH", "1200"))

    # Upper bound on total_duration_sec accepted by the export endpoint.
    max_export_seconds: float = float(os.getenv("SIGNALGEN_MAX_EXPORT_SECONDS", "600"))

    session_history_size: int = int(os.getenv("SIGNALGEN_SESSION_HISTORY_SIZE", "256"))


settings = AppConfig()
