from __future__ import annotations

from prometheus_client import Counter, Gauge


SIGNALGEN_BURSTS_ASSEMBLED_TOTAL = Counter(
    "signalgen_bursts_assembled_total",
    "Total bursts assembled, labelled by whether any descriptor was active.",
    ["kind"],
)

SIGNALGEN_EXPORTS_TOTAL = Counter(
    "signalgen_exports_total",
    "Total WAV export requests by outcome.",
    ["status"],
)

SIGNALGEN_EXPORT_BYTES_TOTAL = Counter(
    "signalgen_export_bytes_total",
    "Total number of WAV bytes produced by exports.",
)

SIGNALGEN_PLAYBACK_SESSIONS_TOTAL = Counter(
    "signalgen_playback_sessions_total",
    "Total playback sessions by lifecycle event.",
    ["status"],
)

SIGNALGEN_PLAYBACK_REJECTED_TOTAL = Counter(
    "signalgen_playback_rejected_total",
    "Total start requests rejected by the cycle scheduler.",
    ["reason"],
)

SIGNALGEN_CYCLES_TOTAL = Counter(
    "signalgen_cycles_total",
    "Total burst cycles handled by the scheduler.",
    ["outcome"],
)

SIGNALGEN_ACTIVE_PLAYBACK = Gauge(
    "signalgen_active_playback",
    "Current number of playing sessions.",
)


def record_burst_assembled(active_count: int) -> None:
    kind = "signal" if active_count else "empty"
    SIGNALGEN_BURSTS_ASSEMBLED_TOTAL.labels(kind=kind).inc()


def record_export(status: str, num_bytes: int = 0) -> None:
    SIGNALGEN_EXPORTS_TOTAL.labels(status=status).inc()
    if num_bytes:
        SIGNALGEN_EXPORT_BYTES_TOTAL.inc(num_bytes)


def record_playback_started() -> None:
    SIGNALGEN_PLAYBACK_SESSIONS_TOTAL.labels(status="started").inc()
    SIGNALGEN_ACTIVE_PLAYBACK.inc()


def record_playback_finished(status: str) -> None:
    """Record a session leaving the playing state (``stopped`` or ``completed``)."""
    SIGNALGEN_PLAYBACK_SESSIONS_TOTAL.labels(status=status).inc()
    SIGNALGEN_ACTIVE_PLAYBACK.dec()


def record_playback_rejected(reason: str) -> None:
    SIGNALGEN_PLAYBACK_REJECTED_TOTAL.labels(reason=reason).inc()


def record_cycle(outcome: str) -> None:
    SIGNALGEN_CYCLES_TOTAL.labels(outcome=outcome).inc()
