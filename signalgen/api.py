from __future__ import annotations

import asyncio
from typing import List

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from signalgen.config import settings
from signalgen.models import (
    Burst,
    BurstPreviewRequest,
    BurstRequest,
    BurstSummaryResponse,
    DefaultsResponse,
    ExportRequest,
    HealthResponse,
    PlaybackRequest,
    PlaybackStatusResponse,
    SignalDescriptorModel,
    TransmissionConfigModel,
    default_signals,
)
from signalgen.logging_utils import get_logger
from signalgen.container import (
    get_cycle_scheduler,
    get_export_service,
    get_session_repo,
)
from signalgen.services import (
    InsufficientDurationError,
    assemble_burst,
    export_filename,
    waveform_envelope,
)


logger = get_logger(__name__)
router = APIRouter()


def _sample_rate(req: BurstRequest) -> int:
    return req.sample_rate_hz or settings.sample_rate_hz


async def _assemble(req: BurstRequest) -> Burst:
    return await asyncio.to_thread(assemble_burst, req.descriptors(), _sample_rate(req))


@router.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    return HealthResponse(status="ok")


@router.get("/v1/signals/defaults", response_model=DefaultsResponse)
async def signal_defaults() -> DefaultsResponse:
    return DefaultsResponse(
        signals=[SignalDescriptorModel.from_domain(d) for d in default_signals()],
        transmission=TransmissionConfigModel(),
        sample_rate_hz=settings.sample_rate_hz,
    )


@router.post("/v1/bursts", response_model=BurstSummaryResponse)
async def create_burst(req: BurstPreviewRequest) -> BurstSummaryResponse:
    """Assemble a burst and describe it, optionally with a plot envelope."""
    burst = await _assemble(req)
    width = settings.preview_width if req.preview_width is None else req.preview_width
    envelope = waveform_envelope(burst, width) if width > 0 else None
    return BurstSummaryResponse(
        num_samples=burst.num_samples,
        sample_rate_hz=burst.sample_rate,
        duration_sec=burst.duration_sec,
        active_count=sum(1 for s in req.signals if s.active),
        envelope=envelope,
    )


@router.post("/v1/exports/wav")
async def export_wav(req: ExportRequest) -> Response:
    config = req.transmission.to_domain()
    if config.total_duration_sec > settings.max_export_seconds:
        raise HTTPException(
            status_code=422,
            detail=(
                f"total_duration_sec {config.total_duration_sec:g} exceeds "
                f"the export limit of {settings.max_export_seconds:g}s"
            ),
        )

    burst = await _assemble(req)
    try:
        data = await asyncio.to_thread(get_export_service().export_wav, burst, config)
    except InsufficientDurationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    filename = export_filename()
    return Response(
        content=data,
        media_type="audio/wav",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/v1/playback",
    response_model=PlaybackStatusResponse,
    status_code=201,
)
async def start_playback(req: PlaybackRequest) -> PlaybackStatusResponse:
    burst = await _assemble(req)
    scheduler = get_cycle_scheduler()
    session = scheduler.start(burst, req.transmission.to_domain())
    if session is None:
        active = scheduler.active_session
        detail = (
            f"Playback session '{active.id}' is already playing"
            if active is not None
            else "Playback could not be started for this configuration"
        )
        raise HTTPException(status_code=409, detail=detail)
    get_session_repo().save(session)
    return PlaybackStatusResponse.from_session(session)


@router.get("/v1/playback", response_model=List[PlaybackStatusResponse])
async def list_playback() -> List[PlaybackStatusResponse]:
    return [
        PlaybackStatusResponse.from_session(s)
        for s in get_session_repo().list_sessions()
    ]


@router.get("/v1/playback/{session_id}", response_model=PlaybackStatusResponse)
async def get_playback(session_id: str) -> PlaybackStatusResponse:
    session = get_session_repo().get(session_id)
    if not session:
        raise HTTPException(status_code=404, detail=f"Unknown session '{session_id}'")
    return PlaybackStatusResponse.from_session(session)


@router.post(
    "/v1/playback/{session_id}/stop",
    response_model=PlaybackStatusResponse,
)
async def stop_playback(session_id: str) -> PlaybackStatusResponse:
    session = get_session_repo().get(session_id)
    if not session:
        raise HTTPException(status_code=404, detail=f"Unknown session '{session_id}'")
    get_cycle_scheduler().stop(session)
    return PlaybackStatusResponse.from_session(session)


@router.get("/metrics")
async def metrics() -> PlainTextResponse:
    payload = generate_latest()
    return PlainTextResponse(payload, media_type=CONTENT_TYPE_LATEST)
