"""FastAPI application exposing transcript segmentation over HTTP.

WHY: Playback front-ends and TTS pipelines that are not written in Python
still need segmented timelines. A thin HTTP layer with OpenAPI docs lets
them call the same pure function the CLI uses.

HOW: POST /segmentations validates the body with pydantic, converts the
words to RawWordTiming and calls segment_transcript(). Segmentation is
CPU-bound and fast, so the endpoint is a plain def and runs in FastAPI's
threadpool. GET /presets and GET /health are informational.

RULES:
- Configuration errors (unknown preset) map to 400 with ErrorResponse
- The app holds no per-request state; concurrent requests are independent
- Every endpoint has an OpenAPI summary and description
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException

from transcript_segmenter import __version__
from transcript_segmenter.config import API_HOST, API_PORT, LOG_LEVEL
from transcript_segmenter.core.ir import RawWordTiming
from transcript_segmenter.core.pipeline import segment_transcript
from transcript_segmenter.presets import PRESETS
from transcript_segmenter.server.models import (
    ErrorResponse,
    HealthResponse,
    PresetInfo,
    SegmentationRequest,
    TimelineResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Transcript Segmenter API",
    description=(
        "Split timed transcript words into follow-along reading segments. "
        "Submit the source text and word timings, receive a timeline of "
        "segments with per-word timing."
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ---------------------------------------------------------------------------
# Endpoints: Segmentation
# ---------------------------------------------------------------------------


@app.post(
    "/segmentations",
    response_model=TimelineResponse,
    tags=["segmentation"],
    summary="Segment a timed transcript",
    description=(
        "Aligns the word timings to the source text, scores break points "
        "and returns display segments. An empty word list returns an empty "
        "timeline."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Unknown preset or invalid configuration"},
    },
)
def create_segmentation(request: SegmentationRequest) -> TimelineResponse:
    timings = [
        RawWordTiming(text=w.text, start_time=w.startTime, end_time=w.endTime)
        for w in request.words
    ]
    try:
        timeline = segment_transcript(
            request.text,
            timings,
            request.language,
            preset=request.preset,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    logger.info(
        "Segmented %d words into %d segments (language=%s)",
        len(timings),
        len(timeline.timeline),
        request.language,
    )
    return TimelineResponse.model_validate(timeline.to_dict())


# ---------------------------------------------------------------------------
# Endpoints: Presets
# ---------------------------------------------------------------------------


@app.get(
    "/presets",
    response_model=List[PresetInfo],
    tags=["presets"],
    summary="List segmentation presets",
    description="Returns every preset name with its word-count bounds and pause thresholds.",
)
def list_presets() -> List[PresetInfo]:
    return [PresetInfo(name=name, values=dict(values)) for name, values in PRESETS.items()]


# ---------------------------------------------------------------------------
# Endpoints: Health
# ---------------------------------------------------------------------------


@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["health"],
    summary="Health check",
    description="Liveness and readiness check for load balancers and orchestrators.",
)
def health_check() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


def run_api():
    """Entry point for the segmenter-api console script."""
    import uvicorn

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    uvicorn.run(app, host=API_HOST, port=API_PORT)
