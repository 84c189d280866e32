"""Pydantic request/response models for the HTTP API.

WHY: The FastAPI endpoints need typed schemas for request validation,
response serialization, and automatic OpenAPI documentation.

HOW: The request mirrors segment_transcript()'s arguments; word timings use
the provider's camelCase startTime/endTime names. Responses mirror
TranscriptTimeline.to_dict() so HTTP and CLI output are identical.

RULES:
- All models use Field(description=...) for OpenAPI documentation
- Times in requests are float seconds; times in responses are integer ms
- Python 3.9+ compatible (no PEP 604 unions, use Optional from typing)
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class WordTimingIn(BaseModel):
    """One provider word with its timing in seconds."""

    text: str = Field(description="The word as spoken, may include punctuation.")
    startTime: float = Field(description="Word start time in seconds.")
    endTime: float = Field(description="Word end time in seconds.")


class SegmentationRequest(BaseModel):
    """Source text plus word timings to segment.

    RULES:
    - words may be empty (returns an empty timeline)
    - language enables English-only signals when it starts with "en"
    - preset defaults to the server's SEGMENTER_PRESET
    """

    text: str = Field(description="The source text the timings were produced from.")
    words: List[WordTimingIn] = Field(description="Word timings in spoken order.")
    language: Optional[str] = Field(
        default=None,
        description="Language code of the text (e.g. 'en', 'zh-CN').",
    )
    preset: Optional[str] = Field(
        default=None,
        description="Segmentation preset name. See GET /presets.",
    )

    model_config = {"json_schema_extra": {
        "examples": [
            {
                "text": "Hello world. How are you today?",
                "words": [
                    {"text": "Hello", "startTime": 0.0, "endTime": 0.3},
                    {"text": "world.", "startTime": 0.4, "endTime": 0.7},
                    {"text": "How", "startTime": 0.8, "endTime": 1.0},
                ],
                "language": "en",
            }
        ]
    }}


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class WordOut(BaseModel):
    text: str = Field(description="Word text.")
    start: int = Field(description="Word start in milliseconds.")
    duration: int = Field(description="Word duration in milliseconds.")


class SegmentOut(BaseModel):
    """One display segment with its per-word timeline."""

    text: str = Field(description="Space-joined segment text.")
    start: int = Field(description="Segment start in milliseconds.")
    duration: int = Field(description="Segment duration in milliseconds.")
    timeline: List[WordOut] = Field(description="Per-word timing inside the segment.")


class TimelineResponse(BaseModel):
    timeline: List[SegmentOut] = Field(description="Segments in playback order.")


class PresetInfo(BaseModel):
    """A named segmentation preset and its values."""

    name: str = Field(description="Preset name used in requests.")
    values: Dict[str, int] = Field(description="Word-count bounds and pause thresholds (ms).")


class ErrorResponse(BaseModel):
    detail: str = Field(description="Human-readable error description.")


class HealthResponse(BaseModel):
    status: str = Field(description="Service health status.", json_schema_extra={"example": "ok"})
    version: str = Field(description="API version string.", json_schema_extra={"example": "0.1.0"})
