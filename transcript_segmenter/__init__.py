"""Transcript Segmenter: timed words to follow-along reading segments.

WHY: TTS and ASR providers return a flat list of word timings. A reading
view that highlights text in sync with audio needs those words grouped into
short, natural segments that end at sentence and clause boundaries, never
after "Dr." or inside "3.14".

HOW: Four-stage pipeline. Each raw word is aligned to the source text and
enriched with punctuation, abbreviation, number and sentence-end signals;
a single forward pass scores break points; short fragments are merged; the
segments are mapped to a nested timeline. NLP helpers (entities, meaning
groups, abbreviations, locale sentence segmentation) are optional injected
capabilities.

RULES:
- segment_transcript() is pure: no I/O, no global mutable state
- Every input word appears in exactly one output segment, in order
- Capability failures degrade to "no signal", never to an exception
- Configuration travels as an explicit dict (see presets.PRESETS)
"""

from transcript_segmenter.core.capabilities import Capabilities
from transcript_segmenter.core.ir import (
    EntitySpan,
    MeaningGroup,
    RawWordTiming,
    TimelineItem,
    TranscriptTimeline,
)
from transcript_segmenter.core.pipeline import segment_transcript

__version__ = "0.1.0"

__all__ = [
    "Capabilities",
    "EntitySpan",
    "MeaningGroup",
    "RawWordTiming",
    "TimelineItem",
    "TranscriptTimeline",
    "segment_transcript",
]
