"""End-to-end orchestration: raw timings in, display timeline out.

WHY: Callers hold a source text and a provider's word timings and want
one call that returns ready-to-render segments. The enricher, segmenter,
merger and NLP capabilities should not leak into that call site.

HOW: segment_transcript() normalizes the raw timings, asks the optional
English capabilities for entities and meaning groups (once each, best
effort), enriches every word, segments, merges short segments, and maps
each segment to a TimelineItem with a nested per-word timeline.

RULES:
- Empty input returns an empty timeline, never an error.
- Capability failures are logged as warnings and treated as "found nothing".
- Entity and meaning-group detection run only for English.
- Segment text is the space-joined word texts; start and duration come from
  the first and last word.
- Only configuration errors (unknown preset, inconsistent config) raise.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from transcript_segmenter.config import resolve_config, validate_config
from transcript_segmenter.core.capabilities import Capabilities, merge_overlapping_groups
from transcript_segmenter.core.ir import (
    EntitySpan,
    MeaningGroup,
    RawWordTiming,
    TimelineItem,
    TranscriptTimeline,
    WordSegment,
)
from transcript_segmenter.core.merge import merge_short_segments
from transcript_segmenter.core.segmentation import segment_words
from transcript_segmenter.core.sentence_boundary import SentenceBoundaryOracle
from transcript_segmenter.core.word_metadata import enrich_word_metadata

logger = logging.getLogger(__name__)

RawTimingInput = Union[RawWordTiming, Dict[str, Any]]


def to_raw_timings(raw_timings: Iterable[RawTimingInput]) -> List[RawWordTiming]:
    """Accept RawWordTiming objects or provider dicts, return RawWordTiming."""
    return [
        t if isinstance(t, RawWordTiming) else RawWordTiming.from_dict(t)
        for t in raw_timings
    ]


def detect_entities(text: str, capabilities: Capabilities) -> List[EntitySpan]:
    if capabilities.entity_detector is None:
        return []
    try:
        return list(capabilities.entity_detector.detect_entities(text))
    except Exception:
        logger.warning("Entity detection failed, continuing without entities", exc_info=True)
        return []


def detect_meaning_groups(text: str, capabilities: Capabilities) -> List[MeaningGroup]:
    if capabilities.meaning_group_detector is None:
        return []
    try:
        groups = capabilities.meaning_group_detector.detect_meaning_groups(text)
    except Exception:
        logger.warning(
            "Meaning group detection failed, continuing without meaning groups",
            exc_info=True,
        )
        return []
    return merge_overlapping_groups(list(groups))


def segment_to_timeline_item(segment: WordSegment) -> TimelineItem:
    """Map a word segment to its output record with a per-word timeline."""
    first = segment.words[0]
    last = segment.words[-1]
    return TimelineItem(
        text=" ".join(w.text for w in segment.words),
        start=first.start,
        duration=last.end - first.start,
        timeline=[
            TimelineItem(text=w.text, start=w.start, duration=w.duration)
            for w in segment.words
        ],
    )


def segment_transcript(
    source_text: str,
    raw_timings: Sequence[RawTimingInput],
    language_code: Optional[str] = None,
    *,
    config: Optional[Dict[str, Any]] = None,
    preset: Optional[str] = None,
    capabilities: Optional[Capabilities] = None,
) -> TranscriptTimeline:
    """Segment a timed transcript into display segments.

    Args:
        source_text: The text the timings were produced from.
        raw_timings: Provider word timings (seconds), as RawWordTiming or
            dicts with text/startTime/endTime keys.
        language_code: Language of the text, e.g. "en" or "zh-CN".
        config: A full segmentation config dict. Takes precedence over preset.
        preset: Preset name from presets.PRESETS (environment default if None).
        capabilities: Optional NLP collaborators.

    Returns:
        The segmented TranscriptTimeline.

    Raises:
        ValueError: If the preset is unknown or the config is inconsistent.
    """
    if config is None:
        config = resolve_config(preset)
    else:
        validate_config(config)

    timings = to_raw_timings(raw_timings)
    if not timings:
        return TranscriptTimeline(timeline=[])

    capabilities = capabilities or Capabilities()
    is_english = bool(language_code) and language_code.lower().startswith("en")

    entities = []  # type: List[EntitySpan]
    meaning_groups = []  # type: List[MeaningGroup]
    if is_english:
        entities = detect_entities(source_text, capabilities)
        meaning_groups = detect_meaning_groups(source_text, capabilities)

    words = enrich_word_metadata(
        source_text,
        timings,
        language_code,
        entities,
        meaning_groups,
        oracle=SentenceBoundaryOracle(capabilities.sentence_segmenter),
        abbreviation_classifier=capabilities.abbreviation_classifier,
    )

    segments = merge_short_segments(segment_words(words, config), config)
    logger.debug("Segmented %d words into %d segments", len(words), len(segments))

    return TranscriptTimeline(timeline=[segment_to_timeline_item(s) for s in segments])
