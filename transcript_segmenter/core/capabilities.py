"""Injected NLP capability interfaces and span helpers.

WHY: Entity recognition, meaning-group (意群) detection, context-aware
abbreviation classification and locale sentence segmentation all live in
external NLP libraries. The segmenter consumes their output but must stay
testable and usable without any of them, and each can be swapped per
target language.

HOW: Each capability is a typing.Protocol with one method. Capabilities
bundles optional implementations; None means "not available". The span
helpers answer containment questions against capability output, and
merge_overlapping_groups() normalizes meaning groups so that overlapping
spans collapse to the longer one.

RULES:
- A missing capability behaves exactly like one that found nothing.
- Offsets are character positions into the source text; end is exclusive.
- Callers wrap every capability call; failures never reach segment_transcript.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from transcript_segmenter.core.ir import EntitySpan, MeaningGroup


class EntityDetector(Protocol):
    def detect_entities(self, text: str) -> Sequence[EntitySpan]:
        ...


class MeaningGroupDetector(Protocol):
    def detect_meaning_groups(self, text: str) -> Sequence[MeaningGroup]:
        ...


class AbbreviationClassifier(Protocol):
    def is_abbreviation(self, text: str, word: str) -> bool:
        ...


class SentenceSegmenter(Protocol):
    def sentence_boundaries(self, text: str, locale: str) -> Sequence[int]:
        """Return the exclusive end offset of every sentence in text."""
        ...


@dataclass
class Capabilities:
    """Optional NLP collaborators handed to segment_transcript().

    Attributes:
        entity_detector: English entity spans (people, places, organizations).
        meaning_group_detector: English meaning-group spans.
        abbreviation_classifier: English context-aware abbreviation check,
            consulted only after the fixed abbreviation list misses.
        sentence_segmenter: Locale-aware sentence boundaries, any language.
    """

    entity_detector: Optional[EntityDetector] = None
    meaning_group_detector: Optional[MeaningGroupDetector] = None
    abbreviation_classifier: Optional[AbbreviationClassifier] = None
    sentence_segmenter: Optional[SentenceSegmenter] = None


# ---------------------------------------------------------------------------
# Span helpers
# ---------------------------------------------------------------------------


def is_position_in_entity(position: int, entities: Sequence[EntitySpan]) -> bool:
    """True if position falls inside an entity (start inclusive, end exclusive)."""
    return any(entity.start <= position < entity.end for entity in entities)


def is_position_in_meaning_group(position: int, groups: Sequence[MeaningGroup]) -> bool:
    """True if position is strictly inside a meaning group, not on its edges."""
    return any(group.start < position < group.end for group in groups)


def is_meaning_group_boundary(position: int, groups: Sequence[MeaningGroup]) -> bool:
    """True if position is exactly the start or end of a meaning group."""
    return any(position == group.start or position == group.end for group in groups)


def merge_overlapping_groups(groups: Sequence[MeaningGroup]) -> List[MeaningGroup]:
    """Collapse overlapping meaning groups, keeping the longer span.

    Groups are sorted by start offset first. On equal length the earlier
    group wins. Non-overlapping groups pass through unchanged.
    """
    ordered = sorted(groups, key=lambda g: g.start)
    if len(ordered) <= 1:
        return ordered

    merged = []  # type: List[MeaningGroup]
    current = ordered[0]
    for group in ordered[1:]:
        if group.start < current.end:
            if group.end - group.start > current.end - current.start:
                current = group
        else:
            merged.append(current)
            current = group
    merged.append(current)
    return merged
