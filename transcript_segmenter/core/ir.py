"""Intermediate representation dataclasses for transcript segmentation.

WHY: TTS and ASR providers hand over flat (text, start, end) triples in
seconds. The segmenter needs richer per-word records, a grouping type, and
an output timeline that the playback layer consumes. Typed dataclasses make
each stage's contract explicit.

HOW: Five dataclasses form the pipeline:
  - RawWordTiming: one provider word, times in float seconds
  - EnrichedWord: one annotated word, times in integer milliseconds
  - WordSegment: a contiguous run of enriched words
  - TimelineItem: one output record (a segment, or a word inside one)
  - TranscriptTimeline: the ordered output records
EntitySpan and MeaningGroup carry optional NLP capability output as
character offsets into the source text.

RULES:
- EnrichedWord count and order always equal the RawWordTiming input.
- Segments partition the enriched sequence: no gaps, overlaps or reordering.
- EnrichedWord is never mutated after enrichment.
- gap_after may be negative when provider timings overlap; it is not clamped.
- English-only flags are None when they were not evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _seconds(value: Any, name: str, text: str) -> float:
    # true/false in JSON is never a time, although bool is an int subclass
    if not isinstance(value, bool):
        try:
            return float(value)
        except (TypeError, ValueError):
            pass
    raise ValueError("Invalid {} time for word {!r}: {!r}".format(name, text, value))


@dataclass
class RawWordTiming:
    """A single spoken word as reported by a TTS/ASR provider.

    Attributes:
        text: The word as the provider spelled it (may carry punctuation).
        start_time: Start time in seconds.
        end_time: End time in seconds.
    """

    text: str
    start_time: float
    end_time: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RawWordTiming:
        """Parse a word timing from a provider dict.

        RULES:
        - text: "text" or "word"
        - start: "startTime", "start_time" or "start"
        - end: "endTime", "end_time" or "end" (defaults to start)
        - Missing or non-numeric times raise ValueError
        """
        text = data.get("text", data.get("word", ""))
        start = _seconds(
            data.get("startTime", data.get("start_time", data.get("start", 0.0))), "start", text
        )
        end = _seconds(
            data.get("endTime", data.get("end_time", data.get("end", start))), "end", text
        )
        return cls(text=text, start_time=start, end_time=end)


@dataclass
class EnrichedWord:
    """A word annotated with every signal the segmenter scores.

    WHY: Break decisions combine timing, punctuation, abbreviation/number
    exceptions, sentence boundaries and meaning-group membership. Computing
    them once per word keeps the segmentation pass a simple forward walk.

    RULES:
    - start / end / duration / gap_after are integer milliseconds
    - gap_after is 0 for the last word
    - punctuation_after is a single character or None
    - punctuation_weight is 0 for abbreviations and unknown marks
    """

    text: str
    start: int
    end: int
    duration: int
    gap_after: int
    punctuation_after: Optional[str] = None
    punctuation_weight: int = 0
    is_abbreviation: bool = False
    is_number: bool = False
    is_sentence_end: bool = False
    is_in_entity: Optional[bool] = None
    is_in_meaning_group: Optional[bool] = None
    is_at_meaning_group_boundary: Optional[bool] = None


@dataclass
class WordSegment:
    """A contiguous, non-empty run of enriched words shown together."""

    words: List[EnrichedWord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.words)


@dataclass
class TimelineItem:
    """One output record: a segment, or a single word inside a segment.

    RULES:
    - start and duration are integer milliseconds
    - segment records carry a per-word timeline; word records carry None
    """

    text: str
    start: int
    duration: int
    timeline: Optional[List[TimelineItem]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "text": self.text,
            "start": self.start,
            "duration": self.duration,
        }  # type: Dict[str, Any]
        if self.timeline is not None:
            data["timeline"] = [item.to_dict() for item in self.timeline]
        return data


@dataclass
class TranscriptTimeline:
    """The segmented transcript handed to the playback layer."""

    timeline: List[TimelineItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"timeline": [item.to_dict() for item in self.timeline]}


@dataclass
class EntitySpan:
    """A named entity (person, place, organization) in the source text."""

    text: str
    start: int
    end: int
    type: str


@dataclass
class MeaningGroup:
    """A semantic phrase unit (意群) that should not be split across segments.

    Attributes:
        start: Character offset where the group begins.
        end: Character offset just past the group's last character.
        type: Phrase kind, e.g. "prepositional" or "relative-clause".
        text: The group's text as it appears in the source.
    """

    start: int
    end: int
    type: str
    text: str = ""
