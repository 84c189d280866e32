"""Per-word metadata enrichment.

WHY: Raw provider timings carry nothing but text and seconds. Every break
decision downstream needs timing in milliseconds, the punctuation that
follows a word in the source text, and whether that punctuation really ends
a sentence (not "Dr." or "3.14").

HOW: enrich_word_metadata() walks the raw sequence once. Each word is
cleaned of trailing punctuation, aligned to the source text by occurrence,
and annotated with punctuation, abbreviation, number, sentence-end and
(English only) entity / meaning-group flags.

RULES:
- Output length and order equal the input; nothing is dropped or merged.
- Alignment misses never raise; the affected fields default to absent/False.
- Abbreviations suppress both punctuation weight and sentence end.
- Sentence end = oracle answer OR sentence-ending punctuation. The oracle
  is only consulted when DEBUG logging is enabled for this module.
- Capability failures are logged as warnings and treated as negative.
"""

import logging
import math
import re
from typing import Dict, List, Optional, Sequence

from transcript_segmenter.core.capabilities import (
    AbbreviationClassifier,
    is_meaning_group_boundary,
    is_position_in_entity,
    is_position_in_meaning_group,
)
from transcript_segmenter.core.ir import (
    EnrichedWord,
    EntitySpan,
    MeaningGroup,
    RawWordTiming,
)
from transcript_segmenter.core.sentence_boundary import SentenceBoundaryOracle
from transcript_segmenter.core.text_utils import (
    clean_word,
    extract_punctuation_after_word,
    get_word_position_in_text,
    is_abbreviation_word,
    trailing_punctuation,
)
from transcript_segmenter.presets import (
    COMMON_ABBREVIATIONS,
    PUNCTUATION_WEIGHTS,
    SENTENCE_ENDING_PUNCTUATION,
)

logger = logging.getLogger(__name__)

_NON_NUMERIC_RE = re.compile(r"[^\d.,]")
_NUMBER_RE = re.compile(r"^\d+([.,]\d+)*$")


def to_milliseconds(seconds: float) -> int:
    """Round float seconds to integer milliseconds (halves round up)."""
    return math.floor(seconds * 1000.0 + 0.5)


def is_number_word(cleaned: str) -> bool:
    """True if the word is mostly a number ("2024", "3.14", "1,000").

    At least half of the cleaned word must survive stripping non-numeric
    characters, so ordinals like "3rd" are not numbers.
    """
    digits = _NON_NUMERIC_RE.sub("", cleaned)
    return (
        len(digits) > 0
        and _NUMBER_RE.match(digits) is not None
        and len(digits) >= len(cleaned) * 0.5
    )


def punctuation_weight(punctuation: Optional[str], is_abbreviation: bool) -> int:
    if not punctuation or is_abbreviation:
        return 0
    return PUNCTUATION_WEIGHTS.get(punctuation, 0)


class _BoundaryCache:
    """Computes the text's sentence boundaries at most once per enrichment."""

    def __init__(self, oracle: SentenceBoundaryOracle, text: str, language: str) -> None:
        self._oracle = oracle
        self._text = text
        self._language = language
        self._boundaries = None  # type: Optional[frozenset]

    def __contains__(self, position: int) -> bool:
        if self._boundaries is None:
            self._boundaries = frozenset(
                self._oracle.get_sentence_boundaries(self._text, self._language)
            )
        return position in self._boundaries


def _classify_abbreviation(
    text: str,
    cleaned: str,
    punctuation_after: Optional[str],
    classifier: Optional[AbbreviationClassifier],
) -> bool:
    if is_abbreviation_word(cleaned, punctuation_after, COMMON_ABBREVIATIONS):
        return True
    if classifier is None or punctuation_after != ".":
        return False
    try:
        return bool(classifier.is_abbreviation(text, cleaned))
    except Exception:
        logger.warning("Abbreviation classifier failed for %r", cleaned, exc_info=True)
        return False


def enrich_word_metadata(
    text: str,
    raw_timings: Sequence[RawWordTiming],
    language: Optional[str],
    entities: Sequence[EntitySpan],
    meaning_groups: Sequence[MeaningGroup],
    oracle: Optional[SentenceBoundaryOracle] = None,
    abbreviation_classifier: Optional[AbbreviationClassifier] = None,
) -> List[EnrichedWord]:
    """Annotate every raw word timing with segmentation signals.

    Args:
        text: The source text the timings were produced from.
        raw_timings: Provider words in spoken order, times in seconds.
        language: Language code ("en", "zh-CN", ...) or None.
        entities: Entity spans, consulted for English only.
        meaning_groups: Non-overlapping meaning groups, English only.
        oracle: Sentence-boundary oracle; a regex-only oracle when None.
        abbreviation_classifier: Optional English abbreviation classifier,
            asked only after the fixed abbreviation list misses.

    Returns:
        One EnrichedWord per raw timing, in input order.
    """
    if oracle is None:
        oracle = SentenceBoundaryOracle()

    is_english = bool(language) and language.lower().startswith("en")
    classifier = abbreviation_classifier if is_english else None
    # Oracle answers only feed the debug log.
    boundaries = None  # type: Optional[_BoundaryCache]
    if language and logger.isEnabledFor(logging.DEBUG):
        boundaries = _BoundaryCache(oracle, text, language)

    seen = {}  # type: Dict[str, int]
    enriched = []  # type: List[EnrichedWord]

    for index, raw in enumerate(raw_timings):
        start = to_milliseconds(raw.start_time)
        end = to_milliseconds(raw.end_time)
        if index < len(raw_timings) - 1:
            gap_after = to_milliseconds(raw_timings[index + 1].start_time) - end
        else:
            gap_after = 0

        word_text = raw.text.strip()
        cleaned = clean_word(word_text)
        key = cleaned.lower()
        occurrence = seen.get(key, 0)
        seen[key] = occurrence + 1

        punctuation_after = extract_punctuation_after_word(text, cleaned, occurrence)
        if punctuation_after is None:
            punctuation_after = trailing_punctuation(word_text)

        position = get_word_position_in_text(text, cleaned, occurrence)

        is_abbreviation = _classify_abbreviation(
            text,
            cleaned,
            punctuation_after,
            classifier if position is not None else None,
        )
        is_number = is_number_word(cleaned)

        is_sentence_end = False
        if (
            punctuation_after in SENTENCE_ENDING_PUNCTUATION
            and not is_abbreviation
            and not is_number
        ):
            # Oracle OR punctuation: the oracle can confirm, never veto.
            is_sentence_end = True
            if position is not None and boundaries is not None:
                end_position = position + len(cleaned) + 1
                if end_position not in boundaries:
                    logger.debug(
                        "No sentence boundary at %d after %r, keeping punctuation break",
                        end_position,
                        word_text,
                    )

        in_entity = None  # type: Optional[bool]
        in_group = None  # type: Optional[bool]
        at_group_boundary = None  # type: Optional[bool]
        if is_english:
            in_entity = position is not None and is_position_in_entity(position, entities)
            in_group = position is not None and is_position_in_meaning_group(
                position, meaning_groups
            )
            at_group_boundary = position is not None and is_meaning_group_boundary(
                position + len(cleaned), meaning_groups
            )

        enriched.append(
            EnrichedWord(
                text=word_text,
                start=start,
                end=end,
                duration=end - start,
                gap_after=gap_after,
                punctuation_after=punctuation_after,
                punctuation_weight=punctuation_weight(punctuation_after, is_abbreviation),
                is_abbreviation=is_abbreviation,
                is_number=is_number,
                is_sentence_end=is_sentence_end,
                is_in_entity=in_entity,
                is_in_meaning_group=in_group,
                is_at_meaning_group_boundary=at_group_boundary,
            )
        )

    return enriched
