"""Break scoring and the forward segmentation pass.

WHY: Follow-along reading needs segments that end where a listener hears a
boundary. No single signal is reliable on its own: periods also follow
abbreviations and decimals, pauses also come from hesitation, and a pure
word count cuts mid-phrase. Signals are therefore scored additively and a
segment only ends when enough of them agree.

HOW: segment_words() walks the enriched words once, appending each to the
current segment and asking should_break_at_position() whether to close it.
When a segment reaches max_words_per_segment without a natural break, a
short look-back (find_best_break_point) picks the strongest recent break
candidate; failing that, find_fallback_break_point() looks for any weak
signal or cuts mechanically at the preferred length.

RULES:
- Segments partition the input: every word lands in exactly one segment.
- The last word always closes a segment.
- A single-word sentence ("Why?") always stands alone.
- Segments shorter than min_words_per_segment only close on a score >= 10.
- A segment closes on a score >= 6.
- All thresholds come from the config dict; nothing is read from globals.
"""

import logging
from typing import Dict, List, Optional, Sequence

from transcript_segmenter.core.ir import EnrichedWord, WordSegment

logger = logging.getLogger(__name__)

SENTENCE_END_SCORE = 12
LONG_PAUSE_SCORE = 8
PAUSE_SCORE = 4
PREFERRED_LENGTH_SCORE = 3
SHORT_SEGMENT_MIN_SCORE = 10
BREAK_THRESHOLD = 6

LOOKBACK_WORDS = 5
CANDIDATE_SENTENCE_END_SCORE = 15
CANDIDATE_PAUSE_SCORE = 3
CANDIDATE_LENGTH_SCORE = 2
MECHANICAL_CUT_SLACK = 3


def calculate_break_score(word: EnrichedWord, word_count: int, config: Dict) -> int:
    """Additive break score for closing a segment of word_count words after word."""
    score = 0

    if word.punctuation_weight > 0 and not word.is_abbreviation:
        score += word.punctuation_weight

    if word.is_sentence_end:
        score += SENTENCE_END_SCORE

    if word.gap_after >= config["long_pause_threshold"]:
        score += LONG_PAUSE_SCORE
    elif word.gap_after >= config["pause_threshold"]:
        score += PAUSE_SCORE

    if word_count >= config["preferred_words_per_segment"]:
        score += PREFERRED_LENGTH_SCORE

    return score


def should_break_at_position(
    words: Sequence[EnrichedWord], index: int, word_count: int, config: Dict
) -> bool:
    """Decide whether the current segment ends after words[index].

    Args:
        words: The full enriched word sequence.
        index: Position of the word just appended to the current segment.
        word_count: Number of words in the current segment, including it.
        config: Segmentation config dict.
    """
    if index == len(words) - 1:
        return True

    word = words[index]

    if word_count == 1 and word.is_sentence_end:
        return True

    if (
        word_count <= 2
        and word.is_sentence_end
        and word.gap_after >= config["pause_threshold"]
    ):
        return True

    score = calculate_break_score(word, word_count, config)

    if word_count < config["min_words_per_segment"] and score < SHORT_SEGMENT_MIN_SCORE:
        return False

    return score >= BREAK_THRESHOLD


def find_best_break_point(segment: Sequence[EnrichedWord], config: Dict) -> Optional[int]:
    """Pick the strongest break candidate among the segment's last few words.

    The current last word is never a candidate, and abbreviations are
    skipped. Returns the index of the word that ends the first part, or
    None when no candidate scores above zero.
    """
    lookback = min(LOOKBACK_WORDS, len(segment) - 1)
    start_index = max(0, len(segment) - lookback - 1)

    best_index = None  # type: Optional[int]
    best_score = 0

    for i in range(start_index, len(segment) - 1):
        word = segment[i]
        if word.is_abbreviation:
            continue

        score = 0
        if word.is_sentence_end:
            score += CANDIDATE_SENTENCE_END_SCORE
        elif word.punctuation_weight > 0:
            score += word.punctuation_weight * 2

        if word.gap_after >= config["pause_threshold"]:
            score += CANDIDATE_PAUSE_SCORE

        words_before = i + 1
        if (
            config["min_words_per_segment"]
            <= words_before
            <= config["preferred_words_per_segment"]
        ):
            score += CANDIDATE_LENGTH_SCORE

        if score > best_score:
            best_score = score
            best_index = i

    return best_index


def find_fallback_break_point(segment: Sequence[EnrichedWord], config: Dict) -> Optional[int]:
    """Find where to cut an over-long segment that has no scored candidate.

    Scans backwards from the end, down to index preferred_words_per_segment,
    for any word with a meaning-group boundary, punctuation or a pause
    after it. Without one, segments of at least preferred + 3 words are cut
    mechanically after preferred words.

    Returns:
        The number of words in the first part, or None to keep the segment
        whole.
    """
    preferred = config["preferred_words_per_segment"]

    for j in range(len(segment) - 1, preferred - 1, -1):
        word = segment[j]
        if (
            word.is_at_meaning_group_boundary
            or word.punctuation_weight > 0
            or word.gap_after >= config["pause_threshold"]
        ):
            return j + 1

    if len(segment) >= preferred + MECHANICAL_CUT_SLACK:
        return preferred

    return None


def segment_words(words: Sequence[EnrichedWord], config: Dict) -> List[WordSegment]:
    """Split enriched words into display segments in a single forward pass."""
    segments = []  # type: List[WordSegment]
    current = []  # type: List[EnrichedWord]

    for i, word in enumerate(words):
        current.append(word)

        if should_break_at_position(words, i, len(current), config):
            segments.append(WordSegment(words=current))
            current = []
            continue

        if len(current) < config["max_words_per_segment"]:
            continue

        split = _split_over_long(current, config)
        segments.append(WordSegment(words=current[:split]))
        current = current[split:]

    if current:
        segments.append(WordSegment(words=current))

    return segments


def _split_over_long(segment: List[EnrichedWord], config: Dict) -> int:
    """Number of words to emit from a segment that reached the maximum."""
    best = find_best_break_point(segment, config)
    if best is not None and best > 0:
        logger.debug("Forced break after %r (look-back)", segment[best].text)
        return best + 1

    fallback = find_fallback_break_point(segment, config)
    if fallback is not None:
        logger.debug("Forced break after %d words (fallback)", fallback)
        return fallback

    logger.debug("Forced break at %d words, no interior cut", len(segment))
    return len(segment)
