"""Short-segment merging after the segmentation pass.

WHY: The forward pass can leave fragments shorter than the configured
minimum, e.g. a clause cut by a long breath pause. Showing them alone makes
the reading view flicker, so they are folded into the following segment
when that stays within the maximum.

HOW: One left-to-right pass. A short, non-final segment absorbs its
successor and the merged pair is emitted as a unit.

RULES:
- Single-word sentences ("Yes!") are never merged.
- A merge never produces more than max_words_per_segment words.
- Single pass: merged results are not re-checked against the minimum.
- A second run changes nothing when min_words_per_segment is 1; with a
  larger minimum it may merge pairs that the first run produced.
"""

from typing import Dict, List, Sequence

from transcript_segmenter.core.ir import WordSegment


def is_single_word_sentence(segment: WordSegment) -> bool:
    return len(segment.words) == 1 and segment.words[-1].is_sentence_end


def merge_short_segments(segments: Sequence[WordSegment], config: Dict) -> List[WordSegment]:
    """Fold segments below min_words_per_segment into their successor."""
    if len(segments) <= 1:
        return list(segments)

    min_words = config["min_words_per_segment"]
    max_words = config["max_words_per_segment"]

    merged = []  # type: List[WordSegment]
    i = 0
    while i < len(segments):
        current = segments[i]
        if (
            not is_single_word_sentence(current)
            and len(current) < min_words
            and i < len(segments) - 1
        ):
            following = segments[i + 1]
            if len(current) + len(following) <= max_words:
                merged.append(WordSegment(words=current.words + following.words))
                i += 2
                continue

        merged.append(current)
        i += 1

    return merged
