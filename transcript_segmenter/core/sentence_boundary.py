"""Language-aware sentence boundary detection.

WHY: A period after a word is only a weak hint that a sentence ended:
different scripts use different terminators, and locale-aware segmenters
know about quotes, ellipses and CJK full-width marks. The enricher asks
this oracle whether a character offset is a sentence boundary.

HOW: SentenceBoundaryOracle delegates to an injected SentenceSegmenter when
one is available. If there is none, if it raises, or if it finds nothing,
a regex fallback places a boundary after every run of the language's
sentence-ending characters and at the end of the text.

RULES:
- Language codes are normalized through LANGUAGE_MAP; unmapped codes try
  their primary subtag, then default to "en".
- Segmenter failures are logged as warnings and never propagate.
- Boundary offsets are exclusive end positions, ascending.
- Blank text has no boundaries and no sentences.
"""

import logging
import re
from typing import Dict, List, Optional

from transcript_segmenter.core.capabilities import SentenceSegmenter

logger = logging.getLogger(__name__)

# Application language codes -> base locale tags.
LANGUAGE_MAP: Dict[str, str] = {
    "en": "en",
    "en-us": "en",
    "en-gb": "en",
    "zh": "zh",
    "zh-cn": "zh",
    "zh-tw": "zh",
    "ja": "ja",
    "ko": "ko",
    "es": "es",
    "fr": "fr",
    "de": "de",
    "pt": "pt",
    "pt-br": "pt",
    "pt-pt": "pt",
}

DEFAULT_LANGUAGE = "en"

_LATIN_ENDINGS = re.compile(r"[.!?]+")

SENTENCE_ENDINGS: Dict[str, "re.Pattern"] = {
    "en": _LATIN_ENDINGS,
    "es": _LATIN_ENDINGS,
    "fr": _LATIN_ENDINGS,
    "de": _LATIN_ENDINGS,
    "pt": _LATIN_ENDINGS,
    "zh": re.compile("[。！？…]+"),
    "ja": re.compile("[。！？]+"),
    "ko": re.compile("[.!?。！？]+"),
}


def normalize_language(language: Optional[str]) -> str:
    """Collapse a language code to the base tag used for segmentation."""
    if not language:
        return DEFAULT_LANGUAGE
    code = language.strip().replace("_", "-").lower()
    if code in LANGUAGE_MAP:
        return LANGUAGE_MAP[code]
    return LANGUAGE_MAP.get(code.split("-")[0], DEFAULT_LANGUAGE)


def punctuation_sentence_boundaries(text: str, language: Optional[str]) -> List[int]:
    """Regex fallback: a boundary after every run of sentence-ending marks."""
    regex = SENTENCE_ENDINGS.get(normalize_language(language), _LATIN_ENDINGS)
    boundaries = [match.end() for match in regex.finditer(text)]
    if not boundaries or boundaries[-1] < len(text):
        boundaries.append(len(text))
    return boundaries


class SentenceBoundaryOracle:
    """Answers sentence-boundary questions for one text at a time.

    WHY: The enricher needs a yes/no answer per word while the CLI and HTTP
    layers want whole sentences; both must agree on the same boundary set.

    HOW: get_sentence_boundaries() is the single source of positions;
    is_sentence_boundary() and segment_sentences() are derived from it.

    RULES:
    - Holds no per-call state, so one instance can serve concurrent calls.
    - A segmenter that returns offsets outside (0, len(text)] has them dropped.
    """

    def __init__(self, segmenter: Optional[SentenceSegmenter] = None) -> None:
        self._segmenter = segmenter

    @property
    def has_segmenter(self) -> bool:
        return self._segmenter is not None

    def get_sentence_boundaries(self, text: str, language: Optional[str] = None) -> List[int]:
        """Return the exclusive end offsets of every sentence in text."""
        if not text or not text.strip():
            return []

        boundaries = self._segmenter_boundaries(text, language)
        if boundaries:
            return boundaries
        return punctuation_sentence_boundaries(text, language)

    def is_sentence_boundary(self, text: str, position: int, language: Optional[str] = None) -> bool:
        """True if a sentence ends exactly at the given character offset."""
        return position in self.get_sentence_boundaries(text, language)

    def segment_sentences(self, text: str, language: Optional[str] = None) -> List[str]:
        """Split text into stripped, non-empty sentences."""
        if not text or not text.strip():
            return []

        sentences = []  # type: List[str]
        start = 0
        for end in self.get_sentence_boundaries(text, language):
            sentence = text[start:end].strip()
            if sentence:
                sentences.append(sentence)
            start = end

        remaining = text[start:].strip()
        if remaining:
            sentences.append(remaining)
        return sentences

    def _segmenter_boundaries(self, text: str, language: Optional[str]) -> List[int]:
        if self._segmenter is None:
            return []

        locale = normalize_language(language)
        try:
            offsets = self._segmenter.sentence_boundaries(text, locale)
        except Exception:
            logger.warning(
                "Sentence segmenter failed for locale %s, using punctuation fallback",
                locale,
                exc_info=True,
            )
            return []
        return sorted({int(o) for o in offsets if 0 < o <= len(text)})
