"""Unit tests for the sentence-boundary oracle.

WHY: Sentence ends are the strongest break signal. The oracle must give the
same answer with or without a locale segmenter for well-punctuated text,
and a failing segmenter must never break segmentation.

HOW: Regex fallback behaviour is tested directly; the segmenter path uses
small fake segmenters that record their calls, return fixed offsets, or raise.

RULES:
- Segmenter failures are logged as warnings and fall back to regex.
- Blank text has no boundaries.
"""

import logging

import pytest

from transcript_segmenter.core.sentence_boundary import (
    SentenceBoundaryOracle,
    normalize_language,
    punctuation_sentence_boundaries,
)


class _FixedSegmenter:
    def __init__(self, offsets):
        self.offsets = offsets
        self.calls = []

    def sentence_boundaries(self, text, locale):
        self.calls.append((text, locale))
        return self.offsets


class _BrokenSegmenter:
    def sentence_boundaries(self, text, locale):
        raise RuntimeError("segmenter exploded")


class TestNormalizeLanguage:
    """Language codes collapse to a supported base tag, defaulting to en."""

    @pytest.mark.parametrize("code, expected", [
        ("en", "en"),
        ("en-US", "en"),
        ("en-GB", "en"),
        ("zh-TW", "zh"),
        ("pt-BR", "pt"),
        ("pt_PT", "pt"),
        ("ja", "ja"),
    ])
    def test_mapped_codes(self, code, expected):
        assert normalize_language(code) == expected

    def test_unmapped_region_uses_primary_subtag(self):
        assert normalize_language("fr-CA") == "fr"

    def test_unknown_defaults_to_english(self):
        assert normalize_language("xx") == "en"

    def test_missing_defaults_to_english(self):
        assert normalize_language(None) == "en"
        assert normalize_language("") == "en"


class TestPunctuationFallback:
    """Regex boundaries after runs of sentence-ending marks."""

    def test_latin_sentences(self):
        assert punctuation_sentence_boundaries("Hello world. How are you?", "en") == [12, 25]

    def test_end_of_text_is_boundary(self):
        assert punctuation_sentence_boundaries("One. Two", "en") == [4, 8]

    def test_punctuation_runs_count_once(self):
        assert punctuation_sentence_boundaries("Wait... what?!", "en") == [7, 14]

    def test_cjk_full_width(self):
        assert punctuation_sentence_boundaries("你好。世界！", "zh") == [3, 6]

    def test_japanese_ignores_latin_period(self):
        assert punctuation_sentence_boundaries("A.B。", "ja") == [4]

    def test_unknown_language_uses_latin(self):
        assert punctuation_sentence_boundaries("Hi. Bye.", "xx") == [3, 8]


class TestSentenceBoundaryOracle:
    """Segmenter offsets are filtered; failures fall back to punctuation."""

    def test_regex_only_when_no_segmenter(self):
        oracle = SentenceBoundaryOracle()
        assert not oracle.has_segmenter
        assert oracle.get_sentence_boundaries("Hello world. How are you?", "en") == [12, 25]

    def test_is_sentence_boundary(self):
        oracle = SentenceBoundaryOracle()
        assert oracle.is_sentence_boundary("Hello world. Bye", 12, "en")
        assert not oracle.is_sentence_boundary("Hello world. Bye", 5, "en")

    def test_blank_text(self):
        oracle = SentenceBoundaryOracle(_FixedSegmenter([3]))
        assert oracle.get_sentence_boundaries("   ", "en") == []
        assert oracle.segment_sentences("", "en") == []

    def test_segment_sentences(self):
        oracle = SentenceBoundaryOracle()
        assert oracle.segment_sentences("Hello world. How are you?", "en") == [
            "Hello world.",
            "How are you?",
        ]

    def test_segmenter_is_primary(self):
        segmenter = _FixedSegmenter([5, 10])
        oracle = SentenceBoundaryOracle(segmenter)
        assert oracle.get_sentence_boundaries("abcde fghi", "en-US") == [5, 10]
        assert segmenter.calls == [("abcde fghi", "en")]

    def test_segmenter_offsets_out_of_range_dropped(self):
        oracle = SentenceBoundaryOracle(_FixedSegmenter([0, 5, 999]))
        assert oracle.get_sentence_boundaries("abcde fghi", "en") == [5]

    def test_empty_segmenter_result_falls_back(self):
        oracle = SentenceBoundaryOracle(_FixedSegmenter([]))
        assert oracle.get_sentence_boundaries("One. Two.", "en") == [4, 9]

    def test_failing_segmenter_falls_back_and_warns(self, caplog):
        oracle = SentenceBoundaryOracle(_BrokenSegmenter())
        with caplog.at_level(logging.WARNING):
            boundaries = oracle.get_sentence_boundaries("One. Two.", "en")
        assert boundaries == [4, 9]
        assert "punctuation fallback" in caplog.text

    def test_segment_sentences_uses_segmenter(self):
        oracle = SentenceBoundaryOracle(_FixedSegmenter([6]))
        assert oracle.segment_sentences("Mr. X said hi", "en") == ["Mr. X", "said hi"]
