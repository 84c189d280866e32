"""spaCy-backed locale sentence segmenter.

WHY: Regex sentence splitting misreads quotes, ellipses and mixed scripts.
spaCy's rule-based sentencizer knows the punctuation conventions of many
languages and needs no downloaded model, so it is a cheap upgrade for the
sentence-boundary oracle.

HOW: One blank pipeline per locale (spacy.blank(locale) plus the
"sentencizer" component) is built on first use and cached on the adapter
instance. sentence_boundaries() returns each sentence's end character.

RULES:
- Requires the optional "nlp" extra (pip install transcript-segmenter[nlp]).
- Languages spaCy cannot build a blank pipeline for raise from
  sentence_boundaries(); the oracle logs that and falls back to regex.
- The cache is per instance; no module-level pipeline state.
"""

import logging
from typing import Dict, List

import spacy
from spacy.language import Language

logger = logging.getLogger(__name__)


class SpacySentenceSegmenter:
    """SentenceSegmenter implementation using spaCy's sentencizer."""

    def __init__(self) -> None:
        self._pipelines = {}  # type: Dict[str, Language]

    def _pipeline(self, locale: str) -> Language:
        nlp = self._pipelines.get(locale)
        if nlp is None:
            logger.info("Building spaCy sentencizer pipeline for locale %s", locale)
            nlp = spacy.blank(locale)
            nlp.add_pipe("sentencizer")
            self._pipelines[locale] = nlp
        return nlp

    def sentence_boundaries(self, text: str, locale: str) -> List[int]:
        doc = self._pipeline(locale)(text)
        return [sent.end_char for sent in doc.sents if sent.text.strip()]
