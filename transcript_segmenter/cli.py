"""Command-line interface for the transcript segmenter.

WHY: Word timings exported from TTS/ASR tools are usually files on disk.
A small CLI turns such a file into a segmented timeline without writing
any Python, and makes it easy to compare presets on real material.

HOW: argparse reads the input path (or "-" for stdin), optional source
text file, language, preset and log level. The JSON is parsed with
loader.try_parse_json() and loader.parse_input(), then handed to
segment_transcript(). The timeline JSON goes to the output file or stdout.

RULES:
- Positional: input JSON path, "-" reads stdin
- --text-file overrides the "text" field of the input
- --language overrides the "language" field of the input
- --spacy cross-checks sentence ends with spaCy at DEBUG (needs the "nlp" extra)
- Status messages go to stderr; timeline JSON to stdout or --output
- Exit codes: 0 = success, 1 = error
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from transcript_segmenter.config import DEFAULT_PRESET, LOG_LEVEL
from transcript_segmenter.core.capabilities import Capabilities
from transcript_segmenter.core.loader import parse_input, try_parse_json
from transcript_segmenter.core.pipeline import segment_transcript
from transcript_segmenter.presets import PRESETS


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _build_capabilities(use_spacy: bool) -> Capabilities:
    if not use_spacy:
        return Capabilities()
    from transcript_segmenter.adapters.spacy_segmenter import SpacySentenceSegmenter
    return Capabilities(sentence_segmenter=SpacySentenceSegmenter())


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="segment-transcript",
        description="Split timed transcript words into follow-along reading segments.",
    )
    parser.add_argument(
        "input",
        help='Word timing JSON file, or "-" to read stdin.',
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write the timeline JSON here instead of stdout.",
    )
    parser.add_argument(
        "--text-file",
        default=None,
        help="UTF-8 file with the source text the timings were produced from.",
    )
    parser.add_argument(
        "--language",
        default=None,
        help="Language code of the text, e.g. en or zh-CN.",
    )
    parser.add_argument(
        "--preset",
        default=DEFAULT_PRESET,
        help="Segmentation preset. Available: {} (default: %(default)s).".format(
            ", ".join(PRESETS.keys())
        ),
    )
    parser.add_argument(
        "--spacy",
        action="store_true",
        help="Cross-check punctuation sentence ends against spaCy's sentencizer "
             "(logged at DEBUG; the timeline is unchanged).",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        help="Logging level (default: %(default)s).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Run the segmenter CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        data = try_parse_json(_read_text(args.input))
        text = _read_text(args.text_file) if args.text_file else None
        request = parse_input(data, text=text)
    except (OSError, ValueError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    if not request.words:
        print("Error: No words found in input", file=sys.stderr)
        sys.exit(1)

    language = args.language or request.language

    try:
        capabilities = _build_capabilities(args.spacy)
    except ImportError as e:
        print(
            "Error: --spacy needs the 'nlp' extra ({})".format(e),
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        timeline = segment_transcript(
            request.text,
            request.words,
            language,
            preset=args.preset,
            capabilities=capabilities,
        )
    except ValueError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)

    output = json.dumps(timeline.to_dict(), ensure_ascii=False, indent=2)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
            f.write("\n")
        _status("Wrote {} segments ({} words) to {}".format(
            len(timeline.timeline), len(request.words), args.output
        ))
    else:
        print(output)
        _status("{} segments ({} words)".format(len(timeline.timeline), len(request.words)))
