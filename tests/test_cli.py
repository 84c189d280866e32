"""Tests for the segment-transcript command-line tool.

WHY: The CLI is how exported provider JSON gets segmented in practice. It
must accept both input shapes, read stdin, honour overrides and exit with
status 1 and a message on stderr for every user error.

HOW: main() is called in-process with tmp_path files; stdout/stderr are
captured with capsys and stdin is replaced with monkeypatch.

RULES:
- Timeline JSON on stdout (or --output); status on stderr.
- Errors exit with code 1.
"""

import io
import json

import pytest

from conftest import HELLO_TEXT, HELLO_WORDS, build_timings

from transcript_segmenter.cli import build_parser, main
from transcript_segmenter.core.loader import parse_input, try_parse_json


def _word_dicts(words):
    return [
        {"text": t.text, "startTime": t.start_time, "endTime": t.end_time}
        for t in build_timings(words)
    ]


def _write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestMain:
    """End-to-end runs of main() on files and stdin."""

    def test_document_input(self, tmp_path, capsys):
        src = _write_json(tmp_path / "in.json", {
            "text": HELLO_TEXT,
            "words": _word_dicts(HELLO_WORDS),
            "language": "en",
        })
        main([src])
        out = json.loads(capsys.readouterr().out)
        assert [s["text"] for s in out["timeline"]] == ["Hello world.", "How are you today?"]

    def test_bare_list_with_text_file(self, tmp_path, capsys):
        src = _write_json(tmp_path / "words.json", _word_dicts(["Hello", "world", "How", "are"]))
        text = tmp_path / "text.txt"
        text.write_text("Hello world. How are", encoding="utf-8")
        main([src, "--text-file", str(text), "--language", "en"])
        out = json.loads(capsys.readouterr().out)
        assert [s["text"] for s in out["timeline"]] == ["Hello world", "How are"]

    def test_stdin_input(self, monkeypatch, capsys):
        payload = json.dumps({"text": HELLO_TEXT, "words": _word_dicts(HELLO_WORDS)})
        monkeypatch.setattr("sys.stdin", io.StringIO(payload))
        main(["-"])
        out = json.loads(capsys.readouterr().out)
        assert len(out["timeline"]) == 2

    def test_output_file(self, tmp_path, capsys):
        src = _write_json(tmp_path / "in.json", {
            "text": HELLO_TEXT, "words": _word_dicts(HELLO_WORDS),
        })
        dest = tmp_path / "out.json"
        main([src, "-o", str(dest)])
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "2 segments" in captured.err
        assert len(json.loads(dest.read_text(encoding="utf-8"))["timeline"]) == 2

    def test_unknown_preset_exits_1(self, tmp_path, capsys):
        src = _write_json(tmp_path / "in.json", _word_dicts(HELLO_WORDS))
        with pytest.raises(SystemExit) as exc:
            main([src, "--preset", "karaoke"])
        assert exc.value.code == 1
        assert "Unknown preset" in capsys.readouterr().err

    def test_invalid_json_exits_1(self, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main([str(bad)])
        assert exc.value.code == 1
        assert "Could not parse JSON" in capsys.readouterr().err

    def test_no_words_exits_1(self, tmp_path, capsys):
        src = _write_json(tmp_path / "in.json", {"text": "Hello", "words": []})
        with pytest.raises(SystemExit) as exc:
            main([src])
        assert exc.value.code == 1
        assert "No words found" in capsys.readouterr().err

    def test_missing_file_exits_1(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "nope.json")])
        assert exc.value.code == 1

    @pytest.mark.parametrize("start", [None, "soon", True])
    def test_bad_word_time_exits_1(self, tmp_path, capsys, start):
        src = _write_json(tmp_path / "in.json", {
            "words": [{"text": "Hi", "startTime": start, "endTime": 0.2}],
        })
        with pytest.raises(SystemExit) as exc:
            main([src])
        assert exc.value.code == 1
        assert "Invalid start time for word 'Hi'" in capsys.readouterr().err


class TestBuildParser:
    """Argument defaults."""

    def test_defaults(self):
        args = build_parser().parse_args(["in.json"])
        assert args.output is None
        assert args.language is None
        assert args.spacy is False


class TestLoader:
    """JSON repair and word normalization in the loader."""

    def test_repairs_truncated_list(self):
        data = try_parse_json('[{"text": "Hi", "start": 0.0, "end": 0.2},')
        assert data == [{"text": "Hi", "start": 0.0, "end": 0.2}]

    def test_flexible_field_names(self):
        request = parse_input([{"word": "Hi", "start": 0.5, "end": 0.7}])
        assert request.words[0].text == "Hi"
        assert request.words[0].start_time == 0.5
        assert request.text == "Hi"

    def test_skips_empty_words(self):
        request = parse_input({"words": [{"text": ""}, {"text": "ok", "startTime": 1}]})
        assert [w.text for w in request.words] == ["ok"]
        assert request.words[0].end_time == 1.0

    def test_text_override(self):
        request = parse_input({"text": "A.", "words": [{"text": "A"}]}, text="B.")
        assert request.text == "B."

    def test_repairs_truncated_document(self):
        data = try_parse_json('{"text": "Hi [there]", "words": [{"text": "Hi", "start": 0.0}')
        assert data == {"text": "Hi [there]", "words": [{"text": "Hi", "start": 0.0}]}

    def test_unrepairable_raises(self):
        with pytest.raises(ValueError, match="Could not parse JSON"):
            try_parse_json('{"text": "Hi", "words": [{"text":')

    def test_null_time_raises(self):
        with pytest.raises(ValueError, match="Invalid end time"):
            parse_input([{"text": "Hi", "start": 0.1, "end": None}])
