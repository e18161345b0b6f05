"""CLI behaviour tests."""

from __future__ import annotations

import json

import pytest

from wordscan.cli import _build_parser, main, render_file_result, render_summary
from wordscan.logging import configure_logging
from wordscan.models import AnalysisReport, AnalysisResult, FileAnalysisResult, WordCount


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--verbose", "analyze", "."]).verbose is True
    assert parser.parse_args(["analyze", ".", "--verbose"]).verbose is True


def test_cli_parses_analyze_options() -> None:
    args = _build_parser().parse_args(
        ["analyze", "docs", "--ext", ".md", "--workers", "4", "--top-words", "3", "--json"]
    )
    assert args.command == "analyze"
    assert args.path == "docs"
    assert args.ext == ".md"
    assert args.workers == 4
    assert args.top_words == 3
    assert args.json is True
    assert args.min_size is None


def test_cli_rejects_zero_workers() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["analyze", ".", "--workers", "0"])


def test_render_file_result_and_summary() -> None:
    bundle = FileAnalysisResult(
        file_name="a.txt",
        size=20,
        results=(
            AnalysisResult(name="word_count", data=4),
            AnalysisResult(name="line_count", data=2),
            AnalysisResult(name="most_frequent_words", data={"hello": 2}),
        ),
    )
    assert render_file_result(bundle) == "File: a.txt, size: 20\n  words: 4\n  lines: 2"

    report = AnalysisReport(
        files=[bundle], total_words=4, total_lines=2, top_words=[WordCount("hello", 2)]
    )
    assert render_summary(report).splitlines() == [
        "",
        "TOTAL: lines = 2, words = 4",
        "",
        '"hello": 2',
    ]


def test_main_analyze_prints_stream_and_totals(corpus_builder, capsys) -> None:
    corpus_builder.write({"a.txt": "hello world\nhello go"})

    main(["analyze", str(corpus_builder.path()), "--workers", "1", "--top-words", "1"])

    out = capsys.readouterr().out
    assert "File: a.txt" in out
    assert "TOTAL: lines = 2, words = 4" in out
    assert '"hello": 2' in out


def test_main_analyze_json_output(corpus_builder, capsys) -> None:
    corpus_builder.write({"a.txt": "one two three"})

    main(["analyze", str(corpus_builder.path()), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["total_words"] == 3
    assert payload["files"][0]["file_name"] == "a.txt"
    assert payload["cancelled"] is False


def test_main_analyze_missing_path_exits(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(tmp_path / "missing")])
    assert excinfo.value.code == 1


def test_main_analyze_writes_worker_debug_lines_to_log_file(corpus_builder, tmp_path) -> None:
    corpus_builder.write({"a.txt": "one two", "b.txt": "three four"})
    log_file = tmp_path / "wordscan.log"

    main(
        [
            "analyze",
            str(corpus_builder.path()),
            "--workers",
            "2",
            "--verbose",
            "--log-file",
            str(log_file),
        ]
    )
    configure_logging()

    content = log_file.read_text(encoding="utf-8")
    assert "DEBUG wordscan.pool wordscan-worker-0: Worker 0 exiting" in content
    assert "DEBUG wordscan.pool wordscan-worker-1: Worker 1 exiting" in content
