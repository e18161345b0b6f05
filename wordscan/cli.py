"""CLI entrypoints for wordscan commands."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from .analyzers import LINE_COUNT, WORD_COUNT
from .cancellation import CancellationToken, interrupt_handler
from .config import ConfigError
from .logging import configure_logging
from .models import AnalysisReport, FileAnalysisResult
from .orchestrator import AnalysisOptions, Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _non_negative_int(value: str) -> int:
    parsed = int(value)
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return parsed


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordscan",
        description="Count words and lines across text files and report the most frequent words.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze a text file or every matching file under a directory.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument("path", help="Directory of text files or a single file.")
    analyze_parser.add_argument("--ext", help="File extension to analyze (default: .txt).")
    analyze_parser.add_argument(
        "--workers", type=_positive_int, help="Number of concurrent workers (default: CPU count)."
    )
    analyze_parser.add_argument(
        "--top-words", type=_non_negative_int, help="Show the N most frequent words."
    )
    analyze_parser.add_argument(
        "--min-size", type=_non_negative_int, help="Minimum file size in bytes."
    )
    analyze_parser.add_argument(
        "--max-size", type=_non_negative_int, help="Maximum file size in bytes."
    )
    analyze_parser.add_argument(
        "--min-words",
        type=_non_negative_int,
        help="Hide files with fewer words than this (default: 2).",
    )
    analyze_parser.add_argument(
        "--analyzers",
        help="Comma-separated analyzer names to run (default: all).",
    )
    analyze_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Glob pattern of paths to skip; may be repeated.",
    )
    analyze_parser.add_argument(
        "--log-file",
        type=Path,
        help="Also write log records, with thread names, to this file.",
    )
    analyze_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final report as JSON instead of streaming text.",
    )

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for wordscan commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose), log_file=getattr(args, "log_file", None)
    )

    if args.command == "analyze":
        _run_analyze(parser, args)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_analyze(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    options = AnalysisOptions(
        extension=args.ext,
        workers=args.workers,
        top_words=args.top_words,
        min_size=args.min_size,
        max_size=args.max_size,
        min_words=args.min_words,
        analyzers=_split_names(args.analyzers),
        exclude_paths=list(args.exclude),
    )
    on_result = None if args.json else _print_file_result

    token = CancellationToken()
    try:
        with interrupt_handler(token):
            report = Orchestrator().run_analysis(
                args.path, options, cancel=token, on_result=on_result
            )
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, ValueError) as exc:
        parser.exit(1, f"wordscan analyze failed: {exc}\nRun with --verbose for more details.\n")
    except OSError as exc:
        parser.exit(1, f"wordscan analyze failed while scanning: {exc}\n")

    if args.json:
        print(json.dumps(asdict(report), indent=2, sort_keys=True))
    else:
        print(render_summary(report))


def _split_names(value: str | None) -> list[str] | None:
    if not value:
        return None
    names = [name.strip() for name in value.split(",") if name.strip()]
    return names or None


def render_file_result(bundle: FileAnalysisResult) -> str:
    lines = [f"File: {bundle.file_name}, size: {bundle.size}"]
    for result in bundle.results:
        if not result.ok:
            lines.append(f"  {result.name}: error ({result.error})")
        elif result.name == WORD_COUNT:
            lines.append(f"  words: {result.data}")
        elif result.name == LINE_COUNT:
            lines.append(f"  lines: {result.data}")
    return "\n".join(lines)


def _print_file_result(bundle: FileAnalysisResult) -> None:
    print(render_file_result(bundle), flush=True)


def render_summary(report: AnalysisReport) -> str:
    lines = [""]
    if report.cancelled:
        lines.append("Run interrupted; totals cover files processed so far.")
    lines.append(f"TOTAL: lines = {report.total_lines}, words = {report.total_words}")
    if report.top_words:
        lines.append("")
        for entry in report.top_words:
            lines.append(f'"{entry.word}": {entry.count}')
    return "\n".join(lines)


if __name__ == "__main__":
    main(sys.argv[1:])
