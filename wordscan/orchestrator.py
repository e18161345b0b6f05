"""Run orchestration: config, discovery, analyzer selection and the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .analyzers import Analyzer, discover_analyzers
from .cancellation import CancellationToken
from .config import WordScanConfig, load_config
from .logging import get_logger
from .models import AnalysisReport
from .pipeline import ResultCallback, min_word_count, run_pipeline
from .scanner import FileScanner


@dataclass
class AnalysisOptions:
    """Per-run overrides; ``None`` means use the configured value."""

    extension: Optional[str] = None
    workers: Optional[int] = None
    top_words: Optional[int] = None
    min_size: Optional[int] = None
    max_size: Optional[int] = None
    min_words: Optional[int] = None
    analyzers: Optional[List[str]] = None
    exclude_paths: List[str] = field(default_factory=list)


class Orchestrator:
    """Coordinates a full analysis run over a file or directory."""

    def __init__(self, analyzers: Optional[Iterable[Analyzer]] = None) -> None:
        self._analyzer_overrides = list(analyzers) if analyzers is not None else None
        self.logger = get_logger("orchestrator")

    def run_analysis(
        self,
        path: str,
        options: Optional[AnalysisOptions] = None,
        *,
        cancel: Optional[CancellationToken] = None,
        on_result: Optional[ResultCallback] = None,
    ) -> AnalysisReport:
        """Analyze every matching file under ``path`` and return the report."""
        options = options or AnalysisOptions()
        target = Path(path).expanduser().resolve()
        self.logger.info("Starting analysis run for %s", target)

        config = load_config(target)
        scan = config.scan
        analysis = config.analysis

        scanner = FileScanner(
            _pick(options.extension, scan.extension),
            min_size=_pick(options.min_size, scan.min_size),
            max_size=_pick(options.max_size, scan.max_size),
            exclude_paths=[*scan.exclude_paths, *options.exclude_paths],
        )
        files = scanner.scan(str(target))
        if not files:
            self.logger.warning("No files with extension %s found under %s", scanner.extension, target)
        self.logger.debug("Scanner discovered %d files", len(files))

        analyzers = self._select_analyzers(config, options)
        self.logger.debug("Selected analyzers: %s", ", ".join(a.name for a in analyzers))

        workers = _pick(options.workers, analysis.workers)
        if workers < 1:
            raise ValueError("workers must be at least 1")

        report = run_pipeline(
            files,
            analyzers,
            workers=workers,
            predicate=min_word_count(_pick(options.min_words, analysis.min_words)),
            top_n=_pick(options.top_words, analysis.top_words),
            buffer_size=analysis.buffer_size,
            cancel=cancel,
            on_result=on_result,
        )
        self.logger.info(
            "Analyzed %d of %d files: %d lines, %d words",
            len(report.files),
            len(files),
            report.total_lines,
            report.total_words,
        )
        return report

    def _select_analyzers(
        self, config: WordScanConfig, options: AnalysisOptions
    ) -> List[Analyzer]:
        if self._analyzer_overrides is not None:
            return list(self._analyzer_overrides)
        enabled = options.analyzers or config.analyzers.enabled or None
        return discover_analyzers(enabled)


def _pick(override, default):
    return default if override is None else override


__all__ = ["AnalysisOptions", "Orchestrator"]
