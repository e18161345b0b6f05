"""Filtering and aggregation stages plus the end-to-end pipeline wiring."""

from __future__ import annotations

import threading
from collections import Counter
from typing import Callable, Iterable, List, Optional, Sequence

from .analyzers import LINE_COUNT, WORD_COUNT, WORD_FREQUENCY, Analyzer
from .cancellation import CancellationToken
from .logging import get_logger
from .models import AnalysisReport, FileAnalysisResult, WordCount
from .pool import WorkerPool, feed_paths
from .streams import Channel

_LOGGER = get_logger("pipeline")

Predicate = Callable[[FileAnalysisResult], bool]
ResultCallback = Callable[[FileAnalysisResult], None]


def min_word_count(threshold: int) -> Predicate:
    """Keep bundles whose word count is at least ``threshold``.

    Bundles without a usable word count pass through untouched.
    """

    def _predicate(bundle: FileAnalysisResult) -> bool:
        result = bundle.get(WORD_COUNT)
        if result is None or not result.ok or not isinstance(result.data, int):
            return True
        return result.data >= threshold

    return _predicate


def filter_stage(
    inbound: Channel[FileAnalysisResult],
    predicate: Predicate,
    cancel: Optional[CancellationToken] = None,
    *,
    buffer_size: int = 1,
) -> Channel[FileAnalysisResult]:
    """Forward bundles that satisfy ``predicate`` on a new channel.

    A single thread reads ``inbound`` until it closes and then closes the
    returned channel, so downstream sees end-of-stream exactly once.
    """
    outbound: Channel[FileAnalysisResult] = Channel(buffer_size, name="filtered")

    def _run() -> None:
        forwarded = dropped = 0
        try:
            for bundle in inbound:
                if not predicate(bundle):
                    dropped += 1
                    continue
                if not outbound.put(bundle, cancel):
                    break
                forwarded += 1
        finally:
            outbound.close()
            _LOGGER.debug("Filter stage done: %d forwarded, %d dropped", forwarded, dropped)

    threading.Thread(target=_run, name="wordscan-filter", daemon=True).start()
    return outbound


class Aggregator:
    """Single-owner accumulator of corpus totals and word frequencies."""

    def __init__(self) -> None:
        self.total_words = 0
        self.total_lines = 0
        self.word_frequency: Counter[str] = Counter()
        self.files: List[FileAnalysisResult] = []

    def add(self, bundle: FileAnalysisResult) -> None:
        self.files.append(bundle)
        for result in bundle.results:
            if not result.ok:
                continue
            if result.name == WORD_COUNT and isinstance(result.data, int):
                self.total_words += result.data
            elif result.name == LINE_COUNT and isinstance(result.data, int):
                self.total_lines += result.data
            elif result.name == WORD_FREQUENCY and isinstance(result.data, dict):
                self.word_frequency.update(result.data)

    def consume(
        self,
        stream: Iterable[FileAnalysisResult],
        on_result: Optional[ResultCallback] = None,
    ) -> None:
        """Drain ``stream`` to exhaustion, folding in every bundle."""
        for bundle in stream:
            self.add(bundle)
            if on_result is not None:
                on_result(bundle)

    def top_words(self, limit: int) -> List[WordCount]:
        """Return up to ``limit`` words by descending count, ties by word."""
        if limit <= 0:
            return []
        ranked = sorted(self.word_frequency.items(), key=lambda item: (-item[1], item[0]))
        return [WordCount(word=word, count=count) for word, count in ranked[:limit]]

    def report(self, top_n: int = 0, *, cancelled: bool = False) -> AnalysisReport:
        return AnalysisReport(
            files=list(self.files),
            total_words=self.total_words,
            total_lines=self.total_lines,
            top_words=self.top_words(top_n),
            cancelled=cancelled,
        )


def run_pipeline(
    files: Sequence[str],
    analyzers: Sequence[Analyzer],
    *,
    workers: int,
    predicate: Optional[Predicate] = None,
    top_n: int = 0,
    buffer_size: int = 100,
    cancel: Optional[CancellationToken] = None,
    on_result: Optional[ResultCallback] = None,
) -> AnalysisReport:
    """Run paths through pool, filter and aggregator and return the report.

    ``on_result`` is invoked from the calling thread for every accepted
    bundle as it arrives. When ``cancel`` fires the stages drain and the
    report covers whatever was aggregated up to that point.
    """
    cancel = cancel or CancellationToken()
    predicate = predicate or min_word_count(2)

    paths: Channel[str] = Channel(buffer_size, name="paths")
    feed_paths(files, paths, cancel)
    results = WorkerPool(analyzers, workers).run(paths, cancel)
    filtered = filter_stage(results, predicate, cancel)

    aggregator = Aggregator()
    try:
        aggregator.consume(filtered, on_result)
    except BaseException:
        # Upstream stages block on full channels until they observe the token.
        cancel.cancel()
        raise

    if cancel.cancelled:
        _LOGGER.warning("Pipeline cancelled after %d files", len(aggregator.files))
    return aggregator.report(top_n, cancelled=cancel.cancelled)


__all__ = [
    "Aggregator",
    "Predicate",
    "filter_stage",
    "min_word_count",
    "run_pipeline",
]
