"""Tests for wordscan.pool."""

from __future__ import annotations

import threading
import time
from collections import Counter

import pytest

from wordscan.analyzers import (
    Analyzer,
    LineCountAnalyzer,
    WordCountAnalyzer,
    WordFrequencyAnalyzer,
)
from wordscan.cancellation import CancellationToken
from wordscan.engine import analyze_sequential
from wordscan.models import AnalysisResult
from wordscan.pool import WorkerPool, analyze_parallel, feed_paths
from wordscan.streams import Channel


def _analyzers():
    return [WordCountAnalyzer(), LineCountAnalyzer(), WordFrequencyAnalyzer()]


class CancellingAnalyzer(Analyzer):
    """Fires the token once it has seen ``after`` files."""

    name = "cancelling"

    def __init__(self, token: CancellationToken, after: int) -> None:
        self._token = token
        self._after = after
        self._seen = 0
        self._lock = threading.Lock()

    def analyze(self, content: str) -> AnalysisResult:
        with self._lock:
            self._seen += 1
            if self._seen >= self._after:
                self._token.cancel()
        time.sleep(0.01)
        return AnalysisResult(name=self.name, data=0)


@pytest.fixture
def corpus(corpus_builder):
    corpus_builder.write(
        {f"doc{index:02d}.txt": f"word{index} shared " * (index + 1) for index in range(20)}
    )
    return corpus_builder.scan()


@pytest.mark.parametrize("workers", [1, 3, 8, 32])
def test_parallel_matches_sequential_as_multiset(corpus, workers: int) -> None:
    sequential = analyze_sequential(corpus, _analyzers())
    parallel = analyze_parallel(corpus, _analyzers(), workers)

    def _key(bundle):
        return bundle.file_name

    assert sorted(parallel, key=_key) == sorted(sequential, key=_key)


def test_every_file_processed_exactly_once_with_fewer_workers(corpus) -> None:
    bundles = analyze_parallel(corpus, _analyzers(), workers=4)

    counts = Counter(bundle.file_name for bundle in bundles)
    assert len(counts) == len(corpus)
    assert set(counts.values()) == {1}


def test_unreadable_files_are_skipped(corpus_builder) -> None:
    paths = corpus_builder.write({"a.txt": "one two", "b.txt": "three four"})
    missing = str(corpus_builder.path() / "missing.txt")

    bundles = analyze_parallel([paths[0], missing, paths[1]], _analyzers(), workers=2)

    assert sorted(bundle.file_name for bundle in bundles) == ["a.txt", "b.txt"]


def test_pre_cancelled_run_produces_nothing(corpus) -> None:
    token = CancellationToken()
    token.cancel()

    assert analyze_parallel(corpus, _analyzers(), workers=4, cancel=token) == []


def test_cancellation_mid_run_terminates_without_deadlock(corpus) -> None:
    token = CancellationToken()
    analyzers = [WordCountAnalyzer(), CancellingAnalyzer(token, after=5)]
    collected: list = []

    def _run() -> None:
        collected.extend(analyze_parallel(corpus, analyzers, workers=2, cancel=token))

    thread = threading.Thread(target=_run)
    thread.start()
    thread.join(timeout=10)

    assert not thread.is_alive()
    assert token.cancelled
    assert len(collected) <= len(corpus)
    assert len({bundle.file_name for bundle in collected}) == len(collected)


def test_pool_closes_output_after_slow_consumer_drains(corpus) -> None:
    paths: Channel[str] = Channel(4, name="paths")
    feed_paths(corpus, paths)
    output = WorkerPool(_analyzers(), workers=3, buffer_size=1).run(paths)

    received = []
    for bundle in output:
        time.sleep(0.005)
        received.append(bundle)

    assert len(received) == len(corpus)
    assert output.closed


def test_pool_requires_a_worker() -> None:
    with pytest.raises(ValueError):
        WorkerPool(_analyzers(), workers=0)
