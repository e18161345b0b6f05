"""Fixed-size worker pool that turns a path stream into a bundle stream."""

from __future__ import annotations

import threading
from typing import Iterable, List, Optional, Sequence

from .analyzers import Analyzer
from .cancellation import CancellationToken
from .engine import AnalysisEngine, FileReadError
from .logging import get_logger
from .models import FileAnalysisResult
from .streams import Channel

_LOGGER = get_logger("pool")


def feed_paths(
    files: Iterable[str],
    paths: Channel[str],
    cancel: Optional[CancellationToken] = None,
) -> threading.Thread:
    """Start a producer thread that pushes ``files`` into ``paths`` and closes it."""

    def _produce() -> None:
        sent = 0
        try:
            for path in files:
                if not paths.put(path, cancel):
                    _LOGGER.debug("Path feed cancelled after %d paths", sent)
                    return
                sent += 1
            _LOGGER.debug("Path feed exhausted after %d paths", sent)
        finally:
            paths.close()

    thread = threading.Thread(target=_produce, name="wordscan-feed", daemon=True)
    thread.start()
    return thread


class WorkerPool:
    """Runs ``workers`` threads that each pull paths and push finished bundles.

    File read errors are logged and skipped. Cancellation is observed when a
    worker pulls its next path and when it pushes a result; analysis already
    under way for a file is allowed to finish. The output channel is closed
    once, after every worker has exited.
    """

    def __init__(
        self,
        analyzers: Sequence[Analyzer],
        workers: int,
        *,
        buffer_size: int = 1,
    ) -> None:
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.analyzers = list(analyzers)
        self.workers = workers
        self.buffer_size = buffer_size

    def run(
        self,
        paths: Channel[str],
        cancel: Optional[CancellationToken] = None,
    ) -> Channel[FileAnalysisResult]:
        """Start the pool and return its output channel without blocking."""
        results: Channel[FileAnalysisResult] = Channel(self.buffer_size, name="results")
        engine = AnalysisEngine(self.analyzers, max_concurrency=self.workers)
        threads = [
            threading.Thread(
                target=self._work,
                args=(index, engine, paths, results, cancel),
                name=f"wordscan-worker-{index}",
                daemon=True,
            )
            for index in range(self.workers)
        ]
        for thread in threads:
            thread.start()

        def _close_when_done() -> None:
            for thread in threads:
                thread.join()
            engine.close()
            results.close()
            _LOGGER.debug("All %d workers finished; results closed", len(threads))

        threading.Thread(target=_close_when_done, name="wordscan-pool-join", daemon=True).start()
        return results

    def _work(
        self,
        index: int,
        engine: AnalysisEngine,
        paths: Channel[str],
        results: Channel[FileAnalysisResult],
        cancel: Optional[CancellationToken],
    ) -> None:
        processed = 0
        while True:
            path, ok = paths.get(cancel)
            if not ok:
                break
            try:
                bundle = engine.analyze_file(path)  # type: ignore[arg-type]
            except FileReadError as exc:
                _LOGGER.warning("Skipping file: %s", exc)
                continue
            if not results.put(bundle, cancel):
                break
            processed += 1
        _LOGGER.debug("Worker %d exiting after %d files", index, processed)


def analyze_parallel(
    files: Sequence[str],
    analyzers: Sequence[Analyzer],
    workers: int,
    cancel: Optional[CancellationToken] = None,
) -> List[FileAnalysisResult]:
    """Analyze ``files`` with a pool of ``workers`` and collect every bundle.

    Result order follows completion, not input order.
    """
    paths: Channel[str] = Channel(max(1, len(files)), name="paths")
    feed_paths(files, paths, cancel)
    output = WorkerPool(analyzers, workers).run(paths, cancel)
    return list(output)


__all__ = ["WorkerPool", "analyze_parallel", "feed_paths"]
