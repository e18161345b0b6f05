"""Per-file analysis: reading content and fanning out over analyzers."""

from __future__ import annotations

import os
from concurrent.futures import Executor, ThreadPoolExecutor, wait
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .analyzers import Analyzer
from .logging import get_logger
from .models import AnalysisResult, FileAnalysisResult

_LOGGER = get_logger("engine")


class FileReadError(OSError):
    """Raised when a candidate file cannot be read; callers skip the file."""


def read_file_content(path: str) -> Tuple[str, int]:
    """Return ``(content, size_in_bytes)`` for ``path``.

    Invalid UTF-8 is decoded to U+FFFD rather than rejected, so every readable
    file yields content; distinct invalid byte sequences become the same
    character.
    """
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
        size = file_path.stat().st_size
    except OSError as exc:
        raise FileReadError(f"Unable to read {path}: {exc}") from exc
    return data.decode("utf-8", errors="replace"), size


class AnalysisEngine:
    """Runs a fixed analyzer list over file content, one concurrent task per analyzer.

    Every task writes into its own pre-allocated slot, so the returned results
    follow analyzer order whatever order the tasks finish in. The engine owns a
    thread pool sized for ``max_concurrency`` simultaneous files; use it as a
    context manager or call ``close``.
    """

    def __init__(
        self,
        analyzers: Sequence[Analyzer],
        *,
        max_concurrency: int = 1,
        executor: Optional[Executor] = None,
    ) -> None:
        self.analyzers: Tuple[Analyzer, ...] = tuple(analyzers)
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=max(1, len(self.analyzers) * max(1, max_concurrency)),
            thread_name_prefix="wordscan-analyzer",
        )

    def __enter__(self) -> "AnalysisEngine":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_executor:
            self._executor.shutdown(wait=True)

    def analyze(self, content: str) -> Tuple[AnalysisResult, ...]:
        """Run all analyzers over ``content`` and wait for every one of them."""
        slots: List[Optional[AnalysisResult]] = [None] * len(self.analyzers)

        def _run(index: int, analyzer: Analyzer) -> None:
            slots[index] = _invoke(analyzer, content)

        futures = [
            self._executor.submit(_run, index, analyzer)
            for index, analyzer in enumerate(self.analyzers)
        ]
        wait(futures)
        for future in futures:
            # _invoke traps analyzer errors; anything here is an engine bug.
            future.result()
        return tuple(slots)  # type: ignore[arg-type]

    def analyze_file(self, path: str) -> FileAnalysisResult:
        """Read ``path`` and return its complete bundle. Raises ``FileReadError``."""
        content, size = read_file_content(path)
        results = self.analyze(content)
        return FileAnalysisResult(
            file_name=os.path.basename(path),
            size=size,
            results=results,
        )


def _invoke(analyzer: Analyzer, content: str) -> AnalysisResult:
    name = analyzer.name or analyzer.__class__.__name__
    try:
        result = analyzer.analyze(content)
    except Exception as exc:
        _LOGGER.warning("Analyzer %s failed: %s", name, exc)
        return AnalysisResult(name=name, data=None, error=str(exc) or exc.__class__.__name__)
    if not isinstance(result, AnalysisResult):
        _LOGGER.warning("Analyzer %s returned %r instead of a result", name, type(result).__name__)
        return AnalysisResult(name=name, data=None, error="invalid result type")
    return result


def analyze_sequential(
    files: Sequence[str], analyzers: Sequence[Analyzer]
) -> List[FileAnalysisResult]:
    """Analyze ``files`` one after another, preserving input order.

    Analyzers for each file still run concurrently. Unreadable files are
    skipped.
    """
    results: List[FileAnalysisResult] = []
    with AnalysisEngine(analyzers) as engine:
        for path in files:
            try:
                results.append(engine.analyze_file(path))
            except FileReadError as exc:
                _LOGGER.warning("Skipping file: %s", exc)
    return results


__all__ = [
    "AnalysisEngine",
    "FileReadError",
    "analyze_sequential",
    "read_file_content",
]
