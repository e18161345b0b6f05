"""Word and line counting analyzers."""

from __future__ import annotations

from .base import Analyzer
from .tokens import split_fields
from ..models import AnalysisResult

WORD_COUNT = "word_count"
LINE_COUNT = "line_count"


class WordCountAnalyzer(Analyzer):
    """Counts whitespace-delimited tokens."""

    name = WORD_COUNT

    def analyze(self, content: str) -> AnalysisResult:
        return AnalysisResult(name=self.name, data=len(split_fields(content)))


class LineCountAnalyzer(Analyzer):
    """Counts lines as newlines plus one, so empty content is a single line."""

    name = LINE_COUNT

    def analyze(self, content: str) -> AnalysisResult:
        return AnalysisResult(name=self.name, data=content.count("\n") + 1)
