"""Per-file word frequency analyzer."""

from __future__ import annotations

from collections import Counter

from .base import Analyzer
from .tokens import split_fields
from ..models import AnalysisResult

WORD_FREQUENCY = "most_frequent_words"


class WordFrequencyAnalyzer(Analyzer):
    """Maps each lower-cased token to its number of occurrences in the file."""

    name = WORD_FREQUENCY

    def analyze(self, content: str) -> AnalysisResult:
        counts = Counter(token.lower() for token in split_fields(content))
        return AnalysisResult(name=self.name, data=dict(counts))
