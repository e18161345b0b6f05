"""Core data models shared across wordscan components."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

ResultData = Union[int, Dict[str, int], None]


@dataclass(frozen=True)
class AnalysisResult:
    """Named output of a single analyzer; `name` decides how `data` is read."""

    name: str
    data: ResultData
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class FileAnalysisResult:
    """All analyzer outputs for one file, in analyzer order."""

    file_name: str
    size: int
    results: Tuple[AnalysisResult, ...]

    def get(self, name: str) -> Optional[AnalysisResult]:
        for result in self.results:
            if result.name == name:
                return result
        return None


@dataclass(frozen=True)
class WordCount:
    """A ranked entry of the global word frequency table."""

    word: str
    count: int


@dataclass
class AnalysisReport:
    """Terminal values of a pipeline run."""

    files: List[FileAnalysisResult] = field(default_factory=list)
    total_words: int = 0
    total_lines: int = 0
    top_words: List[WordCount] = field(default_factory=list)
    cancelled: bool = False
