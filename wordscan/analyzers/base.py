"""Base classes for analyzer plugins."""

from abc import ABC, abstractmethod

from ..models import AnalysisResult


class Analyzer(ABC):
    """Contract for analyzers that turn file content into a named result.

    Implementations must be pure functions of ``content``: the engine invokes
    the same instance from several threads at once without synchronization.
    """

    #: Result name, also the key used by ``discover_analyzers``.
    name: str = ""

    @abstractmethod
    def analyze(self, content: str) -> AnalysisResult:
        """Return this analyzer's result for ``content``."""
