"""Configuration loading for wordscan (.wordscan.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".wordscan.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ScanConfig:
    """File discovery filters."""

    extension: str = ".txt"
    min_size: int = 0
    max_size: int = 0
    exclude_paths: List[str] = field(default_factory=list)


@dataclass
class AnalysisConfig:
    """Pipeline sizing and reporting settings."""

    workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    buffer_size: int = 100
    min_words: int = 2
    top_words: int = 0


@dataclass
class AnalyzerConfig:
    """Analyzer enablement."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class WordScanConfig:
    """Represents the settings defined in .wordscan.yml."""

    root: Path
    scan: ScanConfig = field(default_factory=ScanConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    analyzers: AnalyzerConfig = field(default_factory=AnalyzerConfig)


def load_config(config_path: Path) -> WordScanConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return WordScanConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    scan = ScanConfig()
    scan_data = _as_dict(data.get("scan"))
    if scan_data:
        extension = _as_str(scan_data.get("extension"))
        if extension:
            scan.extension = extension
        scan.min_size = _as_non_negative(scan_data.get("min_size"), scan.min_size)
        scan.max_size = _as_non_negative(scan_data.get("max_size"), scan.max_size)
        scan.exclude_paths = _as_str_list(scan_data.get("exclude_paths"))

    analysis = AnalysisConfig()
    analysis_data = _as_dict(data.get("analysis"))
    if analysis_data:
        analysis.workers = _as_positive(analysis_data.get("workers"), analysis.workers)
        analysis.buffer_size = _as_positive(analysis_data.get("buffer_size"), analysis.buffer_size)
        analysis.min_words = _as_non_negative(analysis_data.get("min_words"), analysis.min_words)
        analysis.top_words = _as_non_negative(analysis_data.get("top_words"), analysis.top_words)

    analyzers = AnalyzerConfig()
    analyzer_data = _as_dict(data.get("analyzers"))
    if analyzer_data:
        analyzers.enabled = _as_str_list(analyzer_data.get("enabled"))

    return WordScanConfig(root=root, scan=scan, analysis=analysis, analyzers=analyzers)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_positive(value: Any, default: int) -> int:
    parsed = _as_int(value)
    return parsed if parsed is not None and parsed > 0 else default


def _as_non_negative(value: Any, default: int) -> int:
    parsed = _as_int(value)
    return parsed if parsed is not None and parsed >= 0 else default


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
