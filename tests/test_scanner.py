"""Tests for wordscan.scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from wordscan.scanner import FileScanner


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_scan_walks_directory_filtering_by_extension(tmp_path: Path) -> None:
    _write(tmp_path / "b.txt", "bee")
    _write(tmp_path / "nested" / "a.txt", "aye")
    _write(tmp_path / "notes.md", "# not text")
    _write(tmp_path / ".git" / "HEAD.txt", "ref")

    found = FileScanner(".txt").scan(str(tmp_path))

    assert found == sorted([str(tmp_path / "b.txt"), str(tmp_path / "nested" / "a.txt")])


def test_scan_applies_size_bounds(tmp_path: Path) -> None:
    _write(tmp_path / "small.txt", "x")
    _write(tmp_path / "medium.txt", "x" * 10)
    _write(tmp_path / "large.txt", "x" * 100)

    found = FileScanner(".txt", min_size=5, max_size=50).scan(str(tmp_path))

    assert [Path(path).name for path in found] == ["medium.txt"]


def test_scan_accepts_single_file(tmp_path: Path) -> None:
    target = tmp_path / "only.txt"
    _write(target, "content")

    assert FileScanner(".txt").scan(str(target)) == [str(target)]
    assert FileScanner(".log").scan(str(target)) == []


def test_scan_honours_exclude_paths(tmp_path: Path) -> None:
    _write(tmp_path / "keep.txt", "keep")
    _write(tmp_path / "drafts" / "skip.txt", "skip")
    _write(tmp_path / "archive" / "old" / "skip.txt", "skip")
    _write(tmp_path / "scratch.txt", "skip")

    scanner = FileScanner(".txt", exclude_paths=["drafts/", "archive/old", "scratch*"])
    found = scanner.scan(str(tmp_path))

    assert [Path(path).name for path in found] == ["keep.txt"]


def test_scan_rejects_missing_path(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(FileNotFoundError) as excinfo:
        FileScanner().scan(str(missing))
    assert str(missing) in str(excinfo.value)
