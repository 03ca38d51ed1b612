"""Unit tests for MemoryBackupStrategy."""

from pathlib import Path

from stratify_remediator.infrastructure.backup import MemoryBackupStrategy


class TestMemoryBackupStrategy:
    def test_rollback_restores_content(self, tmp_path: Path) -> None:
        target = tmp_path / "A.java"
        target.write_text("class A {}", encoding="utf-8")
        strategy = MemoryBackupStrategy()
        strategy.backup([target], tmp_path)
        target.write_text("class B {}", encoding="utf-8")
        assert [r.success for r in strategy.rollback([target], tmp_path)] == [True]
        assert target.read_text(encoding="utf-8") == "class A {}"

    def test_rollback_deletes_file_that_did_not_exist(self, tmp_path: Path) -> None:
        target = tmp_path / "new" / "dir" / "mvnw"
        strategy = MemoryBackupStrategy()
        handle = strategy.backup([target], tmp_path)
        assert handle.absent == frozenset({target})
        target.parent.mkdir(parents=True)
        target.write_text("#!/bin/sh", encoding="utf-8")
        strategy.rollback([target], tmp_path)
        assert not target.exists()
        assert not (tmp_path / "new").exists()
        assert tmp_path.exists()

    def test_nothing_written_outside_targets(self, tmp_path: Path) -> None:
        target = tmp_path / "f.txt"
        target.write_text("x", encoding="utf-8")
        strategy = MemoryBackupStrategy()
        strategy.backup([target], tmp_path)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["f.txt"]

    def test_cleanup_forgets_snapshot(self, tmp_path: Path) -> None:
        target = tmp_path / "f.txt"
        target.write_text("x", encoding="utf-8")
        strategy = MemoryBackupStrategy()
        strategy.backup([target], tmp_path)
        strategy.cleanup([target], tmp_path)
        results = strategy.rollback([target], tmp_path)
        assert results[0].success is False
