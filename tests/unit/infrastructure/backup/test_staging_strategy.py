"""Unit tests for StagingBackupStrategy."""

from pathlib import Path

import pytest

from stratify_remediator.domain.exceptions import BackupError
from stratify_remediator.infrastructure.backup import StagingBackupStrategy


class TestStagingBackupStrategy:
    def test_backup_path_mirrors_project_layout(self, tmp_path: Path) -> None:
        strategy = StagingBackupStrategy()
        target = tmp_path / "agent" / "pom.xml"
        copy = strategy.backup_path(target, tmp_path)
        assert copy == tmp_path / ".remediation/staging/agent/pom.xml.bak"

    def test_target_outside_root_is_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(BackupError):
            StagingBackupStrategy().backup_path(tmp_path.parent / "elsewhere.txt", tmp_path)

    def test_backup_then_rollback_restores_bytes(self, tmp_path: Path) -> None:
        target = tmp_path / "agent" / "pom.xml"
        target.parent.mkdir()
        target.write_bytes(b"<project>original</project>")
        strategy = StagingBackupStrategy()
        handle = strategy.backup([target], tmp_path)
        assert handle.strategy == "staging"
        assert handle.absent == frozenset()

        target.write_bytes(b"corrupted")
        results = strategy.rollback([target], tmp_path)
        assert [r.success for r in results] == [True]
        assert target.read_bytes() == b"<project>original</project>"

    def test_rollback_removes_created_file_and_directories(self, tmp_path: Path) -> None:
        target = tmp_path / "agent" / "agent-api" / "pom.xml"
        strategy = StagingBackupStrategy()
        handle = strategy.backup([target], tmp_path)
        assert handle.absent == frozenset({target})

        target.parent.mkdir(parents=True)
        target.write_text("<project/>", encoding="utf-8")
        results = strategy.rollback([target], tmp_path)
        assert results[0].success
        assert not target.exists()
        assert not (tmp_path / "agent").exists()

    def test_cleanup_removes_staging_tree(self, tmp_path: Path) -> None:
        target = tmp_path / "a" / "b.txt"
        target.parent.mkdir()
        target.write_text("x", encoding="utf-8")
        strategy = StagingBackupStrategy()
        strategy.backup([target], tmp_path)
        assert strategy.backup_path(target, tmp_path).exists()
        strategy.cleanup([target], tmp_path)
        assert not (tmp_path / ".remediation").exists()
        assert target.read_text(encoding="utf-8") == "x"

    def test_rollback_without_backup_reports_failure(self, tmp_path: Path) -> None:
        results = StagingBackupStrategy().rollback([tmp_path / "never.txt"], tmp_path)
        assert results[0].success is False
        assert results[0].message == "No backup found"
