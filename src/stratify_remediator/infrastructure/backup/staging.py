"""Default backup strategy: byte copies under <project>/.remediation/staging."""

import logging
import shutil
import threading
from pathlib import Path

from stratify_remediator.domain.constants import ABSENT_SUFFIX, BACKUP_SUFFIX, STAGING_DIR
from stratify_remediator.domain.entities import BackupHandle, RestoreResult
from stratify_remediator.domain.exceptions import BackupError
from stratify_remediator.domain.protocols import BackupStrategyProtocol, FileSystemProtocol
from stratify_remediator.infrastructure.backup.paths import (
    deepest_existing_ancestor,
    prune_empty_dirs,
    relative_to_root,
)
from stratify_remediator.infrastructure.gateways.filesystem_gateway import FileSystemGateway

logger = logging.getLogger(__name__)


class StagingBackupStrategy(BackupStrategyProtocol):
    """
    Copies each target to <staging>/<relative path>.bak before a fix.

    A target that does not exist yet gets a <relative path>.absent marker
    holding the deepest directory that already existed, so rollback can delete
    the file and any directories the fix created for it.
    """

    NAME = "staging"

    def __init__(self, filesystem: FileSystemProtocol | None = None, staging_dir: str = STAGING_DIR) -> None:
        self.filesystem = filesystem or FileSystemGateway()
        self.staging_dir = staging_dir
        # Guards the shared staging tree: cleanup prunes directories another backup may be filling.
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self.NAME

    def backup_root(self, project_root: Path) -> Path:
        return project_root / self.staging_dir

    def backup_path(self, target: Path, project_root: Path) -> Path:
        relative = relative_to_root(target, project_root)
        return self.backup_root(project_root) / f"{relative}{BACKUP_SUFFIX}"

    def absent_marker(self, target: Path, project_root: Path) -> Path:
        relative = relative_to_root(target, project_root)
        return self.backup_root(project_root) / f"{relative}{ABSENT_SUFFIX}"

    def backup(self, files: list[Path], project_root: Path) -> BackupHandle:
        absent = set()
        try:
            with self._lock:
                self._stage(files, project_root, absent)
        except OSError as exc:
            raise BackupError(f"Failed to back up files: {exc}") from exc
        logger.debug("Staged %d file(s), %d absent", len(files), len(absent))
        return BackupHandle(strategy=self.NAME, files=tuple(files), absent=frozenset(absent))

    def _stage(self, files: list[Path], project_root: Path, absent: set[Path]) -> None:
        for target in files:
            copy = self.backup_path(target, project_root)
            marker = self.absent_marker(target, project_root)
            self.filesystem.delete_file(copy)
            self.filesystem.delete_file(marker)
            if self.filesystem.exists(target):
                self.filesystem.make_dirs(copy.parent)
                shutil.copy2(target, copy)
            else:
                ancestor = deepest_existing_ancestor(target)
                self.filesystem.write_text(marker, str(ancestor))
                absent.add(target)

    def rollback(self, files: list[Path], project_root: Path) -> list[RestoreResult]:
        results = []
        for target in files:
            copy = self.backup_path(target, project_root)
            marker = self.absent_marker(target, project_root)
            try:
                if self.filesystem.exists(copy):
                    self.filesystem.write_bytes(target, self.filesystem.read_bytes(copy))
                    shutil.copystat(copy, target)
                    results.append(RestoreResult(target, copy, True))
                elif self.filesystem.exists(marker):
                    ancestor = Path(self.filesystem.read_text(marker))
                    self.filesystem.delete_file(target)
                    prune_empty_dirs(target.parent, ancestor)
                    results.append(RestoreResult(target, None, True, "Removed file created by the fix"))
                else:
                    results.append(RestoreResult(target, None, False, "No backup found"))
            except OSError as exc:
                results.append(RestoreResult(target, copy, False, str(exc)))
        return results

    def cleanup(self, files: list[Path], project_root: Path) -> None:
        with self._lock:
            for target in files:
                for staged in (self.backup_path(target, project_root), self.absent_marker(target, project_root)):
                    self.filesystem.delete_file(staged)
                    prune_empty_dirs(staged.parent, project_root)
