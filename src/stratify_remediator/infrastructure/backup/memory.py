"""In-process backup strategy. Nothing is written outside the targets themselves."""

import threading
from pathlib import Path
from typing import Optional

from stratify_remediator.domain.entities import BackupHandle, RestoreResult
from stratify_remediator.domain.protocols import BackupStrategyProtocol, FileSystemProtocol
from stratify_remediator.infrastructure.backup.paths import deepest_existing_ancestor, prune_empty_dirs
from stratify_remediator.infrastructure.gateways.filesystem_gateway import FileSystemGateway


class MemoryBackupStrategy(BackupStrategyProtocol):
    """Keeps snapshots as bytes keyed by resolved path. Lost if the process dies mid-fix."""

    NAME = "memory"

    def __init__(self, filesystem: FileSystemProtocol | None = None) -> None:
        self.filesystem = filesystem or FileSystemGateway()
        # path -> (content, or None when absent; deepest pre-existing ancestor)
        self._snapshots: dict[Path, tuple[Optional[bytes], Path]] = {}
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self.NAME

    def backup(self, files: list[Path], project_root: Path) -> BackupHandle:
        absent = set()
        taken: dict[Path, tuple[Optional[bytes], Path]] = {}
        for target in files:
            if self.filesystem.exists(target):
                taken[target.resolve()] = (self.filesystem.read_bytes(target), target.parent)
            else:
                taken[target.resolve()] = (None, deepest_existing_ancestor(target))
                absent.add(target)
        with self._lock:
            self._snapshots.update(taken)
        return BackupHandle(strategy=self.NAME, files=tuple(files), absent=frozenset(absent))

    def rollback(self, files: list[Path], project_root: Path) -> list[RestoreResult]:
        results = []
        for target in files:
            with self._lock:
                snapshot = self._snapshots.get(target.resolve())
            if snapshot is None:
                results.append(RestoreResult(target, None, False, "No backup found"))
                continue
            content, ancestor = snapshot
            try:
                if content is None:
                    self.filesystem.delete_file(target)
                    prune_empty_dirs(target.parent, ancestor)
                    results.append(RestoreResult(target, None, True, "Removed file created by the fix"))
                else:
                    self.filesystem.write_bytes(target, content)
                    results.append(RestoreResult(target, None, True))
            except OSError as exc:
                results.append(RestoreResult(target, None, False, str(exc)))
        return results

    def cleanup(self, files: list[Path], project_root: Path) -> None:
        with self._lock:
            for target in files:
                self._snapshots.pop(target.resolve(), None)
