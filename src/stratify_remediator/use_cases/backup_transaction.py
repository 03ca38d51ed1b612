"""Per-fix backup transaction: snapshot, then clean up on success or roll back on failure."""

import logging
import uuid
from pathlib import Path
from types import TracebackType
from typing import Optional

from stratify_remediator.domain.entities import BackupHandle, RestoreResult
from stratify_remediator.domain.protocols import BackupStrategyProtocol

logger = logging.getLogger(__name__)


class BackupTransaction:
    """
    Guards one fixer invocation.

    Usage:
        with BackupTransaction(strategy, targets, project_root):
            fixer.fix(violation, context)

    Entering snapshots every target. A clean exit discards the snapshot. An
    exception rolls every target back, then re-raises; the snapshot is kept
    when any file could not be restored.
    """

    def __init__(
        self,
        strategy: BackupStrategyProtocol,
        files: list[Path],
        project_root: Path,
        enabled: bool = True,
    ) -> None:
        self.id = str(uuid.uuid4())
        self.strategy = strategy
        self.files = list(files)
        self.project_root = project_root
        self.enabled = enabled
        self.handle: Optional[BackupHandle] = None
        self.restore_results: list[RestoreResult] = []
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def begin(self) -> None:
        if self.enabled:
            self.handle = self.strategy.backup(self.files, self.project_root)
        self._active = True

    def commit(self) -> None:
        if not self._active:
            return
        self._active = False
        if self.enabled:
            self.strategy.cleanup(self.files, self.project_root)

    def rollback(self) -> list[RestoreResult]:
        if not self._active:
            return []
        self._active = False
        if not self.enabled:
            return []
        self.restore_results = self.strategy.rollback(self.files, self.project_root)
        failed = [r for r in self.restore_results if not r.success]
        if failed:
            logger.error(
                "Transaction %s: %d file(s) could not be restored; snapshot kept by '%s'",
                self.id, len(failed), self.strategy.name,
            )
        else:
            self.strategy.cleanup(self.files, self.project_root)
        return self.restore_results

    def __enter__(self) -> "BackupTransaction":
        self.begin()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
