"""Backup/restore subsystem guarding every fixer invocation."""

from stratify_remediator.infrastructure.backup.memory import MemoryBackupStrategy
from stratify_remediator.infrastructure.backup.registry import BackupStrategyRegistry
from stratify_remediator.infrastructure.backup.staging import StagingBackupStrategy

__all__ = [
    "BackupStrategyRegistry",
    "MemoryBackupStrategy",
    "StagingBackupStrategy",
]
