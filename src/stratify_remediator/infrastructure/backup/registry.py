"""Discovery and per-project selection of backup strategies."""

import logging
from importlib.metadata import entry_points
from typing import Callable, Optional

from stratify_remediator.domain.constants import (
    BACKUP_STRATEGY_ENTRY_POINT_GROUP,
    DEFAULT_BACKUP_STRATEGY,
)
from stratify_remediator.domain.exceptions import BackupError
from stratify_remediator.domain.protocols import (
    BackupStrategyProtocol,
    BackupStrategySelectorProtocol,
    FileSystemProtocol,
)
from stratify_remediator.infrastructure.backup.memory import MemoryBackupStrategy
from stratify_remediator.infrastructure.backup.staging import StagingBackupStrategy
from stratify_remediator.infrastructure.gateways.filesystem_gateway import FileSystemGateway

logger = logging.getLogger(__name__)

StrategyFactory = Callable[[], BackupStrategyProtocol]


class BackupStrategyRegistry(BackupStrategySelectorProtocol):
    """
    Built-in strategies plus any registered under the
    ``stratify_remediator.backup_strategies`` entry-point group.

    An entry point must load to a zero-argument callable (usually the class)
    returning an object that satisfies BackupStrategyProtocol.
    """

    def __init__(
        self,
        filesystem: Optional[FileSystemProtocol] = None,
        discover: bool = True,
        default_name: str = DEFAULT_BACKUP_STRATEGY,
    ) -> None:
        fs = filesystem or FileSystemGateway()
        self._factories: dict[str, StrategyFactory] = {
            StagingBackupStrategy.NAME: lambda: StagingBackupStrategy(fs),
            MemoryBackupStrategy.NAME: lambda: MemoryBackupStrategy(fs),
        }
        self._instances: dict[str, BackupStrategyProtocol] = {}
        self.default_name = default_name
        if discover:
            self._discover()

    def _discover(self) -> None:
        for entry_point in entry_points(group=BACKUP_STRATEGY_ENTRY_POINT_GROUP):
            if entry_point.name in self._factories:
                logger.warning("Backup strategy '%s' shadows a built-in; ignoring it", entry_point.name)
                continue
            try:
                factory = entry_point.load()
            except (ImportError, AttributeError) as exc:
                logger.warning("Cannot load backup strategy '%s': %s", entry_point.name, exc)
                continue
            self._factories[entry_point.name] = factory

    def register(self, name: str, factory: StrategyFactory) -> None:
        self._factories[name] = factory
        self._instances.pop(name, None)

    def names(self) -> list[str]:
        return sorted(self._factories)

    def get(self, name: str) -> BackupStrategyProtocol:
        """Return the strategy registered under name, created once and reused."""
        if name not in self._instances:
            factory = self._factories.get(name)
            if factory is None:
                raise BackupError(
                    f"Unknown backup strategy '{name}'. Available: {', '.join(self.names())}"
                )
            strategy = factory()
            if not isinstance(strategy, BackupStrategyProtocol):
                raise BackupError(f"Backup strategy '{name}' does not implement backup/rollback/cleanup")
            self._instances[name] = strategy
        return self._instances[name]

    def get_default(self) -> BackupStrategyProtocol:
        return self.get(self.default_name)

    def select(self, name: Optional[str]) -> BackupStrategyProtocol:
        """The project's configured strategy, or the default when none is configured."""
        return self.get(name) if name else self.get_default()
