"""Shared fixer plumbing: contract properties, applicability, module-root resolution."""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from stratify_remediator.domain.constants import DEFAULT_FIXER_PRIORITY, POM_FILE
from stratify_remediator.domain.entities import FixerContext, FixResult, StructureViolation
from stratify_remediator.domain.protocols import FileSystemProtocol, FixerProtocol
from stratify_remediator.infrastructure.gateways.filesystem_gateway import FileSystemGateway


class AbstractStructureFixer(FixerProtocol, ABC):
    """
    Base class for fixers.

    Subclasses declare their targets and implement _apply. Faults raised by
    _apply propagate: the orchestrator owns rollback and turns them into
    FAILED results.
    """

    def __init__(
        self,
        name: str,
        description: str,
        supported_rules: Iterable[str],
        priority: int = DEFAULT_FIXER_PRIORITY,
        filesystem: Optional[FileSystemProtocol] = None,
    ) -> None:
        self._name = name
        self._description = description
        self._supported_rules = frozenset(supported_rules)
        self._priority = priority
        self.filesystem = filesystem or FileSystemGateway()

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def supported_rules(self) -> frozenset[str]:
        return self._supported_rules

    def can_fix(self, violation: StructureViolation) -> bool:
        return violation.rule_id in self._supported_rules

    def fix(self, violation: StructureViolation, context: FixerContext) -> FixResult:
        if not self.can_fix(violation):
            return FixResult.skipped(violation, f"{self.name} does not handle rule {violation.rule_id}")
        return self._apply(violation, context)

    @abstractmethod
    def target_files(self, violation: StructureViolation, context: FixerContext) -> list[Path]: ...

    @abstractmethod
    def _apply(self, violation: StructureViolation, context: FixerContext) -> FixResult: ...

    def derive_module_root(self, violation: StructureViolation, context: FixerContext) -> Path:
        """Nearest directory at or above the violation location holding a pom.xml."""
        location = Path(violation.location)
        current = location if self.filesystem.is_dir(location) else location.parent
        project_root = context.project_root.resolve()
        while True:
            if self.filesystem.exists(current / POM_FILE):
                return current
            resolved = current.resolve()
            if resolved == project_root or project_root not in resolved.parents:
                return context.module_root
            current = current.parent

    def write_if_changed(self, path: Path, content: str) -> bool:
        """Replace the file in full when its bytes would change. Returns True if written."""
        new_bytes = content.encode("utf-8")
        if self.filesystem.exists(path) and self.filesystem.read_bytes(path) == new_bytes:
            return False
        self.filesystem.write_bytes(path, new_bytes)
        return True

    @staticmethod
    def to_pascal_case(name: str) -> str:
        return "".join(part[:1].upper() + part[1:] for part in re.split(r"[-_.\s]+", name) if part)

    @staticmethod
    def relative(path: Path, root: Path) -> str:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            return path.as_posix()
