"""Domain protocols (ports). Infrastructure supplies the implementations."""

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from stratify_remediator.domain.entities import (
        BackupHandle,
        FixerContext,
        FixResult,
        ModuleInfo,
        RestoreResult,
        StructureViolation,
    )
    from stratify_remediator.domain.java import JavaCompilationUnit
    from stratify_remediator.domain.registry_types import RuleRegistryEntry


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def debug(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for file system operations used by fixers and the backup subsystem."""

    def exists(self, path: Path) -> bool: ...
    def is_dir(self, path: Path) -> bool: ...
    def read_text(self, path: Path) -> str: ...
    def read_bytes(self, path: Path) -> bytes: ...

    def write_text(self, path: Path, content: str) -> None:
        """Replace the file in full; a partially written file is never observable."""
        ...

    def write_bytes(self, path: Path, content: bytes) -> None: ...
    def make_dirs(self, path: Path) -> None: ...
    def delete_file(self, path: Path) -> None: ...
    def make_executable(self, path: Path) -> bool: ...
    def walk_files(self, root: Path, suffix: str) -> list[Path]: ...


class JavaSourceProtocol(Protocol):
    """Protocol for turning Java source into a structural index."""

    def parse_file(self, path: Path) -> "JavaCompilationUnit":
        """Index one file. Raises JavaSyntaxError or OSError on failure."""
        ...


class ModuleScannerProtocol(Protocol):
    """Protocol for discovering modules and their source roots."""

    def scan(self, project_root: Path) -> list["ModuleInfo"]: ...
    def scan_module(self, module_path: Path) -> "ModuleInfo": ...
    def source_roots(self, module: "ModuleInfo") -> list[Path]: ...
    def source_files(self, module: "ModuleInfo") -> list[Path]: ...


class DetectorProtocol(Protocol):
    """A read-only rule check. Never raises; unreadable files are skipped."""

    @property
    def rule_ids(self) -> frozenset[str]: ...

    def detect(self, module: "ModuleInfo") -> list["StructureViolation"]: ...


@runtime_checkable
class FixerProtocol(Protocol):
    """A remediation strategy for one or more rule ids."""

    @property
    def name(self) -> str: ...
    @property
    def description(self) -> str: ...
    @property
    def priority(self) -> int: ...
    @property
    def supported_rules(self) -> frozenset[str]: ...

    def can_fix(self, violation: "StructureViolation") -> bool: ...

    def target_files(self, violation: "StructureViolation", context: "FixerContext") -> list[Path]:
        """Every file this fix might create or modify, existing or not."""
        ...

    def fix(self, violation: "StructureViolation", context: "FixerContext") -> "FixResult": ...


class FixerRegistryProtocol(Protocol):
    """Protocol for the priority-ordered fixer dispatch table."""

    def register(self, fixer: FixerProtocol) -> None: ...
    def find_fixers_for_rule(self, rule_id: str) -> list[FixerProtocol]: ...


@runtime_checkable
class BackupStrategyProtocol(Protocol):
    """Pluggable snapshot mechanism guarding one fixer invocation."""

    @property
    def name(self) -> str: ...

    def backup(self, files: list[Path], project_root: Path) -> "BackupHandle":
        """Capture current bytes of each file; missing files are recorded as absent."""
        ...

    def rollback(self, files: list[Path], project_root: Path) -> list["RestoreResult"]:
        """Restore each file to its snapshot, deleting files that were absent."""
        ...

    def cleanup(self, files: list[Path], project_root: Path) -> None:
        """Discard the snapshot of a successful fix."""
        ...


class RuleRegistryProtocol(Protocol):
    """Protocol for rule metadata lookups."""

    def get_entry(self, rule_id: str) -> Optional["RuleRegistryEntry"]: ...
    def get_registry(self) -> dict[str, "RuleRegistryEntry"]: ...


class PomProtocol(Protocol):
    """Protocol for minimal pom.xml key extraction and module-list editing."""

    def extract_value(self, content: str, tag: str, default: Optional[str] = None) -> Optional[str]: ...
    def packaging(self, content: str) -> str: ...
    def is_aggregator(self, content: str) -> bool: ...
    def is_root(self, content: str) -> bool: ...
    def declared_modules(self, content: str) -> list[str]: ...
    def add_module(self, content: str, module_name: str) -> str: ...


class BackupStrategySelectorProtocol(Protocol):
    """Resolves a backup strategy by name; None selects the default."""

    def names(self) -> list[str]: ...

    def select(self, name: Optional[str]) -> BackupStrategyProtocol:
        """Raises BackupError for an unknown name."""
        ...
