from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional


class Severity(Enum):
    """Classification attached to rules. Orthogonal to FixStatus."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class FixStatus(Enum):
    """Outcome of one fixer invocation."""
    FIXED = "fixed"
    SKIPPED = "skipped"
    FAILED = "failed"
    # A valid transformation was computed but nothing was written.
    DRY_RUN = "dry_run"


class FixerRole(Enum):
    """How a Java class relates to the fixer contract, resolved once while indexing."""
    NONE = "none"
    IMPLEMENTS_CAPABILITY = "implements_capability"
    EXTENDS_BASE = "extends_base"

    @property
    def is_fixer(self) -> bool:
        return self is not FixerRole.NONE


_CATEGORY_BY_PREFIX: dict[str, str] = {
    "MS": "ModuleStructure",
    "MD": "ModuleDependencies",
    "AG": "Aggregator",
    "PA": "Parent",
    "FA": "FacadeDesign",
    "FX": "FixerDesign",
    "NC": "NamingConventions",
    "DP": "DependencyPatterns",
}


@dataclass(frozen=True)
class ModuleInfo:
    """Presence of layer submodules for one component, built from directory inspection."""

    base_name: str
    path: Path
    has_api: bool = False
    has_core: bool = False
    has_facade: bool = False
    has_spi: bool = False
    has_common: bool = False
    has_util: bool = False

    @property
    def has_any_submodules(self) -> bool:
        return (self.has_api or self.has_core or self.has_facade or self.has_spi
                or self.has_common or self.has_util)

    def has_role(self, role: str) -> bool:
        """Return the presence flag for a layer role name ('api', 'core', ...)."""
        return bool(getattr(self, f"has_{role}", False))

    def submodule_path(self, role: str) -> Path:
        return self.path / f"{self.base_name}-{role}"


@dataclass(frozen=True)
class StructureViolation:
    """
    A detected deviation from a structural rule.

    Created by detectors and consumed by fixers; never mutated. The category
    is derived from the rule id prefix when not given explicitly.
    """

    rule_id: str
    message: str
    location: str
    rule_category: str = ""
    found: str = ""
    expected: str = ""
    suggested_fix: str = ""
    reference: str = ""
    severity: Severity = Severity.WARNING
    line: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.rule_category:
            object.__setattr__(self, "rule_category", self.category_for(self.rule_id))

    @staticmethod
    def category_for(rule_id: str) -> str:
        """Map a rule id like 'MS-001' to its category name."""
        prefix = rule_id.split("-", 1)[0].upper()
        return _CATEGORY_BY_PREFIX.get(prefix, "Other")

    @property
    def display_location(self) -> str:
        if self.line is not None:
            return f"{self.location}:{self.line}"
        return self.location

    def to_dict(self) -> dict[str, object]:
        return {
            "rule_id": self.rule_id,
            "rule_category": self.rule_category,
            "message": self.message,
            "location": self.location,
            "line": self.line,
            "found": self.found,
            "expected": self.expected,
            "suggested_fix": self.suggested_fix,
            "reference": self.reference,
            "severity": self.severity.value,
        }


@dataclass(frozen=True)
class FixResult:
    """
    Outcome of applying one fixer to one violation.

    modified_files lists only files whose bytes changed and is empty unless the
    status is FIXED. planned_files is the would-be list, identical for a dry
    run and a full run of the same input.
    """

    violation: StructureViolation
    status: FixStatus
    description: str
    modified_files: tuple[Path, ...] = ()
    diffs: tuple[str, ...] = ()
    planned_files: tuple[Path, ...] = ()

    @classmethod
    def fixed(
        cls,
        violation: StructureViolation,
        description: str,
        modified_files: list[Path],
        diffs: Optional[list[str]] = None,
    ) -> "FixResult":
        return cls(
            violation=violation,
            status=FixStatus.FIXED,
            description=description,
            modified_files=tuple(modified_files),
            diffs=tuple(diffs or ()),
            planned_files=tuple(modified_files),
        )

    @classmethod
    def dry_run(
        cls,
        violation: StructureViolation,
        description: str,
        planned_files: list[Path],
        diffs: Optional[list[str]] = None,
    ) -> "FixResult":
        return cls(
            violation=violation,
            status=FixStatus.DRY_RUN,
            description=description,
            diffs=tuple(diffs or ()),
            planned_files=tuple(planned_files),
        )

    @classmethod
    def skipped(cls, violation: StructureViolation, reason: str) -> "FixResult":
        return cls(violation=violation, status=FixStatus.SKIPPED, description=reason)

    @classmethod
    def failed(cls, violation: StructureViolation, error: str) -> "FixResult":
        return cls(violation=violation, status=FixStatus.FAILED, description=error)

    @classmethod
    def computed(
        cls,
        violation: StructureViolation,
        description: str,
        files: list[Path],
        diffs: list[str],
        dry_run: bool,
    ) -> "FixResult":
        """FIXED or DRY_RUN with the same payload, depending on the run mode."""
        if dry_run:
            return cls.dry_run(violation, description, files, diffs)
        return cls.fixed(violation, description, files, diffs)

    @property
    def is_success(self) -> bool:
        return self.status in (FixStatus.FIXED, FixStatus.DRY_RUN)

    def to_dict(self) -> dict[str, object]:
        return {
            "violation": self.violation.to_dict(),
            "status": self.status.value,
            "description": self.description,
            "modified_files": [str(p) for p in self.modified_files],
            "planned_files": [str(p) for p in self.planned_files],
            "diffs": list(self.diffs),
        }


@dataclass(frozen=True)
class TypeMapping:
    """Core implementation type and the API type that should replace it."""

    core_qualified_name: str
    api_qualified_name: str
    inferred: bool = False

    @staticmethod
    def simple_name(qualified_name: str) -> str:
        return qualified_name.rsplit(".", 1)[-1]

    @property
    def core_simple_name(self) -> str:
        return self.simple_name(self.core_qualified_name)

    @property
    def api_simple_name(self) -> str:
        return self.simple_name(self.api_qualified_name)

    @property
    def api_package(self) -> str:
        if "." not in self.api_qualified_name:
            return ""
        return self.api_qualified_name.rsplit(".", 1)[0]


def _discard(message: str) -> None:
    """Default log sink: drop the message."""


@dataclass(frozen=True)
class FixerContext:
    """Everything a fixer may read. Shared read-only across one orchestrator run."""

    project_root: Path
    module_root: Path
    dry_run: bool = True
    log: Callable[[str], None] = _discard
    namespace: str = "dev.engineeringlab"
    project: str = "architecture"
    type_mappings: dict[str, TypeMapping] = field(default_factory=dict)


@dataclass(frozen=True)
class RestoreResult:
    """Outcome of restoring one file during rollback."""

    target: Path
    backup: Optional[Path]
    success: bool
    message: str = ""


@dataclass(frozen=True)
class BackupHandle:
    """Opaque record of one snapshot: which files, and which of them did not exist yet."""

    strategy: str
    files: tuple[Path, ...]
    absent: frozenset[Path] = frozenset()


@dataclass
class RemediationReport:
    """Ordered fix results of one orchestrator run plus per-status counts."""

    results: list[FixResult] = field(default_factory=list)
    abandoned: bool = False

    @property
    def counts(self) -> dict[FixStatus, int]:
        counter = Counter(result.status for result in self.results)
        return {status: counter.get(status, 0) for status in FixStatus}

    def has_failures(self) -> bool:
        return any(result.status is FixStatus.FAILED for result in self.results)

    def summary(self) -> str:
        counts = self.counts
        return (
            f"Total: {len(self.results)}, Fixed: {counts[FixStatus.FIXED]}, "
            f"Would Fix: {counts[FixStatus.DRY_RUN]}, Failed: {counts[FixStatus.FAILED]}, "
            f"Skipped: {counts[FixStatus.SKIPPED]}"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "summary": {status.value: count for status, count in self.counts.items()},
            "abandoned": self.abandoned,
            "results": [result.to_dict() for result in self.results],
        }
