"""Pytest configuration and shared builders for Maven project fixtures.

Run pytest from this project's root. pythonpath in pyproject.toml puts src/
and the project root on sys.path so tests can import these helpers as
``tests.conftest``.
"""

from pathlib import Path
from typing import Callable, Optional
from unittest.mock import MagicMock

from stratify_remediator.domain.entities import (
    FixerContext,
    FixResult,
    Severity,
    StructureViolation,
)

AGGREGATOR_POM = """<?xml version="1.0" encoding="UTF-8"?>
<project>
    <modelVersion>4.0.0</modelVersion>
    <parent>
        <groupId>dev.engineeringlab</groupId>
        <artifactId>platform-parent</artifactId>
        <version>1.4.0</version>
    </parent>
    <groupId>com.acme</groupId>
    <artifactId>{artifact_id}</artifactId>
    <version>2.1.0</version>
    <packaging>{packaging}</packaging>
{modules}</project>
"""


def write(path: Path, content: str) -> Path:
    """Write content, creating parent directories. Returns path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def make_pom(artifact_id: str, packaging: str = "pom", modules: tuple[str, ...] = ()) -> str:
    block = ""
    if modules:
        lines = "\n".join(f"        <module>{m}</module>" for m in modules)
        block = f"    <modules>\n{lines}\n    </modules>\n"
    return AGGREGATOR_POM.format(artifact_id=artifact_id, packaging=packaging, modules=block)


def make_component(
    root: Path,
    base: str,
    roles: tuple[str, ...] = ("api", "core"),
    packaging: str = "pom",
    directory_name: Optional[str] = None,
) -> Path:
    """Create <root>/<base> with a pom.xml and one <base>-<role> submodule (with pom) per role."""
    component = root / (directory_name or base)
    write(component / "pom.xml", make_pom(directory_name or base, packaging, tuple(f"{base}-{r}" for r in roles)))
    for role in roles:
        write(component / f"{base}-{role}" / "pom.xml", make_pom(f"{base}-{role}", "jar"))
    return component


def make_violation(**overrides: object) -> StructureViolation:
    """Return a StructureViolation with sensible defaults. Pass overrides to customize."""
    base: dict[str, object] = {
        "rule_id": "MS-001",
        "message": "Component 'agent' is missing its API module.",
        "location": "/tmp/agent",
        "severity": Severity.ERROR,
    }
    base.update(overrides)
    return StructureViolation(**base)  # type: ignore[arg-type]


def make_context(project_root: Path, **overrides: object) -> FixerContext:
    """Return a FixerContext rooted at project_root (dry run unless overridden)."""
    base: dict[str, object] = {
        "project_root": project_root,
        "module_root": project_root,
        "dry_run": True,
    }
    base.update(overrides)
    return FixerContext(**base)  # type: ignore[arg-type]


class StubFixer:
    """Minimal FixerProtocol implementation whose behaviour is a callable."""

    def __init__(
        self,
        name: str,
        rules: tuple[str, ...] = ("MS-001",),
        priority: int = 50,
        targets: Optional[list[Path]] = None,
        behaviour: Optional[Callable[[StructureViolation, FixerContext], FixResult]] = None,
    ) -> None:
        self._name = name
        self._rules = frozenset(rules)
        self._priority = priority
        self.targets = targets or []
        self.behaviour = behaviour or (lambda v, c: FixResult.computed(v, f"{name} fixed", self.targets, [], c.dry_run))
        self.calls: list[StructureViolation] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return f"{self._name} (stub)"

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def supported_rules(self) -> frozenset[str]:
        return self._rules

    def can_fix(self, violation: StructureViolation) -> bool:
        return violation.rule_id in self._rules

    def target_files(self, violation: StructureViolation, context: FixerContext) -> list[Path]:
        return list(self.targets)

    def fix(self, violation: StructureViolation, context: FixerContext) -> FixResult:
        self.calls.append(violation)
        return self.behaviour(violation, context)


def orchestrator_deps(**overrides: object) -> dict[str, object]:
    """Return required dependency mocks for RemediationOrchestrator. Pass overrides to customize."""
    base: dict[str, object] = {
        "registry": MagicMock(),
        "backup_strategy": MagicMock(),
        "telemetry": MagicMock(),
    }
    base.update(overrides)
    return base
