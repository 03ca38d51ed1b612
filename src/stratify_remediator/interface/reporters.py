"""Protocol for scan and remediation reporting - no infrastructure imports."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from stratify_remediator.domain.entities import RemediationReport, StructureViolation
    from stratify_remediator.domain.registry_types import RuleRegistryEntry


class StructureReporter(Protocol):
    """Protocol for rendering violations, fix results and the rule catalog."""

    def report_violations(self, violations: list["StructureViolation"]) -> None:
        """Render one row per violation, grouped by rule id."""
        ...

    def report_remediation(self, report: "RemediationReport", dry_run: bool) -> None:
        """Render one row per fix result, followed by the status counts."""
        ...

    def report_rules(self, registry: dict[str, "RuleRegistryEntry"]) -> None: ...
