"""Structure reporters: rich tables for a terminal, JSON for tooling."""

import json
import sys
from typing import TYPE_CHECKING, Optional, TextIO

from rich.console import Console
from rich.table import Table

from stratify_remediator.domain.entities import FixStatus, Severity

if TYPE_CHECKING:
    from stratify_remediator.domain.entities import RemediationReport, StructureViolation
    from stratify_remediator.domain.registry_types import RuleRegistryEntry

_SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "blue",
}
_STATUS_STYLES = {
    FixStatus.FIXED: "green",
    FixStatus.DRY_RUN: "cyan",
    FixStatus.SKIPPED: "yellow",
    FixStatus.FAILED: "bold red",
}
_MAX_DIFF_LINES = 6


class TerminalStructureReporter:
    """Implements StructureReporter for an interactive terminal."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console(highlight=False)

    def report_violations(self, violations: list["StructureViolation"]) -> None:
        if not violations:
            self.console.print("[bold green]No structure violations found.[/bold green]")
            return
        table = Table(title=f"Structure Violations ({len(violations)})")
        table.add_column("Rule", no_wrap=True)
        table.add_column("Severity")
        table.add_column("Location")
        table.add_column("Message")
        for v in sorted(violations, key=lambda x: (x.rule_id, x.location, x.line or 0)):
            style = _SEVERITY_STYLES.get(v.severity, "")
            table.add_row(
                v.rule_id,
                f"[{style}]{v.severity.value}[/{style}]" if style else v.severity.value,
                v.display_location,
                v.message,
            )
        self.console.print(table)

    def report_remediation(self, report: "RemediationReport", dry_run: bool) -> None:
        title = "Planned Fixes (dry run)" if dry_run else "Applied Fixes"
        table = Table(title=f"{title} ({len(report.results)})")
        table.add_column("Rule", no_wrap=True)
        table.add_column("Status")
        table.add_column("Location")
        table.add_column("Description")
        table.add_column("Changes")
        for result in report.results:
            style = _STATUS_STYLES[result.status]
            diffs = list(result.diffs[:_MAX_DIFF_LINES])
            if len(result.diffs) > _MAX_DIFF_LINES:
                diffs.append(f"... and {len(result.diffs) - _MAX_DIFF_LINES} more")
            table.add_row(
                result.violation.rule_id,
                f"[{style}]{result.status.value}[/{style}]",
                result.violation.display_location,
                result.description,
                "\n".join(diffs) or "-",
            )
        self.console.print(table)
        self.console.print(report.summary())
        if report.abandoned:
            self.console.print(
                "[bold red]Remediation stopped early: failure threshold reached.[/bold red]")

    def report_rules(self, registry: dict[str, "RuleRegistryEntry"]) -> None:
        table = Table(title="Rules")
        table.add_column("Rule", no_wrap=True)
        table.add_column("Name")
        table.add_column("Category")
        table.add_column("Severity")
        table.add_column("Fixer")
        for rule_id, entry in sorted(registry.items()):
            table.add_row(
                rule_id,
                entry.get("display_name", ""),
                entry.get("category", ""),
                entry.get("severity", ""),
                entry.get("fixer", "-") if entry.get("fixable") else "-",
            )
        self.console.print(table)


class JsonStructureReporter:
    """Implements StructureReporter as one JSON document per call, for CI and scripts."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved per call so a swapped sys.stdout (CliRunner, redirection) is honoured.
        return self._stream or sys.stdout

    def _emit(self, payload: dict[str, object]) -> None:
        self.stream.write(json.dumps(payload, indent=2) + "\n")

    def report_violations(self, violations: list["StructureViolation"]) -> None:
        self._emit({
            "total": len(violations),
            "violations": [v.to_dict() for v in violations],
        })

    def report_remediation(self, report: "RemediationReport", dry_run: bool) -> None:
        self._emit({"dry_run": dry_run, **report.to_dict()})

    def report_rules(self, registry: dict[str, "RuleRegistryEntry"]) -> None:
        self._emit({"rules": {rule_id: dict(entry) for rule_id, entry in sorted(registry.items())}})
