"""Remediation orchestrator: apply fixers to violations under backup/rollback discipline."""

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from stratify_remediator.domain.entities import (
    FixerContext,
    FixResult,
    FixStatus,
    RemediationReport,
    StructureViolation,
)
from stratify_remediator.use_cases.backup_transaction import BackupTransaction

if TYPE_CHECKING:
    from stratify_remediator.domain.config import ConfigurationLoader
    from stratify_remediator.domain.protocols import (
        BackupStrategyProtocol,
        FixerProtocol,
        FixerRegistryProtocol,
        TelemetryPort,
    )


class _FixerReportedFailure(Exception):
    """Carries a FAILED result out of the transaction so its targets are rolled back."""

    def __init__(self, result: FixResult) -> None:
        super().__init__(result.description)
        self.result = result


@dataclass
class _Unit:
    """One violation with its candidate fixers and the union of their target files."""

    index: int
    violation: StructureViolation
    fixers: list["FixerProtocol"]
    targets: frozenset[Path] = frozenset()
    planning_error: Optional[str] = None


@dataclass
class _Progress:
    failures: int = 0
    abandoned: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock)


class RemediationOrchestrator:
    """
    Applies the highest-priority enabled fixer to each violation.

    Every application runs inside a BackupTransaction over the fixer's declared
    target files: a raised fault or a FAILED result rolls those files back.
    Faults are isolated per violation. Violations whose target sets intersect
    run serially in one lane; disjoint lanes may run concurrently when
    max_workers > 1.
    """

    def __init__(
        self,
        registry: "FixerRegistryProtocol",
        backup_strategy: "BackupStrategyProtocol",
        telemetry: Optional["TelemetryPort"] = None,
        config_loader: Optional["ConfigurationLoader"] = None,
        max_failures: Optional[int] = None,
        max_workers: Optional[int] = None,
        fallthrough_on_skip: Optional[bool] = None,
    ) -> None:
        self.registry = registry
        self.backup_strategy = backup_strategy
        self.telemetry = telemetry
        self.config_loader = config_loader
        self.max_failures = max_failures if max_failures is not None else (
            config_loader.max_failures if config_loader else None)
        self.max_workers = max_workers if max_workers is not None else (
            config_loader.max_workers if config_loader else 1)
        self.fallthrough_on_skip = fallthrough_on_skip if fallthrough_on_skip is not None else (
            config_loader.fallthrough_on_skip if config_loader else False)

    def execute(self, violations: list[StructureViolation], context: FixerContext) -> RemediationReport:
        """Fix every violation; returns one result per enabled violation, grouped by rule id."""
        units = self._plan(violations, context)
        slots: list[Optional[FixResult]] = [None] * len(units)
        progress = _Progress()
        lanes = self._lanes(units)
        if self.max_workers <= 1 or len(lanes) <= 1:
            for lane in lanes:
                self._run_lane(lane, context, slots, progress)
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [
                    executor.submit(self._run_lane, lane, context, slots, progress)
                    for lane in lanes
                ]
                for future in as_completed(futures):
                    future.result()
        report = RemediationReport(
            results=[result for result in slots if result is not None],
            abandoned=progress.abandoned,
        )
        if self.telemetry:
            self.telemetry.step(report.summary())
        return report

    def _plan(self, violations: list[StructureViolation], context: FixerContext) -> list[_Unit]:
        groups: dict[str, list[StructureViolation]] = {}
        for violation in violations:
            if self.config_loader and not self.config_loader.is_rule_enabled(violation.rule_id):
                continue
            groups.setdefault(violation.rule_id, []).append(violation)

        units: list[_Unit] = []
        for rule_id, group in groups.items():
            fixers = [
                f for f in self.registry.find_fixers_for_rule(rule_id)
                if self.config_loader is None or self.config_loader.is_fixer_enabled(f.name)
            ]
            for violation in group:
                unit = _Unit(index=len(units), violation=violation,
                             fixers=[f for f in fixers if f.can_fix(violation)])
                try:
                    unit.targets = frozenset(
                        path.resolve()
                        for fixer in unit.fixers
                        for path in fixer.target_files(violation, context)
                    )
                except Exception as e:
                    unit.planning_error = f"Could not determine target files: {e}"
                units.append(unit)
        return units

    @staticmethod
    def _lanes(units: list[_Unit]) -> list[list[_Unit]]:
        """Partition units so that any two sharing a target file land in the same lane."""
        parent = list(range(len(units)))

        def find(i: int) -> int:
            while parent[i] != i:
                parent[i] = parent[parent[i]]
                i = parent[i]
            return i

        owner: dict[Path, int] = {}
        for unit in units:
            for path in unit.targets:
                if path in owner:
                    parent[find(unit.index)] = find(owner[path])
                else:
                    owner[path] = unit.index
        lanes: dict[int, list[_Unit]] = {}
        for unit in units:
            lanes.setdefault(find(unit.index), []).append(unit)
        return list(lanes.values())

    def _run_lane(
        self,
        lane: list[_Unit],
        context: FixerContext,
        slots: list[Optional[FixResult]],
        progress: _Progress,
    ) -> None:
        for unit in lane:
            with progress.lock:
                abandoned = progress.abandoned
                failures = progress.failures
            if abandoned:
                slots[unit.index] = FixResult.skipped(unit.violation, f"Abandoned after {failures} failures")
                continue
            result = self._apply_unit(unit, context)
            slots[unit.index] = result
            if result.status is FixStatus.FAILED:
                with progress.lock:
                    progress.failures += 1
                    if self.max_failures is not None and progress.failures >= self.max_failures:
                        progress.abandoned = True

    def _apply_unit(self, unit: _Unit, context: FixerContext) -> FixResult:
        violation = unit.violation
        if unit.planning_error is not None:
            return FixResult.failed(violation, unit.planning_error)
        if not unit.fixers:
            return FixResult.skipped(violation, f"No fixer registered for rule: {violation.rule_id}")
        result = FixResult.skipped(violation, "No fixer applied")
        for fixer in unit.fixers:
            result = self._apply_fixer(fixer, violation, context)
            if result.status is not FixStatus.SKIPPED or not self.fallthrough_on_skip:
                break
        return result

    def _apply_fixer(
        self, fixer: "FixerProtocol", violation: StructureViolation, context: FixerContext
    ) -> FixResult:
        try:
            targets = fixer.target_files(violation, context)
            with BackupTransaction(self.backup_strategy, targets, context.project_root,
                                   enabled=not context.dry_run):
                result = fixer.fix(violation, context)
                if result.status is FixStatus.FAILED:
                    raise _FixerReportedFailure(result)
        except _FixerReportedFailure as failure:
            return failure.result
        except Exception as e:
            message = f"Failed to fix {violation.rule_id} violation with {fixer.name}: {e}"
            if self.telemetry:
                self.telemetry.error(message)
            return FixResult.failed(violation, message)
        return result
