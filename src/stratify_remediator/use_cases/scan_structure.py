"""Scan use case: run every detector over every module and merge the violations."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from stratify_remediator.domain.entities import ModuleInfo, StructureViolation

if TYPE_CHECKING:
    from stratify_remediator.domain.config import ConfigurationLoader
    from stratify_remediator.domain.protocols import (
        DetectorProtocol,
        ModuleScannerProtocol,
        TelemetryPort,
    )


class ScanStructureUseCase:
    """
    Read-only detection pass.

    Modules are independent, so with max_workers > 1 each module is checked on
    a worker thread. Results are merged in module discovery order regardless of
    completion order.
    """

    def __init__(
        self,
        scanner: "ModuleScannerProtocol",
        detectors: list["DetectorProtocol"],
        telemetry: Optional["TelemetryPort"] = None,
        config_loader: Optional["ConfigurationLoader"] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        self.scanner = scanner
        self.detectors = detectors
        self.telemetry = telemetry
        self.config_loader = config_loader
        self.max_workers = max_workers if max_workers is not None else (
            config_loader.max_workers if config_loader else 1)

    def execute(self, project_root: Path, rule_ids: Optional[list[str]] = None) -> list[StructureViolation]:
        """Scan project_root. When rule_ids is given, only those rules are reported."""
        modules = self.scanner.scan(project_root)
        if self.telemetry:
            self.telemetry.step(f"Scanning {len(modules)} module(s) under {project_root}")
        wanted = set(rule_ids) if rule_ids else None

        if self.max_workers <= 1 or len(modules) <= 1:
            per_module = [self.check_module(module, wanted) for module in modules]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                per_module = list(executor.map(lambda m: self.check_module(m, wanted), modules))

        violations = [v for batch in per_module for v in batch]
        if self.telemetry:
            self.telemetry.step(f"Found {len(violations)} violation(s)")
        return violations

    def check_module(self, module: ModuleInfo, wanted: Optional[set[str]] = None) -> list[StructureViolation]:
        found: list[StructureViolation] = []
        for detector in self.detectors:
            if wanted is not None and not (detector.rule_ids & wanted):
                continue
            try:
                detected = detector.detect(module)
            except Exception as e:
                if self.telemetry:
                    self.telemetry.warning(f"{type(detector).__name__} failed on {module.path}: {e}")
                continue
            for violation in detected:
                if wanted is not None and violation.rule_id not in wanted:
                    continue
                if self.config_loader and not self.config_loader.is_rule_enabled(violation.rule_id):
                    continue
                found.append(violation)
        if found and self.telemetry:
            self.telemetry.debug(f"{module.base_name}: {len(found)} violation(s)")
        return found
