"""CLI entry points for Stratify - Thin Controller using Typer."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

import typer

from stratify_remediator.domain.config import ConfigurationLoader
from stratify_remediator.domain.constants import STRATIFY_BANNER
from stratify_remediator.domain.entities import (
    FixerContext,
    RemediationReport,
    Severity,
    StructureViolation,
)
from stratify_remediator.domain.exceptions import BackupError, ConfigurationError
from stratify_remediator.domain.protocols import (
    BackupStrategySelectorProtocol,
    DetectorProtocol,
    FileSystemProtocol,
    FixerRegistryProtocol,
    JavaSourceProtocol,
    ModuleScannerProtocol,
    PomProtocol,
    RuleRegistryProtocol,
    TelemetryPort,
)
from stratify_remediator.domain.rules import (
    FacadeReturnTypeDetector,
    MavenWrapperDetector,
    MissingModuleDetector,
    NullReturnDetector,
)
from stratify_remediator.interface.reporters import StructureReporter
from stratify_remediator.use_cases.remediate import RemediationOrchestrator
from stratify_remediator.use_cases.scan_structure import ScanStructureUseCase

EXIT_FAILURES = 1
EXIT_CONFIG_ERROR = 2


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    load_config: Callable[[Path], ConfigurationLoader]
    find_project_root: Callable[[Path], Path]
    telemetry: TelemetryPort
    reporter: StructureReporter
    json_reporter: StructureReporter
    filesystem: FileSystemProtocol
    pom: PomProtocol
    scanner: ModuleScannerProtocol
    java_source: JavaSourceProtocol
    fixer_registry: FixerRegistryProtocol
    backup_strategies: BackupStrategySelectorProtocol
    rule_registry: RuleRegistryProtocol


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def resolve_target_path(path: Optional[Path]) -> Path:
        """Explicit path, else the current directory."""
        return (path or Path.cwd()).resolve()

    @staticmethod
    def build_detectors(deps: CLIDependencies, config: ConfigurationLoader) -> list[DetectorProtocol]:
        return [
            MissingModuleDetector(deps.scanner, deps.java_source),
            NullReturnDetector(deps.scanner, deps.java_source),
            FacadeReturnTypeDetector(deps.scanner, deps.java_source, core_types=config.type_mappings),
            MavenWrapperDetector(deps.scanner, deps.java_source, deps.filesystem, deps.pom),
        ]

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies."""
        app = typer.Typer(
            name="stratify",
            help="Stratify: API/Core/SPI/Facade layering checks for Maven projects. "
                 "Run 'stratify scan' to audit; 'stratify fix --apply' to repair.",
            add_completion=False,
        )

        def _session_start(output: OutputFormat) -> None:
            """Print banner then handshake. Use at start of each command so banner renders correctly (not in --help)."""
            if output is OutputFormat.TABLE:
                print(STRATIFY_BANNER)
            deps.telemetry.handshake()

        def _reporter(output: OutputFormat) -> StructureReporter:
            return deps.json_reporter if output is OutputFormat.JSON else deps.reporter

        def _load_config(target: Path) -> ConfigurationLoader:
            try:
                return deps.load_config(target)
            except ConfigurationError as e:
                deps.telemetry.error(str(e))
                raise typer.Exit(code=EXIT_CONFIG_ERROR) from e

        def _scan(
            target: Path, config: ConfigurationLoader, rule_ids: Optional[list[str]], workers: Optional[int]
        ) -> list[StructureViolation]:
            use_case = ScanStructureUseCase(
                scanner=deps.scanner,
                detectors=CLIAppFactory.build_detectors(deps, config),
                telemetry=deps.telemetry,
                config_loader=config,
                max_workers=workers,
            )
            return use_case.execute(target, rule_ids=rule_ids or None)

        @app.command()
        def scan(
            path: Optional[Path] = typer.Argument(None, help="Module or project directory (default: current directory)"),  # noqa: B008
            rule: Optional[list[str]] = typer.Option(None, "--rule", "-r", help="Only report this rule id (repeatable)"),  # noqa: B008
            workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Modules checked in parallel"),
            output: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Report format"),  # noqa: B008
        ) -> None:
            """Run every structure detector and print the violations."""
            _session_start(output)
            target = CLIAppFactory.resolve_target_path(path)
            config = _load_config(target)
            violations = _scan(target, config, rule, workers)
            _reporter(output).report_violations(violations)
            if any(v.severity is Severity.ERROR for v in violations):
                raise typer.Exit(code=EXIT_FAILURES)

        @app.command()
        def fix(
            path: Optional[Path] = typer.Argument(None, help="Module or project directory (default: current directory)"),  # noqa: B008
            apply: bool = typer.Option(False, "--apply/--dry-run", help="Write changes (default: dry run)"),
            rule: Optional[list[str]] = typer.Option(None, "--rule", "-r", help="Only fix this rule id (repeatable)"),  # noqa: B008
            max_failures: Optional[int] = typer.Option(
                None, "--max-failures", min=1, help="Stop after this many FAILED results"),
            workers: Optional[int] = typer.Option(None, "--workers", min=1, help="Parallel remediation lanes"),
            output: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Report format"),  # noqa: B008
        ) -> None:
            """Scan, then fix every violation that has a registered fixer."""
            _session_start(output)
            target = CLIAppFactory.resolve_target_path(path)
            config = _load_config(target)
            try:
                strategy = deps.backup_strategies.select(config.backup_strategy)
            except BackupError as e:
                deps.telemetry.error(str(e))
                raise typer.Exit(code=EXIT_CONFIG_ERROR) from e

            violations = _scan(target, config, rule, workers)
            if not violations:
                deps.telemetry.step("Nothing to fix.")
                if output is OutputFormat.JSON:
                    _reporter(output).report_remediation(RemediationReport(), dry_run=not apply)
                return
            context = FixerContext(
                project_root=deps.find_project_root(target),
                module_root=target,
                dry_run=not apply,
                log=deps.telemetry.step,
                namespace=config.namespace,
                project=config.project,
                type_mappings=config.type_mappings,
            )
            deps.telemetry.step(
                f"{'Applying' if apply else 'Simulating'} fixes for {len(violations)} violation(s) "
                f"(backup: {strategy.name})"
            )
            orchestrator = RemediationOrchestrator(
                registry=deps.fixer_registry,
                backup_strategy=strategy,
                telemetry=deps.telemetry,
                config_loader=config,
                max_failures=max_failures,
                max_workers=workers,
            )
            report = orchestrator.execute(violations, context)
            _reporter(output).report_remediation(report, dry_run=not apply)
            if not apply:
                deps.telemetry.step("Dry run: no files were changed. Re-run with --apply to write.")
            if report.has_failures():
                raise typer.Exit(code=EXIT_FAILURES)

        @app.command()
        def rules(
            output: OutputFormat = typer.Option(OutputFormat.TABLE, "--format", "-f", help="Report format"),  # noqa: B008
        ) -> None:
            """List the known rules and their fixers."""
            _reporter(output).report_rules(deps.rule_registry.get_registry())

        return app
