from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, cast

from stratify_remediator.domain.config import ConfigurationLoader
from stratify_remediator.infrastructure.backup.registry import BackupStrategyRegistry
from stratify_remediator.infrastructure.config_file_loader import ConfigFileLoader
from stratify_remediator.infrastructure.fixers import (
    DefaultFixerRegistry,
    FacadeReturnTypeFixer,
    MavenWrapperFixer,
    MissingModuleFixer,
)
from stratify_remediator.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from stratify_remediator.infrastructure.gateways.java_source_gateway import JavaSourceGateway
from stratify_remediator.infrastructure.gateways.module_scanner import ModuleScanner
from stratify_remediator.infrastructure.gateways.pom_gateway import PomGateway
from stratify_remediator.infrastructure.reporters import JsonStructureReporter, TerminalStructureReporter
from stratify_remediator.infrastructure.services.rule_registry import RuleRegistryService
from stratify_remediator.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from stratify_remediator.domain.protocols import (
        BackupStrategySelectorProtocol,
        FileSystemProtocol,
        FixerRegistryProtocol,
        JavaSourceProtocol,
        ModuleScannerProtocol,
        PomProtocol,
        RuleRegistryProtocol,
        TelemetryPort,
    )
    from stratify_remediator.interface.reporters import StructureReporter


class StratifyContainer:
    """Dependency Injection Container for the structure remediator."""

    _instance: Optional["StratifyContainer"] = None

    def __init__(self) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register default implementations for protocols."""
        telemetry = ProjectTelemetry("STRATIFY", "cyan", "Layering remediator online")
        self.register_singleton("TelemetryPort", telemetry)

        filesystem = FileSystemGateway()
        self.register_singleton("FileSystemGateway", filesystem)
        pom = PomGateway()
        self.register_singleton("PomGateway", pom)
        self.register_singleton("ModuleScanner", ModuleScanner(filesystem))
        self.register_singleton("JavaSourceGateway", JavaSourceGateway())
        self.register_singleton("RuleRegistryService", RuleRegistryService())
        self.register_singleton("StructureReporter", TerminalStructureReporter())
        self.register_singleton("JsonStructureReporter", JsonStructureReporter())

        # Enable/disable filtering happens per run against the target project's config.
        fixer_registry = DefaultFixerRegistry()
        fixer_registry.register(MissingModuleFixer(filesystem, pom))
        fixer_registry.register(FacadeReturnTypeFixer(filesystem))
        fixer_registry.register(MavenWrapperFixer(filesystem))
        self.register_singleton("FixerRegistry", fixer_registry)

        self.register_singleton("BackupStrategyRegistry", BackupStrategyRegistry(filesystem))

    def register_singleton(self, key: str, instance: object) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> object:
        """Resolve a dependency."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    @staticmethod
    def load_config(start: Path) -> ConfigurationLoader:
        """Load the configuration governing start. Raises ConfigurationError on a malformed file."""
        config_dict, _ = ConfigFileLoader.load_config_from_fs(start)
        return ConfigurationLoader(config_dict)

    @staticmethod
    def find_project_root(start: Path) -> Path:
        return ConfigFileLoader.find_project_root(start)

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_pom_gateway(self) -> "PomProtocol":
        return cast("PomProtocol", self.get("PomGateway"))

    def get_module_scanner(self) -> "ModuleScannerProtocol":
        return cast("ModuleScannerProtocol", self.get("ModuleScanner"))

    def get_java_source_gateway(self) -> "JavaSourceProtocol":
        """Return the Java structural index gateway."""
        return cast("JavaSourceProtocol", self.get("JavaSourceGateway"))

    def get_rule_registry(self) -> "RuleRegistryProtocol":
        return cast("RuleRegistryProtocol", self.get("RuleRegistryService"))

    def get_reporter(self) -> "StructureReporter":
        return cast("StructureReporter", self.get("StructureReporter"))

    def get_json_reporter(self) -> "StructureReporter":
        """Return the machine-readable reporter used by --format json."""
        return cast("StructureReporter", self.get("JsonStructureReporter"))

    def get_fixer_registry(self) -> "FixerRegistryProtocol":
        """Return the priority-ordered fixer registry with the bundled fixers."""
        return cast("FixerRegistryProtocol", self.get("FixerRegistry"))

    def get_backup_strategies(self) -> "BackupStrategySelectorProtocol":
        return cast("BackupStrategySelectorProtocol", self.get("BackupStrategyRegistry"))

    @classmethod
    def get_instance(cls) -> "StratifyContainer":
        """Get or create global container instance."""
        if cls._instance is None:
            cls._instance = StratifyContainer()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        cls._instance = None
