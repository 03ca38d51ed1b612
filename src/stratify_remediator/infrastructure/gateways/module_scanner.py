"""Module Source Index: discovers Maven components and resolves their source roots."""

import logging
import re
from pathlib import Path
from typing import Optional

from stratify_remediator.domain.constants import (
    JAVA_EXTENSION,
    JAVA_SOURCE_DIR,
    LAYER_ROLES,
    MODULE_SUFFIXES,
    PACKAGE_MARKER_FILE,
    POM_FILE,
)
from stratify_remediator.domain.entities import ModuleInfo
from stratify_remediator.domain.protocols import FileSystemProtocol, ModuleScannerProtocol
from stratify_remediator.infrastructure.gateways.filesystem_gateway import FileSystemGateway

logger = logging.getLogger(__name__)

_SUFFIX_PATTERN = re.compile(rf"-({'|'.join(MODULE_SUFFIXES)})$")
_SKIPPED_DIRS = frozenset({"src", "target", "build", "node_modules", "out"})


class ModuleScanner(ModuleScannerProtocol):
    """Builds one immutable ModuleInfo per Maven module directory."""

    def __init__(self, filesystem: Optional[FileSystemProtocol] = None) -> None:
        self.filesystem = filesystem or FileSystemGateway()

    @staticmethod
    def extract_module_name(directory_name: str) -> str:
        """Strip a layer or parent suffix: 'agent-parent' -> 'agent', 'agent-api' -> 'agent'."""
        return _SUFFIX_PATTERN.sub("", directory_name)

    def scan_module(self, module_path: Path) -> ModuleInfo:
        base_name = self.extract_module_name(module_path.name)
        flags = {
            f"has_{role}": self.filesystem.is_dir(module_path / f"{base_name}-{role}")
            for role in ("api", "core", "facade", "spi", "common")
        }
        flags["has_util"] = (
            self.filesystem.is_dir(module_path / f"{base_name}-util")
            or self.filesystem.is_dir(module_path / f"{base_name}-utils")
        )
        return ModuleInfo(base_name=base_name, path=module_path, **flags)

    def scan(self, project_root: Path) -> list[ModuleInfo]:
        """Every directory holding a pom.xml, depth first, in sorted order."""
        modules: list[ModuleInfo] = []
        self._collect(project_root, modules)
        logger.debug("Scanned %d module(s) under %s", len(modules), project_root)
        return modules

    def _collect(self, directory: Path, modules: list[ModuleInfo]) -> None:
        if self.filesystem.exists(directory / POM_FILE):
            modules.append(self.scan_module(directory))
        try:
            children = sorted(p for p in directory.iterdir() if p.is_dir())
        except OSError as exc:
            logger.debug("Cannot list %s: %s", directory, exc)
            return
        for child in children:
            if child.name.startswith(".") or child.name in _SKIPPED_DIRS:
                continue
            self._collect(child, modules)

    def source_roots(self, module: ModuleInfo) -> list[Path]:
        """The module's own source root plus one per present layer submodule."""
        roots = [module.path / JAVA_SOURCE_DIR]
        for role in LAYER_ROLES:
            if module.has_role(role):
                roots.append(module.submodule_path(role) / JAVA_SOURCE_DIR)
        return [root for root in roots if self.filesystem.is_dir(root)]

    def source_files(self, module: ModuleInfo) -> list[Path]:
        files: list[Path] = []
        for root in self.source_roots(module):
            files.extend(
                path for path in self.filesystem.walk_files(root, JAVA_EXTENSION)
                if path.name != PACKAGE_MARKER_FILE
            )
        return files
