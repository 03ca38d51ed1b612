"""MS-001 / MS-002 Scaffold Fixer: generate a missing API or Core module under an aggregator."""

import re
from pathlib import Path
from typing import Optional

from stratify_remediator.domain.constants import (
    DEFAULT_GROUP_ID,
    DEFAULT_VERSION,
    JAVA_SOURCE_DIR,
    LAYER_DESCRIPTIONS,
    PACKAGE_MARKER_FILE,
    POM_FILE,
    RULE_MISSING_API,
    RULE_MISSING_CORE,
)
from stratify_remediator.domain.entities import FixerContext, FixResult, StructureViolation
from stratify_remediator.domain.protocols import FileSystemProtocol, PomProtocol
from stratify_remediator.infrastructure.fixers.base import AbstractStructureFixer
from stratify_remediator.infrastructure.gateways.module_scanner import ModuleScanner
from stratify_remediator.infrastructure.gateways.pom_gateway import PomGateway

_ROLE_BY_RULE = {RULE_MISSING_API: "api", RULE_MISSING_CORE: "core"}
_ROLE_LABELS = {"api": "API", "core": "Core", "spi": "SPI", "facade": "Facade"}
_MODULE_DESCRIPTIONS = {
    "api": "API module for {name} - contains public interfaces and contracts",
    "core": "Core module for {name} - contains implementations",
}

_POM_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
         xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 http://maven.apache.org/xsd/maven-4.0.0.xsd">
    <modelVersion>4.0.0</modelVersion>

    <parent>
        <groupId>{group_id}</groupId>
        <artifactId>{parent_artifact_id}</artifactId>
        <version>{version}</version>
    </parent>

    <artifactId>{artifact_id}</artifactId>
    <packaging>jar</packaging>

    <name>{display_name}</name>
    <description>{description}</description>
{dependencies}</project>
"""

_API_DEPENDENCY_TEMPLATE = """
    <dependencies>
        <dependency>
            <groupId>{group_id}</groupId>
            <artifactId>{api_artifact_id}</artifactId>
            <version>${{project.version}}</version>
        </dependency>
    </dependencies>
"""

_PACKAGE_INFO_TEMPLATE = """/**
 * {layer_description}.
 *
 * <p>Module: {module_name}
 */
package {package};
"""


class MissingModuleFixer(AbstractStructureFixer):
    """
    Scaffolds <base>-api or <base>-core next to its siblings.

    Only aggregator modules (packaging pom) may gain submodules. The parent
    descriptor is read with key extraction only, and the new module name is
    appended to its <modules> list.
    """

    def __init__(
        self,
        filesystem: Optional[FileSystemProtocol] = None,
        pom: Optional[PomProtocol] = None,
    ) -> None:
        super().__init__(
            name="MissingModuleFixer",
            description="Creates missing API and Core submodules for aggregator modules",
            supported_rules=list(_ROLE_BY_RULE),
            priority=90,
            filesystem=filesystem,
        )
        self.pom = pom or PomGateway()

    @staticmethod
    def base_package(context: FixerContext, role: str) -> str:
        project = re.sub(r"[^\w.]", ".", context.project.lower()).strip(".")
        parts = [context.namespace, project, role]
        return ".".join(p for p in parts if p)

    @staticmethod
    def layer_description(role: str) -> str:
        return LAYER_DESCRIPTIONS.get(role, f"{role.capitalize()} layer")

    def _layout(self, violation: StructureViolation, context: FixerContext) -> tuple[Path, str, str, Path, Path]:
        """(module root, role, new module name, new module pom, package marker file)."""
        module_root = self.derive_module_root(violation, context)
        role = _ROLE_BY_RULE[violation.rule_id]
        base = ModuleScanner.extract_module_name(module_root.name)
        module_name = f"{base}-{role}"
        module_dir = module_root / module_name
        package_dir = module_dir / JAVA_SOURCE_DIR / Path(*self.base_package(context, role).split("."))
        return module_root, role, module_name, module_dir / POM_FILE, package_dir / PACKAGE_MARKER_FILE

    def target_files(self, violation: StructureViolation, context: FixerContext) -> list[Path]:
        if not self.can_fix(violation):
            return []
        module_root, _, _, module_pom, package_info = self._layout(violation, context)
        return [module_pom, package_info, module_root / POM_FILE]

    def generate_pom(
        self, parent_content: str, parent_dir_name: str, module_name: str, base: str, role: str
    ) -> str:
        group_id = self.pom.extract_value(parent_content, "groupId", DEFAULT_GROUP_ID) or DEFAULT_GROUP_ID
        version = self.pom.extract_value(parent_content, "version", DEFAULT_VERSION) or DEFAULT_VERSION
        parent_artifact_id = (
            self.pom.extract_value(parent_content, "artifactId", parent_dir_name) or parent_dir_name
        )
        label = _ROLE_LABELS.get(role, role.capitalize())
        description = _MODULE_DESCRIPTIONS.get(role, f"{label} module for {{name}}").format(name=base)
        dependencies = ""
        if role == "core":
            dependencies = _API_DEPENDENCY_TEMPLATE.format(group_id=group_id, api_artifact_id=f"{base}-api")
        return _POM_TEMPLATE.format(
            group_id=group_id,
            parent_artifact_id=parent_artifact_id,
            version=version,
            artifact_id=module_name,
            display_name=f"{self.to_pascal_case(base)} {label}",
            description=description,
            dependencies=dependencies,
        )

    def generate_package_info(self, context: FixerContext, role: str, module_name: str) -> str:
        return _PACKAGE_INFO_TEMPLATE.format(
            layer_description=self.layer_description(role),
            module_name=module_name,
            package=self.base_package(context, role),
        )

    def _apply(self, violation: StructureViolation, context: FixerContext) -> FixResult:
        module_root, role, module_name, module_pom, package_info = self._layout(violation, context)
        parent_pom = module_root / POM_FILE
        if not self.filesystem.exists(parent_pom):
            return FixResult.skipped(violation, "No pom.xml found in module root")
        parent_content = self.filesystem.read_text(parent_pom)
        packaging = self.pom.packaging(parent_content)
        if packaging != "pom":
            return FixResult.skipped(
                violation,
                f"Module is not a parent (packaging={packaging}). "
                "Only parent modules with packaging=pom can have submodules.",
            )
        module_dir = module_root / module_name
        if self.filesystem.exists(module_dir):
            return FixResult.skipped(violation, f"Module directory already exists: {module_name}")

        base = ModuleScanner.extract_module_name(module_root.name)
        pom_content = self.generate_pom(parent_content, module_root.name, module_name, base, role)
        marker_content = self.generate_package_info(context, role, module_name)
        updated_parent = self.pom.add_module(parent_content, module_name)

        files = [module_pom, package_info]
        diffs = [
            f"+ create directory: {module_name}",
            f"+ create: {self.relative(module_pom, module_root)}",
            f"+ create: {self.relative(package_info, module_root)}",
        ]
        if updated_parent != parent_content:
            files.append(parent_pom)
            diffs.append(f"+ add module {module_name} to {POM_FILE}")
        label = _ROLE_LABELS[role]
        description = f"Created {label} module {module_name}"

        if not context.dry_run:
            self.filesystem.make_dirs(package_info.parent)
            self.filesystem.write_text(module_pom, pom_content)
            self.filesystem.write_text(package_info, marker_content)
            if updated_parent != parent_content:
                self.filesystem.write_text(parent_pom, updated_parent)
            context.log(f"Generated: {module_pom}")
            context.log(f"Generated: {package_info}")
            if parent_pom in files:
                context.log(f"Updated: {parent_pom}")
        return FixResult.computed(violation, description, files, diffs, context.dry_run)
