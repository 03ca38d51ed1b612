"""FA-002 Source Patch Fixer: swap core return types in facade signatures for their API types."""

import re
from pathlib import Path
from typing import Optional

from stratify_remediator.domain.constants import (
    JAVA_EXTENSION,
    PACKAGE_MARKER_FILE,
    RULE_FACADE_RETURN_TYPE,
)
from stratify_remediator.domain.entities import (
    FixerContext,
    FixResult,
    StructureViolation,
    TypeMapping,
)
from stratify_remediator.domain.protocols import FileSystemProtocol
from stratify_remediator.infrastructure.fixers.base import AbstractStructureFixer

NO_CHANGES_NEEDED = "No changes needed - return type already correct or not found"

# (modifiers)(return type)(name, parameters and opening brace)
METHOD_PATTERN = re.compile(
    r"((?:public|protected)\s+(?:(?:static|final|synchronized)\s+)*)(\w+)(\s+\w+\s*\([^)]*\)\s*\{)"
)
CORE_TYPE_PATTERN = re.compile(r"(?:returns?|return type)\s+(Default\w+|\w+Impl)", re.IGNORECASE)
_PACKAGE_LINE = re.compile(r"^[ \t]*package\s+([\w.]+)\s*;[^\n]*\n?", re.MULTILINE)
_IMPORT_LINE = re.compile(r"^[ \t]*import\s+(?:static\s+)?[\w.]+(?:\.\*)?\s*;[^\n]*\n?", re.MULTILINE)


class FacadeReturnTypeFixer(AbstractStructureFixer):
    """
    Regex-based patch for facade methods that return core implementation types.

    The mapping table comes from FixerContext.type_mappings. Identifiers not
    in the table fall back to naming-convention inference (DefaultFoo -> Foo,
    FooImpl -> Foo); such results say so in their description.
    """

    def __init__(self, filesystem: Optional[FileSystemProtocol] = None) -> None:
        super().__init__(
            name="FacadeReturnTypeFixer",
            description="Changes facade return types from core implementations to API interfaces",
            supported_rules=[RULE_FACADE_RETURN_TYPE],
            priority=80,
            filesystem=filesystem,
        )

    def target_files(self, violation: StructureViolation, context: FixerContext) -> list[Path]:
        source = self.resolve_source_file(violation)
        return [source] if source is not None else []

    def resolve_source_file(self, violation: StructureViolation) -> Optional[Path]:
        """A file location is used as is; a directory yields its first non-marker source file."""
        location = Path(violation.location)
        if self.filesystem.is_dir(location):
            for candidate in self.filesystem.walk_files(location, JAVA_EXTENSION):
                if candidate.name != PACKAGE_MARKER_FILE:
                    return candidate
            return None
        if self.filesystem.exists(location):
            return location
        return None

    @staticmethod
    def extract_core_type(message: str, mappings: dict[str, TypeMapping]) -> Optional[str]:
        match = CORE_TYPE_PATTERN.search(message)
        if match:
            return match.group(1)
        for simple_name in mappings:
            if re.search(rf"\b{re.escape(simple_name)}\b", message):
                return simple_name
        return None

    @staticmethod
    def resolve_mapping(core_type: str, mappings: dict[str, TypeMapping]) -> Optional[TypeMapping]:
        """Exact table lookup first, then an unverified naming-convention guess."""
        if core_type in mappings:
            return mappings[core_type]
        if core_type.startswith("Default") and len(core_type) > len("Default"):
            return TypeMapping(core_type, core_type[len("Default"):], inferred=True)
        if core_type.endswith("Impl") and len(core_type) > len("Impl"):
            return TypeMapping(core_type, core_type[: -len("Impl")], inferred=True)
        return None

    @staticmethod
    def rewrite_signatures(content: str, mapping: TypeMapping) -> tuple[str, list[str]]:
        """Replace the return type of every matching signature. Unmatched text is kept verbatim."""
        parts: list[str] = []
        diffs: list[str] = []
        last = 0
        for match in METHOD_PATTERN.finditer(content):
            if match.group(2) != mapping.core_simple_name:
                continue
            parts.append(content[last:match.start()])
            replacement = match.group(1) + mapping.api_simple_name + match.group(3)
            parts.append(replacement)
            diffs.append(f"- {' '.join(match.group(0).split())}")
            diffs.append(f"+ {' '.join(replacement.split())}")
            last = match.end()
        parts.append(content[last:])
        return "".join(parts), diffs

    @staticmethod
    def reconcile_imports(content: str, mapping: TypeMapping) -> tuple[str, list[str]]:
        """Add the API import when needed; drop the core import once nothing references it."""
        diffs: list[str] = []
        package_match = _PACKAGE_LINE.search(content)
        own_package = package_match.group(1) if package_match else ""

        api_fqn = mapping.api_qualified_name
        api_package = mapping.api_package
        if api_package and api_package != own_package and not _imports(content, api_fqn):
            statement = f"import {api_fqn};"
            imports = list(_IMPORT_LINE.finditer(content))
            if imports:
                content = _insert_line(content, imports[-1].end(), statement)
            elif package_match:
                content = _insert_line(content, package_match.end(), "\n" + statement)
            else:
                content = f"{statement}\n\n{content}"
            diffs.append(f"+ {statement}")

        core_import = _core_import_line(content, mapping)
        if core_import is not None:
            without = content[:core_import.start()] + content[core_import.end():]
            if not re.search(rf"\b{re.escape(mapping.core_simple_name)}\b", without):
                content = without
                diffs.append(f"- {core_import.group(0).strip()}")
        return content, diffs

    def _apply(self, violation: StructureViolation, context: FixerContext) -> FixResult:
        source = self.resolve_source_file(violation)
        if source is None:
            return FixResult.skipped(
                violation, f"Could not determine source file from violation: {violation.location}")
        core_type = self.extract_core_type(violation.message, context.type_mappings)
        if core_type is None:
            return FixResult.skipped(violation, "Could not determine core type from violation message")
        mapping = self.resolve_mapping(core_type, context.type_mappings)
        if mapping is None:
            return FixResult.skipped(violation, f"No API interface mapping found for: {core_type}")

        original = self.filesystem.read_text(source)
        patched, diffs = self.rewrite_signatures(original, mapping)
        if patched == original:
            return FixResult.skipped(violation, NO_CHANGES_NEEDED)
        patched, import_diffs = self.reconcile_imports(patched, mapping)
        diffs.extend(import_diffs)

        description = f"Changed return type from {mapping.core_simple_name} to {mapping.api_simple_name}"
        if mapping.inferred:
            description += " (inferred mapping; verify the API type exists)"
            context.log(f"Inferred {mapping.api_simple_name} for {core_type} in {source.name}; review required")
        if not context.dry_run:
            self.write_if_changed(source, patched)
            context.log(f"Patched: {source}")
        return FixResult.computed(violation, description, [source], diffs, context.dry_run)


def _imports(content: str, fqn: str) -> bool:
    package = fqn.rsplit(".", 1)[0]
    pattern = rf"^[ \t]*import\s+(?:{re.escape(fqn)}|{re.escape(package)}\.\*)\s*;"
    return re.search(pattern, content, re.MULTILINE) is not None


def _insert_line(content: str, position: int, statement: str) -> str:
    prefix = content[:position]
    if prefix and not prefix.endswith("\n"):
        prefix += "\n"
    return f"{prefix}{statement}\n{content[position:]}"


def _core_import_line(content: str, mapping: TypeMapping) -> Optional[re.Match[str]]:
    if "." in mapping.core_qualified_name:
        target = re.escape(mapping.core_qualified_name)
    else:
        # Inferred mapping: accept the import of any package ending in the simple name.
        target = rf"[\w.]+\.{re.escape(mapping.core_simple_name)}"
    pattern = rf"^[ \t]*import\s+{target}\s*;[^\n]*\n?"
    return re.search(pattern, content, re.MULTILINE)
