"""AG-005 Resource Materialization Fixer: install the bundled Maven wrapper into an aggregator."""

from pathlib import Path
from typing import Optional

from stratify_remediator.domain.constants import (
    EXECUTABLE_WRAPPER_FILES,
    MAVEN_WRAPPER_DIR,
    MAVEN_WRAPPER_FILES,
    RULE_MAVEN_WRAPPER,
)
from stratify_remediator.domain.entities import FixerContext, FixResult, StructureViolation
from stratify_remediator.domain.protocols import FileSystemProtocol
from stratify_remediator.infrastructure.fixers.base import AbstractStructureFixer

# Default: packaged resource next to this package
_TEMPLATES_DIR = Path(__file__).resolve().parent.parent.parent / "resources" / "maven_wrapper"


class MavenWrapperFixer(AbstractStructureFixer):
    """Copies each missing wrapper file from the bundled templates. Existing files are never touched."""

    def __init__(
        self,
        filesystem: Optional[FileSystemProtocol] = None,
        templates_dir: Optional[Path] = None,
    ) -> None:
        super().__init__(
            name="MavenWrapperFixer",
            description="Adds Maven wrapper files (mvnw, mvnw.cmd, .mvn/wrapper) to pure aggregators",
            supported_rules=[RULE_MAVEN_WRAPPER],
            priority=80,
            filesystem=filesystem,
        )
        self.templates_dir = templates_dir or _TEMPLATES_DIR

    def target_files(self, violation: StructureViolation, context: FixerContext) -> list[Path]:
        module_root = self.derive_module_root(violation, context)
        return [module_root / relative for relative in MAVEN_WRAPPER_FILES]

    def template(self, relative: str) -> bytes:
        return self.filesystem.read_bytes(self.templates_dir / Path(relative).name)

    def _apply(self, violation: StructureViolation, context: FixerContext) -> FixResult:
        module_root = self.derive_module_root(violation, context)
        wrapper_dir = module_root / MAVEN_WRAPPER_DIR
        missing = [rel for rel in MAVEN_WRAPPER_FILES if not self.filesystem.exists(module_root / rel)]
        if not missing and self.filesystem.is_dir(wrapper_dir):
            return FixResult.skipped(violation, "All Maven wrapper files already exist")

        diffs = []
        if not self.filesystem.is_dir(wrapper_dir):
            diffs.append(f"+ create directory: {MAVEN_WRAPPER_DIR}")
        diffs.extend(f"+ create: {rel}" for rel in missing)
        files = [module_root / rel for rel in missing]
        description = f"Created Maven wrapper files ({len(files)} files)"

        if not context.dry_run:
            self.filesystem.make_dirs(wrapper_dir)
            for rel in missing:
                target = module_root / rel
                self.filesystem.write_bytes(target, self.template(rel))
                if rel in EXECUTABLE_WRAPPER_FILES:
                    self.filesystem.make_executable(target)
                context.log(f"Generated: {target}")
        return FixResult.computed(violation, description, files, diffs, context.dry_run)
