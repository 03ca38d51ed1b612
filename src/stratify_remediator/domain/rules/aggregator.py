"""AG-005: pure aggregator modules ship a Maven wrapper."""

from stratify_remediator.domain.constants import (
    MAVEN_WRAPPER_DIR,
    POM_FILE,
    RULE_MAVEN_WRAPPER,
)
from stratify_remediator.domain.entities import ModuleInfo, Severity, StructureViolation
from stratify_remediator.domain.protocols import (
    FileSystemProtocol,
    JavaSourceProtocol,
    ModuleScannerProtocol,
    PomProtocol,
)
from stratify_remediator.domain.rules.base import BaseDetector


class MavenWrapperDetector(BaseDetector):
    """
    Pure aggregators (packaging pom, no layer submodules) need mvnw, mvnw.cmd
    and .mvn/wrapper/maven-wrapper.properties. One violation per missing item.
    """

    rule_ids = frozenset({RULE_MAVEN_WRAPPER})

    def __init__(
        self,
        scanner: ModuleScannerProtocol,
        java_source: JavaSourceProtocol,
        filesystem: FileSystemProtocol,
        pom: PomProtocol,
    ) -> None:
        super().__init__(scanner, java_source)
        self.filesystem = filesystem
        self.pom = pom

    def _detect(self, module: ModuleInfo) -> list[StructureViolation]:
        pom_path = module.path / POM_FILE
        if module.has_any_submodules or not self.filesystem.exists(pom_path):
            return []
        content = self.filesystem.read_text(pom_path)
        if not self.pom.is_aggregator(content):
            return []
        artifact = self.pom.extract_value(content, "artifactId", module.path.name)
        checks = [
            ("mvnw", f"Pure aggregator '{artifact}' must have Maven wrapper script 'mvnw'."),
            ("mvnw.cmd", f"Pure aggregator '{artifact}' must have Maven wrapper batch script 'mvnw.cmd' for Windows support."),
        ]
        if not self.filesystem.is_dir(module.path / MAVEN_WRAPPER_DIR):
            checks.append((
                MAVEN_WRAPPER_DIR,
                f"Pure aggregator '{artifact}' must have Maven wrapper directory '{MAVEN_WRAPPER_DIR}' "
                "with maven-wrapper.properties.",
            ))
        else:
            properties = f"{MAVEN_WRAPPER_DIR}/maven-wrapper.properties"
            checks.append((properties, f"Pure aggregator '{artifact}' must have Maven wrapper properties '{properties}'."))
        violations = []
        for relative, message in checks:
            target = module.path / relative
            if self.filesystem.exists(target):
                continue
            violations.append(StructureViolation(
                rule_id=RULE_MAVEN_WRAPPER,
                message=message,
                location=str(target),
                found=f"Missing {relative}",
                expected=relative,
                suggested_fix="Run 'mvn wrapper:wrapper' in the aggregator directory, or let the fixer install the bundled wrapper.",
                reference="aggregator.md § AG-005",
                severity=Severity.WARNING,
            ))
        return violations
