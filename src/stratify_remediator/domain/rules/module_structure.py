"""MS-001 / MS-002: a multi-module component must carry both an API and a Core module."""

from stratify_remediator.domain.constants import RULE_MISSING_API, RULE_MISSING_CORE
from stratify_remediator.domain.entities import ModuleInfo, Severity, StructureViolation
from stratify_remediator.domain.rules.base import BaseDetector

_REQUIRED_ROLES: tuple[tuple[str, str, str], ...] = (
    (RULE_MISSING_API, "api", "API"),
    (RULE_MISSING_CORE, "core", "Core"),
)


class MissingModuleDetector(BaseDetector):
    """Reports each required layer submodule that is absent from a component."""

    rule_ids = frozenset({RULE_MISSING_API, RULE_MISSING_CORE})

    def _detect(self, module: ModuleInfo) -> list[StructureViolation]:
        if not module.has_any_submodules:
            return []
        violations = []
        for rule_id, role, label in _REQUIRED_ROLES:
            if module.has_role(role):
                continue
            expected_dir = f"{module.base_name}-{role}"
            violations.append(StructureViolation(
                rule_id=rule_id,
                message=(
                    f"Component '{module.base_name}' is missing its {label} module. "
                    f"Expected '{expected_dir}' directory with pom.xml."
                ),
                location=str(module.path),
                found=f"No {expected_dir} module",
                expected=f"{expected_dir}/pom.xml",
                suggested_fix=f"Create the {expected_dir} module and add it to the parent pom.xml <modules>.",
                reference=f"module-structure.md § {rule_id}",
                severity=Severity.ERROR,
            ))
        return violations
