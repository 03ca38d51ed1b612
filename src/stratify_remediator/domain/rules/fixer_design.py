"""FX-002: fixer contract methods must not return null."""

from stratify_remediator.domain.constants import (
    FIXER_CONTRACT_ARITY,
    FIXER_CONTRACT_METHOD,
    RULE_FIXER_NULL_RETURN,
)
from stratify_remediator.domain.entities import ModuleInfo, Severity, StructureViolation
from stratify_remediator.domain.rules.base import BaseDetector


class NullReturnDetector(BaseDetector):
    """
    Flags fixer implementations whose fix(violation, context) returns a null literal.

    Only concrete classes whose role was resolved as a fixer (implements the
    capability interface or extends the abstract base) are inspected, and only
    the overload with the contract arity. One violation per offending method,
    citing the first null return.
    """

    rule_ids = frozenset({RULE_FIXER_NULL_RETURN})

    def _detect(self, module: ModuleInfo) -> list[StructureViolation]:
        if not module.has_any_submodules:
            return []
        violations: list[StructureViolation] = []
        for unit in self.parsed_units(module):
            for java_class in unit.concrete_classes():
                if not java_class.role.is_fixer:
                    continue
                method = java_class.find_method(FIXER_CONTRACT_METHOD, FIXER_CONTRACT_ARITY)
                if method is None:
                    continue
                null_return = method.first_null_return
                if null_return is None:
                    continue
                name = java_class.name
                violations.append(StructureViolation(
                    rule_id=RULE_FIXER_NULL_RETURN,
                    rule_category="FixerDesign",
                    message="Fixer fix() method must not return null",
                    location=str(unit.path),
                    found=f"{name}.fix() returns null at line {null_return.line}",
                    expected=f"{name}.fix() should return FixResult",
                    suggested_fix=(
                        "Return a FixResult instead of null:\n"
                        "  FixResult.success(violation, description, modifiedFiles, diffs)\n"
                        "  FixResult.failed(violation, errorMessage)\n"
                        "  FixResult.skipped(violation, reason)"
                    ),
                    reference="remediation-design.md § FX-002",
                    severity=Severity.ERROR,
                    line=null_return.line,
                ))
        return violations
