"""FA-002: facade methods must expose API types, not core implementations."""

import re
from typing import Iterable

from stratify_remediator.domain.constants import JAVA_SOURCE_DIR, RULE_FACADE_RETURN_TYPE
from stratify_remediator.domain.entities import ModuleInfo, Severity, StructureViolation
from stratify_remediator.domain.java import JavaMethod
from stratify_remediator.domain.protocols import JavaSourceProtocol, ModuleScannerProtocol
from stratify_remediator.domain.rules.base import BaseDetector

_CORE_NAMING = re.compile(r"^(Default\w+|\w+Impl)$")
_EXPOSED = frozenset({"public", "protected"})


class FacadeReturnTypeDetector(BaseDetector):
    """Flags public facade methods whose return type is a core implementation class."""

    rule_ids = frozenset({RULE_FACADE_RETURN_TYPE})

    def __init__(
        self,
        scanner: ModuleScannerProtocol,
        java_source: JavaSourceProtocol,
        core_types: Iterable[str] = (),
    ) -> None:
        super().__init__(scanner, java_source)
        self.core_types = frozenset(core_types)

    def is_core_type(self, simple_name: str) -> bool:
        return simple_name in self.core_types or bool(_CORE_NAMING.match(simple_name))

    @staticmethod
    def is_rewritable(method: JavaMethod) -> bool:
        """Concrete, non-generic methods whose declared return type is a bare simple name."""
        return method.has_body and not method.type_parameters and method.return_type == method.return_type_name

    def _detect(self, module: ModuleInfo) -> list[StructureViolation]:
        if not module.has_facade:
            return []
        facade_root = module.submodule_path("facade") / JAVA_SOURCE_DIR
        violations = []
        for unit in self.parsed_units(module):
            if facade_root not in unit.path.parents:
                continue
            for java_class in unit.classes:
                for method in java_class.methods:
                    type_name = method.return_type_name
                    if not type_name or not _EXPOSED.intersection(method.modifiers):
                        continue
                    if not self.is_core_type(type_name) or not self.is_rewritable(method):
                        continue
                    violations.append(StructureViolation(
                        rule_id=RULE_FACADE_RETURN_TYPE,
                        message=(
                            f"Facade method {java_class.name}.{method.name}() returns {type_name} "
                            "instead of its API interface"
                        ),
                        location=str(unit.path),
                        found=f"{method.name}() returns {type_name}",
                        expected=f"{method.name}() returns the API interface implemented by {type_name}",
                        suggested_fix="Declare the API interface as the return type and import it from the -api module.",
                        reference="facade-design.md § FA-002",
                        severity=Severity.WARNING,
                        line=method.line,
                    ))
        return violations
