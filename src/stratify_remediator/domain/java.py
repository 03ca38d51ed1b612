"""Structural index of a Java compilation unit: just enough shape for rule checks."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from stratify_remediator.domain.entities import FixerRole


@dataclass(frozen=True)
class ReturnStatement:
    line: int
    returns_null: bool


@dataclass(frozen=True)
class JavaMethod:
    name: str
    parameter_count: int
    line: int
    return_type: str = ""
    returns: tuple[ReturnStatement, ...] = ()
    modifiers: tuple[str, ...] = ()
    has_body: bool = True
    type_parameters: bool = False

    @property
    def return_type_name(self) -> str:
        """Simple name of the return type, generics and qualifier dropped."""
        return self.return_type.split("<", 1)[0].rsplit(".", 1)[-1]

    @property
    def first_null_return(self) -> Optional[ReturnStatement]:
        for statement in self.returns:
            if statement.returns_null:
                return statement
        return None


@dataclass(frozen=True)
class JavaClass:
    """
    One type declaration.

    kind is 'class', 'interface', 'enum', 'record' or 'annotation'. Supertype
    names are simple names with generic arguments dropped. role is resolved
    once, while indexing, against the fixer contract names.
    """

    name: str
    kind: str
    line: int
    extends: tuple[str, ...] = ()
    implements: tuple[str, ...] = ()
    methods: tuple[JavaMethod, ...] = ()
    role: FixerRole = FixerRole.NONE

    @property
    def is_interface(self) -> bool:
        return self.kind in ("interface", "annotation")

    def find_method(self, name: str, arity: int) -> Optional[JavaMethod]:
        """Return the first method with exactly this name and parameter count."""
        for method in self.methods:
            if method.name == name and method.parameter_count == arity:
                return method
        return None


@dataclass(frozen=True)
class JavaCompilationUnit:
    path: Path
    package: str = ""
    imports: tuple[str, ...] = ()
    classes: tuple[JavaClass, ...] = field(default_factory=tuple)

    def concrete_classes(self) -> list[JavaClass]:
        return [cls for cls in self.classes if not cls.is_interface]
