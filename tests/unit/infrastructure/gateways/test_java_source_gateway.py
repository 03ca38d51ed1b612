"""Unit tests for the Java structural indexer and JavaSourceGateway."""

from pathlib import Path

import pytest

from stratify_remediator.domain.entities import FixerRole
from stratify_remediator.domain.exceptions import JavaSyntaxError
from stratify_remediator.infrastructure.gateways.java_source_gateway import (
    JavaSourceGateway,
    JavaStructureIndexer,
)

FIXER_SOURCE = """package dev.engineeringlab.agent.fixer;

import dev.engineeringlab.stratify.Fixer;
import static java.util.Objects.requireNonNull;

/** Example fixer. */
@Component
public class NullFixer implements Fixer, Comparable<NullFixer> {

    private static final String NAME = "{null}";
    private final Runnable hook = () -> { return; };

    public NullFixer() {
        requireNonNull(NAME);
    }

    @Override
    public FixResult fix(StructureViolation violation, FixerContext context) {
        if (violation == null) {
            return (null);
        }
        return FixResult.skipped(violation, "n/a");
    }

    public FixResult fix(StructureViolation violation) {
        return null;
    }

    public int compareTo(NullFixer other) { return 0; }
}
"""


def _index(source: str, path: str = "Foo.java"):
    return JavaSourceGateway().parse_source(source, Path(path))


class TestJavaStructureIndexer:
    """Classes, methods, returns and fixer roles extracted from source."""

    def test_package_and_imports(self) -> None:
        unit = _index(FIXER_SOURCE)
        assert unit.package == "dev.engineeringlab.agent.fixer"
        assert unit.imports == (
            "dev.engineeringlab.stratify.Fixer",
            "java.util.Objects.requireNonNull",
        )

    def test_class_supertypes_and_role(self) -> None:
        cls = _index(FIXER_SOURCE).classes[0]
        assert cls.name == "NullFixer"
        assert cls.kind == "class"
        assert cls.implements == ("Fixer", "Comparable")
        assert cls.role is FixerRole.IMPLEMENTS_CAPABILITY

    def test_methods_with_arity_and_lines(self) -> None:
        cls = _index(FIXER_SOURCE).classes[0]
        summary = [(m.name, m.parameter_count, m.line) for m in cls.methods]
        assert ("NullFixer", 0, 13) in summary
        assert ("fix", 2, 18) in summary
        assert ("fix", 1, 25) in summary
        assert ("compareTo", 1, 29) in summary
        # The field initialised with a lambda is not a method.
        assert all(m.name != "hook" for m in cls.methods)

    def test_return_statements_and_parenthesised_null(self) -> None:
        cls = _index(FIXER_SOURCE).classes[0]
        fix = cls.find_method("fix", 2)
        assert fix is not None
        assert [(r.line, r.returns_null) for r in fix.returns] == [(20, True), (22, False)]
        assert fix.first_null_return is not None
        assert fix.first_null_return.line == 20

    def test_return_type_and_modifiers(self) -> None:
        cls = _index(FIXER_SOURCE).classes[0]
        fix = cls.find_method("fix", 2)
        assert fix.return_type == "FixResult"
        assert "public" in fix.modifiers
        constructor = cls.find_method("NullFixer", 0)
        assert constructor.return_type == ""

    def test_generic_and_qualified_return_types(self) -> None:
        source = """
        class Holder {
            public java.util.List<Map<String, Integer>> items() { return null; }
            protected <T> T first(List<T> xs, int i) { return xs.get(i); }
            String[] names() { return new String[0]; }
        }
        """
        cls = _index(source).classes[0]
        items = cls.find_method("items", 0)
        assert items.return_type == "java.util.List<Map<String,Integer>>"
        assert items.return_type_name == "List"
        assert cls.find_method("first", 2).return_type == "T"
        assert cls.find_method("names", 0).return_type == "String[]"

    def test_extends_abstract_base_role(self) -> None:
        source = "public final class ApiFixer extends AbstractStructureFixer<Foo> { }"
        cls = _index(source).classes[0]
        assert cls.extends == ("AbstractStructureFixer",)
        assert cls.role is FixerRole.EXTENDS_BASE

    def test_interfaces_never_get_a_fixer_role(self) -> None:
        source = "public interface SpecialFixer extends Fixer { FixResult fix(V v, C c); }"
        unit = _index(source)
        cls = unit.classes[0]
        assert cls.is_interface
        assert cls.role is FixerRole.NONE
        assert cls.find_method("fix", 2) is not None
        assert unit.concrete_classes() == []

    def test_custom_contract_names(self) -> None:
        indexer = JavaStructureIndexer(capability_interfaces=("Remediator",), abstract_bases=())
        gateway = JavaSourceGateway(indexer)
        unit = gateway.parse_source("class R implements Remediator {}")
        assert unit.classes[0].role is FixerRole.IMPLEMENTS_CAPABILITY

    def test_nested_types_are_indexed_separately(self) -> None:
        source = """
        public class Outer {
            void a() { }
            static class Inner implements Fixer {
                public FixResult fix(V v, C c) { return null; }
            }
            void b() { }
        }
        """
        classes = {c.name: c for c in _index(source).classes}
        assert {m.name for m in classes["Outer"].methods} == {"a", "b"}
        assert classes["Inner"].role is FixerRole.IMPLEMENTS_CAPABILITY
        assert classes["Inner"].find_method("fix", 2).first_null_return is not None

    def test_enum_constants_with_bodies_are_not_methods(self) -> None:
        source = """
        enum Mode {
            FAST("f") { int speed() { return 2; } },
            SLOW("s");
            private final String code;
            Mode(String code) { this.code = code; }
            String code() { return code; }
        }
        """
        cls = _index(source).classes[0]
        assert cls.kind == "enum"
        names = [(m.name, m.parameter_count) for m in cls.methods]
        assert ("Mode", 1) in names
        assert ("code", 0) in names
        assert ("FAST", 1) not in names

    def test_records_and_annotations(self) -> None:
        source = """
        public record Point(int x, int y) { int sum() { return x + y; } }
        @interface Marker { String value(); }
        """
        classes = {c.name: c for c in _index(source).classes}
        assert classes["Point"].kind == "record"
        assert classes["Point"].find_method("sum", 0) is not None
        assert classes["Marker"].kind == "annotation"

    def test_keyword_after_dot_is_not_a_declaration(self) -> None:
        source = "class A { Class<?> k() { return A.class; } }"
        classes = _index(source).classes
        assert [c.name for c in classes] == ["A"]

    def test_anonymous_class_return_counts_toward_enclosing_method(self) -> None:
        source = """
        class Factory implements Fixer {
            public FixResult fix(V v, C c) {
                Runnable r = new Runnable() { public void run() { return; } };
                return null;
            }
        }
        """
        fix = _index(source).classes[0].find_method("fix", 2)
        assert [r.returns_null for r in fix.returns] == [False, True]

    def test_bodyless_and_generic_methods_are_marked(self) -> None:
        source = """
        abstract class Base {
            abstract Foo plain();
            public <T> T pick(T a) { return a; }
            Foo concrete() { return null; }
        }
        """
        cls = _index(source).classes[0]
        plain = cls.find_method("plain", 0)
        assert not plain.has_body and not plain.type_parameters
        pick = cls.find_method("pick", 1)
        assert pick.has_body and pick.type_parameters
        concrete = cls.find_method("concrete", 0)
        assert concrete.has_body and not concrete.type_parameters

    def test_unbalanced_braces_raise(self) -> None:
        with pytest.raises(JavaSyntaxError):
            _index("class A { void x() { ")

    def test_parse_file_reads_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "Greeter.java"
        path.write_text('class Greeter { String hi() { return "héllo"; } }', encoding="utf-8")
        unit = JavaSourceGateway().parse_file(path)
        assert unit.path == path
        assert unit.classes[0].find_method("hi", 0).returns[0].returns_null is False
