"""Unit tests for JavaLexer."""

import pytest

from stratify_remediator.domain.exceptions import JavaSyntaxError
from stratify_remediator.infrastructure.gateways.java_lexer import JavaLexer, TokenType


def _values(source: str) -> list[str]:
    return [t.value for t in JavaLexer(source).tokenize() if t.type is not TokenType.EOF]


class TestJavaLexer:
    """Token stream shape, positions and literal handling."""

    def test_simple_declaration(self) -> None:
        assert _values("public class Foo {}") == ["public", "class", "Foo", "{", "}"]

    def test_ends_with_single_eof(self) -> None:
        tokens = list(JavaLexer("x").tokenize())
        assert tokens[-1].type is TokenType.EOF
        assert sum(1 for t in tokens if t.type is TokenType.EOF) == 1

    def test_comments_are_dropped(self) -> None:
        source = "// line { comment\nint /* block } */ x;"
        assert _values(source) == ["int", "x", ";"]

    def test_braces_inside_strings_stay_in_the_literal(self) -> None:
        tokens = list(JavaLexer('String s = "{ not a brace }";').tokenize())
        strings = [t for t in tokens if t.type is TokenType.STRING]
        assert [t.value for t in strings] == ['"{ not a brace }"']
        assert not any(t.is_symbol("{") for t in tokens)

    def test_escaped_quote_in_string(self) -> None:
        assert _values(r'"a\"b" ;') == [r'"a\"b"', ";"]

    def test_char_literal(self) -> None:
        tokens = list(JavaLexer("char c = '}';").tokenize())
        assert [t.value for t in tokens if t.type is TokenType.CHAR] == ["'}'"]

    def test_text_block(self) -> None:
        source = 'String s = """\n  { json }\n  """;'
        tokens = list(JavaLexer(source).tokenize())
        blocks = [t for t in tokens if t.type is TokenType.STRING]
        assert len(blocks) == 1
        assert blocks[0].value.startswith('"""') and blocks[0].value.endswith('"""')

    def test_numbers(self) -> None:
        tokens = list(JavaLexer("1_000L 0x1F 3.5e-2 .5f").tokenize())
        numbers = [t.value for t in tokens if t.type is TokenType.NUMBER]
        assert numbers == ["1_000L", "0x1F", "3.5e-2", ".5f"]

    def test_identifiers_with_dollar_and_underscore(self) -> None:
        assert _values("$proxy _tmp a$b") == ["$proxy", "_tmp", "a$b"]

    def test_multi_char_symbols(self) -> None:
        assert _values("(a) -> b::c ...") == ["(", "a", ")", "->", "b", "::", "c", "..."]

    def test_generic_closers_are_single_symbols(self) -> None:
        assert _values("Map<K, List<V>>") == ["Map", "<", "K", ",", "List", "<", "V", ">", ">"]

    def test_line_and_column_tracking(self) -> None:
        tokens = list(JavaLexer("class A {\n  int x;\n}").tokenize())
        x = next(t for t in tokens if t.value == "x")
        assert (x.line, x.column) == (2, 7)

    def test_unterminated_block_comment_raises(self) -> None:
        with pytest.raises(JavaSyntaxError) as exc_info:
            list(JavaLexer("int x; /* never closed", "Foo.java").tokenize())
        assert exc_info.value.line == 1
        assert "Foo.java:1:8" in str(exc_info.value)

    def test_unterminated_string_raises(self) -> None:
        with pytest.raises(JavaSyntaxError):
            list(JavaLexer('String s = "open\n";').tokenize())

    def test_unterminated_text_block_raises(self) -> None:
        with pytest.raises(JavaSyntaxError):
            list(JavaLexer('String s = """\nnever closed').tokenize())
