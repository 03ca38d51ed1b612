"""Java structural indexer: token stream to JavaCompilationUnit. Infrastructure I/O at the edge only."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from stratify_remediator.domain.constants import FIXER_ABSTRACT_BASE, FIXER_CAPABILITY_INTERFACE
from stratify_remediator.domain.entities import FixerRole
from stratify_remediator.domain.exceptions import JavaSyntaxError
from stratify_remediator.domain.java import (
    JavaClass,
    JavaCompilationUnit,
    JavaMethod,
    ReturnStatement,
)
from stratify_remediator.infrastructure.gateways.java_lexer import JavaLexer, Token, TokenType

_TYPE_KEYWORDS = frozenset({"class", "interface", "enum"})
_SUPERTYPE_CLAUSES = frozenset({"extends", "implements", "permits"})
_MODIFIERS = frozenset({
    "public", "protected", "private", "static", "final", "abstract", "synchronized",
    "native", "default", "strictfp", "transient", "volatile", "sealed", "non-sealed",
})


@dataclass
class _ClassFrame:
    name: str
    kind: str
    line: int
    extends: tuple[str, ...]
    implements: tuple[str, ...]
    methods: list[JavaMethod] = field(default_factory=list)
    # Enum bodies open with a constant list that ends at the first top-level semicolon.
    in_enum_constants: bool = False


@dataclass
class _MethodFrame:
    owner: _ClassFrame
    name: str
    parameter_count: int
    line: int
    return_type: str
    modifiers: tuple[str, ...]
    type_parameters: bool
    returns: list[ReturnStatement] = field(default_factory=list)


@dataclass
class _BlockFrame:
    line: int


_Frame = Union[_ClassFrame, _MethodFrame, _BlockFrame]


class JavaStructureIndexer:
    """
    Builds the structural index of one compilation unit.

    Tracks type declarations, member headers and brace nesting; everything
    inside a method body other than return statements and nested type
    declarations is treated as opaque. Returns inside lambdas and anonymous
    classes count toward the enclosing method.
    """

    def __init__(
        self,
        capability_interfaces: Iterable[str] = (FIXER_CAPABILITY_INTERFACE,),
        abstract_bases: Iterable[str] = (FIXER_ABSTRACT_BASE,),
    ) -> None:
        self.capability_interfaces = frozenset(capability_interfaces)
        self.abstract_bases = frozenset(abstract_bases)

    def index(self, source: str, path: Path) -> JavaCompilationUnit:
        tokens = list(JavaLexer(source, str(path)).tokenize())
        return _IndexRun(self, tokens, path).run()

    def resolve_role(self, kind: str, extends: tuple[str, ...], implements: tuple[str, ...]) -> FixerRole:
        """Classify a declaration against the fixer contract names."""
        if kind in ("interface", "annotation"):
            return FixerRole.NONE
        if self.capability_interfaces.intersection(implements):
            return FixerRole.IMPLEMENTS_CAPABILITY
        if self.abstract_bases.intersection(extends):
            return FixerRole.EXTENDS_BASE
        return FixerRole.NONE


class _IndexRun:
    """Single pass over one token list."""

    def __init__(self, indexer: JavaStructureIndexer, tokens: list[Token], path: Path) -> None:
        self.indexer = indexer
        self.tokens = tokens
        self.path = path
        self.stack: list[_Frame] = []
        self.header: list[Token] = []
        self.package = ""
        self.imports: list[str] = []
        self.classes: list[JavaClass] = []

    def _tok(self, i: int) -> Token:
        if i < len(self.tokens):
            return self.tokens[i]
        return self.tokens[-1]

    def _error(self, message: str, token: Token) -> JavaSyntaxError:
        return JavaSyntaxError(message, token.line, token.column, str(self.path))

    def run(self) -> JavaCompilationUnit:
        i = 0
        while self._tok(i).type is not TokenType.EOF:
            i = self._step(i)
        if self.stack:
            raise self._error("unexpected end of file inside a declaration", self._tok(i))
        return JavaCompilationUnit(
            path=self.path,
            package=self.package,
            imports=tuple(self.imports),
            classes=tuple(self.classes),
        )

    def _at_member_level(self) -> bool:
        return not self.stack or isinstance(self.stack[-1], _ClassFrame)

    def _step(self, i: int) -> int:
        tok = self._tok(i)
        kind = self._type_declaration_kind(i)
        if kind is not None:
            return self._open_type(i, kind)
        if not self.stack and tok.type is TokenType.IDENTIFIER and tok.value in ("package", "import"):
            return self._read_directive(i)
        if self._at_member_level():
            return self._member_step(i)
        return self._body_step(i)

    def _type_declaration_kind(self, i: int) -> Optional[str]:
        tok = self._tok(i)
        if tok.is_symbol("@") and self._tok(i + 1).is_word("interface"):
            return "annotation"
        if tok.type is not TokenType.IDENTIFIER:
            return None
        if self._tok(i - 1).is_symbol(".") and i > 0:
            return None
        if tok.value in _TYPE_KEYWORDS and self._tok(i + 1).type is TokenType.IDENTIFIER:
            return tok.value
        if (
            tok.value == "record"
            and self._tok(i + 1).type is TokenType.IDENTIFIER
            and (self._tok(i + 2).is_symbol("(") or self._tok(i + 2).is_symbol("<"))
        ):
            return "record"
        return None

    def _read_directive(self, i: int) -> int:
        keyword = self._tok(i).value
        parts: list[str] = []
        j = i + 1
        while not self._tok(j).is_symbol(";"):
            tok = self._tok(j)
            if tok.type is TokenType.EOF:
                raise self._error(f"unterminated {keyword} declaration", self._tok(i))
            if not tok.is_word("static"):
                parts.append(tok.value)
            j += 1
        name = "".join(parts)
        if keyword == "package":
            self.package = name
        else:
            self.imports.append(name)
        self.header = []
        return j + 1

    def _open_type(self, i: int, kind: str) -> int:
        keyword_tok = self._tok(i)
        if kind == "annotation":
            i += 1
        name_tok = self._tok(i + 1)
        j = i + 2
        clause = ""
        clauses: dict[str, list[list[Token]]] = {c: [] for c in _SUPERTYPE_CLAUSES}
        depth = 0
        while True:
            tok = self._tok(j)
            if tok.type is TokenType.EOF:
                raise self._error(f"missing body for {kind} {name_tok.value}", keyword_tok)
            if depth == 0 and tok.is_symbol("{"):
                break
            if tok.is_symbol("<") or tok.is_symbol("("):
                depth += 1
            elif tok.is_symbol(">") or tok.is_symbol(")"):
                depth = max(depth - 1, 0)
            elif depth == 0 and tok.type is TokenType.IDENTIFIER and tok.value in _SUPERTYPE_CLAUSES:
                clause = tok.value
                clauses[clause].append([])
            elif depth == 0 and clause and tok.is_symbol(","):
                clauses[clause].append([])
            elif depth == 0 and clause and clauses[clause]:
                clauses[clause][-1].append(tok)
            j += 1
        extends = self._simple_names(clauses["extends"])
        implements = self._simple_names(clauses["implements"])
        self.stack.append(_ClassFrame(
            name=name_tok.value,
            kind=kind,
            line=keyword_tok.line,
            extends=extends,
            implements=implements,
            in_enum_constants=kind == "enum",
        ))
        self.header = []
        return j + 1

    @staticmethod
    def _simple_names(groups: list[list[Token]]) -> tuple[str, ...]:
        names = []
        for group in groups:
            idents = [t.value for t in group if t.type is TokenType.IDENTIFIER]
            if idents:
                names.append(idents[-1])
        return tuple(names)

    def _skip_annotation(self, i: int) -> int:
        j = i + 1
        while self._tok(j).type is TokenType.IDENTIFIER:
            j += 1
            if self._tok(j).is_symbol(".") and self._tok(j + 1).type is TokenType.IDENTIFIER:
                j += 1
            else:
                break
        if self._tok(j).is_symbol("("):
            j = self._matching_paren(j) + 1
        return j

    def _matching_paren(self, i: int) -> int:
        depth = 0
        j = i
        while True:
            tok = self._tok(j)
            if tok.type is TokenType.EOF:
                raise self._error("unbalanced parentheses", self._tok(i))
            if tok.is_symbol("("):
                depth += 1
            elif tok.is_symbol(")"):
                depth -= 1
                if depth == 0:
                    return j
            j += 1

    def _member_step(self, i: int) -> int:
        tok = self._tok(i)
        if tok.is_symbol("@"):
            return self._skip_annotation(i)
        if tok.is_symbol(";"):
            owner = self.stack[-1] if self.stack else None
            if isinstance(owner, _ClassFrame) and owner.in_enum_constants:
                owner.in_enum_constants = False
                self.header = []
                return i + 1
            method = self._method_header(self.header)
            if isinstance(owner, _ClassFrame) and method is not None:
                name, arity, line, return_type, modifiers, generic = method
                owner.methods.append(JavaMethod(
                    name, arity, line, return_type,
                    modifiers=modifiers, has_body=False, type_parameters=generic,
                ))
            self.header = []
            return i + 1
        if tok.is_symbol("{"):
            if not self.stack:
                raise self._error("'{' outside a type declaration", tok)
            owner = self.stack[-1]
            method = self._method_header(self.header)
            if isinstance(owner, _ClassFrame) and owner.in_enum_constants:
                method = None
            if isinstance(owner, _ClassFrame) and method is not None:
                self.stack.append(_MethodFrame(owner, *method))
            else:
                self.stack.append(_BlockFrame(tok.line))
            self.header = []
            return i + 1
        if tok.is_symbol("}"):
            if not self.stack:
                raise self._error("unbalanced '}'", tok)
            self._close_class()
            self.header = []
            return i + 1
        self.header.append(tok)
        return i + 1

    def _body_step(self, i: int) -> int:
        tok = self._tok(i)
        if tok.is_symbol("{"):
            self.stack.append(_BlockFrame(tok.line))
        elif tok.is_symbol("}"):
            frame = self.stack.pop()
            if isinstance(frame, _MethodFrame):
                frame.owner.methods.append(JavaMethod(
                    name=frame.name,
                    parameter_count=frame.parameter_count,
                    line=frame.line,
                    return_type=frame.return_type,
                    returns=tuple(frame.returns),
                    modifiers=frame.modifiers,
                    type_parameters=frame.type_parameters,
                ))
            if self._at_member_level():
                self.header = []
        elif tok.is_word("return"):
            method = self._enclosing_method()
            if method is not None:
                method.returns.append(ReturnStatement(tok.line, self._returns_null(i)))
        return i + 1

    def _enclosing_method(self) -> Optional[_MethodFrame]:
        for frame in reversed(self.stack):
            if isinstance(frame, _MethodFrame):
                return frame
            if isinstance(frame, _ClassFrame):
                return None
        return None

    def _returns_null(self, i: int) -> bool:
        j = i + 1
        parens = 0
        while self._tok(j).is_symbol("("):
            parens += 1
            j += 1
        if not self._tok(j).is_word("null"):
            return False
        j += 1
        for _ in range(parens):
            if not self._tok(j).is_symbol(")"):
                return False
            j += 1
        return self._tok(j).is_symbol(";")

    def _close_class(self) -> None:
        frame = self.stack.pop()
        if not isinstance(frame, _ClassFrame):
            return
        self.classes.append(JavaClass(
            name=frame.name,
            kind=frame.kind,
            line=frame.line,
            extends=frame.extends,
            implements=frame.implements,
            methods=tuple(frame.methods),
            role=self.indexer.resolve_role(frame.kind, frame.extends, frame.implements),
        ))

    @staticmethod
    def _method_header(header: list[Token]) -> Optional[tuple[str, int, int, str, tuple[str, ...], bool]]:
        """
        Return (name, arity, line, return type, modifiers, generic) when the header
        declares a method. generic is set when the method declares its own type parameters.
        """
        angle = 0
        for p, tok in enumerate(header):
            if tok.is_symbol("=") and angle == 0:
                return None
            if tok.is_symbol("<"):
                angle += 1
            elif tok.is_symbol(">"):
                angle = max(angle - 1, 0)
            elif tok.is_symbol("(") and angle == 0:
                if p == 0 or header[p - 1].type is not TokenType.IDENTIFIER or header[p - 1].value == "new":
                    return None
                name_tok = header[p - 1]
                arity = _IndexRun._count_parameters(header[p + 1:])
                return_type = _IndexRun._return_type(header[:p - 1])
                modifiers = tuple(
                    t.value for t in header[:p - 1]
                    if t.type is TokenType.IDENTIFIER and t.value in _MODIFIERS
                )
                leading = next(
                    (t for t in header[:p - 1] if not (t.type is TokenType.IDENTIFIER and t.value in _MODIFIERS)),
                    None,
                )
                generic = leading is not None and leading.is_symbol("<")
                return (name_tok.value, arity, name_tok.line, return_type, modifiers, generic)
        return None

    @staticmethod
    def _count_parameters(tokens: list[Token]) -> int:
        depth = 0
        count = 0
        seen = False
        for tok in tokens:
            if tok.is_symbol("(") or tok.is_symbol("<"):
                depth += 1
            elif tok.is_symbol(")") or tok.is_symbol(">"):
                if depth == 0 and tok.is_symbol(")"):
                    break
                depth = max(depth - 1, 0)
            elif tok.is_symbol(",") and depth == 0:
                count += 1
                continue
            seen = True
        if not seen:
            return 0
        return count + 1

    @staticmethod
    def _return_type(prefix: list[Token]) -> str:
        """The declared return type text, or '' for constructors."""
        parts: list[str] = []
        angle = 0
        j = len(prefix) - 1
        while j >= 0:
            tok = prefix[j]
            if angle == 0 and tok.type is TokenType.IDENTIFIER and tok.value in _MODIFIERS:
                break
            if tok.is_symbol(">"):
                angle += 1
            elif tok.is_symbol("<"):
                angle -= 1
            parts.append(tok.value)
            j -= 1
            if angle == 0 and tok.type is TokenType.IDENTIFIER and not (j >= 0 and prefix[j].is_symbol(".")):
                break
        return "".join(reversed(parts))


class JavaSourceGateway:
    """Reads Java files from disk and indexes them. Raises on unreadable or malformed input."""

    def __init__(self, indexer: Optional[JavaStructureIndexer] = None) -> None:
        self.indexer = indexer or JavaStructureIndexer()

    def parse_file(self, path: Path) -> JavaCompilationUnit:
        source = path.read_text(encoding="utf-8")
        return self.indexer.index(source, path)

    def parse_source(self, source: str, path: Path = Path("<memory>")) -> JavaCompilationUnit:
        return self.indexer.index(source, path)
