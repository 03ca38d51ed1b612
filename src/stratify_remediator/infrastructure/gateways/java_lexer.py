"""
Java lexer (tokenizer).

Converts Java source into a flat token stream with line/column positions.
Comments and whitespace are dropped; string, text-block and char literals are
kept as single tokens so braces inside them never confuse the indexer.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from stratify_remediator.domain.exceptions import JavaSyntaxError


class TokenType(Enum):
    """Types of tokens in Java source."""
    IDENTIFIER = auto()      # names and keywords alike: class, fix, null
    STRING = auto()          # "text" and """text blocks"""
    CHAR = auto()            # 'c'
    NUMBER = auto()          # 42, 0x1F, 1_000L, 3.5e-2
    SYMBOL = auto()          # { } ( ) < > ; , . @ = -> :: ...
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: str
    line: int
    column: int

    def is_symbol(self, value: str) -> bool:
        return self.type is TokenType.SYMBOL and self.value == value

    def is_word(self, value: str) -> bool:
        return self.type is TokenType.IDENTIFIER and self.value == value


class JavaLexer:
    """
    Tokenizer for Java source files.

    Usage:
        tokens = list(JavaLexer(source_text, "Foo.java").tokenize())
    """

    MULTI_CHAR_SYMBOLS = ("...", "->", "::")

    def __init__(self, source: str, filename: Optional[str] = None) -> None:
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.length = len(source)

    def _current(self) -> Optional[str]:
        if self.pos >= self.length:
            return None
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> Optional[str]:
        pos = self.pos + offset
        if pos >= self.length:
            return None
        return self.source[pos]

    def _advance(self) -> Optional[str]:
        ch = self._current()
        if ch is not None:
            self.pos += 1
            if ch == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return ch

    def _error(self, message: str, line: int, column: int) -> JavaSyntaxError:
        return JavaSyntaxError(message, line, column, self.filename)

    def _skip_line_comment(self) -> None:
        while self._current() not in (None, "\n"):
            self._advance()

    def _skip_block_comment(self) -> None:
        start_line, start_col = self.line, self.column
        self._advance()
        self._advance()
        while True:
            ch = self._current()
            if ch is None:
                raise self._error("unterminated comment", start_line, start_col)
            if ch == "*" and self._peek() == "/":
                self._advance()
                self._advance()
                return
            self._advance()

    def _read_quoted(self, quote: str, token_type: TokenType) -> Token:
        start_line, start_col = self.line, self.column
        start = self.pos
        self._advance()
        while True:
            ch = self._current()
            if ch is None or ch == "\n":
                raise self._error("unterminated literal", start_line, start_col)
            if ch == "\\":
                self._advance()
                self._advance()
                continue
            self._advance()
            if ch == quote:
                break
        return Token(token_type, self.source[start:self.pos], start_line, start_col)

    def _read_text_block(self) -> Token:
        start_line, start_col = self.line, self.column
        start = self.pos
        for _ in range(3):
            self._advance()
        while True:
            ch = self._current()
            if ch is None:
                raise self._error("unterminated text block", start_line, start_col)
            if ch == "\\":
                self._advance()
                self._advance()
                continue
            if ch == '"' and self._peek() == '"' and self._peek(2) == '"':
                for _ in range(3):
                    self._advance()
                break
            self._advance()
        return Token(TokenType.STRING, self.source[start:self.pos], start_line, start_col)

    def _read_number(self) -> Token:
        start_line, start_col = self.line, self.column
        start = self.pos
        hexadecimal = self._current() == "0" and (self._peek() or "") in "xX"
        while True:
            ch = self._current()
            if ch is None:
                break
            if ch.isalnum() or ch in "_.":
                self._advance()
                continue
            previous = self.source[self.pos - 1]
            exponent = previous in "pP" if hexadecimal else previous in "eE"
            if ch in "+-" and exponent:
                self._advance()
                continue
            break
        return Token(TokenType.NUMBER, self.source[start:self.pos], start_line, start_col)

    def _read_identifier(self) -> Token:
        start_line, start_col = self.line, self.column
        start = self.pos
        while True:
            ch = self._current()
            if ch is None or not (ch.isalnum() or ch in "_$"):
                break
            self._advance()
        return Token(TokenType.IDENTIFIER, self.source[start:self.pos], start_line, start_col)

    def _read_symbol(self) -> Token:
        start_line, start_col = self.line, self.column
        for symbol in self.MULTI_CHAR_SYMBOLS:
            if self.source.startswith(symbol, self.pos):
                for _ in symbol:
                    self._advance()
                return Token(TokenType.SYMBOL, symbol, start_line, start_col)
        ch = self._advance() or ""
        return Token(TokenType.SYMBOL, ch, start_line, start_col)

    def tokenize(self) -> Iterator[Token]:
        """Yield tokens, ending with a single EOF token."""
        while True:
            ch = self._current()
            if ch is None:
                yield Token(TokenType.EOF, "", self.line, self.column)
                return
            if ch.isspace():
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._skip_line_comment()
            elif ch == "/" and self._peek() == "*":
                self._skip_block_comment()
            elif ch == '"' and self._peek() == '"' and self._peek(2) == '"':
                yield self._read_text_block()
            elif ch == '"':
                yield self._read_quoted('"', TokenType.STRING)
            elif ch == "'":
                yield self._read_quoted("'", TokenType.CHAR)
            elif ch.isdigit() or (ch == "." and (self._peek() or "").isdigit()):
                yield self._read_number()
            elif ch.isalpha() or ch in "_$":
                yield self._read_identifier()
            else:
                yield self._read_symbol()
