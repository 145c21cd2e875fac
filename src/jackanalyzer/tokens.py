"""Token types, reserved words, punctuation, and leaf escaping."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    # Value is the leaf marker tag name
    KEYWORD = "keyword"
    SYMBOL = "symbol"
    INT_CONST = "integerConstant"
    STRING_CONST = "stringConstant"
    IDENTIFIER = "identifier"


class Keyword(Enum):
    # Program structure
    CLASS = "class"
    CONSTRUCTOR = "constructor"
    FUNCTION = "function"
    METHOD = "method"
    FIELD = "field"
    STATIC = "static"
    VAR = "var"

    # Types
    INT = "int"
    CHAR = "char"
    BOOLEAN = "boolean"
    VOID = "void"

    # Constants
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    THIS = "this"

    # Statements
    LET = "let"
    DO = "do"
    IF = "if"
    ELSE = "else"
    WHILE = "while"
    RETURN = "return"


class Symbol(Enum):
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    DOT = "."
    COMMA = ","
    SEMICOLON = ";"
    PLUS = "+"
    MINUS = "-"
    TIMES = "*"
    DIVIDE = "/"
    AND = "&"
    OR = "|"
    LT = "<"
    GT = ">"
    EQ = "="
    NOT = "~"
    SHIFT_LEFT = "^"
    SHIFT_RIGHT = "#"

    @property
    def display(self) -> str:
        """Markup-safe rendering of the character."""
        return escape(self.value)


KEYWORDS: dict[str, Keyword] = {kw.value: kw for kw in Keyword}
SYMBOLS: dict[str, Symbol] = {sym.value: sym for sym in Symbol}

# Largest integer constant the language admits
INT_MAX = 65535

_ESCAPES = (("&", "&amp;"), ("<", "&lt;"), (">", "&gt;"))


def escape(text: str) -> str:
    """Escape ``&``, ``<`` and ``>`` for use inside a tree marker."""
    for ch, entity in _ESCAPES:
        text = text.replace(ch, entity)
    return text


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column in the original text."""

    line: int
    column: int


Kind = TokenType | Keyword | Symbol


@dataclass(frozen=True, slots=True)
class Token:
    """A classified lexer token.

    ``value`` is the ``Keyword`` or ``Symbol`` member for reserved words and
    punctuation, the numeric value for integer constants, and the raw text for
    string constants and identifiers.
    """

    type: TokenType
    value: Keyword | Symbol | int | str
    position: Position

    @property
    def display(self) -> str:
        """Leaf text with markup characters escaped."""
        if isinstance(self.value, Symbol):
            return self.value.display
        return escape(self.text)

    @property
    def text(self) -> str:
        """Canonical source text of the token (unescaped)."""
        if isinstance(self.value, (Keyword, Symbol)):
            return self.value.value
        return str(self.value)

    @property
    def width(self) -> int:
        """Number of source characters the token spans, quotes included."""
        if self.type == TokenType.STRING_CONST:
            return len(self.text) + 2
        return len(self.text)

    def matches(self, kind: Kind) -> bool:
        """Return True if this token is of category *kind* or is the exact variant *kind*."""
        if isinstance(kind, TokenType):
            return self.type == kind
        return self.value is kind

    def describe(self) -> str:
        """Short human-readable form used in error messages."""
        if self.type == TokenType.STRING_CONST:
            return f'string "{self.value}"'
        return f"'{self.text}'"


def describe_kind(kind: Kind) -> str:
    """Human-readable form of an expected token kind."""
    if isinstance(kind, TokenType):
        return {
            TokenType.KEYWORD: "keyword",
            TokenType.SYMBOL: "symbol",
            TokenType.INT_CONST: "integer constant",
            TokenType.STRING_CONST: "string constant",
            TokenType.IDENTIFIER: "identifier",
        }[kind]
    return f"'{kind.value}'"


def describe_kinds(kinds: tuple[Kind, ...]) -> str:
    """Join expected kinds as "a, b or c"."""
    names = [describe_kind(kind) for kind in kinds]
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + " or " + names[-1]
