"""Jack lexer: normalizes comments and whitespace, then classifies tokens."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass

from jackanalyzer.tokens import KEYWORDS, SYMBOLS, Keyword, Position, Symbol, Token, TokenType

COMMENT = "//"
BLOCK_COMMENT_BEGIN = "/*"
BLOCK_COMMENT_END = "*/"

_DIGITS = frozenset("0123456789")


@dataclass(frozen=True, slots=True)
class _Line:
    """A surviving source line after comment and whitespace normalization."""

    number: int
    indent: int
    text: str


def strip_block_comments(source: str) -> str:
    """Remove ``/* ... */`` comments (non-nesting).

    Every character of a comment except newlines becomes a space, so source
    lines and columns are kept and no two tokens are joined.
    An unterminated comment runs to the end of the input.
    """
    parts: list[str] = []
    pos = 0
    while True:
        begin = source.find(BLOCK_COMMENT_BEGIN, pos)
        if begin < 0:
            parts.append(source[pos:])
            break
        parts.append(source[pos:begin])
        end = source.find(BLOCK_COMMENT_END, begin + len(BLOCK_COMMENT_BEGIN))
        if end < 0:
            comment = source[begin:]
        else:
            comment = source[begin : end + len(BLOCK_COMMENT_END)]
        parts.append("".join(ch if ch == "\n" else " " for ch in comment))
        if end < 0:
            break
        pos = end + len(BLOCK_COMMENT_END)
    return "".join(parts)


def _logical_lines(source: str) -> list[_Line]:
    lines: list[_Line] = []
    for number, raw in enumerate(strip_block_comments(source).split("\n"), start=1):
        text = raw.strip()
        if not text or text.startswith(COMMENT):
            continue
        comment_index = text.find(COMMENT)
        if comment_index >= 0:
            text = text[:comment_index].rstrip()
        indent = len(raw) - len(raw.lstrip())
        lines.append(_Line(number, indent, text))
    return lines


def normalize(source: str) -> str:
    """Strip comments, trim lines, drop blank ones, and join the rest with one space."""
    return " ".join(line.text for line in _logical_lines(source))


class Lexer:
    """Tokenize Jack source text into a list of Token objects.

    Scanning never fails: malformed input degrades into identifiers, and an
    unterminated string literal absorbs the rest of the input.
    """

    def __init__(self, source: str) -> None:
        self._lines = _logical_lines(source)
        self._text = " ".join(line.text for line in self._lines)
        self._line_starts: list[int] = []
        offset = 0
        for line in self._lines:
            self._line_starts.append(offset)
            offset += len(line.text) + 1
        self._pos = 0
        self._tokens: list[Token] = []
        self._pending: list[str] = []
        self._pending_start = 0

    def tokenize(self) -> list[Token]:
        """Tokenize the full source and return the token list."""
        while self._pos < len(self._text):
            ch = self._text[self._pos]

            if ch.isspace():
                self._flush()
                self._pos += 1
            elif ch in SYMBOLS:
                self._flush()
                self._emit(TokenType.SYMBOL, SYMBOLS[ch], self._pos)
                self._pos += 1
            elif ch == '"':
                self._flush()
                self._lex_string()
            elif ch in _DIGITS and not self._pending:
                self._lex_integer()
            else:
                if not self._pending:
                    self._pending_start = self._pos
                self._pending.append(ch)
                self._pos += 1

        self._flush()
        return self._tokens

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _position(self, offset: int) -> Position:
        idx = bisect_right(self._line_starts, offset) - 1
        line = self._lines[idx]
        return Position(line.number, line.indent + offset - self._line_starts[idx] + 1)

    def _emit(self, tt: TokenType, value: Keyword | Symbol | int | str, start: int) -> None:
        self._tokens.append(Token(tt, value, self._position(start)))

    def _flush(self) -> None:
        """Finalize the pending run as a keyword or identifier."""
        if not self._pending:
            return
        text = "".join(self._pending)
        self._pending.clear()
        keyword = KEYWORDS.get(text)
        if keyword is not None:
            self._emit(TokenType.KEYWORD, keyword, self._pending_start)
        else:
            self._emit(TokenType.IDENTIFIER, text, self._pending_start)

    def _lex_string(self) -> None:
        start = self._pos
        end = self._text.find('"', start + 1)
        if end < 0:
            end = len(self._text)
        self._emit(TokenType.STRING_CONST, self._text[start + 1 : end], start)
        self._pos = end + 1

    def _lex_integer(self) -> None:
        start = self._pos
        while self._pos < len(self._text) and self._text[self._pos] in _DIGITS:
            self._pos += 1
        self._emit(TokenType.INT_CONST, int(self._text[start : self._pos]), start)


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize source text and return token list."""
    return Lexer(source).tokenize()
