"""Forward-only read position over a materialized token list."""

from __future__ import annotations

from jackanalyzer.errors import EndOfInputError, ParseError
from jackanalyzer.tokens import Kind, Position, Token, describe_kinds


class TokenCursor:
    """Sequential access to a token list with one token of lookahead."""

    def __init__(self, tokens: list[Token], source: str) -> None:
        self._tokens = tokens
        self._source = source
        self._pos = 0

    def peek(self) -> Token | None:
        """Return the current token, or None at end of input."""
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def advance(self) -> Token | None:
        """Consume and return the current token; None if already exhausted."""
        tok = self.peek()
        if tok is not None:
            self._pos += 1
        return tok

    def at(self, *kinds: Kind) -> bool:
        tok = self.peek()
        return tok is not None and any(tok.matches(kind) for kind in kinds)

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def expect(self, *kinds: Kind) -> Token:
        """Consume the current token if it matches one of *kinds*, else raise."""
        tok = self.peek()
        if tok is not None and any(tok.matches(kind) for kind in kinds):
            self._pos += 1
            return tok
        raise self.error(describe_kinds(kinds))

    def error(self, expected: str) -> ParseError:
        """Build the error for the current token not matching *expected*."""
        tok = self.peek()
        if tok is None:
            return EndOfInputError(expected, self._end_position(), self._source)
        return ParseError(expected, tok, tok.position, self._source)

    def _end_position(self) -> Position:
        lines = self._source.splitlines()
        while lines and not lines[-1].strip():
            lines.pop()
        if not lines:
            return Position(1, 1)
        return Position(len(lines), len(lines[-1].rstrip()) + 1)

