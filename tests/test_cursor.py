"""Test the token cursor: lookahead, consumption, and expect failures."""

import pytest

from jackanalyzer.cursor import TokenCursor
from jackanalyzer.errors import EndOfInputError, ParseError
from jackanalyzer.lexer import tokenize
from jackanalyzer.tokens import Keyword, Symbol, TokenType


def _cursor(source: str) -> TokenCursor:
    return TokenCursor(tokenize(source), source)


class TestPeekAdvance:
    def test_peek_does_not_consume(self):
        cur = _cursor("do x;")
        assert cur.peek() is cur.peek()
        assert cur.peek().value is Keyword.DO

    def test_advance_returns_current(self):
        cur = _cursor("do x;")
        first = cur.advance()
        assert first.value is Keyword.DO
        assert cur.peek().value == "x"

    def test_end_of_sequence(self):
        cur = _cursor(";")
        assert cur.advance() is not None
        assert cur.peek() is None
        assert cur.advance() is None
        assert cur.at_end()

    def test_empty(self):
        cur = _cursor("")
        assert cur.peek() is None
        assert cur.at_end()

    def test_each_token_seen_once(self):
        source = "let a = b + 1;"
        tokens = tokenize(source)
        cur = TokenCursor(tokens, source)
        seen = []
        while (tok := cur.advance()) is not None:
            seen.append(tok)
        assert seen == tokens


class TestAt:
    def test_at_variant(self):
        cur = _cursor("static")
        assert cur.at(Keyword.STATIC)
        assert cur.at(Keyword.FIELD, Keyword.STATIC)
        assert not cur.at(Keyword.FIELD)

    def test_at_category(self):
        cur = _cursor("foo")
        assert cur.at(TokenType.IDENTIFIER)

    def test_at_end_is_false(self):
        assert not _cursor("").at(Symbol.SEMICOLON)


class TestExpect:
    def test_match_consumes(self):
        cur = _cursor("{ }")
        tok = cur.expect(Symbol.LBRACE)
        assert tok.value is Symbol.LBRACE
        assert cur.peek().value is Symbol.RBRACE

    def test_category_match(self):
        cur = _cursor("Main")
        assert cur.expect(TokenType.IDENTIFIER).value == "Main"

    def test_mismatch_raises(self):
        cur = _cursor("int x;")
        with pytest.raises(ParseError) as exc_info:
            cur.expect(Keyword.STATIC, Keyword.FIELD)
        err = exc_info.value
        assert err.expected == "'static' or 'field'"
        assert err.found.value is Keyword.INT
        assert not isinstance(err, EndOfInputError)

    def test_mismatch_does_not_consume(self):
        cur = _cursor("int")
        with pytest.raises(ParseError):
            cur.expect(Symbol.SEMICOLON)
        assert cur.peek().value is Keyword.INT

    def test_exhausted_raises_end_of_input(self):
        cur = _cursor("x")
        cur.advance()
        with pytest.raises(EndOfInputError, match="found end of input"):
            cur.expect(Symbol.SEMICOLON)

    def test_keyword_spelling_is_not_identifier(self):
        cur = _cursor("class")
        with pytest.raises(ParseError, match="expected identifier, found 'class'"):
            cur.expect(TokenType.IDENTIFIER)
