"""Shared test fixtures and helpers."""

from __future__ import annotations

import re

import pytest

from jackanalyzer.lexer import tokenize
from jackanalyzer.parser import Parser
from jackanalyzer.tokens import Token, TokenType

_MARKER = re.compile(r"^( *)<(/?)(\w+)>(?: (.*) </(\w+)>)?$")


@pytest.fixture
def lex():
    """Return a helper that tokenizes source."""

    def _lex(source: str) -> list[Token]:
        return tokenize(source)

    return _lex


@pytest.fixture
def compile_rule():
    """Return a helper that runs one grammar production over source.

    The helper returns (output, parser) so tests can inspect what the rule left unconsumed.
    """

    def _compile(rule: str, source: str, indent: int = 2) -> tuple[str, Parser]:
        parser = Parser(tokenize(source), source, indent)
        getattr(parser, f"_compile_{rule}")()
        return "".join(parser._out), parser

    return _compile


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token source texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def check_well_formed(tree: str) -> list[str]:
    """Assert open/close markers nest in strict LIFO order; return the open marker names."""
    stack: list[str] = []
    opened: list[str] = []
    for line in tree.splitlines():
        m = _MARKER.match(line)
        assert m is not None, f"Malformed marker line: {line!r}"
        if m.group(4) is not None:
            assert m.group(3) == m.group(5), f"Leaf tags differ: {line!r}"
        elif m.group(2):
            assert stack, f"Close marker with nothing open: {line!r}"
            top = stack.pop()
            assert top == m.group(3), f"Expected </{top}>, got {line!r}"
        else:
            stack.append(m.group(3))
            opened.append(m.group(3))
    assert not stack, f"Unclosed markers: {stack}"
    return opened


def leaves(tree: str) -> list[tuple[str, str]]:
    """Return (tag, text) for every leaf marker in order."""
    result = []
    for line in tree.splitlines():
        m = _MARKER.match(line)
        if m is not None and m.group(4) is not None:
            result.append((m.group(3), m.group(4)))
    return result
