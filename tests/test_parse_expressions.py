"""Tests for expressions and the identifier lookahead in terms."""

from __future__ import annotations

import pytest

from jackanalyzer.tokens import Symbol

from .conftest import check_well_formed, leaves


class TestTermShapes:
    def test_bare_variable(self, compile_rule):
        out, parser = compile_rule("term", "x;")
        assert out == "<term>\n  <identifier> x </identifier>\n</term>\n"
        assert parser._cursor.peek().value is Symbol.SEMICOLON

    def test_array_element(self, compile_rule):
        out, parser = compile_rule("term", "x[i + 1];")
        assert [text for _, text in leaves(out)] == ["x", "[", "i", "+", "1", "]"]
        assert check_well_formed(out) == ["term", "expression", "term", "term"]
        assert parser._cursor.peek().value is Symbol.SEMICOLON

    def test_call(self, compile_rule):
        out, parser = compile_rule("term", "x(a, b);")
        assert [text for _, text in leaves(out)] == ["x", "(", "a", ",", "b", ")"]
        assert "expressionList" in check_well_formed(out)
        assert parser._cursor.peek().value is Symbol.SEMICOLON

    def test_qualified_call(self, compile_rule):
        out, parser = compile_rule("term", "x.y();")
        assert [text for _, text in leaves(out)] == ["x", ".", "y", "(", ")"]
        assert parser._cursor.peek().value is Symbol.SEMICOLON

    def test_identifier_before_operator(self, compile_rule):
        out, parser = compile_rule("term", "x + 1")
        assert leaves(out) == [("identifier", "x")]
        assert parser._cursor.peek().value is Symbol.PLUS


class TestConstants:
    def test_integer(self, compile_rule):
        out, _ = compile_rule("term", "32767")
        assert leaves(out) == [("integerConstant", "32767")]

    def test_string(self, compile_rule):
        out, _ = compile_rule("term", '"a < b & c"')
        assert leaves(out) == [("stringConstant", "a &lt; b &amp; c")]

    @pytest.mark.parametrize("word", ["true", "false", "null", "this"])
    def test_keyword_constants(self, compile_rule, word):
        out, _ = compile_rule("term", word)
        assert leaves(out) == [("keyword", word)]


class TestUnaryAndParens:
    @pytest.mark.parametrize("op", ["-", "~", "^", "#"])
    def test_unary(self, compile_rule, op):
        out, _ = compile_rule("term", f"{op}x")
        assert check_well_formed(out) == ["term", "term"]
        assert leaves(out)[0] == ("symbol", op)

    def test_parenthesized(self, compile_rule):
        out, _ = compile_rule("term", "(a - b)")
        assert check_well_formed(out) == ["term", "expression", "term", "term"]

    def test_double_negation(self, compile_rule):
        out, _ = compile_rule("term", "--1")
        assert check_well_formed(out) == ["term", "term", "term"]


class TestBinaryOperators:
    @pytest.mark.parametrize(
        ("op", "display"),
        [
            ("+", "+"),
            ("-", "-"),
            ("*", "*"),
            ("/", "/"),
            ("&", "&amp;"),
            ("|", "|"),
            ("<", "&lt;"),
            (">", "&gt;"),
            ("=", "="),
            ("^", "^"),
            ("#", "#"),
        ],
    )
    def test_operator_leaf(self, compile_rule, op, display):
        out, _ = compile_rule("expression", f"a {op} b")
        assert leaves(out) == [("identifier", "a"), ("symbol", display), ("identifier", "b")]

    def test_chained_operators_are_flat(self, compile_rule):
        out, _ = compile_rule("expression", "a + b * c - 1")
        assert check_well_formed(out) == ["expression", "term", "term", "term", "term"]
        assert [text for _, text in leaves(out)] == ["a", "+", "b", "*", "c", "-", "1"]

    def test_single_term(self, compile_rule):
        out, _ = compile_rule("expression", "1")
        assert check_well_formed(out) == ["expression", "term"]


class TestExpressionList:
    def test_empty(self, compile_rule):
        out, _ = compile_rule("expression_list", ")")
        assert out == "<expressionList>\n</expressionList>\n"

    def test_nested_calls(self, compile_rule):
        out, _ = compile_rule("expression_list", "f(g(1), a[2]), 3)")
        opened = check_well_formed(out)
        assert opened.count("expressionList") == 3
        assert opened.count("expression") == 6
