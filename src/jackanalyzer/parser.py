"""Jack parser: recursive descent that serializes the parse tree as it descends."""

from __future__ import annotations

from jackanalyzer.cursor import TokenCursor
from jackanalyzer.errors import ParseError
from jackanalyzer.lexer import tokenize
from jackanalyzer.tokens import INT_MAX, Keyword, Kind, Symbol, Token, TokenType, describe_kinds


class Parser:
    """Recursive descent parser for a single Jack class.

    Each ``_compile_*`` method handles one grammar production: it writes the
    production's open marker, consumes its terminals (one leaf each) and
    sub-productions, then writes the close marker. The first mismatch raises
    ``ParseError`` and the partial output is abandoned with the parser.
    """

    def __init__(self, tokens: list[Token], source: str, indent: int = 2) -> None:
        self._cursor = TokenCursor(tokens, source)
        self._source = source
        self._indent = " " * indent
        self._out: list[str] = []
        self._depth = 0

    def parse(self) -> str:
        self._compile_class()
        if not self._cursor.at_end():
            raise self._cursor.error("end of input")
        return "".join(self._out)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _open(self, name: str) -> None:
        self._out.append(f"{self._indent * self._depth}<{name}>\n")
        self._depth += 1

    def _close(self, name: str) -> None:
        self._depth -= 1
        self._out.append(f"{self._indent * self._depth}</{name}>\n")

    def _leaf(self, tok: Token) -> None:
        tag = tok.type.value
        self._out.append(f"{self._indent * self._depth}<{tag}> {tok.display} </{tag}>\n")

    def _consume(self, *kinds: Kind) -> Token:
        """Expect one of *kinds* and write it as a leaf."""
        tok = self._cursor.expect(*kinds)
        self._leaf(tok)
        return tok

    # ------------------------------------------------------------------
    # Program structure
    # ------------------------------------------------------------------

    def _compile_class(self) -> None:
        self._open("class")
        self._consume(Keyword.CLASS)
        self._consume(TokenType.IDENTIFIER)
        self._consume(Symbol.LBRACE)

        members: tuple[Kind, ...] = _CLASS_VAR_KINDS + _SUBROUTINE_KINDS
        while self._cursor.at(*_CLASS_VAR_KINDS):
            self._compile_class_var_dec()
        while self._cursor.at(*_SUBROUTINE_KINDS):
            self._compile_subroutine()
            members = _SUBROUTINE_KINDS

        if not self._cursor.at(Symbol.RBRACE):
            raise self._cursor.error(describe_kinds(members + (Symbol.RBRACE,)))
        self._consume(Symbol.RBRACE)
        self._close("class")

    def _compile_class_var_dec(self) -> None:
        self._open("classVarDec")
        self._consume(*_CLASS_VAR_KINDS)
        self._compile_type()
        self._compile_name_list()
        self._consume(Symbol.SEMICOLON)
        self._close("classVarDec")

    def _compile_type(self, allow_void: bool = False) -> None:
        if allow_void:
            self._consume(Keyword.VOID, *_TYPE_KINDS)
        else:
            self._consume(*_TYPE_KINDS)

    def _compile_name_list(self) -> None:
        """identifier (',' identifier)*, shared by classVarDec and varDec."""
        self._consume(TokenType.IDENTIFIER)
        while self._cursor.at(Symbol.COMMA):
            self._consume(Symbol.COMMA)
            self._consume(TokenType.IDENTIFIER)

    def _compile_subroutine(self) -> None:
        self._open("subroutineDec")
        self._consume(*_SUBROUTINE_KINDS)
        self._compile_type(allow_void=True)
        self._consume(TokenType.IDENTIFIER)
        self._consume(Symbol.LPAREN)
        self._compile_parameter_list()
        self._consume(Symbol.RPAREN)
        self._compile_subroutine_body()
        self._close("subroutineDec")

    def _compile_parameter_list(self) -> None:
        self._open("parameterList")
        if not self._cursor.at(Symbol.RPAREN):
            self._compile_type()
            self._consume(TokenType.IDENTIFIER)
            while self._cursor.at(Symbol.COMMA):
                self._consume(Symbol.COMMA)
                self._compile_type()
                self._consume(TokenType.IDENTIFIER)
        self._close("parameterList")

    def _compile_subroutine_body(self) -> None:
        self._open("subroutineBody")
        self._consume(Symbol.LBRACE)
        while self._cursor.at(Keyword.VAR):
            self._compile_var_dec()
        self._compile_statements()
        self._consume(Symbol.RBRACE)
        self._close("subroutineBody")

    def _compile_var_dec(self) -> None:
        self._open("varDec")
        self._consume(Keyword.VAR)
        self._compile_type()
        self._compile_name_list()
        self._consume(Symbol.SEMICOLON)
        self._close("varDec")

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _compile_statements(self) -> None:
        self._open("statements")
        while True:
            if self._cursor.at(Keyword.LET):
                self._compile_let()
            elif self._cursor.at(Keyword.IF):
                self._compile_if()
            elif self._cursor.at(Keyword.WHILE):
                self._compile_while()
            elif self._cursor.at(Keyword.DO):
                self._compile_do()
            elif self._cursor.at(Keyword.RETURN):
                self._compile_return()
            else:
                break
        self._close("statements")

    def _compile_let(self) -> None:
        self._open("letStatement")
        self._consume(Keyword.LET)
        self._consume(TokenType.IDENTIFIER)
        if self._cursor.at(Symbol.LBRACKET):
            self._consume(Symbol.LBRACKET)
            self._compile_expression()
            self._consume(Symbol.RBRACKET)
        self._consume(Symbol.EQ)
        self._compile_expression()
        self._consume(Symbol.SEMICOLON)
        self._close("letStatement")

    def _compile_if(self) -> None:
        self._open("ifStatement")
        self._consume(Keyword.IF)
        self._compile_condition()
        self._compile_block()
        if self._cursor.at(Keyword.ELSE):
            self._consume(Keyword.ELSE)
            self._compile_block()
        self._close("ifStatement")

    def _compile_while(self) -> None:
        self._open("whileStatement")
        self._consume(Keyword.WHILE)
        self._compile_condition()
        self._compile_block()
        self._close("whileStatement")

    def _compile_condition(self) -> None:
        self._consume(Symbol.LPAREN)
        self._compile_expression()
        self._consume(Symbol.RPAREN)

    def _compile_block(self) -> None:
        self._consume(Symbol.LBRACE)
        self._compile_statements()
        self._consume(Symbol.RBRACE)

    def _compile_do(self) -> None:
        self._open("doStatement")
        self._consume(Keyword.DO)
        self._compile_subroutine_call()
        self._consume(Symbol.SEMICOLON)
        self._close("doStatement")

    def _compile_return(self) -> None:
        self._open("returnStatement")
        self._consume(Keyword.RETURN)
        if not self._cursor.at(Symbol.SEMICOLON):
            self._compile_expression()
        self._consume(Symbol.SEMICOLON)
        self._close("returnStatement")

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _compile_expression(self) -> None:
        self._open("expression")
        self._compile_term()
        while self._cursor.at(*_BINARY_OPS):
            self._consume(*_BINARY_OPS)
            self._compile_term()
        self._close("expression")

    def _compile_term(self) -> None:
        """Compile a term.

        A leading identifier is disambiguated by one token of lookahead:
        ``[`` starts an array element, ``(`` or ``.`` a subroutine call, and
        anything else leaves a bare variable without consuming further.
        """
        self._open("term")
        tok = self._cursor.peek()

        if tok is None:
            raise self._cursor.error("term")

        if tok.type == TokenType.INT_CONST:
            if isinstance(tok.value, int) and tok.value > INT_MAX:
                raise ParseError(
                    "term",
                    tok,
                    tok.position,
                    self._source,
                    message=f"integer constant {tok.value} out of range (0..{INT_MAX})",
                )
            self._consume(TokenType.INT_CONST)
        elif tok.type == TokenType.STRING_CONST:
            self._consume(TokenType.STRING_CONST)
        elif self._cursor.at(*_KEYWORD_CONSTANTS):
            self._consume(*_KEYWORD_CONSTANTS)
        elif self._cursor.at(*_UNARY_OPS):
            self._consume(*_UNARY_OPS)
            self._compile_term()
        elif self._cursor.at(Symbol.LPAREN):
            self._consume(Symbol.LPAREN)
            self._compile_expression()
            self._consume(Symbol.RPAREN)
        elif tok.type == TokenType.IDENTIFIER:
            self._consume(TokenType.IDENTIFIER)
            if self._cursor.at(Symbol.LBRACKET):
                self._consume(Symbol.LBRACKET)
                self._compile_expression()
                self._consume(Symbol.RBRACKET)
            elif self._cursor.at(Symbol.LPAREN, Symbol.DOT):
                self._compile_call_tail()
        else:
            raise self._cursor.error("term")

        self._close("term")

    def _compile_subroutine_call(self) -> None:
        self._consume(TokenType.IDENTIFIER)
        self._compile_call_tail()

    def _compile_call_tail(self) -> None:
        """('.' identifier)? '(' expressionList ')'"""
        tok = self._consume(Symbol.DOT, Symbol.LPAREN)
        if tok.value is Symbol.DOT:
            self._consume(TokenType.IDENTIFIER)
            self._consume(Symbol.LPAREN)
        self._compile_expression_list()
        self._consume(Symbol.RPAREN)

    def _compile_expression_list(self) -> None:
        self._open("expressionList")
        if not self._cursor.at(Symbol.RPAREN):
            self._compile_expression()
            while self._cursor.at(Symbol.COMMA):
                self._consume(Symbol.COMMA)
                self._compile_expression()
        self._close("expressionList")


# Module-level constants
_CLASS_VAR_KINDS: tuple[Kind, ...] = (Keyword.STATIC, Keyword.FIELD)
_SUBROUTINE_KINDS: tuple[Kind, ...] = (Keyword.CONSTRUCTOR, Keyword.FUNCTION, Keyword.METHOD)
_TYPE_KINDS: tuple[Kind, ...] = (Keyword.INT, Keyword.CHAR, Keyword.BOOLEAN, TokenType.IDENTIFIER)
_KEYWORD_CONSTANTS: tuple[Kind, ...] = (Keyword.TRUE, Keyword.FALSE, Keyword.NULL, Keyword.THIS)
_UNARY_OPS: tuple[Kind, ...] = (Symbol.MINUS, Symbol.NOT, Symbol.SHIFT_LEFT, Symbol.SHIFT_RIGHT)
_BINARY_OPS: tuple[Kind, ...] = (
    Symbol.PLUS,
    Symbol.MINUS,
    Symbol.TIMES,
    Symbol.DIVIDE,
    Symbol.AND,
    Symbol.OR,
    Symbol.LT,
    Symbol.GT,
    Symbol.EQ,
    Symbol.SHIFT_LEFT,
    Symbol.SHIFT_RIGHT,
)


def parse(source: str, indent: int = 2) -> str:
    """Convenience function: parse source text and return the serialized tree."""
    tokens = tokenize(source)
    return Parser(tokens, source, indent).parse()
