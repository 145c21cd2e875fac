"""Error types with formatted source context."""

from __future__ import annotations

from jackanalyzer.tokens import Position, Token


class ParseError(Exception):
    """Raised on the first syntax error, with the expected and found tokens."""

    def __init__(
        self,
        expected: str,
        found: Token | None,
        position: Position,
        source: str,
        message: str | None = None,
    ) -> None:
        self.expected = expected
        self.found = found
        self.position = position
        self.source = source
        if message is None:
            message = f"expected {expected}, found {self.found_text}"
        self.message = message
        super().__init__(self.format())

    @property
    def found_text(self) -> str:
        if self.found is None:
            return "end of input"
        return self.found.describe()

    def format(self, filename: str = "input.jack") -> str:
        lines = self.source.splitlines()
        line_idx = self.position.line - 1
        col = self.position.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\r")
        else:
            source_line = ""

        # Underline the offending token, at least one caret
        if self.found is not None:
            underline_len = max(1, self.found.width)
        else:
            underline_len = 1

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.position.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.position.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


class EndOfInputError(ParseError):
    """Raised when the token sequence ran out where a token was required."""

    def __init__(self, expected: str, position: Position, source: str) -> None:
        super().__init__(expected, None, position, source)
