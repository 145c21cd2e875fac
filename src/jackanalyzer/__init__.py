"""Jack syntax analyzer: source text to a serialized parse tree."""

from __future__ import annotations

__version__ = "0.1.0"


def analyze(source: str, indent: int = 2) -> str:
    """Tokenize and parse one Jack compilation unit, returning the tree text.

    Raises ``ParseError`` on the first syntax error. Performs no I/O.
    """
    from jackanalyzer.parser import parse

    return parse(source, indent)
