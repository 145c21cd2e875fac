"""Flat token dump (``<tokens>`` form) for --tokens and --debug."""

from __future__ import annotations

import sys
from typing import TextIO

from jackanalyzer.tokens import Token


def format_tokens(tokens: list[Token]) -> str:
    """Render tokens as one leaf marker per line inside a ``<tokens>`` pair."""
    lines = ["<tokens>\n"]
    for tok in tokens:
        tag = tok.type.value
        lines.append(f"<{tag}> {tok.display} </{tag}>\n")
    lines.append("</tokens>\n")
    return "".join(lines)


def dump_tokens(tokens: list[Token], *, file: TextIO = sys.stderr) -> None:
    """Print a human-readable token listing with source positions to *file*."""
    for tok in tokens:
        pos = f"{tok.position.line}:{tok.position.column}"
        file.write(f"{pos:>8}  {tok.type.name:<12} {tok.text!r}\n")
