"""Parsing layer - Protocolo de líneas del dispositivo."""

from .line_parser import LineOutcome, LineParseResult, classify_line, parse_line, parse_value

__all__ = ["LineOutcome", "LineParseResult", "classify_line", "parse_line", "parse_value"]
