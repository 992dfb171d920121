"""Cross-cutting utilities."""

from .parsers import parse_command, parse_quoted_args

__all__ = ["parse_command", "parse_quoted_args"]
