"""Fluent FTL parser module.

Module Organization:
- core.py: FluentParser class and the entry loop with Junk recovery
- context.py: ParseContext, per-parse settings and nesting depth
- primitives.py: Basic parsers (identifiers, numbers, strings)
- rules.py: Grammar rules (entries, patterns, expressions, variants)

Public API:
    FluentParser: Main parser class
    ParseContext: Parse context for depth tracking (advanced usage)
"""

from fluentsyntax.syntax.parser.context import ParseContext
from fluentsyntax.syntax.parser.core import FluentParser

__all__ = ["FluentParser", "ParseContext"]
