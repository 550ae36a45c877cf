"""Hypothesis strategies for fluentsyntax property-based testing.

Usage:
    from tests.strategies import ftl_identifiers, ftl_resources
    from tests.strategies.ftl import ftl_select_expressions

Event-Emitting Strategies (HypoFuzz-Optimized):
    ftl_chaos_source, ftl_inline_expressions and ftl_resources call
    hypothesis.event() to label the shapes they generate.
"""

from .ftl import (
    FTL_IDENTIFIER_FIRST_CHARS,
    FTL_IDENTIFIER_REST_CHARS,
    FTL_SAFE_CHARS,
    ftl_any_patterns,
    ftl_call_arguments,
    ftl_chaos_source,
    ftl_identifiers,
    ftl_inline_expressions,
    ftl_message_nodes,
    ftl_patterns,
    ftl_resources,
    ftl_select_expressions,
    ftl_simple_messages,
    ftl_simple_text,
    ftl_term_nodes,
    ftl_valid_sources,
)

__all__ = [
    "FTL_IDENTIFIER_FIRST_CHARS",
    "FTL_IDENTIFIER_REST_CHARS",
    "FTL_SAFE_CHARS",
    "ftl_any_patterns",
    "ftl_call_arguments",
    "ftl_chaos_source",
    "ftl_identifiers",
    "ftl_inline_expressions",
    "ftl_message_nodes",
    "ftl_patterns",
    "ftl_resources",
    "ftl_select_expressions",
    "ftl_simple_messages",
    "ftl_simple_text",
    "ftl_term_nodes",
    "ftl_valid_sources",
]
