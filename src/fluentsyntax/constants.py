"""Shared constants for fluentsyntax.

Placing constants here avoids circular imports between the syntax and
diagnostics packages and gives a single source of truth.

Constants are grouped by domain:
- Depth limits: Recursion protection for parsing/serialization/traversal
- Input limits: DoS prevention via size constraints
- Layout: Canonical serializer layout

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Input limits
    "MAX_SOURCE_SIZE",
    # Layout
    "INDENT",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Unified maximum depth for recursion protection.
# Used by: parser (placeable nesting), serializer, visitor.
# Legitimate FTL rarely nests more than a handful of placeables; anything
# deeper than this is malformed or adversarial.
MAX_DEPTH: int = 100

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum source length accepted by FluentParser (in characters).
# 10M characters is far beyond any real localization resource.
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# LAYOUT
# ============================================================================

# Indentation used by the serializer for continuation lines, attributes
# and variants.
INDENT: str = "    "
