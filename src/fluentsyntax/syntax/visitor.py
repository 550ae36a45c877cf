"""Visitor pattern for AST traversal.

Enables tools to walk the Fluent AST without modifying node classes.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name
(snake_case), e.g. visit_Message, visit_TextElement.

Dispatch is a match over the closed set of node classes; there is one
visit_* method per node kind, each defaulting to generic_visit().

Python 3.13+.
"""

from fluentsyntax.constants import MAX_DEPTH
from fluentsyntax.core.depth_guard import DepthGuard

from .ast import (
    Annotation,
    Attribute,
    BaseNode,
    CallArguments,
    Comment,
    FunctionReference,
    GroupComment,
    Identifier,
    Junk,
    Message,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    Placeable,
    Resource,
    ResourceComment,
    SelectExpression,
    Span,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    VariableReference,
    Variant,
    Whitespace,
)

__all__ = ["ASTVisitor"]

# One select level (Placeable -> SelectExpression -> Variant -> Pattern)
# is four nodes of visit, visit_X, generic_visit and _visit_children,
# plus a frame each for subclasses that wrap visit().
_FRAMES_PER_LEVEL = 20


class ASTVisitor[T = BaseNode]:
    """Base visitor for traversing Fluent AST.

    Follows stdlib ast.NodeVisitor convention: generic_visit() automatically
    traverses all child nodes in field order. Override visit_NodeType
    methods to add behavior; call self.generic_visit(node) from them to
    keep descending.

    Example:
        >>> class CountMessagesVisitor(ASTVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_Message(self, node):
        ...         self.count += 1
        ...         return self.generic_visit(node)
        ...
        >>> visitor = CountMessagesVisitor()
        >>> visitor.visit(resource)
        >>> visitor.count
    """

    __slots__ = ("_depth_guard",)

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard.

        Subclasses MUST call super().__init__().

        Args:
            max_depth: Maximum placeable nesting depth to descend through
                      (default: MAX_DEPTH, the parser's own limit)
        """
        self._depth_guard = DepthGuard(
            max_depth=max_depth if max_depth is not None else MAX_DEPTH,
            frames_per_level=_FRAMES_PER_LEVEL,
        )

    def visit(self, node: BaseNode) -> T:  # noqa: PLR0911, PLR0912 - one arm per node kind
        """Dispatch node to its visit_<ClassName> method."""
        match node:
            case Resource():
                return self.visit_Resource(node)
            case Message():
                return self.visit_Message(node)
            case Term():
                return self.visit_Term(node)
            case Attribute():
                return self.visit_Attribute(node)
            case Comment():
                return self.visit_Comment(node)
            case GroupComment():
                return self.visit_GroupComment(node)
            case ResourceComment():
                return self.visit_ResourceComment(node)
            case Junk():
                return self.visit_Junk(node)
            case Whitespace():
                return self.visit_Whitespace(node)
            case Pattern():
                return self.visit_Pattern(node)
            case TextElement():
                return self.visit_TextElement(node)
            case Placeable():
                return self.visit_Placeable(node)
            case SelectExpression():
                return self.visit_SelectExpression(node)
            case Variant():
                return self.visit_Variant(node)
            case StringLiteral():
                return self.visit_StringLiteral(node)
            case NumberLiteral():
                return self.visit_NumberLiteral(node)
            case VariableReference():
                return self.visit_VariableReference(node)
            case MessageReference():
                return self.visit_MessageReference(node)
            case TermReference():
                return self.visit_TermReference(node)
            case FunctionReference():
                return self.visit_FunctionReference(node)
            case CallArguments():
                return self.visit_CallArguments(node)
            case NamedArgument():
                return self.visit_NamedArgument(node)
            case Identifier():
                return self.visit_Identifier(node)
            case Annotation():
                return self.visit_Annotation(node)
            case Span():
                return self.visit_Span(node)
            case _:
                return self.generic_visit(node)

    def generic_visit(self, node: BaseNode) -> T:
        """Visit every child node, then return node itself.

        Scalar fields (names, raw values, flags) are skipped. Tuple fields
        are visited item by item.

        Raises:
            DepthLimitExceededError: If placeables and call argument lists
                nest deeper than max_depth
        """
        if isinstance(node, (Placeable, CallArguments)):
            with self._depth_guard:
                self._visit_children(node)
        else:
            self._visit_children(node)
        return node  # type: ignore[return-value]  # T defaults to BaseNode

    def _visit_children(self, node: BaseNode) -> None:
        for _, value in node.children():
            if isinstance(value, BaseNode):
                self.visit(value)
            elif isinstance(value, tuple):
                for item in value:
                    if isinstance(item, BaseNode):
                        self.visit(item)

    # Override these to add behavior before/after visiting children.

    def visit_Resource(self, node: Resource) -> T:
        return self.generic_visit(node)

    def visit_Message(self, node: Message) -> T:
        return self.generic_visit(node)

    def visit_Term(self, node: Term) -> T:
        return self.generic_visit(node)

    def visit_Attribute(self, node: Attribute) -> T:
        return self.generic_visit(node)

    def visit_Comment(self, node: Comment) -> T:
        return self.generic_visit(node)

    def visit_GroupComment(self, node: GroupComment) -> T:
        return self.generic_visit(node)

    def visit_ResourceComment(self, node: ResourceComment) -> T:
        return self.generic_visit(node)

    def visit_Junk(self, node: Junk) -> T:
        return self.generic_visit(node)

    def visit_Whitespace(self, node: Whitespace) -> T:
        return self.generic_visit(node)

    def visit_Pattern(self, node: Pattern) -> T:
        return self.generic_visit(node)

    def visit_TextElement(self, node: TextElement) -> T:
        return self.generic_visit(node)

    def visit_Placeable(self, node: Placeable) -> T:
        return self.generic_visit(node)

    def visit_SelectExpression(self, node: SelectExpression) -> T:
        return self.generic_visit(node)

    def visit_Variant(self, node: Variant) -> T:
        return self.generic_visit(node)

    def visit_StringLiteral(self, node: StringLiteral) -> T:
        return self.generic_visit(node)

    def visit_NumberLiteral(self, node: NumberLiteral) -> T:
        return self.generic_visit(node)

    def visit_VariableReference(self, node: VariableReference) -> T:
        return self.generic_visit(node)

    def visit_MessageReference(self, node: MessageReference) -> T:
        return self.generic_visit(node)

    def visit_TermReference(self, node: TermReference) -> T:
        return self.generic_visit(node)

    def visit_FunctionReference(self, node: FunctionReference) -> T:
        return self.generic_visit(node)

    def visit_CallArguments(self, node: CallArguments) -> T:
        return self.generic_visit(node)

    def visit_NamedArgument(self, node: NamedArgument) -> T:
        return self.generic_visit(node)

    def visit_Identifier(self, node: Identifier) -> T:
        return self.generic_visit(node)

    def visit_Annotation(self, node: Annotation) -> T:
        return self.generic_visit(node)

    def visit_Span(self, node: Span) -> T:
        return self.generic_visit(node)
