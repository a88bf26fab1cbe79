"""Flow type expressions for GraphQL type references.

A field type such as ``[Post!]!`` is a tree of wrapper nodes. The composer
folds it bottom-up into a single Flow expression, carrying nullability
explicitly: every named type and every list starts out nullable, and an
enclosing NonNull wrapper clears the flag.

    Post        -> ?Post
    Post!       -> Post
    [Post!]     -> ?Array<Post>
    [Post]!     -> Array<?Post>
"""

import logging
from dataclasses import dataclass, replace

from graphql import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode

from .config import ParsedConfig
from .naming import NameConverter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeExpression:
    """A Flow type expression and whether it currently denotes a nullable value."""
    text: str
    nullable: bool = True

    def render(self) -> str:
        """Return the Flow source text, with the `?` maybe-type prefix when nullable."""
        return f"?{self.text}" if self.nullable else self.text


class TypeExpressionComposer:
    """Builds TypeExpressions from GraphQL type-reference AST nodes."""

    def __init__(self, config: ParsedConfig, converter: NameConverter | None = None):
        self.config = config
        self.converter = converter or NameConverter(config.convert, config.types_prefix)

    def resolve_type_name(self, name: str) -> str:
        """Map a schema type name to its Flow name.

        Explicit mappings win over scalars; anything else is converted and
        prefixed. An empty entry counts as missing and falls through.
        """
        return (
            self.config.mapping.get(name)
            or self.config.scalars.get(name)
            or self.converter.resolve(name)
        )

    def named_type(self, node: NamedTypeNode) -> TypeExpression:
        return TypeExpression(self.resolve_type_name(node.name.value), nullable=True)

    @staticmethod
    def list_type(inner: TypeExpression) -> TypeExpression:
        return TypeExpression(f"Array<{inner.render()}>", nullable=True)

    @staticmethod
    def non_null_type(inner: TypeExpression) -> TypeExpression:
        # A NonNull around a non-nullable expression is passed through untouched
        if not inner.nullable:
            logger.debug("NonNull wrapper around non-nullable %s", inner.text)
            return inner
        return replace(inner, nullable=False)

    def compose(self, node: TypeNode) -> TypeExpression:
        """Fold a type-reference subtree into one TypeExpression.

        Raises:
            TypeError: If the node is not a Named, List or NonNull type node
        """
        if isinstance(node, NamedTypeNode):
            return self.named_type(node)
        if isinstance(node, ListTypeNode):
            return self.list_type(self.compose(node.type))
        if isinstance(node, NonNullTypeNode):
            return self.non_null_type(self.compose(node.type))
        raise TypeError(f"Expected a type reference node, got {type(node).__name__}")

    def render(self, node: TypeNode) -> str:
        """Shortcut for compose(node).render()."""
        return self.compose(node).render()
