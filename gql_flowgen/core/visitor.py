"""Resolver interface emitter.

Turns object and interface type definitions into Flow resolver interfaces:

    type Post { id: ID! title: String }

becomes

    export interface PostResolvers<Context = any, ParentType = Post> {
      id?: Resolver<string, ParentType, Context>,
      title?: Resolver<?string, ParentType, Context>,
    }

Interfaces only get a `__resolveType` member listing the object types that
implement them.
"""

import logging
from typing import Optional

from graphql import (
    DefinitionNode,
    FieldDefinitionNode,
    GraphQLSchema,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
)
from jinja2 import Environment

from .config import ParsedConfig
from .declaration import DeclarationBlock, indent
from .implementors import implementors_of
from .naming import NameConverter
from .type_expr import TypeExpressionComposer

logger = logging.getLogger(__name__)


def subscription_type_name(schema: GraphQLSchema) -> Optional[str]:
    """Return the name of the schema's subscription root, if it has one."""
    subscription_type = schema.subscription_type
    return subscription_type.name if subscription_type else None


class FlowResolversVisitor:
    """Emits one resolver interface per object/interface definition."""

    def __init__(self, config: ParsedConfig, schema: GraphQLSchema, env: Optional[Environment] = None):
        self.config = config
        self.schema = schema
        self.env = env
        self.converter = NameConverter(config.convert, config.types_prefix)
        self.composer = TypeExpressionComposer(config, self.converter)

    def _generics(self, type_name: str) -> str:
        return f"<Context = {self.config.context_type}, ParentType = {type_name}>"

    def _declaration(self) -> DeclarationBlock:
        return DeclarationBlock(self.env).export().as_kind("interface")

    def args_type_name(self, parent_name: str, field_name: str) -> str:
        """Name of the generated arguments type, e.g. Query + search -> QuerySearchArgs."""
        return parent_name + self.converter.resolve(field_name, add_prefix=False) + "Args"

    def field_definition(self, node: FieldDefinitionNode, parent_name: str) -> str:
        """Render one resolver member for a field of `parent_name`."""
        field_name = node.name.value
        is_subscription = parent_name == subscription_type_name(self.schema)
        resolver_kind = "SubscriptionResolver" if is_subscription else "Resolver"

        type_args = [self.composer.render(node.type), "ParentType", "Context"]
        if node.arguments:
            type_args.append(self.args_type_name(parent_name, field_name))

        return indent(f"{field_name}?: {resolver_kind}<{', '.join(type_args)}>,")

    def object_type_definition(self, node: ObjectTypeDefinitionNode) -> str:
        type_name = node.name.value
        name = self.converter.resolve(type_name + "Resolvers")
        body = "\n".join(self.field_definition(field, type_name) for field in node.fields or ())
        logger.debug("Emitting %s for object type %s", name, type_name)
        return self._declaration().with_name(name, self._generics(type_name)).with_block(body).string

    def interface_type_definition(self, node: InterfaceTypeDefinitionNode) -> str:
        type_name = node.name.value
        name = self.converter.resolve(type_name + "Resolvers")
        implementing_types = implementors_of(type_name, self.schema)
        union = " | ".join(f"'{implementor}'" for implementor in implementing_types)
        body = indent(f"__resolveType: TypeResolveFn<{union}>")
        logger.debug("Emitting %s for interface %s", name, type_name)
        return self._declaration().with_name(name, self._generics(type_name)).with_block(body).string

    def visit(self, node: DefinitionNode) -> Optional[str]:
        """Dispatch on the definition kind.

        Returns None for definitions this emitter does not handle (enums,
        unions, inputs, scalars, schema and directive definitions).
        """
        if isinstance(node, ObjectTypeDefinitionNode):
            return self.object_type_definition(node)
        if isinstance(node, InterfaceTypeDefinitionNode):
            return self.interface_type_definition(node)
        return None
