"""Reverse lookup from an interface to the object types implementing it."""

import logging

from graphql import GraphQLObjectType, GraphQLSchema

logger = logging.getLogger(__name__)


def implementors_of(interface_name: str, schema: GraphQLSchema) -> list[str]:
    """Return the names of object types declaring `interface_name`.

    Types are scanned in the order of `schema.type_map`. Computed on every
    call; an empty list is valid.
    """
    implementing_types = []
    for graphql_type in schema.type_map.values():
        if not isinstance(graphql_type, GraphQLObjectType):
            continue
        if any(interface.name == interface_name for interface in graphql_type.interfaces):
            implementing_types.append(graphql_type.name)

    logger.debug("Interface %s implemented by %s", interface_name, implementing_types)
    return implementing_types
