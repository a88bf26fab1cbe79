"""Generation hooks for resolver output.

Pre-generation hooks rewrite the printed schema document before its
definitions are visited, so they decide which resolver interfaces exist.
Post-generation hooks rewrite the rendered Flow file before it is written.

Example:
    hooks = HookRunner()
    hooks.add(DefinitionFilterHook(exclude_prefix="_", kinds={"object"}))
    hooks.add(FlowBannerHook("// @generated"))
    ResolversGenerator(schema, hooks=hooks).write("resolvers.js.flow")
"""

import logging
from typing import Iterable, Protocol, runtime_checkable

from graphql import (
    DefinitionNode,
    DocumentNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
)

logger = logging.getLogger(__name__)

FLOW_PRAGMA = "/* @flow */"

# Definition kinds that produce a resolver interface.
RESOLVER_KINDS = {
    "object": ObjectTypeDefinitionNode,
    "interface": InterfaceTypeDefinitionNode,
}


@runtime_checkable
class PreGenerateHook(Protocol):
    """Receives the schema document and returns the document to visit.

    The GraphQLSchema used for subscription and implementor lookups is not
    affected, so a dropped object type still shows up in the
    `__resolveType` union of its interfaces.
    """

    def pre_generate(self, document: DocumentNode) -> DocumentNode: ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Receives the output filename and rendered content, returns new content."""

    def post_generate(self, filename: str, content: str) -> str: ...


class DefinitionFilterHook:
    """Drops object and interface definitions so no resolvers are emitted for them.

    A definition is dropped when its kind is listed in `skip_kinds`
    ("object" or "interface") or its name starts with `exclude_prefix`.
    Scalars, enums, unions and input types are never touched.
    """

    def __init__(self, exclude_prefix: str | None = None, skip_kinds: Iterable[str] = ()):
        skip_kinds = set(skip_kinds)
        unknown = skip_kinds - RESOLVER_KINDS.keys()
        if unknown:
            raise ValueError(f"Unknown definition kind(s): {', '.join(sorted(unknown))}")
        self.exclude_prefix = exclude_prefix
        self.skip_types = tuple(RESOLVER_KINDS[kind] for kind in sorted(skip_kinds))

    def keeps(self, definition: DefinitionNode) -> bool:
        if not isinstance(definition, tuple(RESOLVER_KINDS.values())):
            return True
        if isinstance(definition, self.skip_types):
            return False
        return not (self.exclude_prefix and definition.name.value.startswith(self.exclude_prefix))

    def pre_generate(self, document: DocumentNode) -> DocumentNode:
        definitions = tuple(d for d in document.definitions if self.keeps(d))
        dropped = len(document.definitions) - len(definitions)
        if dropped:
            logger.debug("Filtered out %d definitions", dropped)
        return DocumentNode(definitions=definitions, loc=document.loc)


class FlowBannerHook:
    """Places a banner comment right below the `/* @flow */` pragma.

    Content without a leading pragma (e.g. from a custom template) gets the
    banner at the very top.
    """

    def __init__(self, banner: str):
        self.banner = banner.rstrip("\n")

    def post_generate(self, filename: str, content: str) -> str:
        if content.startswith(FLOW_PRAGMA + "\n"):
            rest = content[len(FLOW_PRAGMA) + 1:]
            return f"{FLOW_PRAGMA}\n{self.banner}\n{rest}"
        return f"{self.banner}\n\n{content}"


class HookRunner:
    """Holds pre and post hooks and applies them in registration order."""

    def __init__(
        self,
        pre_hooks: Iterable[PreGenerateHook] = (),
        post_hooks: Iterable[PostGenerateHook] = (),
    ):
        self.pre_hooks = list(pre_hooks)
        self.post_hooks = list(post_hooks)

    def add(self, hook) -> None:
        """Register `hook` for every stage whose method it implements."""
        registered = False
        if isinstance(hook, PreGenerateHook):
            self.pre_hooks.append(hook)
            registered = True
        if isinstance(hook, PostGenerateHook):
            self.post_hooks.append(hook)
            registered = True
        if not registered:
            raise TypeError(f"{type(hook).__name__} implements neither pre_generate nor post_generate")

    def run_pre_hooks(self, document: DocumentNode) -> DocumentNode:
        for hook in self.pre_hooks:
            document = hook.pre_generate(document)
        return document

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
