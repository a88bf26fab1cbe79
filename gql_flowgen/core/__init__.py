"""Core modules for Flow resolver generation."""

from .config import (
    DEFAULT_SCALARS,
    ConfigError,
    ParsedConfig,
    ResolversPluginConfig,
    load_plugin_config,
    resolve_naming_convention,
)
from .declaration import DeclarationBlock, indent
from .generator import ResolversGenerator, plugin
from .hooks import (
    DefinitionFilterHook,
    FlowBannerHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .implementors import implementors_of
from .naming import NameConverter, to_camel_case, to_pascal_case, to_snake_case
from .parser import SchemaLoader, SchemaLoadError, load_schema
from .type_expr import TypeExpression, TypeExpressionComposer
from .visitor import FlowResolversVisitor, subscription_type_name

__all__ = [
    # Config
    "DEFAULT_SCALARS",
    "ConfigError",
    "ParsedConfig",
    "ResolversPluginConfig",
    "load_plugin_config",
    "resolve_naming_convention",
    # Naming
    "NameConverter",
    "to_camel_case",
    "to_pascal_case",
    "to_snake_case",
    # Type expressions
    "TypeExpression",
    "TypeExpressionComposer",
    # Schema
    "SchemaLoader",
    "SchemaLoadError",
    "load_schema",
    "implementors_of",
    # Emitter
    "DeclarationBlock",
    "indent",
    "FlowResolversVisitor",
    "subscription_type_name",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "DefinitionFilterHook",
    "FlowBannerHook",
    "HookRunner",
    # Generator
    "ResolversGenerator",
    "plugin",
]
