"""Plugin configuration for the Flow resolvers generator.

Raw plugin input is validated by ResolversPluginConfig (camelCase keys as
written in codegen config files are accepted). It is turned once per run
into an immutable ParsedConfig that the visitor reads.

Example:
    raw = ResolversPluginConfig.model_validate(
        {"contextType": "MyContext", "scalars": {"DateTime": "Date"}}
    )
    config = ParsedConfig.from_plugin_config(raw)
"""

import importlib
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .naming import BUILTIN_CONVENTIONS, to_pascal_case, to_snake_case

logger = logging.getLogger(__name__)

# GraphQL built-in scalars and their Flow counterparts
DEFAULT_SCALARS: dict[str, str] = {
    "ID": "string",
    "String": "string",
    "Boolean": "boolean",
    "Int": "number",
    "Float": "number",
}


class ConfigError(ValueError):
    """Raised when the plugin configuration cannot be loaded or resolved."""


class ResolversPluginConfig(BaseModel):
    """Raw plugin configuration, as supplied by the user."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    context_type: str | None = Field(default=None, alias="contextType")
    mapping: dict[str, str] = Field(default_factory=dict)
    scalars: dict[str, str] = Field(default_factory=dict)
    naming_convention: str | None = Field(default=None, alias="namingConvention")
    types_prefix: str | None = Field(default=None, alias="typesPrefix")


def load_plugin_config(path: str | Path) -> ResolversPluginConfig:
    """Load a ResolversPluginConfig from a JSON file.

    Raises:
        ConfigError: If the file is missing, not JSON, or has unknown keys
    """
    config_path = Path(path)
    try:
        content = config_path.read_text()
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    try:
        data = json.loads(content)
        return ResolversPluginConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e


def resolve_naming_convention(ref: str | None) -> Callable[[str], str]:
    """Resolve a naming convention reference to a casing function.

    Accepted references:
        None                        -> PascalCase
        "keep", "camel-case", ...   -> a built-in convention
        "change-case#upperCase"     -> the matching built-in
        "my_pkg.naming#shout"       -> function `shout` of module `my_pkg.naming`
        "my_pkg.naming:shout"       -> same, entry-point style
    """
    if ref is None:
        return to_pascal_case

    key = to_snake_case(ref).replace("_", "-")
    if key in BUILTIN_CONVENTIONS:
        return BUILTIN_CONVENTIONS[key]

    separator = "#" if "#" in ref else ":"
    module_name, _, fn_name = ref.partition(separator)
    if not module_name or not fn_name:
        raise ConfigError(f"Unknown naming convention: {ref!r}")

    if module_name == "change-case":
        builtin_key = to_snake_case(fn_name).replace("_", "-")
        if builtin_key in BUILTIN_CONVENTIONS:
            return BUILTIN_CONVENTIONS[builtin_key]
        raise ConfigError(f"Unsupported change-case function: {fn_name!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import naming convention module {module_name!r}: {e}") from e

    fn = getattr(module, fn_name, None)
    if not callable(fn):
        raise ConfigError(f"Module {module_name!r} has no callable {fn_name!r}")
    logger.debug("Resolved naming convention %s", ref)
    return fn


@dataclass(frozen=True)
class ParsedConfig:
    """Immutable configuration for one generation run."""

    scalars: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(DEFAULT_SCALARS)))
    mapping: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    convert: Callable[[str], str] = to_pascal_case
    types_prefix: str = ""
    context_type: str = "any"

    def __post_init__(self):
        # Freeze caller-supplied dicts so the run cannot mutate them
        object.__setattr__(self, "scalars", MappingProxyType(dict(self.scalars)))
        object.__setattr__(self, "mapping", MappingProxyType(dict(self.mapping)))

    @classmethod
    def from_plugin_config(cls, plugin_config: ResolversPluginConfig) -> "ParsedConfig":
        """Merge user input over the defaults."""
        return cls(
            scalars={**DEFAULT_SCALARS, **plugin_config.scalars},
            mapping=dict(plugin_config.mapping),
            convert=resolve_naming_convention(plugin_config.naming_convention),
            types_prefix=plugin_config.types_prefix or "",
            context_type=plugin_config.context_type or "any",
        )
