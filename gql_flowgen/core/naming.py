"""Naming conventions for generated identifiers.

Provides the built-in casing functions and the NameConverter that turns
schema identifiers into Flow type names (casing first, then the optional
types prefix).
"""

import re
from typing import Callable


def to_snake_case(name: str) -> str:
    """Convert PascalCase, camelCase or kebab-case to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    s2 = re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[\W_]+", "_", s2).strip("_").lower()


def to_pascal_case(name: str) -> str:
    """Convert snake_case, camelCase or kebab-case to PascalCase."""
    return "".join(word.capitalize() for word in to_snake_case(name).split("_") if word)


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def to_upper_case(name: str) -> str:
    return name.upper()


def to_constant_case(name: str) -> str:
    """Convert to CONSTANT_CASE."""
    return to_snake_case(name).upper()


def to_lower_case(name: str) -> str:
    return name.lower()


def keep(name: str) -> str:
    """Leave the name untouched."""
    return name


# Keys are kebab-case; lookups normalize underscores and camel humps first.
BUILTIN_CONVENTIONS: dict[str, Callable[[str], str]] = {
    "keep": keep,
    "pascal-case": to_pascal_case,
    "camel-case": to_camel_case,
    "snake-case": to_snake_case,
    "upper-case": to_upper_case,
    "constant-case": to_constant_case,
    "lower-case": to_lower_case,
}


class NameConverter:
    """Applies a naming convention and an optional prefix to schema names.

    Example:
        converter = NameConverter(to_pascal_case, types_prefix="Gql")
        converter.resolve("post_resolvers")          # "GqlPostResolvers"
        converter.resolve("search", add_prefix=False)  # "Search"
    """

    def __init__(self, convert: Callable[[str], str] = to_pascal_case, types_prefix: str = ""):
        self.convert = convert
        self.types_prefix = types_prefix

    def resolve(self, raw_name: str, add_prefix: bool = True) -> str:
        """Return the converted name, prefixed unless add_prefix is False."""
        prefix = self.types_prefix if add_prefix else ""
        return prefix + self.convert(raw_name)
