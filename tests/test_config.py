"""Tests for plugin configuration parsing."""

import json
import os.path
import string
from dataclasses import FrozenInstanceError

import pytest
from graphql import build_schema, parse
from pydantic import ValidationError

from gql_flowgen.core.config import (
    DEFAULT_SCALARS,
    ConfigError,
    ParsedConfig,
    ResolversPluginConfig,
    load_plugin_config,
    resolve_naming_convention,
)
from gql_flowgen.core.naming import keep, to_camel_case, to_constant_case, to_pascal_case, to_upper_case
from gql_flowgen.core.visitor import FlowResolversVisitor


class TestResolversPluginConfig:
    """Tests for the raw pydantic config model."""

    def test_accepts_camel_case_keys(self):
        config = ResolversPluginConfig.model_validate(
            {"contextType": "Ctx", "typesPrefix": "Gql", "namingConvention": "keep"}
        )
        assert config.context_type == "Ctx"
        assert config.types_prefix == "Gql"
        assert config.naming_convention == "keep"

    def test_accepts_field_names(self):
        config = ResolversPluginConfig(context_type="Ctx")
        assert config.context_type == "Ctx"

    def test_rejects_unknown_keys(self):
        with pytest.raises(ValidationError):
            ResolversPluginConfig.model_validate({"contextTyp": "Ctx"})

    def test_defaults(self):
        config = ResolversPluginConfig()
        assert config.mapping == {}
        assert config.scalars == {}
        assert config.context_type is None


class TestLoadPluginConfig:
    """Tests for loading config files."""

    def test_loads_json(self, tmp_path):
        path = tmp_path / "codegen.json"
        path.write_text(json.dumps({"contextType": "Ctx", "scalars": {"DateTime": "Date"}}))
        config = load_plugin_config(path)
        assert config.context_type == "Ctx"
        assert config.scalars == {"DateTime": "Date"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_plugin_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "codegen.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_plugin_config(path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "codegen.json"
        path.write_text(json.dumps({"prefix": "Gql"}))
        with pytest.raises(ConfigError):
            load_plugin_config(path)


class TestResolveNamingConvention:
    """Tests for naming convention references."""

    def test_default_is_pascal_case(self):
        assert resolve_naming_convention(None) is to_pascal_case

    @pytest.mark.parametrize(
        "ref, expected",
        [
            ("keep", keep),
            ("camel-case", to_camel_case),
            ("camelCase", to_camel_case),
            ("upper_case", to_upper_case),
            ("change-case#upperCase", to_upper_case),
            ("change-case#pascalCase", to_pascal_case),
            ("constant-case", to_constant_case),
            ("change-case#constantCase", to_constant_case),
        ],
    )
    def test_builtins(self, ref, expected):
        assert resolve_naming_convention(ref) is expected

    def test_change_case_upper_case_only_upper_cases(self):
        sdl = "type PostItem { id: ID! author: UserRef } type UserRef { id: ID! } type Query { item: PostItem }"
        raw = ResolversPluginConfig(namingConvention="change-case#upperCase")
        visitor = FlowResolversVisitor(ParsedConfig.from_plugin_config(raw), build_schema(sdl))
        result = visitor.visit(parse(sdl).definitions[0])
        assert result.startswith("export interface POSTITEMRESOLVERS<")
        assert "  author?: Resolver<?USERREF, ParentType, Context>," in result

    def test_external_module_hash(self):
        assert resolve_naming_convention("string#capwords") is string.capwords

    def test_external_module_colon(self):
        assert resolve_naming_convention("os.path:basename") is os.path.basename

    def test_unknown_module(self):
        with pytest.raises(ConfigError, match="Cannot import"):
            resolve_naming_convention("no_such_module_here#convert")

    def test_missing_function(self):
        with pytest.raises(ConfigError, match="no callable"):
            resolve_naming_convention("string#no_such_function")

    def test_unknown_name(self):
        with pytest.raises(ConfigError, match="Unknown naming convention"):
            resolve_naming_convention("shouting")

    def test_unsupported_change_case_function(self):
        with pytest.raises(ConfigError, match="change-case"):
            resolve_naming_convention("change-case#spongeCase")


class TestParsedConfig:
    """Tests for the immutable run configuration."""

    def test_defaults(self):
        config = ParsedConfig()
        assert dict(config.scalars) == DEFAULT_SCALARS
        assert dict(config.mapping) == {}
        assert config.convert is to_pascal_case
        assert config.types_prefix == ""
        assert config.context_type == "any"

    def test_from_plugin_config_merges_scalars(self):
        raw = ResolversPluginConfig(scalars={"ID": "number", "DateTime": "Date"})
        config = ParsedConfig.from_plugin_config(raw)
        assert config.scalars["ID"] == "number"
        assert config.scalars["DateTime"] == "Date"
        assert config.scalars["String"] == "string"

    def test_from_plugin_config_fields(self):
        raw = ResolversPluginConfig(
            context_type="Ctx",
            types_prefix="Gql",
            naming_convention="keep",
            mapping={"User": "UserModel"},
        )
        config = ParsedConfig.from_plugin_config(raw)
        assert config.context_type == "Ctx"
        assert config.types_prefix == "Gql"
        assert config.convert is keep
        assert config.mapping == {"User": "UserModel"}

    def test_from_plugin_config_defaults(self):
        config = ParsedConfig.from_plugin_config(ResolversPluginConfig())
        assert config.context_type == "any"
        assert config.types_prefix == ""

    def test_is_frozen(self):
        config = ParsedConfig()
        with pytest.raises(FrozenInstanceError):
            config.context_type = "Ctx"

    def test_maps_are_read_only(self):
        source = {"User": "UserModel"}
        config = ParsedConfig(mapping=source)
        with pytest.raises(TypeError):
            config.mapping["Post"] = "PostModel"
        source["Post"] = "PostModel"
        assert "Post" not in config.mapping
