"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from gql_flowgen.cli import main, parse_pairs
from gql_flowgen.core.generator import ResolversGenerator

SDL = """
scalar DateTime

type User {
  id: ID!
  joined: DateTime
}

type _Meta {
  version: String
}

type Query {
  user(id: ID!): User
  meta: _Meta
}
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.graphql"
    path.write_text(SDL)
    return path


def run_generate(runner, schema_file, output, *extra):
    return runner.invoke(main, ["generate", "-s", str(schema_file), "-o", str(output), *extra])


class TestParsePairs:
    """Tests for repeated Key=Value options."""

    def test_pairs(self):
        assert parse_pairs(("DateTime=string", "JSON = mixed"), "=", "--scalar") == {
            "DateTime": "string",
            "JSON": "mixed",
        }

    def test_header_pairs(self):
        assert parse_pairs(("Authorization: Bearer x",), ":", "--http-header") == {
            "Authorization": "Bearer x"
        }


class TestGenerateCommand:
    """Tests for `gql-flowgen generate`."""

    def test_generates_file(self, runner, schema_file, tmp_path):
        output = tmp_path / "out" / "resolvers.js.flow"
        result = run_generate(runner, schema_file, output)

        assert result.exit_code == 0, result.output
        assert "Done!" in result.output
        content = output.read_text()
        assert content.startswith("/* @flow */")
        assert "export interface UserResolvers<Context = any, ParentType = User> {" in content
        assert "  user?: Resolver<?User, ParentType, Context, QueryUserArgs>," in content

    def test_options(self, runner, schema_file, tmp_path):
        output = tmp_path / "resolvers.js.flow"
        result = run_generate(
            runner, schema_file, output,
            "--context-type", "AppContext",
            "--types-prefix", "Gql",
            "--scalar", "DateTime=string",
            "--mapping", "User=UserModel",
        )

        assert result.exit_code == 0, result.output
        content = output.read_text()
        assert "export interface GqlUserResolvers<Context = AppContext, ParentType = User> {" in content
        assert "  joined?: Resolver<?string, ParentType, Context>," in content
        assert "  user?: Resolver<?UserModel, ParentType, Context, QueryUserArgs>," in content

    def test_config_file_with_overrides(self, runner, schema_file, tmp_path):
        config = tmp_path / "codegen.json"
        config.write_text(json.dumps({"contextType": "FileContext", "scalars": {"DateTime": "Date"}}))
        output = tmp_path / "resolvers.js.flow"
        result = run_generate(
            runner, schema_file, output,
            "--config", str(config),
            "--context-type", "CliContext",
        )

        assert result.exit_code == 0, result.output
        content = output.read_text()
        assert "<Context = CliContext, ParentType = User>" in content
        assert "  joined?: Resolver<?Date, ParentType, Context>," in content

    def test_header_and_exclude_prefix(self, runner, schema_file, tmp_path):
        output = tmp_path / "resolvers.js.flow"
        result = run_generate(
            runner, schema_file, output,
            "--header", "// @generated",
            "--exclude-prefix", "_",
        )

        assert result.exit_code == 0, result.output
        content = output.read_text()
        assert content.startswith("/* @flow */\n// @generated\n")
        assert "export interface MetaResolvers" not in content
        assert "export interface UserResolvers" in content
        assert "  meta?: Resolver<?Meta, ParentType, Context>," in content

    def test_naming_convention(self, runner, schema_file, tmp_path):
        output = tmp_path / "resolvers.js.flow"
        result = run_generate(runner, schema_file, output, "--naming-convention", "keep")

        assert result.exit_code == 0, result.output
        assert "QueryuserArgs" in output.read_text()

    def test_verbose(self, runner, schema_file, tmp_path):
        output = tmp_path / "resolvers.js.flow"
        result = run_generate(runner, schema_file, output, "--verbose")

        assert result.exit_code == 0, result.output
        assert "Resolver interfaces: 3" in result.output

    def test_verbose_generates_once(self, runner, schema_file, tmp_path, monkeypatch):
        calls = []
        original = ResolversGenerator.generate_blocks

        def counting(self):
            calls.append(1)
            return original(self)

        monkeypatch.setattr(ResolversGenerator, "generate_blocks", counting)
        result = run_generate(runner, schema_file, tmp_path / "resolvers.js.flow", "--verbose")

        assert result.exit_code == 0, result.output
        assert len(calls) == 1

    def test_skip_interfaces(self, runner, tmp_path):
        schema_file = tmp_path / "schema.graphql"
        schema_file.write_text("interface Node { id: ID! } type User implements Node { id: ID! } type Query { node: Node }")
        output = tmp_path / "resolvers.js.flow"
        result = run_generate(runner, schema_file, output, "--skip-interfaces")

        assert result.exit_code == 0, result.output
        content = output.read_text()
        assert "export interface NodeResolvers" not in content
        assert "export interface UserResolvers" in content

    def test_bad_scalar_option(self, runner, schema_file, tmp_path):
        result = run_generate(runner, schema_file, tmp_path / "out.js.flow", "--scalar", "DateTime")
        assert result.exit_code == 2
        assert "Key=Value" in result.output

    def test_bad_naming_convention(self, runner, schema_file, tmp_path):
        result = run_generate(
            runner, schema_file, tmp_path / "out.js.flow",
            "--naming-convention", "no_such_module_here#fn",
        )
        assert result.exit_code == 1
        assert "Cannot import" in result.output

    def test_missing_schema(self, runner, tmp_path):
        result = run_generate(runner, tmp_path / "missing.graphql", tmp_path / "out.js.flow")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_invalid_config_file(self, runner, schema_file, tmp_path):
        config = tmp_path / "codegen.json"
        config.write_text(json.dumps({"unknownKey": 1}))
        result = run_generate(runner, schema_file, tmp_path / "out.js.flow", "--config", str(config))
        assert result.exit_code == 1
        assert "Invalid config file" in result.output
