"""Command-line interface for gql-flowgen."""

import logging

import click

from .core.config import (
    ConfigError,
    ParsedConfig,
    ResolversPluginConfig,
    load_plugin_config,
)
from .core.generator import ResolversGenerator
from .core.hooks import DefinitionFilterHook, FlowBannerHook, HookRunner
from .core.parser import SchemaLoader, SchemaLoadError


def parse_pairs(values: tuple[str, ...], separator: str, option: str) -> dict[str, str]:
    """Parse repeated `Key<sep>Value` options into a dict."""
    result = {}
    for value in values:
        key, sep, item = value.partition(separator)
        if not sep or not key.strip():
            raise click.BadParameter(f"Expected Key{separator}Value, got {value!r}", param_hint=option)
        result[key.strip()] = item.strip()
    return result


def build_config(
    config_file: str | None,
    context_type: str | None,
    types_prefix: str | None,
    naming_convention: str | None,
    scalars: dict[str, str],
    mapping: dict[str, str],
) -> ParsedConfig:
    """Merge the optional config file with command-line overrides."""
    base = load_plugin_config(config_file) if config_file else ResolversPluginConfig()
    merged = ResolversPluginConfig(
        context_type=context_type if context_type is not None else base.context_type,
        types_prefix=types_prefix if types_prefix is not None else base.types_prefix,
        naming_convention=naming_convention if naming_convention is not None else base.naming_convention,
        scalars={**base.scalars, **scalars},
        mapping={**base.mapping, **mapping},
    )
    return ParsedConfig.from_plugin_config(merged)


@click.group()
@click.version_option(package_name="gql-flowgen")
def main():
    """Flow resolver signatures generator for GraphQL schemas."""
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    help="Schema file, directory, archive (.zip, .tar.gz, .tgz) or http(s) endpoint.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="Output file for the generated declarations (e.g., resolvers.js.flow).",
)
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON plugin config (contextType, mapping, scalars, namingConvention, typesPrefix).",
)
@click.option("--context-type", help="Default type of the resolver Context (default: any).")
@click.option("--types-prefix", help="Prefix for every generated type name.")
@click.option(
    "--naming-convention",
    help="Built-in convention (keep, pascal-case, camel-case, ...) or module#function.",
)
@click.option("--scalar", "scalar_pairs", multiple=True, help="Scalar mapping, e.g. DateTime=string.")
@click.option("--mapping", "mapping_pairs", multiple=True, help="Type override, e.g. User=UserModel.")
@click.option("--header", help="Comment placed below the /* @flow */ pragma of the generated file.")
@click.option("--exclude-prefix", help="Skip object and interface types starting with this prefix.")
@click.option("--skip-interfaces", is_flag=True, help="Do not emit resolver interfaces for GraphQL interfaces.")
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with templates overriding the built-in ones.",
)
@click.option(
    "--http-header",
    "http_headers",
    multiple=True,
    help="Header for schema introspection requests, e.g. 'Authorization: Bearer x'.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    output: str,
    config_file: str | None,
    context_type: str | None,
    types_prefix: str | None,
    naming_convention: str | None,
    scalar_pairs: tuple[str, ...],
    mapping_pairs: tuple[str, ...],
    header: str | None,
    exclude_prefix: str | None,
    skip_interfaces: bool,
    template_dir: str | None,
    http_headers: tuple[str, ...],
    verbose: bool,
):
    """Generate Flow resolver signatures from a GraphQL schema.

    Examples:

        gql-flowgen generate --schema ./schema.graphql --output ./resolvers.js.flow

        gql-flowgen generate -s ./schema -o ./resolvers.js.flow --context-type Context

        gql-flowgen generate -s https://api.example.com/graphql -o out.js.flow \\
            --http-header "Authorization: Bearer $TOKEN"
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    scalars = parse_pairs(scalar_pairs, "=", "--scalar")
    mapping = parse_pairs(mapping_pairs, "=", "--mapping")
    headers = parse_pairs(http_headers, ":", "--http-header")

    try:
        config = build_config(config_file, context_type, types_prefix, naming_convention, scalars, mapping)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"Schema: {schema}")
        click.echo(f"Output: {output}")
        click.echo(f"  Context type: {config.context_type}")
        click.echo(f"  Types prefix: {config.types_prefix!r}")

    click.echo("Loading schema...")
    try:
        graphql_schema = SchemaLoader(schema, headers=headers).load()
    except SchemaLoadError as e:
        raise click.ClickException(str(e)) from e

    hooks = HookRunner()
    if exclude_prefix or skip_interfaces:
        skip_kinds = ["interface"] if skip_interfaces else []
        hooks.add(DefinitionFilterHook(exclude_prefix=exclude_prefix, skip_kinds=skip_kinds))
    if header:
        hooks.add(FlowBannerHook(header))

    click.echo("Generating resolver signatures...")
    generator = ResolversGenerator(graphql_schema, config, hooks=hooks, template_dir=template_dir)
    content = generator.write(output)

    if verbose:
        click.echo(f"  Resolver interfaces: {len(generator.blocks)}")
        click.echo(f"  Lines: {len(content.splitlines())}")

    click.echo(f"Done! Generated code in {output}")


if __name__ == "__main__":
    main()
