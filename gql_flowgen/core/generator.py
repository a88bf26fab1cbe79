"""Flow resolver signatures generator.

Prints the schema, parses the printed SDL back into a document, visits each
definition in document order and renders the output file from Jinja2
templates.

Supports custom templates via the template_dir parameter:
    generator = ResolversGenerator(schema, config, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import logging
from pathlib import Path
from typing import Optional

from graphql import GraphQLSchema, parse, print_schema

from .config import ParsedConfig
from .declaration import create_environment
from .hooks import HookRunner
from .visitor import FlowResolversVisitor

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "resolvers.js.flow"


class ResolversGenerator:
    """Generates the Flow resolvers file for a schema.

    Available templates to override:
        - resolvers.flow.j2 - output file (header type aliases + blocks)
        - declaration.flow.j2 - a single exported interface block

    Example:
        generator = ResolversGenerator(schema, ParsedConfig(context_type="Context"))
        generator.write("./generated/resolvers.js.flow")
    """

    FILE_TEMPLATE = "resolvers.flow.j2"

    def __init__(
        self,
        schema: GraphQLSchema,
        config: Optional[ParsedConfig] = None,
        hooks: Optional[HookRunner] = None,
        template_dir: Optional[str] = None,
    ):
        """Initialize the generator.

        Args:
            schema: The schema to generate resolvers for
            config: Parsed plugin configuration (defaults apply when omitted)
            hooks: Optional pre/post generation hooks
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
        """
        self.schema = schema
        self.config = config or ParsedConfig()
        self.hooks = hooks or HookRunner()
        self.env = create_environment(template_dir)
        # Blocks rendered by the most recent generate() call.
        self.blocks: list[str] = []

    def generate_blocks(self) -> list[str]:
        """Return one rendered resolver interface per object/interface definition."""
        document = parse(print_schema(self.schema))
        document = self.hooks.run_pre_hooks(document)

        visitor = FlowResolversVisitor(self.config, self.schema, self.env)
        blocks = []
        for definition in document.definitions:
            block = visitor.visit(definition)
            if block is not None:
                blocks.append(block)
        logger.debug("Generated %d resolver interfaces", len(blocks))
        return blocks

    def generate(self, filename: str = DEFAULT_FILENAME) -> str:
        """Render the complete output file."""
        template = self.env.get_template(self.FILE_TEMPLATE)
        self.blocks = self.generate_blocks()
        content = template.render(blocks=self.blocks)
        return self.hooks.run_post_hooks(filename, content)

    def write(self, output_path: str | Path) -> str:
        """Generate and write the output file. Returns the written content."""
        path = Path(output_path)
        content = self.generate(path.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write(content)
        logger.debug("Wrote %s", path)
        return content


def plugin(schema: GraphQLSchema, config: Optional[ParsedConfig] = None) -> str:
    """Generate the Flow resolvers output for `schema`."""
    return ResolversGenerator(schema, config).generate()
