"""Layout primitives for Flow declarations.

Blocks are rendered from Jinja2 templates. Custom templates can be
supplied through a template directory; files there take precedence over
the package defaults:
    - declaration.flow.j2 - a single exported declaration block
    - resolvers.flow.j2 - the complete output file
"""

from pathlib import Path
from typing import Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

INDENT = "  "


def indent(text: str, count: int = 1) -> str:
    """Indent every non-empty line of text by `count` levels."""
    prefix = INDENT * count
    return "\n".join(prefix + line if line else line for line in text.split("\n"))


def create_environment(template_dir: Optional[str] = None) -> Environment:
    """Build the Jinja2 environment, user templates first."""
    loaders = []
    if template_dir:
        template_path = Path(template_dir)
        if template_path.is_dir():
            loaders.append(FileSystemLoader(str(template_path)))
    loaders.append(PackageLoader("gql_flowgen", "templates"))

    # Output is Flow source, never markup
    return Environment(
        loader=ChoiceLoader(loaders),
        autoescape=False,
        keep_trailing_newline=True,
    )


_default_env: Optional[Environment] = None


def default_environment() -> Environment:
    global _default_env
    if _default_env is None:
        _default_env = create_environment()
    return _default_env


class DeclarationBlock:
    """Fluent builder for one exported declaration.

    Example:
        DeclarationBlock().export().as_kind("interface").with_name(
            "PostResolvers", "<Context = any, ParentType = Post>"
        ).with_block("  id?: Resolver<string, ParentType, Context>,").string
    """

    TEMPLATE = "declaration.flow.j2"

    def __init__(self, env: Optional[Environment] = None):
        self._env = env or default_environment()
        self._export = False
        self._kind = "interface"
        self._name = ""
        self._generics = ""
        self._block = ""

    def export(self, exported: bool = True) -> "DeclarationBlock":
        self._export = exported
        return self

    def as_kind(self, kind: str) -> "DeclarationBlock":
        self._kind = kind
        return self

    def with_name(self, name: str, generics: str = "") -> "DeclarationBlock":
        self._name = name
        self._generics = generics
        return self

    def with_block(self, block: str) -> "DeclarationBlock":
        self._block = block
        return self

    @property
    def string(self) -> str:
        """Render the declaration, including its trailing newline."""
        template = self._env.get_template(self.TEMPLATE)
        return template.render(
            export=self._export,
            kind=self._kind,
            name=self._name,
            generics=self._generics,
            block=self._block,
        )
