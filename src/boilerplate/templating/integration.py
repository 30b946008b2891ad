"""Kida environment setup.

Templates ship inside the asset package (``boilerplate/assets/templates``).
The environment is created once at startup and passed explicitly to the
handlers that render with it.
"""

from typing import Any

from kida import Environment, PackageLoader

TEMPLATE_PACKAGE = "boilerplate.assets"
TEMPLATE_DIR = "templates"


def create_environment(
    package: str = TEMPLATE_PACKAGE,
    directory: str = TEMPLATE_DIR,
) -> Environment:
    """Create the kida Environment used for page rendering."""
    return Environment(
        loader=PackageLoader(package, directory),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(env: Environment, name: str, context: dict[str, Any] | None = None) -> str:
    """Render a full template to string."""
    template = env.get_template(name)
    return template.render(context or {})
