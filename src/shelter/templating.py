"""Kida environment setup.

Creates a kida Environment from the ShellConfig and binds the message
bundle. The environment is created once during ``ShellApp._freeze()``
and shared read-only by every session.
"""

from typing import Any

from kida import ChoiceLoader, Environment, FileSystemLoader, PackageLoader
from kida.template import Markup

from shelter.config import ShellConfig
from shelter.messages import Messages


def create_environment(config: ShellConfig, messages: Messages | None = None) -> Environment:
    """Create a kida Environment from shell configuration.

    A configured ``template_dir`` is consulted first so deployments can
    override any built-in template by name.
    """
    loaders = []
    if config.template_dir is not None:
        loaders.append(FileSystemLoader(str(config.template_dir)))
    loaders.append(PackageLoader("shelter", "templates"))

    env = Environment(
        loader=ChoiceLoader(loaders),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )

    messages = messages or Messages.for_config(config)
    env.add_global("tr", messages)
    return env


def render(env: Environment, template_name: str, **context: Any) -> str:
    """Render a template by name to a string."""
    return env.get_template(template_name).render(context)


def markup(html: str) -> Markup:
    """Mark already-rendered HTML as safe for embedding in another template."""
    return Markup(html)
