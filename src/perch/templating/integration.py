"""Kida environment setup and rendering helpers.

The environment is created once during ``App._freeze()`` from the app's
config and passed through the request pipeline. Rendering is a pure
function of template name and context.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from kida import Environment, FileSystemLoader

from perch.config import AppConfig
from perch.templating.filters import BUILTIN_FILTERS, BUILTIN_GLOBALS
from perch.templating.returns import Template

if TYPE_CHECKING:
    from perch.forms import FormState


def create_environment(
    config: AppConfig,
    filters: dict[str, Callable[..., Any]],
    globals_: dict[str, Any],
) -> Environment:
    """Create a kida Environment from app configuration.

    Built-in perch filters are registered first so app filters can
    override them.
    """
    env = Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )

    env.update_filters(BUILTIN_FILTERS)
    if filters:
        env.update_filters(filters)

    for name, value in {**BUILTIN_GLOBALS, **globals_}.items():
        env.add_global(name, value)

    return env


def render_template(env: Environment, tpl: Template) -> str:
    """Render a full template to string."""
    return env.get_template(tpl.name).render(tpl.context)


def render_form(env: Environment, template_name: str, state: FormState, **extra: Any) -> str:
    """Render *template_name* with a form state bundle.

    The template sees ``title``, ``values`` and ``errors`` plus any
    *extra* context.
    """
    return render_template(env, state.template(template_name, **extra))
