"""kida template integration — return types, environment, and filters."""

from perch.templating.integration import create_environment, render_form, render_template
from perch.templating.returns import Template

__all__ = ["Template", "create_environment", "render_form", "render_template"]
