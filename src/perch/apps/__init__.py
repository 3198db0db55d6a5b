"""The perch form applications.

Each module exposes ``create_app(config=None, ...)`` returning a ready
``App`` that serves its bundled templates::

    contact       contact form, result page only
    registration  registration form, submissions persisted to JSON
    live          strict registration with client-side validation
"""

from dataclasses import replace
from importlib import import_module
from pathlib import Path

from perch.app import App
from perch.config import AppConfig

TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"

APP_NAMES = ("contact", "registration", "live")


def bundled_config(config: AppConfig | None = None, **changes: object) -> AppConfig:
    """Point *config* (or one read from the environment) at the bundled templates."""
    base = config if config is not None else AppConfig.from_env()
    return replace(base, template_dir=TEMPLATES_DIR, **changes)


def load_app(name: str, config: AppConfig | None = None) -> App:
    """Build the app called *name* (one of ``APP_NAMES``)."""
    if name not in APP_NAMES:
        msg = f"Unknown app {name!r}; choose from {', '.join(APP_NAMES)}"
        raise ValueError(msg)
    module = import_module(f"perch.apps.{name}")
    return module.create_app(config)
