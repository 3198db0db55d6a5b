"""Perch — small server-rendered form applications.

Three apps share one validation rule table, one submission store, and a
compact ASGI core:

- ``perch.apps.contact``       contact form, result page only
- ``perch.apps.registration``  registration form persisted to JSON
- ``perch.apps.live``          registration with strict passwords and
                               client-side validation from the same rules

Basic usage::

    from perch.apps.registration import create_app

    app = create_app()
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "FormState",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "PerchError",
    "Redirect",
    "Request",
    "Response",
    "Submission",
    "SubmissionStore",
    "Template",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "App":
        from perch.app import App

        return App

    if name == "AppConfig":
        from perch.config import AppConfig

        return AppConfig

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from perch.http import response as _resp

        return getattr(_resp, name)

    if name == "Template":
        from perch.templating.returns import Template

        return Template

    if name == "FormState":
        from perch.forms import FormState

        return FormState

    if name == "Submission":
        from perch.models import Submission

        return Submission

    if name == "SubmissionStore":
        from perch.store import SubmissionStore

        return SubmissionStore

    if name in ("ConfigurationError", "HTTPError", "MethodNotAllowed", "NotFound", "PerchError"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
