"""Content negotiation — maps return values to Response objects.

``negotiate`` inspects the return value from a route handler and
produces the appropriate Response. isinstance-based dispatch, no magic,
fully predictable.
"""

import json as json_module
from typing import Any

from kida import Environment

from perch.errors import ConfigurationError
from perch.http.response import Redirect, Response
from perch.templating.integration import render_template
from perch.templating.returns import Template

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def negotiate(value: Any, *, kida_env: Environment | None = None) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``         -> pass through
    2. ``Redirect``         -> 303 (or given status) with Location header
    3. ``Template``         -> render via kida -> text/html
    4. ``str``              -> 200, text/html
    5. ``bytes``            -> 200, application/octet-stream
    6. ``dict`` / ``list``  -> 200, application/json
    7. ``(value, int)``     -> negotiate value, override status
    8. ``(value, int, dict)`` -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case Redirect():
            return Response(body="").with_status(value.status).with_header("Location", value.url)
        case Template():
            if kida_env is None:
                msg = (
                    "Template return type requires kida integration. "
                    "Ensure a template_dir is configured in AppConfig."
                )
                raise ConfigurationError(msg)
            return Response(body=render_template(kida_env, value))
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response(
                body=json_module.dumps(value, default=str),
                content_type=JSON_CONTENT_TYPE,
            )
        case (inner, int() as status):
            return negotiate(inner, kida_env=kida_env).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner, kida_env=kida_env).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, dict, list, bytes, Template, Response, or Redirect."
            )
            raise TypeError(msg)
