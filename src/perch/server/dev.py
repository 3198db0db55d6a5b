"""Run a perch App under pounce.

Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``), but
perch hands over a live ``App`` object, so ``pounce.Server`` is used
directly with the ASGI callable.
"""

import logging

logger = logging.getLogger("perch.server")


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
    reload_include: tuple[str, ...] = (".html", ".js", ".css"),
    app_path: str | None = None,
) -> None:
    """Start a pounce server for *app*.

    Args:
        app: ASGI callable (perch App instance).
        host: Bind host address.
        port: Bind port number.
        workers: Worker count; forced to 1 when *reload* is on.
        reload: Restart on file changes (development).
        reload_include: Extra file extensions to watch when reload is
            active.
        app_path: Optional ``"module:attribute"`` import string.  When
            provided, pounce reimports the app on each reload cycle so
            that code changes on disk take effect immediately.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1 if reload else workers,
        reload=reload,
        reload_include=reload_include if reload else (),
    )
    logger.info("Serving on http://%s:%d (reload=%s)", host, port, reload)
    server = Server(config, app, app_path=app_path)
    server.run()
