"""Access logging middleware.

Writes one line per request to the ``perch.access`` logger::

    POST /submit -> 400 (3.2 ms)

Client errors log at WARNING, server errors at ERROR, the rest at INFO.
"""

import logging
import time

from perch.errors import HTTPError
from perch.http.request import Request
from perch.middleware.protocol import AnyResponse, Next

logger = logging.getLogger("perch.access")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLogger:
    """Middleware that logs method, path, status, and elapsed time.

    Installed first by ``App`` so the timing covers every other
    middleware. HTTP errors raised further in are logged with their
    status and re-raised for the error pipeline.
    """

    __slots__ = ("_logger",)

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logger

    async def __call__(self, request: Request, next: Next) -> AnyResponse:
        start = time.perf_counter()
        try:
            response = await next(request)
        except HTTPError as exc:
            self._log(request, exc.status, start)
            raise
        except Exception:
            self._log(request, 500, start)
            raise
        self._log(request, response.status, start)
        return response

    def _log(self, request: Request, status: int, start: float) -> None:
        elapsed_ms = (time.perf_counter() - start) * 1000
        self._logger.log(
            _level_for(status),
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.path,
            status,
            elapsed_ms,
        )
