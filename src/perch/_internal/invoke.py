"""Call sync or async callables uniformly.

Route handlers, error handlers, and lifecycle hooks can all be ``def``
or ``async def``; the sync/async check lives here and nowhere else.
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable."""
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
