"""Invoke helpers — call sync or async callables uniformly.

Actions, responders and failure continuations can all be ``def`` or
``async def``. Anything that calls user-provided code goes through
:func:`invoke` so the sync/async check lives in exactly one place.

Usage::

    from barabara._internal.invoke import invoke

    result = await invoke(controller.actions["read"], options, meta)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it's awaitable.

    Works with both sync and async callables::

        def read(options, meta):
            return {"id": options["id"]}

        async def read(options, meta):
            return await load(options["id"])
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
