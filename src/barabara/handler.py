"""Route handler adapter.

Wraps one controller action into a uniform ``handler(request, respond,
fail)`` callable that routers can register. The handler merges request
inputs into ``options``, passes allow-listed context as ``meta``, awaits
the action and translates its result into responder calls.

Every error raised while handling a request, including a request body
that fails to parse, goes to ``fail`` exactly as raised. The handler
holds no mutable state: every request reads only the controller and meta
keys captured at registration.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeAlias

from barabara._internal.invoke import invoke
from barabara.controllers import ControllerModule
from barabara.http.request import request_meta, request_options
from barabara.http.response import Responder, send_reply, to_reply

logger = logging.getLogger("barabara.handler")

Fail: TypeAlias = Callable[[BaseException], Any]
RouteHandler: TypeAlias = Callable[[Any, Responder, Fail], Awaitable[Any]]


def create_route_handler(
    controller: ControllerModule,
    action: str,
    meta_keys: Iterable[str] = (),
) -> RouteHandler:
    """Build the request handler for ``controller.actions[action]``.

    Raises:
        KeyError: If the controller has no such action.
    """
    func = controller.actions[action]
    keys = tuple(meta_keys)

    async def handler(request: Any, respond: Responder, fail: Fail) -> Any:
        try:
            options = request_options(request)
            meta = request_meta(request, keys)
            result = await invoke(func, options, meta)
            await send_reply(to_reply(result), respond)
        except Exception as exc:
            logger.debug(
                "Action %s of %s raised %s; forwarding",
                action,
                controller.source,
                type(exc).__name__,
            )
            return await invoke(fail, exc)
        return None

    handler.__name__ = f"{action}_handler"
    handler.__qualname__ = handler.__name__
    return handler
