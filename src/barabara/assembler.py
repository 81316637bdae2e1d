"""Router assembly — discovery to a fully registered router.

Construction is one-shot and synchronous: discover controller files,
derive and sort their routes, register each controller, then expose the
OpenAPI document. Any error aborts the whole build; the caller never
sees a partially registered router.
"""

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TypeVar

from barabara.config import RouterConfig
from barabara.controllers import load_controller
from barabara.openapi.document import OpenAPIDocument, build_base_document
from barabara.openapi.merge import create_document_handler
from barabara.registrar import register_controller
from barabara.routing.discovery import find_controllers
from barabara.routing.paths import route_from_path, segment_count
from barabara.routing.route import RouteDescriptor
from barabara.routing.table import RouteTable, RouterLike

logger = logging.getLogger("barabara.routing")

R = TypeVar("R", bound=RouterLike)


def describe_controllers(
    base_path: str | os.PathLike[str],
    config: RouterConfig,
) -> list[RouteDescriptor]:
    """Discover, load and route every controller, most specific first.

    Deeper routes sort first so routers that match in registration
    order never let a shallow route shadow a deeper one. Routes with
    the same depth keep discovery order.
    """
    root = Path(base_path).absolute()
    descriptors = [
        RouteDescriptor(
            path=str(file),
            controller=load_controller(file, config.actions),
            route=route_from_path(root, file, config.extensions),
        )
        for file in find_controllers(root, config.extensions)
    ]
    return sorted(descriptors, key=lambda d: segment_count(d.route), reverse=True)


def create_router(
    base_path: str | os.PathLike[str],
    config: RouterConfig | None = None,
    *,
    meta_keys: Iterable[str] | None = None,
    router_factory: Callable[[], R] = RouteTable,
    document: OpenAPIDocument | None = None,
) -> R:
    """Build a router from a controllers directory.

    Args:
        base_path: Controllers root directory.
        config: Router configuration; defaults to ``RouterConfig()``.
        meta_keys: Overrides ``config.meta_keys`` when given.
        router_factory: Creates the router to register on.
        document: Pre-built OpenAPI document to merge into. When omitted
            and ``config.openapi`` is set, one is built from the config.

    Returns:
        The populated router. A :class:`RouteTable` is compiled first.

    Raises:
        OSError: If the controllers directory can't be read.
        ConfigurationError: For malformed OpenAPI config or controllers.
    """
    config = config or RouterConfig()
    keys = tuple(meta_keys) if meta_keys is not None else config.meta_keys
    if document is None and config.openapi_enabled:
        document = build_base_document(config.openapi)

    descriptors = describe_controllers(base_path, config)
    router = router_factory()

    count = 0
    for descriptor in descriptors:
        count += register_controller(
            router,
            descriptor.route,
            descriptor.controller,
            config.actions,
            keys,
            document,
        )

    if document is not None:
        document.seal()
        router.get(config.openapi_path, create_document_handler(document))
        count += 1

    if isinstance(router, RouteTable):
        router.compile()

    logger.info(
        "Registered %d routes from %d controllers under %s",
        count,
        len(descriptors),
        base_path,
    )
    return router
