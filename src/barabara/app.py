"""The Barabara facade.

Bundles a router factory with a :class:`RouterConfig` and exposes each
stage of router construction as a method::

    from barabara import Barabara

    barabara = Barabara(actions={"index": "get", "store": "post"})
    router = barabara.create_router("controllers")

OpenAPI configuration is validated when the facade is created, so a bad
config fails at startup rather than on the first ``create_router``.
"""

import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from pathlib import Path
from types import ModuleType
from typing import Any

from barabara.assembler import create_router
from barabara.config import RouterConfig
from barabara.controllers import ControllerModule, coerce_controller
from barabara.handler import RouteHandler, create_route_handler
from barabara.openapi.document import OpenAPIDocument, build_base_document, validate_openapi_config
from barabara.registrar import register_controller
from barabara.routing.discovery import find_controllers
from barabara.routing.paths import route_from_path
from barabara.routing.table import RouteTable


class Barabara:
    """Convention-based router builder.

    Args:
        router_factory: Zero-argument callable returning a fresh router.
        actions: Action name -> verb map. Overrides ``config.actions``.
        openapi: OpenAPI config. Overrides ``config.openapi``.
        config: Full configuration; defaults to ``RouterConfig()``.

    Raises:
        ConfigurationError: If an action maps to an unsupported verb.
        OpenAPIConfigError: If the OpenAPI config is malformed.
    """

    __slots__ = ("_document", "config", "router_factory")

    def __init__(
        self,
        router_factory: Callable[[], Any] = RouteTable,
        actions: Mapping[str, str] | None = None,
        openapi: Mapping[str, Any] | None = None,
        *,
        config: RouterConfig | None = None,
    ) -> None:
        config = config or RouterConfig()
        if actions is not None:
            config = replace(config, actions=actions)
        if openapi is not None:
            config = replace(config, openapi=openapi)

        self.router_factory = router_factory
        self.config = config
        self._document: OpenAPIDocument | None = None
        if config.openapi_enabled:
            validate_openapi_config(config.openapi)

    @property
    def document(self) -> OpenAPIDocument | None:
        """The OpenAPI document built by the last ``create_router`` call."""
        return self._document

    def route_from_path(
        self, base_path: str | os.PathLike[str], file_path: str | os.PathLike[str]
    ) -> str:
        return route_from_path(base_path, file_path, self.config.extensions)

    def find_controllers(self, base_path: str | Path) -> list[Path]:
        return find_controllers(base_path, self.config.extensions)

    def create_route_handler(
        self,
        controller: ControllerModule | ModuleType | Mapping[str, Any],
        action: str,
        meta_keys: Iterable[str] = (),
    ) -> RouteHandler:
        return create_route_handler(
            coerce_controller(controller, self.config.actions), action, meta_keys
        )

    def register_controller(
        self,
        router: Any,
        base_route: str,
        controller: ControllerModule | ModuleType | Mapping[str, Any],
        meta_keys: Iterable[str] | None = None,
        document: OpenAPIDocument | None = None,
    ) -> int:
        keys = self.config.meta_keys if meta_keys is None else meta_keys
        return register_controller(
            router, base_route, controller, self.config.actions, keys, document
        )

    def create_router(
        self,
        controllers_base_path: str | os.PathLike[str],
        meta_keys: Iterable[str] | None = None,
    ) -> Any:
        """Discover controllers and build a fully registered router.

        Each call builds a fresh OpenAPI document (when enabled), exposed
        afterwards as :attr:`document`.
        """
        document = build_base_document(self.config.openapi) if self.config.openapi_enabled else None
        router = create_router(
            controllers_base_path,
            self.config,
            meta_keys=meta_keys,
            router_factory=self.router_factory,
            document=document,
        )
        self._document = document
        return router
