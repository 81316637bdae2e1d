"""Barabara — convention-based routing from a controllers directory.

The directory tree is the route table: ``controllers/users.py`` serves
``/users`` and ``/users/:id``, one handler per exported action, with an
optional OpenAPI document merged from per-controller fragments.

Basic usage::

    from barabara import Barabara

    barabara = Barabara(openapi={
        "title": "Shop", "version": "1.0.0",
        "description": "Shop API", "servers": [{"url": "/api"}],
    })
    router = barabara.create_router("controllers", meta_keys=["user"])

    for route in router:
        print(route.method, route.path)
"""

__version__ = "0.1.0"
__all__ = [
    "JSON",
    "Barabara",
    "BarabaraError",
    "ConfigurationError",
    "ControllerModule",
    "ControllerOpenAPIError",
    "OpenAPIConfigError",
    "OpenAPIDocument",
    "Raw",
    "Redirect",
    "Request",
    "RouteTable",
    "RouterConfig",
    "Send",
    "create_router",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import barabara`` fast while providing a clean top-level API.
    """
    if name == "Barabara":
        from barabara.app import Barabara

        return Barabara

    if name == "RouterConfig":
        from barabara.config import RouterConfig

        return RouterConfig

    if name == "create_router":
        from barabara.assembler import create_router

        return create_router

    if name == "ControllerModule":
        from barabara.controllers import ControllerModule

        return ControllerModule

    if name == "Request":
        from barabara.http.request import Request

        return Request

    if name in ("JSON", "Raw", "Redirect", "Send"):
        from barabara.http import response as _resp

        return getattr(_resp, name)

    if name == "OpenAPIDocument":
        from barabara.openapi.document import OpenAPIDocument

        return OpenAPIDocument

    if name == "RouteTable":
        from barabara.routing.table import RouteTable

        return RouteTable

    if name in (
        "BarabaraError",
        "ConfigurationError",
        "ControllerOpenAPIError",
        "OpenAPIConfigError",
    ):
        from barabara import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
