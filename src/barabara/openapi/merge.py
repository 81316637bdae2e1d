"""Merging a controller's OpenAPI metadata into the aggregate document."""

from collections.abc import Mapping
from typing import Any

from barabara._internal.invoke import invoke
from barabara.errors import ControllerOpenAPIError
from barabara.handler import RouteHandler
from barabara.http.response import JSON, Responder, send_reply
from barabara.openapi.document import COMPONENT_KINDS, OpenAPIDocument
from barabara.routing.paths import slug_case
from barabara.routing.route import ID_SEGMENT

_ITEM_SUFFIX = "/" + ID_SEGMENT
_ROOT_SLUG = "index"


def document_path(route_path: str) -> str:
    """``/users/:id`` -> ``/users/{id}``; other paths pass through."""
    if route_path.endswith(_ITEM_SUFFIX):
        return route_path[: -len(_ITEM_SUFFIX)] + "/{id}"
    return route_path


def operation_id(base_route: str, action: str, *, item: bool) -> str:
    """``("/sub-path/users", "read", item=True)`` -> ``sub-path-users_read_id``."""
    slug = slug_case(base_route) or _ROOT_SLUG
    suffix = "_id" if item else ""
    return f"{slug}_{action}{suffix}"


def merge_operation(
    document: OpenAPIDocument,
    openapi: Mapping[str, Any],
    *,
    base_route: str,
    route_path: str,
    verb: str,
    action: str,
) -> None:
    """Document one verb + path registration of *action*.

    The path entry is always created. The operation itself is only
    added when the controller describes this action.
    """
    key = document_path(route_path)
    document.ensure_path(key)

    operation = openapi.get(action)
    if not isinstance(operation, Mapping):
        return
    document.add_operation(
        key,
        verb,
        {
            **operation,
            "operationId": operation_id(base_route, action, item=key != route_path),
        },
    )


def merge_components(
    document: OpenAPIDocument,
    openapi: Mapping[str, Any],
    *,
    base_route: str,
    action: str,
) -> None:
    """Merge ``openapi["components"]`` into the document.

    Raises:
        ControllerOpenAPIError: If ``components`` or one of its
            ``schemas``/``responses``/``parameters`` maps isn't an object.
    """
    if "components" not in openapi:
        return

    components = openapi["components"]
    if not isinstance(components, Mapping):
        msg = (
            f'OpenAPI "components" of action {action!r} in controller '
            f"{base_route!r} must be an object."
        )
        raise ControllerOpenAPIError(msg, action=action, route=base_route)

    for kind in COMPONENT_KINDS:
        if kind not in components:
            continue
        entries = components[kind]
        if not isinstance(entries, Mapping):
            msg = (
                f'OpenAPI "components.{kind}" of action {action!r} in controller '
                f"{base_route!r} must be an object."
            )
            raise ControllerOpenAPIError(msg, action=action, route=base_route)
        document.merge_components(kind, entries)


def create_document_handler(document: OpenAPIDocument) -> RouteHandler:
    """Handler serving the aggregate document as JSON."""

    async def openapi_handler(request: Any, respond: Responder, fail: Any) -> Any:
        try:
            await send_reply(JSON(document.to_dict()), respond)
        except Exception as exc:
            return await invoke(fail, exc)
        return None

    return openapi_handler
