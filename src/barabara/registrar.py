"""Controller registration.

For each action a controller exports, pick the verb from the action map,
expand the base route into its route shapes, register one handler per
shape and, when an OpenAPI document is being built, document it.

Route shapes, for base route ``/users``:

==================  =======================
verb                paths
==================  =======================
head, get           ``/users``, ``/users/:id``
put, patch, delete  ``/users/:id``
post                ``/users``
==================  =======================

At the root every verb registers ``/`` only.
"""

import logging
from collections.abc import Iterable, Mapping
from types import ModuleType
from typing import Any

from barabara.config import normalize_actions
from barabara.controllers import ControllerModule, coerce_controller
from barabara.handler import create_route_handler
from barabara.openapi.document import OpenAPIDocument
from barabara.openapi.merge import merge_components, merge_operation
from barabara.routing.paths import strip_trailing_slash
from barabara.routing.route import COLLECTION_VERBS, ID_SEGMENT, ITEM_VERBS, ROOT
from barabara.routing.table import RouterLike

logger = logging.getLogger("barabara.routing")


def route_shapes(verb: str, base_route: str) -> list[str]:
    """Paths a verb is registered on for a given base route."""
    if base_route == ROOT:
        return [ROOT]
    item = f"{strip_trailing_slash(base_route)}/{ID_SEGMENT}"
    if verb in COLLECTION_VERBS:
        return [base_route, item]
    if verb in ITEM_VERBS:
        return [item]
    return [base_route]


def register_controller(
    router: RouterLike,
    base_route: str,
    controller: ControllerModule | ModuleType | Mapping[str, Any],
    actions: Mapping[str, str],
    meta_keys: Iterable[str] = (),
    document: OpenAPIDocument | None = None,
) -> int:
    """Register every mapped action of *controller* on *router*.

    Args:
        router: Receives ``router.<verb>(path, handler)`` calls.
        base_route: The controller's derived route.
        controller: A loaded controller, a module or a plain mapping.
        actions: Action name -> verb. Verbs are compared lowercase.
        meta_keys: Request attributes forwarded to actions as ``meta``.
        document: OpenAPI document to merge into, if enabled.

    Returns:
        Number of verb + path registrations made.

    Raises:
        ConfigurationError: If an action maps to an unsupported verb.
        ControllerOpenAPIError: If the controller's OpenAPI components
            are malformed.
    """
    actions = normalize_actions(actions)
    controller = coerce_controller(controller, actions)
    keys = tuple(meta_keys)
    openapi = controller.openapi if document is not None else None
    components_merged = False
    count = 0

    for action in controller.actions:
        if action not in actions:
            continue
        verb = actions[action]
        handler = create_route_handler(controller, action, keys)

        if openapi is not None and not components_merged:
            merge_components(document, openapi, base_route=base_route, action=action)
            components_merged = True

        for path in route_shapes(verb, base_route):
            if openapi is not None:
                merge_operation(
                    document,
                    openapi,
                    base_route=base_route,
                    route_path=path,
                    verb=verb,
                    action=action,
                )
            getattr(router, verb)(path, handler)
            logger.debug("Registered %s %s -> %s", verb.upper(), path, action)
            count += 1

    return count
