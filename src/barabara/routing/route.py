"""Route records produced during router construction."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from barabara.controllers import ControllerModule

# The only verbs an action can be mapped to, in registration order
VERBS: tuple[str, ...] = ("head", "get", "post", "put", "patch", "delete")

# Verbs that get both a collection route and an item route
COLLECTION_VERBS = frozenset({"head", "get"})

# Verbs that only address a single item
ITEM_VERBS = frozenset({"put", "patch", "delete"})

ROOT = "/"
ID_SEGMENT = ":id"


@dataclass(frozen=True, slots=True)
class RegisteredRoute:
    """One verb + path + handler registration, in registration order."""

    method: str
    path: str
    handler: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """A discovered controller file and the base route derived from it.

    Built once per file during :func:`~barabara.assembler.create_router`
    and consumed by the registrar.
    """

    path: str
    controller: ControllerModule
    route: str
