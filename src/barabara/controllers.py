"""Controller modules — action tables plus optional OpenAPI metadata.

A controller is a plain Python module::

    # controllers/users.py
    def read(options, meta):
        return {"id": options.get("id")}

    async def create(options, meta):
        return await save_user(options)

    openapi = {
        "read": {"summary": "Fetch users"},
        "components": {"schemas": {"User": {"type": "object"}}},
    }

Module-level callables whose names appear in the action-verb map become
actions. The reserved ``openapi`` attribute (``openApi`` also accepted)
is kept apart from the actions so an action can never shadow it.
"""

from __future__ import annotations

import importlib.util
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType, ModuleType
from typing import Any, TypeAlias

from barabara.errors import ConfigurationError

Action: TypeAlias = Callable[[dict[str, Any], dict[str, Any]], Any]

OPENAPI_KEYS = ("openapi", "openApi")

_MODULE_NAME_RE = re.compile(r"\W")


@dataclass(frozen=True, slots=True)
class ControllerModule:
    """A loaded controller, validated once at load time.

    Attributes:
        source: File path the controller was loaded from, or a label for
            controllers built in code.
        actions: Action name -> callable, in definition order. Only names
            present in the action-verb map are kept.
        openapi: The controller's OpenAPI metadata, or ``None``.
    """

    source: str
    actions: Mapping[str, Action] = field(default_factory=dict)
    openapi: Mapping[str, Any] | None = None

    @classmethod
    def from_mapping(
        cls,
        namespace: Mapping[str, Any],
        actions_map: Mapping[str, str],
        *,
        source: str = "<controller>",
    ) -> ControllerModule:
        """Build a controller from a name -> value mapping.

        Raises:
            ConfigurationError: If a mapped action name is bound to
                something that isn't callable.
        """
        actions: dict[str, Action] = {}
        openapi: Any = None
        for name, value in namespace.items():
            if name in OPENAPI_KEYS:
                openapi = value
                continue
            if name not in actions_map:
                continue
            if not callable(value):
                msg = (
                    f"Controller {source} exports {name!r} for verb "
                    f"{actions_map[name]!r}, but it is not callable."
                )
                raise ConfigurationError(msg)
            actions[name] = value
        if openapi is not None and not isinstance(openapi, Mapping):
            raise ConfigurationError(f"Controller {source}: openapi metadata must be an object.")
        return cls(source=source, actions=MappingProxyType(actions), openapi=openapi)

    @classmethod
    def from_module(
        cls,
        module: ModuleType,
        actions_map: Mapping[str, str],
    ) -> ControllerModule:
        """Build a controller from an imported module's namespace."""
        source = getattr(module, "__file__", None) or module.__name__
        return cls.from_mapping(vars(module), actions_map, source=source)


def coerce_controller(
    controller: ControllerModule | ModuleType | Mapping[str, Any],
    actions_map: Mapping[str, str],
) -> ControllerModule:
    """Accept a ControllerModule, a module, or a plain mapping."""
    if isinstance(controller, ControllerModule):
        return controller
    if isinstance(controller, ModuleType):
        return ControllerModule.from_module(controller, actions_map)
    return ControllerModule.from_mapping(controller, actions_map)


def load_controller(path: str | Path, actions_map: Mapping[str, str]) -> ControllerModule:
    """Import a controller file and extract its actions.

    Raises:
        ConfigurationError: If the file can't be loaded as a module.
    """
    file = Path(path)
    module_name = "_barabara_controller_" + _MODULE_NAME_RE.sub("_", str(file.with_suffix("")))
    spec = importlib.util.spec_from_file_location(module_name, file)
    if spec is None or spec.loader is None:
        raise ConfigurationError(f"Cannot load controller module: {file}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return ControllerModule.from_module(module, actions_map)
