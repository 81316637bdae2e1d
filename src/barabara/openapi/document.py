"""The aggregate OpenAPI document and its base-skeleton builder."""

import copy
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from barabara.errors import OpenAPIConfigError

logger = logging.getLogger("barabara.openapi")

OPENAPI_VERSION = "3.0.1"

COMPONENT_KINDS = ("schemas", "responses", "parameters")


class OpenAPIDocument:
    """An OpenAPI document built incrementally during router setup.

    Mutable until :meth:`seal` is called; afterwards every mutation
    raises ``RuntimeError`` and the document is served read-only.

    Usage::

        document = build_base_document(config)
        document.add_operation("/users/{id}", "get", {"summary": "..."})
        document.merge_components("schemas", {"User": {...}})
        document.seal()
        payload = document.to_dict()
    """

    __slots__ = ("_data", "_sealed")

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    # Read-only views; mutate through the methods below

    @property
    def paths(self) -> Mapping[str, Any]:
        return _read_only(self._data["paths"])

    @property
    def components(self) -> Mapping[str, Any]:
        return _read_only(self._data["components"])

    @property
    def security(self) -> Mapping[str, Any]:
        return _read_only(self._data["security"])

    def _check_open(self) -> None:
        if self._sealed:
            msg = "Cannot modify the OpenAPI document after router construction."
            raise RuntimeError(msg)

    def ensure_path(self, path: str) -> dict[str, Any]:
        """Return the path item for *path*, creating it if needed."""
        self._check_open()
        return self._data["paths"].setdefault(path, {})

    def add_operation(self, path: str, verb: str, operation: Mapping[str, Any]) -> None:
        """Set ``paths[path][verb]``. A later operation replaces an earlier one."""
        self.ensure_path(path)[verb] = dict(operation)

    def merge_components(self, kind: str, entries: Mapping[str, Any]) -> None:
        """Merge named entries into ``components[kind]``; last one wins."""
        self._check_open()
        target = self._data["components"].setdefault(kind, {})
        for name, value in entries.items():
            if name in target and target[name] != value:
                logger.debug("Replacing OpenAPI component %s/%s", kind, name)
            target[name] = value

    def seal(self) -> None:
        """Freeze the document. No more operations or components can be added."""
        self._sealed = True

    def to_dict(self) -> dict[str, Any]:
        """Deep copy of the document, safe to serialize or hand out."""
        return copy.deepcopy(self._data)


def build_base_document(config: Any) -> OpenAPIDocument:
    """Validate top-level OpenAPI configuration and build the skeleton.

    Args:
        config: ``{title, version, description, servers, termsOfService?,
            contact?, license?, tags?, security?}``.

    Returns:
        A fresh, unsealed :class:`OpenAPIDocument` with empty paths and
        component maps.

    Raises:
        OpenAPIConfigError: Naming the first invalid field.
    """
    validate_openapi_config(config)

    info: dict[str, Any] = {
        "title": config["title"],
        "version": config["version"],
        "description": config["description"],
    }
    for name in ("termsOfService", "contact", "license"):
        if name in config:
            info[name] = copy.deepcopy(config[name])

    schemes = config.get("security", {})
    security = {
        scheme_name: list(scheme.get("requirements") or [])
        for scheme_name, scheme in schemes.items()
    }

    return OpenAPIDocument(
        {
            "openapi": OPENAPI_VERSION,
            "info": info,
            "servers": copy.deepcopy(config["servers"]),
            "tags": copy.deepcopy(config.get("tags", [])),
            "paths": {},
            "components": {
                "schemas": {},
                "responses": {},
                "parameters": {},
                "securitySchemes": copy.deepcopy(dict(schemes)),
            },
            "security": security,
        }
    )


def validate_openapi_config(config: Any) -> None:
    """Check top-level OpenAPI configuration without building anything.

    Raises:
        OpenAPIConfigError: Naming the first invalid field.
    """
    if not isinstance(config, Mapping):
        raise OpenAPIConfigError("OpenAPI config must be an object.")

    for name in ("title", "version", "description"):
        _require(config, name, str, "a string")
    _optional(config, "termsOfService", str, "a string")
    _optional(config, "contact", Mapping, "an object")
    _optional(config, "license", Mapping, "an object")
    _require(config, "servers", list, "an array")
    _optional(config, "tags", list, "an array")
    _optional(config, "security", Mapping, "an object")

    for scheme_name, scheme in config.get("security", {}).items():
        if not isinstance(scheme, Mapping):
            msg = f"OpenAPI security scheme {scheme_name!r} must be an object."
            raise OpenAPIConfigError(msg)
        requirements = scheme.get("requirements") or []
        if not isinstance(requirements, list):
            msg = f"OpenAPI security scheme {scheme_name!r}: \"requirements\" must be an array."
            raise OpenAPIConfigError(msg)


def _require(config: Mapping[str, Any], name: str, kind: type, label: str) -> None:
    if name not in config:
        raise OpenAPIConfigError(f'OpenAPI config is missing required field "{name}".')
    _check_type(config, name, kind, label)


def _optional(config: Mapping[str, Any], name: str, kind: type, label: str) -> None:
    if name in config:
        _check_type(config, name, kind, label)


def _check_type(config: Mapping[str, Any], name: str, kind: type, label: str) -> None:
    if not isinstance(config[name], kind):
        raise OpenAPIConfigError(f'OpenAPI config field "{name}" must be {label}.')


def _read_only(value: Any) -> Any:
    """Recursive read-only view: mappings become proxies, lists tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _read_only(item) for key, item in value.items()})
    if isinstance(value, list):
        return tuple(_read_only(item) for item in value)
    return value
