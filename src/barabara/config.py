"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, validated
once at construction, no string-key dict lookups at registration time.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from barabara.errors import ConfigurationError
from barabara.routing.route import VERBS

DEFAULT_ACTIONS: Mapping[str, str] = MappingProxyType(
    {
        "exists": "head",
        "read": "get",
        "create": "post",
        "update": "put",
        "partial": "patch",
        "destroy": "delete",
    }
)


def normalize_actions(actions: Mapping[str, str]) -> Mapping[str, str]:
    """Lowercase every verb and reject verbs outside the supported set."""
    normalized: dict[str, str] = {}
    for action, verb in actions.items():
        if not isinstance(verb, str) or verb.lower() not in VERBS:
            msg = (
                f"Action {action!r} is mapped to unsupported verb {verb!r}. "
                f"Supported verbs: {', '.join(VERBS)}"
            )
            raise ConfigurationError(msg)
        normalized[action] = verb.lower()
    return MappingProxyType(normalized)


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RouterConfig(
            meta_keys=("user",),
            openapi={"title": "Shop", "version": "1.0.0",
                     "description": "Shop API", "servers": []},
        )
    """

    # Action name -> verb (head, get, post, put, patch, delete)
    actions: Mapping[str, str] = field(default_factory=lambda: DEFAULT_ACTIONS)

    # Request attributes passed to actions as ``meta``
    meta_keys: tuple[str, ...] = ()

    # OpenAPI (None disables the document and its endpoint)
    openapi: Mapping[str, Any] | None = None
    openapi_path: str = "/openapi"

    # Controller module extensions picked up by discovery
    extensions: tuple[str, ...] = (".py",)

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", normalize_actions(self.actions))
        object.__setattr__(self, "meta_keys", tuple(self.meta_keys))
        object.__setattr__(
            self, "extensions", tuple(ext.lower() for ext in self.extensions)
        )

    @property
    def openapi_enabled(self) -> bool:
        return self.openapi is not None
