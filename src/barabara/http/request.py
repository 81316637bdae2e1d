"""Immutable request view handed to route handlers.

Frameworks are free to pass their own request objects instead: the
handler adapter only reads ``query``, ``body``, ``params``, ``files``
and the allow-listed meta attributes.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Field under ``files`` that marks an upload payload
UPLOAD_FIELD = "data"


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request as seen by a controller action.

    Attributes:
        query: Parsed query-string parameters.
        body: Parsed request body (JSON object or form fields).
        params: Path parameters captured by the router (``id``).
        files: Uploaded files keyed by form field.
        state: Context injected by middleware (authenticated user,
            trace id, ...). Exposed to actions only through ``meta_keys``.
    """

    query: Mapping[str, Any] = field(default_factory=dict)
    body: Any = None
    params: Mapping[str, Any] = field(default_factory=dict)
    files: Mapping[str, Any] = field(default_factory=dict)
    state: Mapping[str, Any] = field(default_factory=dict)


def request_options(request: Any) -> dict[str, Any]:
    """Merge query, body and path params into one flat dict.

    Later sources win on key collisions. A non-mapping body is ignored.
    """
    options: dict[str, Any] = {}
    for source in (
        getattr(request, "query", None),
        getattr(request, "body", None),
        getattr(request, "params", None),
    ):
        if isinstance(source, Mapping):
            options.update(source)

    files = getattr(request, "files", None)
    if isinstance(files, Mapping) and UPLOAD_FIELD in files:
        options["files"] = files
    return options


def request_meta(request: Any, meta_keys: tuple[str, ...]) -> dict[str, Any]:
    """Collect the allow-listed request attributes.

    Attributes on the request win over entries in ``request.state``.
    Keys the request doesn't carry are left out entirely.
    """
    meta: dict[str, Any] = {}
    state = getattr(request, "state", None)
    for key in meta_keys:
        if hasattr(request, key):
            meta[key] = getattr(request, key)
        elif isinstance(state, Mapping) and key in state:
            meta[key] = state[key]
    return meta
