"""Reply variants and the responder protocol.

Actions either return one of the reply types directly::

    return Redirect("/login")
    return Raw(pdf_bytes, "application/pdf")

or a plain value, which :func:`to_reply` classifies:

- ``{"barabara": {"redirect": url}}`` -> :class:`Redirect`
- ``{"barabara": {"contentType": ct}, "buffer": data}`` -> :class:`Raw`
- any other mapping, list or tuple -> :class:`JSON`
- anything else -> :class:`Send`
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, TypeAlias

from barabara._internal.invoke import invoke

# Reserved key for response directives on a returned mapping
DIRECTIVE_KEY = "barabara"


@dataclass(frozen=True, slots=True)
class JSON:
    """Serialize ``value`` as a JSON body."""

    value: Any


@dataclass(frozen=True, slots=True)
class Redirect:
    """Redirect the client to ``url``."""

    url: str


@dataclass(frozen=True, slots=True)
class Raw:
    """Send ``body`` verbatim with an explicit content type."""

    body: Any
    content_type: str


@dataclass(frozen=True, slots=True)
class Send:
    """Send ``body`` as-is and let the framework pick the content type."""

    body: Any


Reply: TypeAlias = JSON | Redirect | Raw | Send

_REPLY_TYPES = (JSON, Redirect, Raw, Send)


class Responder(Protocol):
    """What the handler needs from the framework's response object.

    Each method may be sync or async.
    """

    def redirect(self, url: str) -> Any: ...

    def json(self, value: Any) -> Any: ...

    def send(self, body: Any) -> Any: ...

    def set_header(self, name: str, value: str) -> Any: ...


def to_reply(result: Any) -> Reply:
    """Classify an action's return value."""
    if isinstance(result, _REPLY_TYPES):
        return result

    if isinstance(result, Mapping):
        directives = result.get(DIRECTIVE_KEY)
        if isinstance(directives, Mapping):
            redirect = directives.get("redirect")
            if isinstance(redirect, str):
                return Redirect(redirect)
            content_type = directives.get("contentType")
            if isinstance(content_type, str):
                return Raw(result.get("buffer"), content_type)
        return JSON(result)

    if isinstance(result, (list, tuple)):
        return JSON(list(result))

    if result is None:
        return Send("")

    return Send(result)


async def send_reply(reply: Reply, responder: Responder) -> None:
    """Apply a reply to the framework's responder."""
    match reply:
        case Redirect(url=url):
            await invoke(responder.redirect, url)
        case Raw(body=body, content_type=content_type):
            await invoke(responder.set_header, "Content-Type", content_type)
            await invoke(responder.send, body)
        case JSON(value=value):
            await invoke(responder.json, value)
        case Send(body=body):
            await invoke(responder.send, body)
