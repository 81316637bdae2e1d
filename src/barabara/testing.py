"""Test helpers for barabara route handlers.

``RecordingResponder`` stands in for a framework response object and
records every call, so tests can assert on what a handler did::

    respond = RecordingResponder()
    await handler(Request(query={"id": "1"}), respond, failures.append)
    assert respond.json_body == {"id": "1"}
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class RecordingResponder:
    """Responder that records calls instead of writing to a socket."""

    __test__ = False

    calls: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)

    def redirect(self, url: str) -> None:
        self.calls.append(("redirect", (url,)))

    def json(self, value: Any) -> None:
        self.calls.append(("json", (value,)))

    def send(self, body: Any) -> None:
        self.calls.append(("send", (body,)))

    def set_header(self, name: str, value: str) -> None:
        self.headers[name] = value
        self.calls.append(("set_header", (name, value)))

    @property
    def methods(self) -> list[str]:
        """Names of the responder methods called, in order."""
        return [name for name, _ in self.calls]

    def _last(self, method: str) -> Any:
        for name, args in reversed(self.calls):
            if name == method:
                return args[0]
        msg = f"{method}() was not called"
        raise AssertionError(msg)

    @property
    def redirected_to(self) -> str:
        return self._last("redirect")

    @property
    def json_body(self) -> Any:
        return self._last("json")

    @property
    def sent(self) -> Any:
        return self._last("send")
