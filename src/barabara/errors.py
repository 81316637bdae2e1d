"""Barabara exception hierarchy.

Setup-time problems (bad configuration, malformed controllers) raise
these types and abort router construction. Errors raised by actions are
never wrapped: they reach the router's failure continuation untouched.
"""


class BarabaraError(Exception):
    """Base for all barabara-specific errors."""


class ConfigurationError(BarabaraError):
    """Raised when router or controller configuration is invalid.

    Always raised during setup, before a router is handed back.
    """


class OpenAPIConfigError(ConfigurationError):
    """The top-level OpenAPI configuration is malformed."""


class ControllerOpenAPIError(ConfigurationError):
    """A controller's ``openapi`` metadata is malformed.

    Carries the action and route that were being registered so the
    message points at the offending controller.
    """

    def __init__(self, message: str, *, action: str, route: str) -> None:
        super().__init__(message)
        self.action = action
        self.route = route
