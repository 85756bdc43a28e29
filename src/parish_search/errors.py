"""Typed failures surfaced to callers of the search service.

Malformed user input never ends up here: invalid directives and filter values
are dropped silently. Only configuration, transport and engine failures raise.
"""


class SearchError(RuntimeError):
    """Base class carrying a stable error code and a human-readable message."""

    code = "search_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"message": self.message}


class NotConfiguredError(SearchError):
    code = "not_configured"


class TransportError(SearchError):
    code = "transport_error"


class EngineError(SearchError):
    code = "search_error"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConnectionCheckError(SearchError):
    code = "connection_failed"
