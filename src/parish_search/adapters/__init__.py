"""Adapters layer - transport implementations for the external search engine."""

from .search_transport import (
    AbstractSearchTransport,
    FakeSearchTransport,
    HttpxSearchTransport,
    TransportResponse,
)


__all__ = [
    "AbstractSearchTransport",
    "FakeSearchTransport",
    "HttpxSearchTransport",
    "TransportResponse",
]
