"""Service layer - orchestrates a search use case over the pure services."""

from .search_service import SearchService


__all__ = ["SearchService"]
