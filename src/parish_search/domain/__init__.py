"""Domain layer - pure search value objects with no infrastructure dependencies.

Following Cosmic Python principles, this layer contains:
- Value Objects: immutable query, filter and result records
- Domain vocabulary: content types, document types and year bounds
"""

from parish_search.domain.search import (
    AnyResult,
    ContentTypeConfig,
    Directive,
    EventResult,
    FaqResult,
    FileResult,
    FilterClause,
    GenericResult,
    PageResult,
    ParsedQuery,
    PostResult,
    ResultRecord,
    SearchOptions,
    SearchRequest,
    SearchResult,
)


__all__ = [
    "AnyResult",
    "ContentTypeConfig",
    "Directive",
    "EventResult",
    "FaqResult",
    "FileResult",
    "FilterClause",
    "GenericResult",
    "PageResult",
    "ParsedQuery",
    "PostResult",
    "ResultRecord",
    "SearchOptions",
    "SearchRequest",
    "SearchResult",
]
