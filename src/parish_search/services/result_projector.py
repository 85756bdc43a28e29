"""Result projection.

Maps raw engine hits onto typed display records. Missing fields fall back to
neutral defaults; unknown hit types degrade to the common field set.
"""

from collections.abc import Iterable, Mapping
import logging
import math
from typing import Any

from parish_search.domain.search import (
    AnyResult,
    EventResult,
    FaqResult,
    FileResult,
    GenericResult,
    PageResult,
    PostResult,
    SearchResult,
)


logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _integer(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value.strip())
    return default


def _string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, Iterable):
        return [_text(item) for item in value if item is not None]
    return [_text(value)]


class ResultProjector:
    """Order-preserving projection from raw hits to ``AnyResult`` records."""

    def project(self, hits: Iterable[Mapping[str, Any]]) -> list[AnyResult]:
        return [self.project_hit(hit) for hit in hits if isinstance(hit, Mapping)]

    def project_hit(self, hit: Mapping[str, Any]) -> AnyResult:
        formatted = hit.get("_formatted")
        if not isinstance(formatted, Mapping):
            formatted = {}

        raw_id = hit.get("id")
        title = formatted.get("title")
        if title is None:
            title = hit.get("title")

        common: dict[str, Any] = {
            "id": raw_id if isinstance(raw_id, (str, int)) and not isinstance(raw_id, bool) else _text(raw_id),
            "title": _text(title),
            "content": _text(formatted.get("content")),
            "date": _text(hit.get("date_display")),
        }
        hit_type = hit.get("type")

        if hit_type == "file":
            return FileResult(
                **common,
                filename=_text(hit.get("filename")),
                path=_text(hit.get("path")),
                url_prefix=_text(hit.get("url_prefix")) or "/wp-content/uploads/",
                page=_integer(hit.get("page"), 1),
                document_type=_text(hit.get("document_type")),
            )
        if hit_type == "faq":
            return FaqResult(
                **common,
                categories=_string_list(hit.get("categories")),
                priority=_integer(hit.get("priority"), 10),
            )
        if hit_type == "event":
            return EventResult(
                **common,
                url=_text(hit.get("url")),
                event_time=_text(hit.get("event_time")),
                event_location=_text(hit.get("event_location")),
            )
        if hit_type in ("post", "page"):
            record_cls = PostResult if hit_type == "post" else PageResult
            return record_cls(**common, url=_text(hit.get("url")), excerpt=_text(hit.get("excerpt")))

        if hit_type is not None:
            logger.debug("Unrecognised hit type %r for id %r, keeping common fields only", hit_type, raw_id)
        return GenericResult(**common, type=_text(hit_type) or "unknown")

    def project_response(self, raw_query: str, body: Mapping[str, Any]) -> SearchResult:
        """Build the caller-facing ``SearchResult`` from an engine response body."""
        hits = body.get("hits")
        if not isinstance(hits, list):
            hits = []
        return SearchResult(
            query=raw_query,
            hits=self.project(hits),
            total=_integer(body.get("estimatedTotalHits"), 0),
            processing_time_ms=_integer(body.get("processingTimeMs"), 0),
        )


def project(hits: Iterable[Mapping[str, Any]]) -> list[AnyResult]:
    return ResultProjector().project(hits)
