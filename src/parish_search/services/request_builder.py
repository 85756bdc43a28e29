"""Search request assembly.

Shapes the engine payload for the three search modes: hybrid relevance,
exact match, and explicit date ordering.
"""

from typing import ClassVar

from parish_search.domain.search import HybridSpec, SearchOptions, SearchRequest, TypoToleranceSpec


MIN_LIMIT = 1
MAX_LIMIT = 100


def clamp_limit(limit: int) -> int:
    return max(MIN_LIMIT, min(limit, MAX_LIMIT))


class SearchRequestBuilder:
    """Build a ``SearchRequest`` from cleaned text, a compiled filter and UI options."""

    RETRIEVE_ATTRIBUTES: ClassVar[tuple[str, ...]] = (
        "id",
        "type",
        "title",
        "content",
        "filename",
        "path",
        "url_prefix",
        "url",
        "excerpt",
        "date_display",
        "document_type",
        "page",
        "categories",
        "priority",
        "event_time",
        "event_location",
    )
    HIGHLIGHT_ATTRIBUTES: ClassVar[tuple[str, ...]] = ("content", "title")
    CROP_ATTRIBUTES: ClassVar[tuple[str, ...]] = ("content",)
    HIGHLIGHT_PRE_TAG = "<mark>"
    HIGHLIGHT_POST_TAG = "</mark>"
    CROP_LENGTH = 150

    SORT_FIELD = "date_sortable"
    SEMANTIC_RATIO = 0.2
    EMBEDDER = "openai"

    def __init__(self, embedder: str = EMBEDDER, semantic_ratio: float = SEMANTIC_RATIO):
        self.embedder = embedder
        self.semantic_ratio = semantic_ratio

    def build(self, text: str, filter_expression: str, options: SearchOptions) -> SearchRequest:
        """Assemble the engine payload.

        Hybrid ranking is only requested for relevance-sorted, non-exact
        searches; an explicit date sort or exact matching turns it off.
        """
        hybrid = None
        if not options.exact_match and options.sort == "relevance":
            hybrid = HybridSpec(semantic_ratio=self.semantic_ratio, embedder=self.embedder)

        matching_strategy = None
        typo_tolerance = None
        if options.exact_match:
            matching_strategy = "all"
            typo_tolerance = TypoToleranceSpec(enabled=False)

        return SearchRequest(
            q=text,
            limit=clamp_limit(options.limit),
            filter=filter_expression or None,
            sort=self._sort(options.sort),
            attributes_to_retrieve=list(self.RETRIEVE_ATTRIBUTES),
            attributes_to_highlight=list(self.HIGHLIGHT_ATTRIBUTES),
            highlight_pre_tag=self.HIGHLIGHT_PRE_TAG,
            highlight_post_tag=self.HIGHLIGHT_POST_TAG,
            attributes_to_crop=list(self.CROP_ATTRIBUTES),
            crop_length=self.CROP_LENGTH,
            hybrid=hybrid,
            matching_strategy=matching_strategy,
            typo_tolerance=typo_tolerance,
        )

    def _sort(self, sort: str) -> list[str] | None:
        if sort == "date_desc":
            return [f"{self.SORT_FIELD}:desc"]
        if sort == "date_asc":
            return [f"{self.SORT_FIELD}:asc"]
        return None


def build_request(text: str, filter_expression: str, options: SearchOptions) -> SearchRequest:
    return SearchRequestBuilder().build(text, filter_expression, options)
