"""Search service orchestration layer.

Runs one search end to end: grammar parsing, filter compilation, request
building, the engine call, and result projection. Holds no mutable state, so
a single instance can serve concurrent requests.
"""

import logging

from opentelemetry.trace import SpanKind

from parish_search.adapters.search_transport import AbstractSearchTransport, TransportResponse
from parish_search.config import Settings
from parish_search.domain.search import SearchOptions, SearchResult
from parish_search.errors import (
    ConnectionCheckError,
    EngineError,
    NotConfiguredError,
    SearchError,
)
from parish_search.observability import SEARCH_LATENCY, SEARCH_REQUESTS, create_span, track_latency
from parish_search.services.filter_compiler import FilterCompiler
from parish_search.services.query_parser import QueryGrammarParser
from parish_search.services.request_builder import SearchRequestBuilder
from parish_search.services.result_projector import ResultProjector


logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Parish Search is not configured. Please set the API URL and key in Settings."
SEARCH_FAILED_MESSAGE = "Search request failed"
CONNECTION_FAILED_MESSAGE = "Could not connect to search server"


class SearchService:
    """High-level search orchestration service."""

    def __init__(self, settings: Settings, transport: AbstractSearchTransport):
        """Initialize search service with dependencies.

        Args:
            settings: Read-only configuration for the engine connection
            transport: Adapter performing the outbound HTTP calls
        """
        self.settings = settings
        self.transport = transport
        self.parser = QueryGrammarParser()
        self.compiler = FilterCompiler()
        self.builder = SearchRequestBuilder(embedder=settings.embedder, semantic_ratio=settings.semantic_ratio)
        self.projector = ResultProjector()

    async def search(self, raw_query: str, options: SearchOptions | None = None) -> SearchResult:
        """Execute a search, honouring inline directives in ``raw_query``.

        Args:
            raw_query: Text as typed by the user, directives included
            options: UI selections; defaults apply when omitted

        Returns:
            SearchResult echoing ``raw_query`` with projected hits

        Raises:
            NotConfiguredError: API URL or key missing; no request is sent
            TransportError: the engine could not be reached
            EngineError: the engine answered with a non-200 status
        """
        if not self.settings.is_configured():
            SEARCH_REQUESTS.labels(status="not_configured").inc()
            raise NotConfiguredError(NOT_CONFIGURED_MESSAGE)

        options = options or SearchOptions(limit=self.settings.results_per_page)

        parsed = self.parser.parse(raw_query)
        filter_expression = self.compiler.compile(parsed.clauses, options, self.settings.content_types())
        request = self.builder.build(parsed.text, filter_expression, options)

        logger.debug(
            f"Search compiled: text={parsed.text!r} filter={filter_expression!r} "
            f"sort={options.sort} exact={options.exact_match} limit={request.limit}"
        )

        mode = "keyword"
        if options.exact_match:
            mode = "exact"
        elif request.hybrid is not None:
            mode = "hybrid"
        attributes = {"search.mode": mode, "search.limit": request.limit, "search.clauses": len(parsed.clauses)}
        try:
            with track_latency(SEARCH_LATENCY, mode=mode), create_span(
                "search.engine", kind=SpanKind.CLIENT, attributes=attributes
            ):
                response = await self.transport.post(
                    self.settings.search_url(),
                    self.settings.auth_headers(),
                    request.to_payload(),
                    self.settings.http_timeout,
                )
                result = self._handle_search_response(raw_query, response)
        except SearchError as exc:
            SEARCH_REQUESTS.labels(status=exc.code).inc()
            logger.warning(f"Search failed ({exc.code}): {exc.message}")
            raise

        SEARCH_REQUESTS.labels(status="ok").inc()
        logger.info(
            "Search returned %d of %d hits in %dms",
            len(result.hits),
            result.total,
            result.processing_time_ms,
        )
        return result

    def _handle_search_response(self, raw_query: str, response: TransportResponse) -> SearchResult:
        body = response.json_dict()
        if response.status_code != 200:
            message = body.get("message")
            if not isinstance(message, str) or not message:
                message = SEARCH_FAILED_MESSAGE
            raise EngineError(message, status_code=response.status_code)
        return self.projector.project_response(raw_query, body)

    async def test_connection(self) -> bool:
        """Check that the engine is reachable with the configured credentials.

        Raises:
            NotConfiguredError: API URL or key missing
            TransportError: the engine could not be reached
            ConnectionCheckError: the health endpoint answered with a non-200 status
        """
        if not self.settings.is_configured():
            raise NotConfiguredError("API URL and key are required")

        response = await self.transport.get(
            self.settings.health_url(),
            self.settings.auth_headers(),
            self.settings.health_timeout,
        )
        if response.status_code != 200:
            logger.warning(f"Health check returned HTTP {response.status_code}")
            raise ConnectionCheckError(CONNECTION_FAILED_MESSAGE)
        return True
