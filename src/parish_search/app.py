"""Main ASGI application entry point.

Exposes the caller-facing search contract over HTTP:

    Starlette App
      ├── POST /search   → run a search, returns a SearchResult envelope
      ├── GET  /health   → engine connectivity check
      └── GET  /metrics  → Prometheus exposition

Usage:
    python -m parish_search.app
"""

import logging
from typing import Any

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from .adapters.search_transport import AbstractSearchTransport, HttpxSearchTransport
from .config import Settings
from .domain.search import SearchOptions
from .errors import EngineError, NotConfiguredError, SearchError, TransportError
from .observability import TraceContextMiddleware, configure_logging, get_metrics, get_metrics_content_type, init_tracing
from .runtime.health import build_health_endpoint
from .service_layer.search_service import SearchService


logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[SearchError], int] = {
    NotConfiguredError: 503,
    TransportError: 502,
    EngineError: 502,
}


def _error_response(data: dict[str, str], status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "data": data}, status_code=status_code)


def options_from_payload(payload: dict[str, Any], default_limit: int) -> SearchOptions:
    """Translate the caller-facing request fields into ``SearchOptions``."""
    exact_match = payload.get("exact_match", payload.get("exactMatch", False))
    limit = payload.get("limit")
    return SearchOptions(
        type_filter=payload.get("type"),
        doctype=payload.get("doctype"),
        year=payload.get("year"),
        sort=payload.get("sort"),
        exact_match=exact_match,
        limit=default_limit if limit in (None, "") else limit,
    )


def build_search_endpoint(service: SearchService):
    async def search_endpoint(request: Request) -> JSONResponse:
        try:
            payload = await request.json()
        except ValueError:
            return _error_response({"message": "Request body must be a JSON object"}, 400)
        if not isinstance(payload, dict):
            return _error_response({"message": "Request body must be a JSON object"}, 400)

        query = str(payload.get("query") or "").strip()
        if not query:
            return _error_response({"message": "No search query provided"}, 400)

        options = options_from_payload(payload, service.settings.results_per_page)
        try:
            result = await service.search(query, options)
        except SearchError as exc:
            return _error_response(exc.to_dict(), ERROR_STATUS.get(type(exc), 502))

        return JSONResponse({"success": True, "data": result.to_payload()})

    return search_endpoint


async def metrics_endpoint(_: Request) -> Response:
    return Response(get_metrics(), media_type=get_metrics_content_type())


def create_app(
    settings: Settings | None = None,
    transport: AbstractSearchTransport | None = None,
) -> Starlette:
    """Build the Starlette application around a single stateless ``SearchService``."""
    settings = settings or Settings()
    service = SearchService(settings=settings, transport=transport or HttpxSearchTransport())

    routes = [
        Route("/search", endpoint=build_search_endpoint(service), methods=["POST"]),
        Route("/health", endpoint=build_health_endpoint(service), methods=["GET"]),
        Route("/metrics", endpoint=metrics_endpoint, methods=["GET"]),
    ]
    app = Starlette(routes=routes, middleware=[Middleware(TraceContextMiddleware)])
    app.state.search_service = service
    return app


def main() -> None:
    """Main entry point for the search server."""
    import uvicorn

    settings = Settings()
    configure_logging(settings.log_level, json_output=settings.json_logs)
    init_tracing()

    if not settings.is_configured():
        logger.warning("PARISH_SEARCH_API_URL / PARISH_SEARCH_API_KEY not set; searches will fail until configured")

    logger.info("Starting server on %s:%d", settings.host, settings.port)
    logger.info("Health check: http://%s:%d/health", settings.host, settings.port)

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,  # Don't let uvicorn override our logging config
    )


if __name__ == "__main__":
    main()
