"""Health endpoint factory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.responses import JSONResponse

from parish_search.errors import SearchError


if TYPE_CHECKING:
    from starlette.requests import Request

    from parish_search.service_layer.search_service import SearchService


logger = logging.getLogger(__name__)


def build_health_endpoint(service: SearchService):
    """Return a coroutine function that reports whether the engine is reachable."""

    async def health_check(request: Request) -> JSONResponse:
        try:
            await service.test_connection()
        except SearchError as exc:
            logger.warning(f"Health check failed ({exc.code}): {exc.message}")
            return JSONResponse(
                {"status": "unhealthy", "code": exc.code, **exc.to_dict()},
                status_code=503,
            )

        return JSONResponse(
            {
                "status": "healthy",
                "index": service.settings.index_name,
            }
        )

    return health_check
