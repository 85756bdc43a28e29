"""Search transport abstractions and implementations.

Defines the HTTP seam between the search core and the external engine.
The core never retries: a failed or timed-out call surfaces as a
``TransportError`` and the retry policy, if any, belongs to the caller.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
from typing import Any

import httpx

from parish_search.errors import TransportError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportResponse:
    """Status code plus decoded JSON body (``None`` when the body was not JSON)."""

    status_code: int
    body: Any = None

    def json_dict(self) -> dict[str, Any]:
        return self.body if isinstance(self.body, dict) else {}


class AbstractSearchTransport(ABC):
    """Abstract transport for talking to the search engine."""

    @abstractmethod
    async def post(
        self,
        url: str,
        headers: dict[str, str],
        json_body: dict[str, Any],
        timeout: float,
    ) -> TransportResponse:
        """POST a JSON body and return the decoded response.

        Raises:
            TransportError: network failure or timeout
        """
        raise NotImplementedError

    @abstractmethod
    async def get(self, url: str, headers: dict[str, str], timeout: float) -> TransportResponse:
        """GET a URL and return the decoded response.

        Raises:
            TransportError: network failure or timeout
        """
        raise NotImplementedError


class HttpxSearchTransport(AbstractSearchTransport):
    """``httpx`` implementation.

    A shared ``AsyncClient`` may be injected (tests pass one built on
    ``httpx.MockTransport``); otherwise a short-lived client is opened per call.
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._client = client

    async def post(
        self,
        url: str,
        headers: dict[str, str],
        json_body: dict[str, Any],
        timeout: float,
    ) -> TransportResponse:
        request_headers = {"Content-Type": "application/json", **headers}
        return await self._send("POST", url, request_headers, timeout, json_body)

    async def get(self, url: str, headers: dict[str, str], timeout: float) -> TransportResponse:
        return await self._send("GET", url, headers, timeout, None)

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        timeout: float,
        json_body: dict[str, Any] | None,
    ) -> TransportResponse:
        request_timeout = httpx.Timeout(timeout)
        try:
            if self._client is not None:
                response = await self._client.request(
                    method, url, headers=headers, json=json_body, timeout=request_timeout
                )
            else:
                async with httpx.AsyncClient(timeout=request_timeout) as client:
                    response = await client.request(method, url, headers=headers, json=json_body)
        except httpx.TimeoutException as exc:
            logger.warning(f"{method} {url} timed out after {timeout}s")
            raise TransportError(f"Search server did not respond within {timeout:g} seconds") from exc
        except httpx.HTTPError as exc:
            logger.warning(f"{method} {url} failed: {exc}")
            raise TransportError(str(exc) or exc.__class__.__name__) from exc

        return TransportResponse(status_code=response.status_code, body=_decode(response))


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.debug("Non-JSON response body (%d bytes) from %s", len(response.content), response.url)
        return None


@dataclass
class FakeSearchTransport(AbstractSearchTransport):
    """In-memory transport for testing.

    Replays canned responses and records every call it receives.
    """

    search_response: TransportResponse = field(
        default_factory=lambda: TransportResponse(200, {"hits": [], "estimatedTotalHits": 0, "processingTimeMs": 0})
    )
    health_response: TransportResponse = field(default_factory=lambda: TransportResponse(200, {"status": "available"}))
    error: TransportError | None = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    async def post(
        self,
        url: str,
        headers: dict[str, str],
        json_body: dict[str, Any],
        timeout: float,
    ) -> TransportResponse:
        self.calls.append({"method": "POST", "url": url, "headers": headers, "json": json_body, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.search_response

    async def get(self, url: str, headers: dict[str, str], timeout: float) -> TransportResponse:
        self.calls.append({"method": "GET", "url": url, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.health_response
