"""Shared test fixtures and configuration."""

import os

import pytest

from parish_search.adapters.search_transport import FakeSearchTransport, TransportResponse
from parish_search.config import Settings


# Complete test environment that overrides all config values read from env
TEST_ENV = {
    "PARISH_SEARCH_API_URL": "https://search.example.org/",
    "PARISH_SEARCH_API_KEY": "test-search-key",
    "PARISH_SEARCH_INDEX_NAME": "parish_search",
    "PARISH_SEARCH_RESULTS_PER_PAGE": "10",
    "PARISH_SEARCH_ENABLE_FILES": "true",
    "PARISH_SEARCH_ENABLE_POSTS": "true",
    "PARISH_SEARCH_ENABLE_PAGES": "true",
    "PARISH_SEARCH_ENABLE_FAQS": "true",
    "PARISH_SEARCH_ENABLE_EVENTS": "true",
    "PARISH_SEARCH_HTTP_TIMEOUT": "10",
    "PARISH_SEARCH_HEALTH_TIMEOUT": "5",
    "PARISH_SEARCH_LOG_LEVEL": "info",
    # Proxy settings - ensure they're cleared for tests
    "http_proxy": "",
    "https_proxy": "",
    "all_proxy": "",
    "no_proxy": "",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset search settings environment before each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def settings() -> Settings:
    return Settings()  # type: ignore[call-arg]


@pytest.fixture
def fake_transport() -> FakeSearchTransport:
    return FakeSearchTransport()


@pytest.fixture
def engine_body() -> dict:
    """A representative engine response mixing every content type."""
    return {
        "hits": [
            {
                "id": "file-1",
                "type": "file",
                "title": "Council Minutes March",
                "filename": "minutes-2024-03.pdf",
                "path": "council/2024/minutes-2024-03.pdf",
                "page": 3,
                "document_type": "minutes",
                "date_display": "12 March 2024",
                "_formatted": {
                    "title": "Council <mark>Minutes</mark> March",
                    "content": "…the <mark>roof repair</mark> quote was approved…",
                },
            },
            {
                "id": 42,
                "type": "post",
                "title": "Church roof appeal",
                "url": "https://parish.example.org/news/roof-appeal",
                "excerpt": "Help us fix the roof",
                "date_display": "1 February 2024",
                "_formatted": {"content": "Help us fix the <mark>roof</mark>"},
            },
            {
                "id": "faq-7",
                "type": "faq",
                "title": "How do I book the hall?",
                "_formatted": {"title": "How do I book the hall?", "content": "Contact the clerk"},
            },
            {
                "id": "event-3",
                "type": "event",
                "title": "Village fete",
                "url": "https://parish.example.org/events/fete",
                "event_time": "14:00",
                "event_location": "Village green",
            },
        ],
        "estimatedTotalHits": 17,
        "processingTimeMs": 4,
    }


@pytest.fixture
def engine_response(engine_body) -> TransportResponse:
    return TransportResponse(status_code=200, body=engine_body)
