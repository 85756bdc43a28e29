"""Unit tests for the config module."""

import os
from unittest.mock import patch

from pydantic import ValidationError
import pytest

from parish_search.config import Settings
from parish_search.domain.search import ContentTypeConfig


pytestmark = pytest.mark.unit


class TestConfig:
    """Test configuration loading and validation."""

    def test_values_come_from_environment(self):
        settings = Settings()  # type: ignore[call-arg]

        assert settings.api_key == "test-search-key"
        assert settings.results_per_page == 10
        assert settings.http_timeout == 10.0

    def test_trailing_slash_is_stripped_from_api_url(self):
        settings = Settings()  # type: ignore[call-arg]

        assert settings.api_url == "https://search.example.org"
        assert settings.search_url() == "https://search.example.org/indexes/parish_search/search"
        assert settings.health_url() == "https://search.example.org/health"

    def test_auth_headers_use_bearer_key(self):
        assert Settings().auth_headers() == {"Authorization": "Bearer test-search-key"}  # type: ignore[call-arg]

    @patch.dict(os.environ, {"PARISH_SEARCH_API_URL": ""}, clear=False)
    def test_missing_url_is_not_configured(self):
        assert Settings().is_configured() is False  # type: ignore[call-arg]

    def test_configured_with_url_and_key(self):
        assert Settings().is_configured() is True  # type: ignore[call-arg]

    @patch.dict(os.environ, {"PARISH_SEARCH_ENABLE_FAQS": "false", "PARISH_SEARCH_ENABLE_PAGES": "0"}, clear=False)
    def test_content_types_reflect_flags(self):
        config = Settings().content_types()  # type: ignore[call-arg]

        assert config == ContentTypeConfig(pages=False, faqs=False)
        assert config.enabled_types() == ["file", "post", "event"]

    @patch.dict(os.environ, {"PARISH_SEARCH_RESULTS_PER_PAGE": "0"}, clear=False)
    def test_results_per_page_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings()  # type: ignore[call-arg]

    @patch.dict(os.environ, {"PARISH_SEARCH_RESULTS_PER_PAGE": "500"}, clear=False)
    def test_large_results_per_page_is_accepted(self):
        assert Settings().results_per_page == 500  # type: ignore[call-arg]

    @patch.dict(os.environ, {"PARISH_SEARCH_SEMANTIC_RATIO": "1.5"}, clear=False)
    def test_semantic_ratio_is_bounded(self):
        with pytest.raises(ValidationError):
            Settings()  # type: ignore[call-arg]
