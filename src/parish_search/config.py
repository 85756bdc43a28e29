"""Centralized configuration for parish-search using Pydantic Settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from parish_search.domain.search import ContentTypeConfig


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Read-only to the search core: it is passed explicitly into the service
    layer and never looked up globally.
    """

    model_config = SettingsConfigDict(
        env_prefix="PARISH_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Search engine connection
    api_url: str = Field(default="", description="Base URL of the search engine (no trailing slash needed)")
    api_key: str = Field(default="", description="Search-only API key sent as a Bearer token")
    index_name: str = Field(default="parish_search", description="Engine index queried by searches")

    # Results
    results_per_page: int = Field(default=10, ge=1, description="Default result limit per search; capped per request")

    # Content types searched when no type is selected
    enable_files: bool = Field(default=True, description="Include uploaded documents")
    enable_posts: bool = Field(default=True, description="Include news posts")
    enable_pages: bool = Field(default=True, description="Include pages")
    enable_faqs: bool = Field(default=True, description="Include FAQs")
    enable_events: bool = Field(default=True, description="Include events")

    # Hybrid search
    embedder: str = Field(default="openai", description="Engine embedder used for hybrid search")
    semantic_ratio: float = Field(default=0.2, ge=0.0, le=1.0, description="Semantic share of hybrid ranking")

    # HTTP settings
    http_timeout: float = Field(default=10.0, gt=0, description="Search request timeout in seconds")
    health_timeout: float = Field(default=5.0, gt=0, description="Health check timeout in seconds")

    # Server settings
    host: str = Field(default="127.0.0.1", description="HTTP server host")
    port: int = Field(default=15010, ge=1, le=65535, description="HTTP server port")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    json_logs: bool = Field(default=True, description="Emit structured JSON logs")

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    def is_configured(self) -> bool:
        return bool(self.api_url and self.api_key)

    def content_types(self) -> ContentTypeConfig:
        return ContentTypeConfig(
            files=self.enable_files,
            posts=self.enable_posts,
            pages=self.enable_pages,
            faqs=self.enable_faqs,
            events=self.enable_events,
        )

    def search_url(self) -> str:
        return f"{self.api_url}/indexes/{self.index_name}/search"

    def health_url(self) -> str:
        return f"{self.api_url}/health"

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}
