"""Domain models for search functionality.

Following Cosmic Python principles:
- Value Objects are immutable (frozen=True)
- Domain logic lives in domain layer
- No infrastructure dependencies

Everything here is created fresh for a single search call and discarded once
the response has been projected.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


MIN_YEAR = 1990
MAX_YEAR = 2100

CONTENT_TYPES: tuple[str, ...] = ("file", "post", "page", "faq", "event")
TYPE_ALIASES: dict[str, str] = {"document": "file", "news": "post"}
DOCUMENT_TYPES: tuple[str, ...] = ("minutes", "agenda", "policy", "planning", "finance", "other")

SortOrder = Literal["relevance", "date_desc", "date_asc"]
SORT_ORDERS: tuple[str, ...] = ("relevance", "date_desc", "date_asc")
DEFAULT_SORT: SortOrder = "date_desc"


def normalize_content_type(value: str) -> str | None:
    """Resolve aliases and return the canonical content type, or None if unknown."""
    lowered = value.strip().lower()
    lowered = TYPE_ALIASES.get(lowered, lowered)
    return lowered if lowered in CONTENT_TYPES else None


def normalize_document_type(value: str) -> str | None:
    lowered = value.strip().lower()
    return lowered if lowered in DOCUMENT_TYPES else None


def year_in_range(year: int) -> bool:
    return MIN_YEAR <= year <= MAX_YEAR


class Directive(str, Enum):
    """Inline ``key:value`` directives understood by the query grammar."""

    TYPE = "type"
    YEAR = "year"
    DOCTYPE = "doctype"
    BEFORE = "before"
    AFTER = "after"
    IN = "in"


class FilterClause(BaseModel):
    """A single engine filter fragment tagged with the directive that produced it."""

    model_config = ConfigDict(frozen=True)

    directive: Directive
    expression: str

    def __str__(self) -> str:
        return self.expression


class ParsedQuery(BaseModel):
    """Free text left over after directive extraction plus the clauses found."""

    model_config = ConfigDict(frozen=True)

    text: str
    clauses: list[FilterClause] = Field(default_factory=list)

    def has(self, directive: Directive) -> bool:
        return any(clause.directive is directive for clause in self.clauses)


class SearchOptions(BaseModel):
    """UI selections passed by value with each search call.

    Inputs are coerced leniently: malformed values fall back to neutral
    defaults instead of raising, so a bad dropdown value never fails a search.
    """

    model_config = ConfigDict(frozen=True)

    type_filter: str = ""
    doctype: str = ""
    year: int | None = None
    sort: SortOrder = DEFAULT_SORT
    exact_match: bool = False
    limit: int = 10

    @field_validator("type_filter", "doctype", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @field_validator("year", mode="before")
    @classmethod
    def _coerce_year(cls, value: object) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        text = str(value).strip()
        return int(text) if text.isdigit() else None

    @field_validator("sort", mode="before")
    @classmethod
    def _coerce_sort(cls, value: object) -> str:
        text = str(value or "").strip().lower()
        return text if text in SORT_ORDERS else DEFAULT_SORT

    @field_validator("exact_match", mode="before")
    @classmethod
    def _coerce_exact_match(cls, value: object) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @field_validator("limit", mode="before")
    @classmethod
    def _coerce_limit(cls, value: object) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        text = str(value or "").strip()
        if text.lstrip("-").isdigit():
            return int(text)
        return 10


class ContentTypeConfig(BaseModel):
    """Which content types are searched when neither grammar nor UI picks one."""

    model_config = ConfigDict(frozen=True)

    files: bool = True
    posts: bool = True
    pages: bool = True
    faqs: bool = True
    events: bool = True

    def enabled_types(self) -> list[str]:
        flags = (self.files, self.posts, self.pages, self.faqs, self.events)
        return [content_type for content_type, enabled in zip(CONTENT_TYPES, flags, strict=True) if enabled]


class _EngineModel(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class HybridSpec(_EngineModel):
    semantic_ratio: float = 0.2
    embedder: str = "openai"


class TypoToleranceSpec(_EngineModel):
    enabled: bool = False


class SearchRequest(_EngineModel):
    """Fully compiled engine payload for one search call."""

    q: str
    limit: int
    filter: str | None = None
    sort: list[str] | None = None
    attributes_to_retrieve: list[str]
    attributes_to_highlight: list[str]
    highlight_pre_tag: str
    highlight_post_tag: str
    attributes_to_crop: list[str]
    crop_length: int
    hybrid: HybridSpec | None = None
    matching_strategy: str | None = None
    typo_tolerance: TypoToleranceSpec | None = None

    def to_payload(self) -> dict:
        """Serialise to the engine's camelCase JSON body, omitting unset options."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ResultRecord(BaseModel):
    """Fields shared by every projected hit."""

    model_config = ConfigDict(frozen=True)

    id: str | int = ""
    type: str = "unknown"
    title: str = ""
    content: str = ""
    date: str = ""


class FileResult(ResultRecord):
    type: Literal["file"] = "file"
    filename: str = ""
    path: str = ""
    url_prefix: str = "/wp-content/uploads/"
    page: int = 1
    document_type: str = ""


class PostResult(ResultRecord):
    type: Literal["post"] = "post"
    url: str = ""
    excerpt: str = ""


class PageResult(ResultRecord):
    type: Literal["page"] = "page"
    url: str = ""
    excerpt: str = ""


class FaqResult(ResultRecord):
    type: Literal["faq"] = "faq"
    categories: list[str] = Field(default_factory=list)
    priority: int = 10


class EventResult(ResultRecord):
    type: Literal["event"] = "event"
    url: str = ""
    event_time: str = ""
    event_location: str = ""


class GenericResult(ResultRecord):
    """Hit whose type is not recognised; only the common fields are populated."""


AnyResult = FileResult | PostResult | PageResult | FaqResult | EventResult | GenericResult


class SearchResult(BaseModel):
    """Value object for a complete search response returned to the caller."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    query: str
    hits: list[AnyResult] = Field(default_factory=list)
    total: int = 0
    processing_time_ms: int = Field(default=0, alias="processingTimeMs")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
