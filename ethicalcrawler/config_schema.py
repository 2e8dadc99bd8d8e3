"""Declarative configuration schema for the crawler."""
from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    PositiveInt,
    PrivateAttr,
    field_validator,
    model_validator,
)

DEFAULT_USER_AGENT = "EthicalCrawler/1.0 (StudentResearch)"


class StrictModel(BaseModel):
    """Base model enforcing strict validation rules."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
    )


class AppSettings(StrictModel):
    """Top-level runtime metadata."""

    environment: str = Field(
        default="development",
        description="Normalized deployment environment name.",
        examples=["production"],
    )
    debug: bool = Field(
        default=False,
        description="When true, enables verbose logging with diagnostics.",
    )

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"development", "production", "staging", "test"}:
            raise ValueError(
                "environment must be one of: development, staging, production, test"
            )
        return normalized


class CollectionConfig(StrictModel):
    """Behaviour shared by every collector."""

    request_timeout_seconds: PositiveFloat = Field(
        default=20.0,
        description="Default HTTP timeout when a source does not override it.",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="HTTP User-Agent header sent to providers.",
    )
    sample_size: PositiveInt = Field(
        default=5,
        description="Number of records printed as a sample after each query.",
    )
    error_preview_chars: PositiveInt = Field(
        default=500,
        description="Characters of the raw body kept in decode error messages.",
    )
    description_max_chars: PositiveInt = Field(
        default=120,
        description="Maximum characters printed for feed item descriptions.",
    )


class QueryConfig(StrictModel):
    """Search phrase shared by the API collectors."""

    phrase: str = Field(
        default='"Universidad de Antioquia" OR UdeA',
        description="Free-text search phrase; quoted terms and OR are allowed.",
    )
    top_n: PositiveInt = Field(
        default=10,
        description="Default ranking size when a source does not override it.",
    )

    @field_validator("phrase")
    @classmethod
    def _require_phrase(cls, value: str) -> str:
        if not value:
            raise ValueError("phrase must not be empty")
        return value


class NewsAPIConfig(StrictModel):
    """NewsAPI.org /v2/everything settings."""

    base_url: str = Field(default="https://newsapi.org/v2/everything")
    api_key: Optional[str] = Field(
        default=None,
        description="NewsAPI key sent in the X-Api-Key header; treated as secret.",
    )
    languages: List[str] = Field(
        default_factory=lambda: ["es", "en"],
        description="ISO 639-1 language codes, sent comma separated.",
    )
    sort_by: str = Field(default="publishedAt")
    page_size: int = Field(default=50, ge=1, le=100)
    lookback_days: PositiveInt = Field(
        default=30,
        description="Days before now covered by the from/to range.",
    )
    timeout_seconds: Optional[PositiveFloat] = Field(default=20.0)
    top_n: PositiveInt = Field(default=10)


class GuardianConfig(StrictModel):
    """The Guardian content API settings."""

    base_url: str = Field(default="https://content.guardianapis.com/search")
    api_key: Optional[str] = Field(
        default=None,
        description="Guardian key sent as the api-key query parameter; secret.",
    )
    from_date: date = Field(default=date(2023, 1, 1))
    to_date: date = Field(default=date(2023, 12, 31))
    page_size: int = Field(default=50, ge=1, le=200)
    timeout_seconds: Optional[PositiveFloat] = Field(default=20.0)
    top_n: PositiveInt = Field(default=5)

    @model_validator(mode="after")
    def _check_range(self) -> "GuardianConfig":
        if self.from_date > self.to_date:
            raise ValueError("from_date must not be later than to_date")
        return self


class GdeltConfig(StrictModel):
    """GDELT DOC 2.0 artlist settings."""

    base_url: str = Field(default="https://api.gdeltproject.org/api/v2/doc/doc")
    languages: List[str] = Field(
        default_factory=lambda: ["spanish", "english"],
        description="sourceLang values OR-ed into the query.",
    )
    start: datetime = Field(default=datetime(2023, 1, 1, 0, 0, 0))
    end: datetime = Field(default=datetime(2023, 12, 31, 23, 59, 59))
    max_records: int = Field(default=250, ge=1, le=250)
    timeout_seconds: Optional[PositiveFloat] = Field(default=30.0)
    top_n: PositiveInt = Field(default=10)

    @model_validator(mode="after")
    def _check_range(self) -> "GdeltConfig":
        if self.start > self.end:
            raise ValueError("start must not be later than end")
        return self


class XConfig(StrictModel):
    """X (Twitter) v2 recent search settings."""

    base_url: str = Field(default="https://api.twitter.com/2/tweets/search/recent")
    bearer_token: Optional[str] = Field(
        default=None,
        description="App bearer token for the Authorization header; secret.",
    )
    query_suffix: str = Field(
        default="investigación lang:es -is:retweet",
        description="Operators appended after the grouped search phrase.",
    )
    max_results: int = Field(default=50, ge=10, le=100)
    lookback_days: int = Field(
        default=7,
        ge=1,
        le=7,
        description="Recent search only covers the last seven days.",
    )
    end_offset_minutes: int = Field(
        default=1,
        ge=0,
        description="Minutes subtracted from now for end_time; the API rejects 'now'.",
    )
    timeout_seconds: Optional[PositiveFloat] = Field(default=20.0)
    top_n: PositiveInt = Field(default=7)


class RSSConfig(StrictModel):
    """Feed reader settings."""

    feeds: List[str] = Field(
        default_factory=lambda: [
            "https://www.eltiempo.com/rss/eltiempo.xml",
            "https://www.larepublica.co/rss",
            "https://feeds.bbci.co.uk/news/rss.xml",
            "https://rss.nytimes.com/services/xml/rss/nyt/HomePage.xml",
            "https://www.theguardian.com/world/rss",
        ],
        description="Feed URLs read in order.",
    )
    sample_size: PositiveInt = Field(default=3)
    timeout_seconds: Optional[PositiveFloat] = Field(default=20.0)
    top_n: PositiveInt = Field(default=10)

    @field_validator("feeds")
    @classmethod
    def _require_http(cls, value: List[str]) -> List[str]:
        for url in value:
            if not url.startswith(("http://", "https://")):
                raise ValueError(f"feed url must be http(s): {url!r}")
        return value


class LoggingConfig(StrictModel):
    """Logging subsystem configuration."""

    level: str = Field(
        default="INFO",
        description="Minimum log level captured by the crawler logger.",
        examples=["DEBUG"],
    )
    file_path: Optional[Path] = Field(
        default=None,
        description="Optional rotating log file; console only when unset.",
    )
    max_file_size_mb: PositiveInt = Field(
        default=10,
        description="Maximum size per log file before rotation (MiB).",
    )
    retention_days: PositiveInt = Field(
        default=30,
        description="Number of days to keep rotated log files.",
    )

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return normalized

    @field_validator("file_path", mode="before")
    @classmethod
    def _blank_path(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @model_validator(mode="after")
    def _resolve_path(self) -> "LoggingConfig":
        if self.file_path is not None and not self.file_path.is_absolute():
            object.__setattr__(self, "file_path", self.file_path.resolve())
        return self


class Config(StrictModel):
    """Complete crawler configuration model."""

    app: AppSettings = Field(default_factory=AppSettings)
    collection: CollectionConfig = Field(default_factory=CollectionConfig)
    query: QueryConfig = Field(default_factory=QueryConfig)
    newsapi: NewsAPIConfig = Field(default_factory=NewsAPIConfig)
    guardian: GuardianConfig = Field(default_factory=GuardianConfig)
    gdelt: GdeltConfig = Field(default_factory=GdeltConfig)
    x: XConfig = Field(default_factory=XConfig)
    rss: RSSConfig = Field(default_factory=RSSConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    _metadata: object = PrivateAttr(default=None)

    @field_validator("newsapi", "guardian", "x", mode="before")
    @classmethod
    def _blank_secrets(cls, value: Any) -> Any:
        # TOML has no null, so unset credentials round-trip as "".
        if isinstance(value, dict):
            return {
                key: (None if item == "" and key in {"api_key", "bearer_token"} else item)
                for key, item in value.items()
            }
        return value


DEFAULT_CONFIG = Config()


def iter_field_docs(
    model: BaseModel | type[BaseModel],
    prefix: str = "",
    *,
    include_defaults: bool = True,
) -> Iterable[dict[str, object]]:
    """Yield flattened schema documentation entries."""

    instance = DEFAULT_CONFIG if isinstance(model, type) else model
    target_model = type(instance) if not isinstance(model, type) else model

    for name, field in target_model.model_fields.items():
        value = getattr(instance, name, field.default)
        key = f"{prefix}{name}" if not prefix else f"{prefix}.{name}"
        is_nested = isinstance(value, BaseModel)
        entry: dict[str, object] = {
            "name": key,
            "type": getattr(field.annotation, "__name__", str(field.annotation)),
            "description": field.description or "",
            "default": None if (is_nested or not include_defaults) else value,
            "examples": field.examples or [],
            "constraints": _describe_constraints(field),
            "is_nested": is_nested,
        }
        yield entry
        if is_nested:
            yield from iter_field_docs(value, key)


def _describe_constraints(field: Any) -> str:
    """Return a human readable description of field constraints."""

    parts: list[str] = []
    for meta in getattr(field, "metadata", []):
        for attr, comparator in (("ge", ">="), ("gt", ">"), ("le", "<="), ("lt", "<")):
            bound = getattr(meta, attr, None)
            if bound is not None:
                parts.append(f"{comparator} {bound}")
    return ", ".join(parts)


__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "DEFAULT_USER_AGENT",
    "iter_field_docs",
]
