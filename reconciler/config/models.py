"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .duration import DurationParseError, parse_duration, validate_duration_range


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


class DatePosted(str, Enum):
    """Posting-age filters accepted by the JSearch API."""

    ALL = "all"
    TODAY = "today"
    THREE_DAYS = "3days"
    WEEK = "week"
    MONTH = "month"


class SearchConfig(BaseModel):
    """Paging and filter settings applied to every search query."""

    start_page: int = Field(1, ge=1, le=100, description="First result page to request")
    pages_per_query: int = Field(
        2, ge=1, le=20, description="Number of result pages fetched per query (num_pages)"
    )
    country: str = Field("us", min_length=2, max_length=2, description="ISO country code")
    date_posted: DatePosted = Field(DatePosted.MONTH, description="Only jobs posted within this window")

    @field_validator("country")
    @classmethod
    def lowercase_country(cls, v: str) -> str:
        """Country codes are sent lower-case."""
        return v.strip().lower()

    model_config = {"use_enum_values": True, "validate_default": True}


class ReferenceStoreConfig(BaseModel):
    """Location and layout of the reference company store."""

    url: str = Field(..., min_length=1, description="Base URL of the Supabase project")
    companies_table: str = Field("companies", min_length=1)
    tracking_table: str = Field("tracking", min_length=1)
    page_size: int = Field(1000, ge=1, le=10000, description="Rows per page when loading companies")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        stripped = v.strip().rstrip("/")
        if not stripped.startswith(("http://", "https://")):
            raise ValueError("url must start with http:// or https://")
        return stripped


class ReportConfig(BaseModel):
    """Shape of the run report."""

    unmatched_preview_limit: int = Field(
        20, ge=0, le=1000, description="Maximum unmatched employers listed in the report"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AdvancedConfig(BaseModel):
    """Advanced runtime settings."""

    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout for provider and store calls (seconds)"
    )
    user_agent: str = Field(
        "CompanyOpeningReconciler/1.0",
        min_length=1,
        description="User-Agent string for HTTP requests",
    )

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        """Strip whitespace from user agent."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for the reconciler."""

    search_queries: List[str] = Field(
        ..., min_length=1, description="Job search queries, run in this order"
    )
    reference_store: ReferenceStoreConfig = Field(..., description="Reference company store")
    search: SearchConfig = Field(default_factory=SearchConfig, description="Search settings")
    report: ReportConfig = Field(default_factory=ReportConfig, description="Report settings")
    scan_interval: str = Field("7d", description="Interval between runs in daemon mode")
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )
    advanced: AdvancedConfig = Field(
        default_factory=AdvancedConfig, description="Advanced runtime settings"
    )

    # Computed field
    scan_interval_seconds: Optional[int] = None

    @field_validator("search_queries")
    @classmethod
    def normalize_queries(cls, v: List[str]) -> List[str]:
        """Strip surrounding whitespace; repeated queries are kept and run each time."""
        queries: List[str] = []
        for query in v:
            stripped = query.strip()
            if not stripped:
                raise ValueError("Search queries cannot be empty or whitespace-only")
            queries.append(stripped)
        return queries

    @field_validator("scan_interval")
    @classmethod
    def validate_scan_interval(cls, v: str) -> str:
        """Validate that the scan interval parses and is within range."""
        try:
            validate_duration_range(parse_duration(v))
            return v
        except DurationParseError as e:
            raise ValueError(str(e)) from e

    @model_validator(mode="after")
    def compute_fields(self):
        """Compute derived fields."""
        self.scan_interval_seconds = parse_duration(self.scan_interval)
        return self
