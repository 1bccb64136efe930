"""
Package Comparison Configuration

This module handles configuration models and logging for the comparison library.
"""

import logging
import os
from datetime import date

import structlog
from pydantic import BaseModel, Field, field_validator

# Configure simple structured logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Create comparison logger
compare_logger = structlog.get_logger("pkgcompare")


class CompareConfig(BaseModel):
    """Configuration for the upstream data providers."""

    registry_url: str = Field(default="https://registry.npmjs.org", description="npm registry base URL")
    downloads_url: str = Field(default="https://api.npmjs.org", description="npm download statistics base URL")
    bundle_url: str = Field(default="https://bundlephobia.com", description="Bundle size analysis base URL")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    search_page_size: int = Field(default=20, description="Suggestions returned per search page")
    min_query_length: int = Field(default=3, description="Shortest query that triggers a search request")
    downloads_start_date: str = Field(default="2010-01-01", description="First day of the total downloads range")
    keyword_preview: int = Field(default=5, description="Keywords shown on an overview card")

    @field_validator("registry_url", "downloads_url", "bundle_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        if not v:
            raise ValueError("base URL must not be empty")
        return v.rstrip("/")

    @field_validator("downloads_start_date")
    @classmethod
    def validate_start_date(cls, v):
        try:
            date.fromisoformat(v)
        except ValueError:
            raise ValueError(f"downloads_start_date must be YYYY-MM-DD, got {v!r}")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("search_page_size", "min_query_length", "keyword_preview")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @classmethod
    def from_env(cls) -> "CompareConfig":
        """Build a configuration from PKGCOMPARE_* environment variables."""
        overrides = {}
        env_map = {
            "PKGCOMPARE_REGISTRY_URL": "registry_url",
            "PKGCOMPARE_DOWNLOADS_URL": "downloads_url",
            "PKGCOMPARE_BUNDLE_URL": "bundle_url",
            "PKGCOMPARE_TIMEOUT": "timeout",
            "PKGCOMPARE_DOWNLOADS_START_DATE": "downloads_start_date",
            "PKGCOMPARE_SEARCH_PAGE_SIZE": "search_page_size",
            "PKGCOMPARE_MIN_QUERY_LENGTH": "min_query_length",
            "PKGCOMPARE_KEYWORD_PREVIEW": "keyword_preview",
        }
        for env_name, field_name in env_map.items():
            value = os.getenv(env_name)
            if value:
                overrides[field_name] = value

        return cls(**overrides)
