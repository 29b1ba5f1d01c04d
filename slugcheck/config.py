"""Configuration management using Pydantic BaseSettings.

This module provides centralized configuration management with validation,
type safety, and sensible defaults for the slug checker.  Values come from
the process environment and an optional ``.env`` file.
"""
from typing import Dict, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Main configuration class combining all settings."""

    # Kontent.ai environment
    kontent_project_id: str = Field("", description="Kontent.ai project (environment) ID")
    kontent_environment_id: str = Field("", description="Kontent.ai environment ID")
    kontent_delivery_api_key: str = Field("", description="Secure access key for the Delivery API")
    kontent_management_api_key: str = Field("", description="Management API key (informational only)")

    # Languages
    kontent_languages: str = Field("", description="Comma-separated language codenames to scan")
    kontent_default_language: str = Field("en", description="Language used when none are configured")

    # Content model
    kontent_content_type: str = Field("page", description="Content type codename holding slugs")
    kontent_slug_fields: str = Field("url_slug,slug", description="Ordered, comma-separated slug element codenames")

    # Delivery API transport
    delivery_base_url: str = Field("https://deliver.kontent.ai", description="Delivery API base URL")
    delivery_page_size: int = Field(500, ge=1, le=2000, description="Items requested per page")
    delivery_timeout: int = Field(30, ge=5, le=300, description="Request timeout in seconds")

    # Search diagnostics
    similar_slugs_limit: int = Field(20, ge=0, le=500, description="Max similar slugs reported by the all-items scan")

    # Logging
    log_level: str = Field("INFO", description="Logging level")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore"
    }

    @field_validator('kontent_slug_fields')
    @classmethod
    def validate_slug_fields(cls, v):
        fields = [f.strip() for f in v.split(',') if f.strip()]
        if not fields:
            raise ValueError('kontent_slug_fields must name at least one element')
        return ",".join(fields)

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'Invalid log level: {v}. Valid options: {valid_levels}')
        return v.upper()

    @property
    def delivery_environment_id(self) -> str:
        """Environment the Delivery API is queried against.

        The environment ID wins over the legacy project ID when both are set.
        """
        return self.kontent_environment_id or self.kontent_project_id

    def get_slug_fields(self) -> List[str]:
        """Return slug element codenames in priority order."""
        return [f.strip() for f in self.kontent_slug_fields.split(',') if f.strip()]

    def get_configured_languages(self) -> List[str]:
        """Return the configured languages or fall back to the default language."""
        languages = [lang.strip() for lang in self.kontent_languages.split(',') if lang.strip()]
        if languages:
            return languages
        return [self.kontent_default_language or "en"]

    def is_config_valid(self) -> bool:
        """Check if the required content source identifier is present."""
        return bool(self.delivery_environment_id)

    def get_config_status(self) -> Dict[str, str]:
        """Return configuration identifiers for display."""
        return {
            "project_id": self.kontent_project_id,
            "environment_id": self.kontent_environment_id,
        }

    def validate_configuration(self) -> List[str]:
        """Validate the complete configuration and return any issues."""
        issues = []

        if not self.is_config_valid():
            issues.append("KONTENT_PROJECT_ID or KONTENT_ENVIRONMENT_ID is required")

        if not self.delivery_base_url.startswith(("http://", "https://")):
            issues.append("DELIVERY_BASE_URL must be an http(s) URL")

        if self.delivery_page_size < 50:
            issues.append("DELIVERY_PAGE_SIZE is very low, scans will need many requests")

        return issues

    def log_configuration(self) -> None:
        """Log the current configuration (sanitized)."""
        from slugcheck.utils.logger import log_info

        log_info("Configuration loaded",
                has_project_id=bool(self.kontent_project_id),
                has_environment_id=bool(self.kontent_environment_id),
                has_delivery_key=bool(self.kontent_delivery_api_key),
                content_type=self.kontent_content_type,
                slug_fields=self.get_slug_fields(),
                languages=self.get_configured_languages(),
                default_language=self.kontent_default_language,
                page_size=self.delivery_page_size,
                log_level=self.log_level)


# Global configuration instance (lazy loading)
_config = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload configuration from environment variables."""
    global _config
    _config = Config()
    return _config
