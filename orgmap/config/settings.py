import logging
from typing import Optional

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Slack Configuration
    slack_token: Optional[str] = Field(
        None, description="Bot/user token used for the Slack Web API."
    )
    slack_api_url: HttpUrl = Field(
        "https://slack.com/api", description="Base URL of the Slack Web API."
    )

    # Confluence Configuration
    confluence_url: Optional[HttpUrl] = Field(
        None, description="Base URL of the Confluence wiki (e.g. https://wiki.example.com)."
    )
    confluence_username: Optional[str] = Field(
        None, description="Username for Confluence basic auth."
    )
    confluence_api_token: Optional[str] = Field(
        None, description="API token (or password) for Confluence basic auth."
    )
    confluence_page_id: str = Field(
        "12159063", description="Content ID of the page holding the lead table."
    )

    # HTTP / Output
    http_timeout: float = Field(
        30.0, gt=0, description="Timeout in seconds for collaborator HTTP calls."
    )
    output_path: Optional[str] = Field(
        None, description="Optional file to write the resulting JSON payload to."
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    def missing_credentials(self) -> list[str]:
        """Names of the settings a live pass cannot run without."""
        required = {
            "SLACK_TOKEN": self.slack_token,
            "CONFLUENCE_URL": self.confluence_url,
            "CONFLUENCE_USERNAME": self.confluence_username,
            "CONFLUENCE_API_TOKEN": self.confluence_api_token,
        }
        return [name for name, value in required.items() if not value]


def load_settings(**overrides) -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings(**overrides)
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")

    log_level_upper = settings.log_level.upper()
    # Validate log_level even if loaded from .env
    if log_level_upper not in VALID_LOG_LEVELS:
        logging.warning(
            f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
        )
        settings.log_level = "INFO"
    else:
        settings.log_level = log_level_upper
    return settings
