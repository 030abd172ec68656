"""Configuration management for the restaurant booking tools using Pydantic."""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Google Places Configuration
    google_maps_api_key: str | None = Field(None, description="Google Maps API key")
    places_api_base_url: str = Field(
        default="https://places.googleapis.com/v1",
        description="Base URL of the Google Places API (New)",
    )
    places_request_timeout: float = Field(
        default=10.0, gt=0, description="Places API request timeout in seconds"
    )
    places_max_results: int = Field(
        default=20, ge=1, le=20, description="Maximum places returned per search"
    )

    # Search Defaults (Taichung, Taiwan)
    default_latitude: float = Field(
        default=24.1501164, ge=-90, le=90, description="Default search latitude"
    )
    default_longitude: float = Field(
        default=120.6692299, ge=-180, le=180, description="Default search longitude"
    )
    default_search_radius: int = Field(
        default=3000, gt=0, description="Default search radius in meters"
    )
    default_locale: str = Field(default="en", description="Default response locale")

    # OpenAI Configuration
    openai_api_key: str | None = Field(None, description="OpenAI API key")
    agent_model: str = Field(default="gpt-4o", description="OpenAI model for agents")
    conversation_db: str = Field(
        default="conversations.db",
        description="SQLite file backing agent conversation memory",
    )

    # Server Configuration
    server_host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=3000, description="Server port")
    server_url: str = Field(
        default="http://localhost:3000",
        description="Server URL for CLI to connect to API",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")

    def has_places_config(self) -> bool:
        """Check if the Google Places API is configured."""
        return bool(self.google_maps_api_key)

    def has_agent_config(self) -> bool:
        """Check if the booking agent can be run."""
        return bool(self.openai_api_key)

    def model_post_init(self, __context) -> None:
        """Validate configuration after initialization."""
        if not self.google_maps_api_key:
            logger.warning("GOOGLE_MAPS_API_KEY not set - restaurant search disabled")

        if not self.openai_api_key:
            logger.warning("OPENAI_API_KEY not set - agent endpoint disabled")


# Global config instance
config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global config
    if config is None:
        config = Config()
    return config


def setup_logging(cfg: Config | None = None) -> None:
    """Configure logging for the application."""
    if cfg is None:
        cfg = get_config()

    log_level = getattr(logging, cfg.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
