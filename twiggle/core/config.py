"""
Application configuration.

Loads settings from environment variables and .env file.
Rate limiter quotas are not settings: they are fixed policies defined
in ``twiggle.shared.security.rate_limiting``.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        description: Short description used in the OpenAPI document.
        version: Current API version string.
        debug: Enable debug mode (interactive docs). Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        rate_limit_per_client: Count permits per client address instead of
            one shared bucket per policy.
        supported_media_types: Request media types reported back to clients
            when a body is sent with an unsupported ``Content-Type``.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    project_name: str = "Twiggle"
    description: str = "API endpoints for Urban Garden Planner"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    rate_limit_per_client: bool = False
    supported_media_types: list[str] = ["application/json"]


settings = Settings()
