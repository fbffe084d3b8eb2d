"""
API Configuration Management

Provides centralized configuration handling with environment-aware settings
management and secure handling of the live agent credentials.

Design Considerations:
- Environment-specific configuration profiles
- Secret values never echoed in logs or reprs
- Default values with proper documentation
"""

from enum import Enum
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field, SecretStr, field_validator

from src.email_triage.models import AgentClientConfig, AgentMode


class EnvironmentType(str, Enum):
    """Valid environment types for configuration context."""
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"


class APISettings(BaseSettings):
    """
    API configuration settings loaded from the environment and .env file.

    The agent settings provide the default mode and live endpoint used
    when a request does not specify its own.
    """
    # Environment Configuration
    ENVIRONMENT: EnvironmentType = Field(
        default=EnvironmentType.DEVELOPMENT,
        description="Runtime environment context"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level"
    )
    LOG_FILE: Optional[str] = Field(
        default=None,
        description="Optional log file path"
    )

    # API Settings
    API_TITLE: str = Field(
        default="Email Triage API",
        description="API title for documentation"
    )
    API_DESCRIPTION: str = Field(
        default="Email triage analysis and response draft generation",
        description="API description for documentation"
    )
    API_VERSION: str = Field(
        default="1.0.0",
        description="API version"
    )

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="*",
        description="Comma-separated list of allowed origins for CORS"
    )

    # Agent Settings
    AGENT_MODE: AgentMode = Field(
        default=AgentMode.SIMULATED,
        description="Default analysis mode"
    )
    AGENT_ENDPOINT: Optional[str] = Field(
        default=None,
        description="Live agent endpoint URL"
    )
    AGENT_API_KEY: Optional[SecretStr] = Field(
        default=None,
        description="Bearer token for the live agent endpoint"
    )
    SCENARIO_LIBRARY_PATH: Optional[str] = Field(
        default=None,
        description="Scenario library JSON file; the packaged library when unset"
    )
    SIMULATED_DELAY_ENABLED: bool = Field(
        default=True,
        description="Add artificial latency to simulated analyses"
    )

    @field_validator("CORS_ORIGINS")
    @classmethod
    def parse_cors_origins(cls, value: str) -> list:
        """Parse comma-separated CORS origins into list."""
        if value == "*":
            return ["*"]
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    @field_validator("AGENT_ENDPOINT")
    @classmethod
    def blank_endpoint_is_unset(cls, value: Optional[str]) -> Optional[str]:
        """Treat an empty endpoint as not configured."""
        if value is not None and not value.strip():
            return None
        return value

    def agent_config(self) -> AgentClientConfig:
        """Default client configuration derived from the agent settings."""
        return AgentClientConfig(
            mode=self.AGENT_MODE,
            endpoint=self.AGENT_ENDPOINT,
            api_key=self.AGENT_API_KEY.get_secret_value() if self.AGENT_API_KEY else None
        )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore"
    }


def get_settings() -> APISettings:
    """
    Retrieve validated API settings.

    Returns:
        Validated API settings object

    Raises:
        ValidationError: If configuration fails validation
    """
    return APISettings()
