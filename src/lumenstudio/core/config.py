"""Configuration management for Lumen Studio.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the LUMEN_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (LUMEN_* prefix)
2. .env file in the project root
3. Default values defined in StudioConfig

The API credential is the one exception to the prefix rule: it is also
accepted as ``GEMINI_API_KEY``, ``GOOGLE_API_KEY`` or ``API_KEY`` so that an
existing Gemini setup works unchanged.

Example .env file:
    LUMEN_API_KEY=...
    LUMEN_TEXT_MODEL=gemini-2.5-flash
    LUMEN_IMAGE_MODEL=gemini-2.5-flash-image
    LUMEN_SERVER_PORT=7860

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
Creating it never fails when the credential is absent; the credential is
checked once, at startup, by :meth:`StudioConfig.require_api_key`.

Usage Example
-------------
    from lumenstudio.core.config import config

    print(config.image_model)
    key = config.require_api_key()

Model Selection
---------------
Three remote model identifiers are used:
- text_model: text and vision analysis (prompt builder, analysis, feedback)
- image_model: multimodal image editing/synthesis (edit, merge, relight...)
- generation_model: pure text-to-image generation (generator, merge backgrounds)
"""

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from lumenstudio.core.errors import ConfigurationError


class StudioConfig(BaseSettings):
    """Main configuration for Lumen Studio.

    Attributes
    ----------
    Remote Service:
        api_key : str | None
            Credential for the remote generation service
        text_model : str
            Model used for text-output operations
        image_model : str
            Model used for image-output operations that take input images
        generation_model : str
            Text-to-image model used by the generator
        generation_mime_type : str
            Output MIME type requested from the text-to-image model

    Server Settings:
        server_host : str
            Server bind address (0.0.0.0 for local network)
        server_port : int
            Server port (1024-65535)
        cors_origins : list[str]
            Allowed CORS origins for the browser front end
        log_level : str
            Root logging level for the server

    Notes
    -----
    - Configuration is immutable after initialization
    - To modify config, set environment variables and restart the application

    Examples
    --------
        >>> custom_config = StudioConfig(
        ...     api_key="test-key",
        ...     image_model="gemini-2.5-flash-image",
        ... )
        >>> custom_config.require_api_key()
        'test-key'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LUMEN_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Remote service
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "api_key", "LUMEN_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY"
        ),
        description="Credential for the remote generation service",
    )
    text_model: str = Field(
        default="gemini-2.5-flash",
        description="Text/vision model for analysis and prompt writing",
    )
    image_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Image editing/synthesis model (must be asked for IMAGE output)",
    )
    generation_model: str = Field(
        default="imagen-4.0-generate-001",
        description="Text-to-image model for the generator",
    )
    generation_mime_type: str = Field(
        default="image/png",
        description="Output MIME type requested from the text-to-image model",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins for the browser front end",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level",
    )

    def require_api_key(self) -> str:
        """Return the API key or fail fast.

        Raises:
            ConfigurationError: If no credential was configured.  This is a
                startup-time condition, not a per-call error.
        """
        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError(
                "Missing API key: set LUMEN_API_KEY (or GEMINI_API_KEY) in the environment"
            )
        return self.api_key.strip()


# Global configuration instance
# Loads values from environment variables (LUMEN_* prefix) and .env file.
config = StudioConfig()
