"""Configuration management for MockupAI Studio.

This module provides centralized configuration management using Pydantic Settings.
Configuration is loaded from environment variables with the MOCKUPSTUDIO_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (MOCKUPSTUDIO_* prefix)
2. .env file in the project root
3. Default values defined in MockupStudioConfig

Example .env file:
    MOCKUPSTUDIO_API_KEY=your-gemini-api-key
    MOCKUPSTUDIO_SERVER_PORT=7860

The API key is the only value without a default. It is also accepted as
``GEMINI_API_KEY`` or ``API_KEY`` so existing Gemini setups work unchanged.

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
A missing API key does not fail the import; it fails when the generation
client is built at server startup (see :meth:`MockupStudioConfig.require_api_key`).

Usage Example
-------------
    from mockupstudio.core.config import config

    print(config.edit_model)
    print(config.server_port)

Security
--------
The key is stored as a ``SecretStr`` so it never shows up in ``repr()`` or
log output. It stays on the server: the browser page only talks to the
MockupAI Studio API, never to Gemini directly.
"""

from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

API_KEY_ENV_VARS = ("MOCKUPSTUDIO_API_KEY", "GEMINI_API_KEY", "API_KEY")


class MockupStudioConfig(BaseSettings):
    """Main configuration for MockupAI Studio.

    Attributes
    ----------
    Credentials:
        api_key : SecretStr | None
            Gemini API key. Required to start the server.

    Models:
        edit_model : str
            Gemini model used for logo mockups (image + instruction in, image out)
        generation_model : str
            Imagen model used for text-to-image generation

    Server:
        server_host : str
            Bind address for uvicorn
        server_port : int
            Port for uvicorn (1024-65535)
        max_sessions : int
            In-memory session cap (least recently used idle sessions are evicted)
        templates_dir : Path
            Directory holding ``index.html``

    Examples
    --------
    Create a configuration for tests:

        >>> cfg = MockupStudioConfig(api_key="test-key")
        >>> cfg.require_api_key()
        'test-key'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MOCKUPSTUDIO_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Credentials
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(*API_KEY_ENV_VARS),
        description="Gemini API key (kept server-side only)",
    )

    # Model identifiers
    edit_model: str = Field(
        default="gemini-2.5-flash-image",
        description="Gemini model for image editing (mockups)",
    )
    generation_model: str = Field(
        default="imagen-4.0-generate-001",
        description="Imagen model for text-to-image generation",
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
    max_sessions: int = Field(
        default=256,
        description="Live sessions kept in memory before the least recently used idle one is dropped",
        ge=1,
    )
    templates_dir: Path = Field(
        default=Path(__file__).resolve().parents[1] / "templates",
        description="Directory containing index.html",
    )

    def require_api_key(self) -> str:
        """Return the API key as plain text.

        Raises:
            RuntimeError: If no key was configured.
        """
        if self.api_key is None or not self.api_key.get_secret_value().strip():
            raise RuntimeError(
                f"Gemini API key is not configured. Set one of: {', '.join(API_KEY_ENV_VARS)}"
            )
        return self.api_key.get_secret_value().strip()


# Global configuration instance
config = MockupStudioConfig()
