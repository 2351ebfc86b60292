"""
Settings for a scrape run.

Values come from the environment (optionally a .env file) and can be
overridden from the command line. A Settings object is passed explicitly
to whatever needs it.

Dependencies: pydantic_settings
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from aiscrape.core.errors import ConfigurationError

GEMINI_URL_DEFAULT = "https://generativelanguage.googleapis.com"
GEMINI_MODEL_DEFAULT = "gemini-1.5-flash"

# setting name -> environment variable
ENV_VARS = {
    "api_key": "GEMINI_API_KEY",
    "model": "GEMINI_MODEL",
    "base_url": "GEMINI_BASE_URL",
    "chunk_length": "AISCRAPE_CHUNK_LENGTH",
    "max_chunks": "AISCRAPE_MAX_CHUNKS",
    "line_width": "AISCRAPE_LINE_WIDTH",
    "request_timeout": "AISCRAPE_TIMEOUT",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    api_key: Optional[str] = Field(
        default=None,
        validation_alias=ENV_VARS["api_key"],
        description="Gemini API key",
    )
    model: str = Field(
        default=GEMINI_MODEL_DEFAULT,
        validation_alias=ENV_VARS["model"],
        description="Gemini model identifier",
    )
    base_url: str = Field(
        default=GEMINI_URL_DEFAULT,
        validation_alias=ENV_VARS["base_url"],
    )
    chunk_length: int = Field(
        default=6000,
        gt=0,
        validation_alias=ENV_VARS["chunk_length"],
        description="Characters per chunk sent to the model",
    )
    max_chunks: int = Field(
        default=16,
        ge=0,
        validation_alias=ENV_VARS["max_chunks"],
        description="Chunks processed per page; later ones are dropped",
    )
    line_width: int = Field(
        default=80,
        gt=0,
        validation_alias=ENV_VARS["line_width"],
    )
    request_timeout: float = Field(
        default=300,
        gt=0,
        validation_alias=ENV_VARS["request_timeout"],
        description="Per-request timeout in seconds",
    )

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(f"{ENV_VARS['api_key']} not set")
        return self.api_key


def load_settings(env_file: Optional[str] = None, **overrides) -> Settings:
    """
    Build Settings from the environment and a .env file (./.env unless given).
    Overrides that are None are ignored so argparse defaults don't mask env values.
    """
    if env_file is not None and not Path(env_file).is_file():
        raise ConfigurationError(f"env file not found: {env_file}")

    # keyed by alias so init values and env values merge on the same key
    kwargs = {ENV_VARS[k]: v for k, v in overrides.items() if v is not None}
    if env_file is not None:
        kwargs["_env_file"] = env_file

    try:
        return Settings(**kwargs)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings:\n{e}") from e
