"""Configuration Management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Builder settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="PAGEBUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Storage
    storage_backend: Literal["file", "http"] = Field(default="file", description="Page store backend")
    storage_dir: str = Field(default="pages", description="Directory for file-backed pages")
    api_url: str = Field(default="http://localhost:5000", description="Page API base URL")
    request_timeout: float = Field(default=5.0, gt=0, description="Page API request timeout")
    temp_page_prefix: str = Field(default="page_", min_length=1, description="Prefix of unsaved page ids")

    # Assets
    upload_dir: str = Field(default="uploads", description="Directory for uploaded assets")
    public_base_url: str = Field(default="http://localhost:5000", description="Base URL for asset links")
    max_upload_size: int = Field(default=10 * 1024 * 1024, gt=0, description="Max upload size (bytes)")

    # Rendering
    html_lang: str = Field(default="en", min_length=1, description="Document language attribute")
    enable_render_cache: bool = Field(default=True, description="Memoise rendered pages")
    render_cache_size: int = Field(default=64, gt=0, description="Render cache max size")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
