"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ALLOWED_MIME_PREFIXES = [
    "image/",
    "video/",
    "audio/",
    "text/",
    "application/pdf",
    "application/zip",
    "application/x-zip-compressed",
    "application/msword",
    "application/vnd.openxmlformats-officedocument",
    "application/json",
    "application/javascript",
]


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3001
    reload: bool = False


class ContentSettings(BaseModel):
    ttl_seconds: int = Field(default=10 * 60, gt=0)
    sweep_interval: float = Field(default=30, gt=0)
    max_file_size: int = Field(default=100 * 1024 * 1024, gt=0)
    max_text_length: int = Field(default=1000, gt=0)
    upload_chunk_size: int = Field(default=1024 * 1024, gt=0)
    allowed_mime_prefixes: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_MIME_PREFIXES))


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    project_name: str = "LAN Share"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    content: ContentSettings = ContentSettings()

    static_dir: Path = Path("dist")

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def content_ttl(self) -> int:
        return self.content.ttl_seconds

    @property
    def sweep_interval(self) -> float:
        return self.content.sweep_interval


@lru_cache()
def get_settings() -> Settings:
    return Settings()
