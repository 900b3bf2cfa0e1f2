"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="Cinepage", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=3000, alias="PORT")

    database_url: str = Field(
        default="sqlite+aiosqlite:///./cinepage.db", alias="DATABASE_URL"
    )
    database_auto_create: bool = Field(default=True, alias="DATABASE_AUTO_CREATE")

    image_base_url: str = Field(
        default=DEFAULT_IMAGE_BASE_URL, alias="IMAGE_BASE_URL"
    )
    site_url: HttpUrl | None = Field(default=None, alias="SITE_URL")

    category_page_size: int = Field(
        default=20, alias="CATEGORY_PAGE_SIZE", ge=1, le=100
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )

    @field_validator("image_base_url", mode="before")
    @classmethod
    def _normalise_image_base_url(cls, value: object) -> str:
        """Strip trailing slashes so sizes can be appended directly."""

        if value is None:
            return DEFAULT_IMAGE_BASE_URL
        cleaned = str(value).strip().rstrip("/")
        if not cleaned:
            return DEFAULT_IMAGE_BASE_URL
        if not cleaned.startswith(("http://", "https://")):
            raise ValueError("IMAGE_BASE_URL must be an absolute http(s) URL")
        return cleaned

    @property
    def site_origin(self) -> str | None:
        """Return the public site origin without a trailing slash."""

        if self.site_url is None:
            return None
        return str(self.site_url).rstrip("/")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
