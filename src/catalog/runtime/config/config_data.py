"""Typed view of ``config.yaml``.

Each section of the ``config:`` mapping has a model here. Every field has a
default, so a partial (or missing) file still produces a usable configuration.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field, model_validator
from sqlalchemy.engine import make_url


class CORSConfig(BaseModel):
    """Origins allowed to call the application from a browser."""

    origins: list[str] = Field(default_factory=lambda: ["http://localhost:8000"])
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE"]
    )
    allow_headers: list[str] = Field(default_factory=lambda: ["*"])


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Minimum level for every sink")
    format: Literal["json", "plain"] = Field(
        default="plain", description="Format of the file sink; the console is always plain"
    )
    file: str | None = Field(default=None, description="Optional log file, rotated by size")
    max_size_mb: int = Field(default=10, gt=0)
    backup_count: int = Field(default=5, ge=0)


class DatabaseConfig(BaseModel):
    url: str = Field(
        default="sqlite:///./catalog.db",
        description="SQLAlchemy URL; SQLite for development, PostgreSQL otherwise",
    )
    pool_size: int = Field(default=5, gt=0)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout: int = Field(default=30, gt=0, description="Seconds to wait for a connection")
    pool_recycle: int = Field(default=1800, description="Seconds before a connection is replaced")
    echo: bool = Field(default=False, description="Log every SQL statement")
    create_tables: bool = Field(
        default=True, description="Create missing tables when the web app starts"
    )
    password_env_var: str | None = Field(
        default=None,
        description="Variable holding the database password, kept out of the URL",
    )

    @computed_field
    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @computed_field
    @property
    def connection_string(self) -> str:
        """The URL to connect with, with the password from ``password_env_var`` if set."""
        if self.is_sqlite or not self.password_env_var:
            return self.url

        password = os.getenv(self.password_env_var)
        if not password:
            raise ValueError(f"Environment variable {self.password_env_var} not set")

        url = make_url(self.url)
        if url.password:
            logger.warning("Ignoring the password in the database URL in favour of {}", self.password_env_var)
        return url.set(password=password).render_as_string(hide_password=False)


class AppConfig(BaseModel):
    environment: Literal["development", "production", "test"] = "development"
    name: str = Field(default="Product Catalog", description="Shown in page titles")
    host: str = "localhost"
    port: int = 8000
    flash_signing_secret: str | None = Field(
        default=None, description="HMAC key for the flash cookie"
    )
    cors: CORSConfig = Field(default_factory=CORSConfig)

    @model_validator(mode="after")
    def _require_secret_in_production(self) -> AppConfig:
        if self.environment == "production" and not self.flash_signing_secret:
            raise ValueError("flash_signing_secret must be set in production")
        return self

    @property
    def base_url(self) -> str:
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class SecurityConfig(BaseModel):
    """Identity and cookie settings."""

    user_header: str = Field(
        default="X-User-ID",
        description="Header set by the trusted front proxy with the signed-in user's id",
    )
    flash_cookie_name: str = "catalog_flash"
    secure_cookies: bool = Field(default=False, description="Send cookies over HTTPS only")
    cookie_samesite: Literal["lax", "strict", "none"] = "lax"


class CatalogConfig(BaseModel):
    """Product listing behaviour."""

    per_page: int = Field(default=5, gt=0, description="Products per listing page")
    list_order: Literal["asc", "desc"] = Field(
        default="asc", description="Listing order by product id"
    )


class ConfigData(BaseModel):
    """Root of the ``config:`` mapping."""

    app: AppConfig = Field(default_factory=AppConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
