"""Catalog server configuration via environment variables and an optional .env file."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.validators import RawStringListEnvSettingsSource, parse_origin_list

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource


class CatalogServerSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    # Connection string for the game store -- required, no default.
    # DB_CONNECT is accepted for deployments configured for the old service.
    database_url: str = Field(
        min_length=1,
        validation_alias=AliasChoices("CATALOG_DATABASE_URL", "DB_CONNECT"),
    )

    log_dir: str | None = None
    cors_origins: list[str] = ["*"]
    docs_title: str = "CRUD operations Python & SQLite"
    server_url: str = "http://localhost:3000/"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        return parse_origin_list(v)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, RawStringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings)
