"""
Centralized configuration for the Finearr backend.

Settings are loaded from constructor arguments, environment variables
(prefixed with FINEARR_, nested with __), a .env file and finally an
optional config.json in the working directory.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel, to_snake
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class PlexSettings(BaseModel):
    """Plex identity provider settings."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    api_base: str = "https://plex.tv/api/v2"
    auth_app_url: str = "https://app.plex.tv/auth#"
    client_identifier: str = "finearr"
    product: str = "Finearr"
    token_header: str = "X-Plex-Token"
    timeout: float = 15.0


class DownloaderTarget(BaseModel):
    """
    A downstream download manager (Radarr for movies, Sonarr for shows).

    A target without a base URL or API key is considered unconfigured.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    base_url: str = ""
    api_key: str = ""
    quality_profile_id: Optional[int] = None
    root_folder_path: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.api_key)


class SSLSettings(BaseModel):
    """TLS material used when serving HTTPS."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    enabled: bool = False
    key_path: Optional[Path] = None
    cert_path: Optional[Path] = None
    ca_path: Optional[Path] = None


def _snake_keys(value: Any) -> Any:
    if isinstance(value, dict):
        return {to_snake(key): _snake_keys(item) for key, item in value.items()}
    return value


class CamelCaseJsonConfigSource(JsonConfigSettingsSource):
    """
    config.json source that also accepts camelCase keys.

    Keys are normalized to field names so that nested environment
    variables still merge over (and win against) values from the file.
    """

    def _read_file(self, file_path: Path) -> dict[str, Any]:
        return _snake_keys(super()._read_file(file_path))


class Settings(BaseSettings):
    """Application settings loaded from environment variables and config.json."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FINEARR_",
        env_nested_delimiter="__",
        json_file="config.json",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Finearr"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False
    ssl: SSLSettings = SSLSettings()

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Storage
    data_dir: Path = Path("data")

    # Presentation preference handed to newly created users
    default_background: str = ""

    # Identity provider
    plex: PlexSettings = PlexSettings()

    # Fulfillment targets
    radarr: DownloaderTarget = DownloaderTarget()
    sonarr: DownloaderTarget = DownloaderTarget()
    dispatch_timeout: float = 15.0

    # Admin sessions
    admin_session_secret: str = ""
    admin_session_ttl_minutes: int = 720

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            CamelCaseJsonConfigSource(settings_cls),
            file_secret_settings,
        )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
