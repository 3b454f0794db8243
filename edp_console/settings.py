"""
Configuration settings for the EDP admin console.

This module provides a settings class with support for loading configuration
from TOML files and environment variables.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)


class DatabaseDriver(str, Enum):
    """Supported database drivers."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql+psycopg2"
    POSTGRESQL_ASYNC = "postgresql+asyncpg"


@dataclass(frozen=True)
class PlatformConfig:
    """Read-only platform configuration injected into links and services.

    Args:
        tenant: EDP tenant identifier
        dns_wildcard: Wildcard DNS domain of the cluster
        namespace: Namespace holding the pipeline and stage resources
    """

    tenant: str
    dns_wildcard: str
    namespace: str


class Settings(BaseSettings):
    """Main settings class for the admin console.

    Values come from environment variables (``EDP_`` prefix) first,
    then from the TOML config files.
    """

    model_config = SettingsConfigDict(
        toml_file=["settings.toml", "settings.custom.toml"], env_prefix="EDP_", extra="ignore"
    )

    # Server settings
    port: int = 8000
    host: str = "127.0.0.1"
    root_url: str = "/"
    debug: bool = False

    # Platform settings
    tenant: str = "edp"
    dns_wildcard: str = "example.com"
    namespace: str | None = None  # If None, will use {tenant}-edp-cicd

    # Orchestrator settings
    k8s_api_url: str = "https://kubernetes.default.svc"
    k8s_token: str | None = None
    k8s_token_path: str = "/var/run/secrets/kubernetes.io/serviceaccount/token"
    k8s_ca_path: str | None = None
    k8s_verify_ssl: bool = True
    k8s_timeout: float = 10.0

    # Database settings
    database_driver: DatabaseDriver = DatabaseDriver.SQLITE
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "edp_console"
    database_username: str = "postgres"
    database_password: str = "postgres"

    # Logging settings
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: str | None = None  # If None, will use ~/edp-console/logs
    log_rotation: str = "20 MB"
    log_retention: str = "1 week"
    log_format: str | None = None  # Use default if None

    @classmethod
    def settings_customize_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the sources for settings.

        Priority order: init arguments, environment variables, then TOML config files
        """
        return init_settings, env_settings, TomlConfigSettingsSource(settings_cls)

    @property
    def resource_namespace(self) -> str:
        """Namespace of the pipeline and stage custom resources."""
        return self.namespace or f"{self.tenant}-edp-cicd"

    @property
    def platform(self) -> PlatformConfig:
        """Get the platform configuration consumed by the core."""
        return PlatformConfig(
            tenant=self.tenant,
            dns_wildcard=self.dns_wildcard,
            namespace=self.resource_namespace,
        )

    @property
    def database_url(self) -> str:
        """Get the database URL for SQLAlchemy."""
        if self.database_driver == DatabaseDriver.SQLITE:
            return f"sqlite:///{self.database_name}.db"
        return (
            f"{self.database_driver.value}://{self.database_username}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    def get_log_dir(self) -> Path:
        """Get the log directory path.

        Returns:
            Path to the log directory. Uses log_dir if specified,
            otherwise ~/edp-console/logs.
        """
        if self.log_dir:
            return Path(self.log_dir)
        return Path.home() / "edp-console" / "logs"


@lru_cache
def get_settings() -> Settings:
    """Get the settings instance, with caching.

    Returns:
        Cached Settings instance
    """
    return Settings()


# Create a global settings instance for easy imports
settings = get_settings()
