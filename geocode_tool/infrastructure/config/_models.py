# geocode_tool/infrastructure/config/_models.py

"""Pydantic models for configuration with validation"""

# Standard library imports
from os import environ
from pathlib import Path

# Third party imports
from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator

# Local imports
from geocode_tool.core.domain.constants import DEFAULT_COUNTRY_CODE
from geocode_tool.core.domain.constants import DEFAULT_DIRECTIONS_PATH
from geocode_tool.core.domain.constants import DEFAULT_DISTANCE_MATRIX_PATH
from geocode_tool.core.domain.constants import DEFAULT_GEOCODE_PATH
from geocode_tool.core.domain.constants import DEFAULT_PROVIDER_HOST
from geocode_tool.core.domain.enums import StorageBackend
from geocode_tool.core.types.json import JSONDict

# Environment variables that override file configuration
ENV_GEOCODER_KEY = "GEOCODER_KEY"
ENV_DATA_DIR = "DATA_DIR"
ENV_BUCKET_NAME = "BUCKET_NAME"


class ProviderConfig(BaseModel):
    """Geocoding provider configuration"""

    api_key: str = Field("", description="Provider API key (required)")
    host: str = Field(DEFAULT_PROVIDER_HOST, description="Provider base URL")
    geocode_path: str = Field(DEFAULT_GEOCODE_PATH, description="Geocoding endpoint path")
    directions_path: str = Field(DEFAULT_DIRECTIONS_PATH, description="Directions endpoint path")
    distance_matrix_path: str = Field(
        DEFAULT_DISTANCE_MATRIX_PATH, description="Distance matrix endpoint path"
    )
    timeout: float = Field(10.0, gt=0, description="Default HTTP timeout in seconds")
    default_country: str = Field(
        DEFAULT_COUNTRY_CODE, min_length=1, description="Country used when none is given"
    )

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Require an absolute http(s) URL without a trailing slash"""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Provider host must start with http:// or https://, got {v}")
        return v.rstrip("/")

    @field_validator("geocode_path", "directions_path", "distance_matrix_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Endpoint paths are absolute"""
        return v if v.startswith("/") else f"/{v}"


class CachingConfig(BaseModel):
    """Caching and cache backup configuration"""

    enabled: bool = Field(False, description="Enable the local geocode cache")
    data_dir: str = Field("data", description="Directory holding the geo/ cache directory")
    bucket_name: str = Field("", description="Remote bucket for cache backup, empty to disable")
    storage_backend: StorageBackend = Field(
        StorageBackend.LOCAL, description="Object storage implementation"
    )
    storage_dir: str = Field(
        "local_filestore", description="Root directory for the local storage backend"
    )
    region: str | None = Field(None, description="Region for the S3 storage backend")
    endpoint_url: str | None = Field(None, description="Endpoint override for S3-compatible stores")


class LoggingConfig(BaseModel):
    """Logging configuration"""

    debug: bool = Field(False, description="Enable debug logging")
    log_file: str | None = Field(None, description="Log file path")


class AppConfig(BaseModel):
    """Root application configuration model"""

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    caching: CachingConfig = Field(default_factory=CachingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> "AppConfig":
        """Load configuration from JSON file with defaults and env overrides

        Args:
            config_path: Path to configuration JSON file

        Returns:
            Validated AppConfig instance
        """
        # Standard library imports
        import json

        if isinstance(config_path, str):
            config_path = Path(config_path)

        # If no path provided, try to find config.json in current directory
        if config_path is None:
            config_path = Path("config.json")

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                config = cls.model_validate(data)
            except Exception as e:
                # Standard library imports
                import logging

                logging.getLogger(__name__).warning(
                    f"Failed to load config from {config_path}: {e}. Using defaults."
                )
                config = cls()
        else:
            config = cls()

        return config.with_env_overrides()

    def with_env_overrides(self) -> "AppConfig":
        """Return a copy with GEOCODER_KEY, DATA_DIR and BUCKET_NAME applied"""
        provider_updates: dict[str, str] = {}
        caching_updates: dict[str, str] = {}
        if environ.get(ENV_GEOCODER_KEY):
            provider_updates["api_key"] = environ[ENV_GEOCODER_KEY]
        if environ.get(ENV_DATA_DIR):
            caching_updates["data_dir"] = environ[ENV_DATA_DIR]
        if environ.get(ENV_BUCKET_NAME):
            caching_updates["bucket_name"] = environ[ENV_BUCKET_NAME]

        if not provider_updates and not caching_updates:
            return self
        return self.model_copy(
            update={
                "provider": self.provider.model_copy(update=provider_updates),
                "caching": self.caching.model_copy(update=caching_updates),
            }
        )

    def to_dict(self) -> JSONDict:
        """Convert to dictionary"""
        return self.model_dump(mode="json")
