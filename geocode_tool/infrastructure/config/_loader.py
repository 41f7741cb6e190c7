# geocode_tool/infrastructure/config/_loader.py

"""Main configuration loader using Pydantic models"""

# Standard library imports
from logging import getLogger

# Local imports
from geocode_tool.core.types.json import JSONDict
from geocode_tool.infrastructure.config._models import AppConfig
from geocode_tool.infrastructure.config._models import CachingConfig
from geocode_tool.infrastructure.config._models import LoggingConfig
from geocode_tool.infrastructure.config._models import ProviderConfig

logger = getLogger(__name__)


class ConfigLoader:
    """Configuration loader exposing the validated config sections"""

    def __init__(self, config_path: str | None = None):
        """Initialize configuration loader

        Args:
            config_path: Path to JSON configuration file, None for auto-detection
        """
        self.config_path = config_path
        self._app_config = AppConfig.load(config_path)

    @property
    def app_config(self) -> AppConfig:
        """Root configuration model"""
        return self._app_config

    @property
    def config(self) -> JSONDict:
        """Full config as dict"""
        return self._app_config.to_dict()

    @property
    def provider(self) -> ProviderConfig:
        """Geocoding provider configuration"""
        return self._app_config.provider

    @property
    def caching(self) -> CachingConfig:
        """Caching configuration"""
        return self._app_config.caching

    @property
    def logging(self) -> LoggingConfig:
        """Logging configuration"""
        return self._app_config.logging


# Global default instance
_default_config: ConfigLoader | None = None


def get_config(config_path: str | None = None) -> ConfigLoader:
    """Get configuration loader instance

    Args:
        config_path: Path to configuration file, None for default

    Returns:
        ConfigLoader instance
    """
    global _default_config

    if config_path:
        return ConfigLoader(config_path)

    if _default_config is None:
        _default_config = ConfigLoader(None)

    return _default_config
