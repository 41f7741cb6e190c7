# geocode_tool/infrastructure/config/__init__.py

"""Configuration infrastructure for geocode_tool.

This module manages configuration loading, validation, and models.
"""

# Local imports
from geocode_tool.infrastructure.config._loader import ConfigLoader
from geocode_tool.infrastructure.config._loader import get_config
from geocode_tool.infrastructure.config._models import AppConfig
from geocode_tool.infrastructure.config._models import CachingConfig
from geocode_tool.infrastructure.config._models import LoggingConfig
from geocode_tool.infrastructure.config._models import ProviderConfig

__all__ = [
    "AppConfig",
    "CachingConfig",
    "ConfigLoader",
    "LoggingConfig",
    "ProviderConfig",
    "get_config",
]
