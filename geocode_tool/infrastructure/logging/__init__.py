# geocode_tool/infrastructure/logging/__init__.py

"""Logging infrastructure for geocode_tool.

This module provides centralized logging configuration and setup.
"""

# Local imports
from geocode_tool.infrastructure.logging._setup import get_default_log_path
from geocode_tool.infrastructure.logging._setup import set_up_logging as setup_logging

__all__ = ["setup_logging", "get_default_log_path"]
