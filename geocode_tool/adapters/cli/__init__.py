# geocode_tool/adapters/cli/__init__.py

"""CLI adapter for geocode_tool"""

# Local imports
from geocode_tool.adapters.cli.main import main
from geocode_tool.adapters.cli.parser import create_argument_parser

__all__ = ["create_argument_parser", "main"]
