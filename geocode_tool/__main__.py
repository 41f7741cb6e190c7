#!/usr/bin/env python3
"""
Geocode Tool - Main Entry Point

This module allows the package to be run as a script:
    python -m geocode_tool
"""

# Local imports
from geocode_tool.adapters.cli.main import main

if __name__ == "__main__":
    raise SystemExit(main())
