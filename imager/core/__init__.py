"""
Core Layer - value types, errors and configuration.

This package contains:
- Configuration management (settings.py)
- Core data types (types.py) - ImageHandle and tagged parse results
- Typed repository errors (errors.py)
"""

from imager.core.types import ImageHandle, ParsedName, PlainName, ThumbnailName

__all__ = ["ImageHandle", "ParsedName", "PlainName", "ThumbnailName"]
