"""
Imager - two-tier image repository.

This package contains:
- Core value types, errors and settings (core/)
- Naming helpers: sharding, thumbnail names, fresh names (libs/)
- The filesystem Repository (storage/)
- Logging setup (observability/)
"""

from imager.core.errors import (
    DirectoryUnavailableError,
    ImagerError,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
)
from imager.core.types import ImageHandle, PlainName, ThumbnailName
from imager.storage.repository import Repository

__all__ = [
    "ImageHandle",
    "PlainName",
    "ThumbnailName",
    "Repository",
    "ImagerError",
    "InvalidArgumentError",
    "NotFoundError",
    "DirectoryUnavailableError",
    "PermissionDeniedError",
]
