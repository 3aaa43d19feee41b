"""Typed errors raised by the image repository."""

from __future__ import annotations


class ImagerError(Exception):
    """Base class for all repository errors."""


class InvalidArgumentError(ImagerError, ValueError):
    """Raised when a caller passes an empty or missing image name."""


class NotFoundError(ImagerError, FileNotFoundError):
    """Raised when a resolved source or thumbnail path does not exist."""


class DirectoryUnavailableError(ImagerError, OSError):
    """Raised when a root directory does not exist and cannot be created."""


class PermissionDeniedError(ImagerError, PermissionError):
    """Raised when a root directory exists but is not writable."""


__all__ = [
    "ImagerError",
    "InvalidArgumentError",
    "NotFoundError",
    "DirectoryUnavailableError",
    "PermissionDeniedError",
]
