"""Storage exports."""

from imager.storage.repository import Repository

__all__ = ["Repository"]
