"""Two-tier image repository: sources and thumbnails on the local filesystem.

Every file lives at ``<root>/<sub_path(name)>/<name>``. Saving moves a staged
file into place with a single rename, so a crash never leaves both the staged
file and its destination behind.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

from imager.core.errors import (
    DirectoryUnavailableError,
    InvalidArgumentError,
    NotFoundError,
    PermissionDeniedError,
)
from imager.core.settings import DEFAULT_FILE_MODE, Settings
from imager.core.types import ImageHandle
from imager.libs.naming import create_name, get_sub_path, parse_name
from imager.observability.logger import get_logger


def _validate_name(name: str | None) -> str:
    if name is None or not isinstance(name, str) or len(name) == 0:
        raise InvalidArgumentError("Name of image cannot be empty.")
    if "/" in name or os.sep in name or name in {".", ".."}:
        raise InvalidArgumentError(f'Name "{name}" must not contain path segments.')
    return name


def _normalize_directory(directory: str | Path | None, role: str) -> str:
    if directory is None or not isinstance(directory, (str, os.PathLike)):
        raise DirectoryUnavailableError(f"Directory with {role} is not configured.")
    raw = str(directory).strip()
    if not raw:
        raise DirectoryUnavailableError(f"Directory with {role} cannot be empty.")
    return os.path.abspath(raw.rstrip(os.sep) or os.sep)


class Repository:
    """Resolve, fetch and save images in a sources tree and a thumbnails tree."""

    def __init__(
        self,
        sources_directory: str | Path,
        thumbnails_directory: str | Path | None = None,
        *,
        file_mode: int = DEFAULT_FILE_MODE,
        logger: logging.Logger | None = None,
    ) -> None:
        self._logger = logger or get_logger("repository")
        self._file_mode = file_mode

        sources = _normalize_directory(sources_directory, "sources")
        # without a thumbnails directory the sources tree holds thumbnails too
        thumbnails = (
            _normalize_directory(thumbnails_directory, "thumbnails")
            if thumbnails_directory is not None and str(thumbnails_directory).strip()
            else sources
        )

        self._sources_directory = self._prepare_directory(sources, "sources")
        if thumbnails == sources:
            self._thumbnails_directory = self._sources_directory
        else:
            self._thumbnails_directory = self._prepare_directory(thumbnails, "thumbnails")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        logger: logging.Logger | None = None,
    ) -> "Repository":
        repo_settings = settings.repository
        return cls(
            repo_settings.sources_directory,
            repo_settings.thumbnails_directory,
            file_mode=repo_settings.file_mode,
            logger=logger or get_logger("repository", settings.observability.log_level),
        )

    @property
    def sources_directory(self) -> str:
        return self._sources_directory

    @property
    def thumbnails_directory(self) -> str:
        return self._thumbnails_directory

    def source_path(self, name: str) -> Path:
        """Return where the source image ``name`` lives (whether or not it exists)."""

        name = _validate_name(name)
        return Path(self._sources_directory + get_sub_path(name) + name)

    def thumbnail_path(self, name: str) -> Path:
        """Return where the thumbnail ``name`` lives (whether or not it exists)."""

        name = _validate_name(name)
        return Path(self._thumbnails_directory + get_sub_path(name) + name)

    def fetch(self, name: str) -> ImageHandle:
        """Return a handle for the existing source image ``name``.

        Raises:
            InvalidArgumentError: ``name`` is empty or missing.
            NotFoundError: No source image exists under that name.
        """

        source = self.source_path(name)
        if not source.is_file():
            raise NotFoundError(f'Source image "{source}" does not exist.')
        return ImageHandle(source)

    def fetch_thumbnail(self, name: str) -> ImageHandle:
        """Return a handle for the existing thumbnail ``name``.

        When the name encodes a source id, the source image is fetched too and
        linked from the returned handle; its errors propagate unchanged.
        """

        thumbnail = self.thumbnail_path(name)
        if not thumbnail.is_file():
            raise NotFoundError(f'Thumbnail image "{thumbnail}" does not exist.')

        source = None
        parsed = parse_name(name)
        if parsed.id is not None:
            source = self.fetch(parsed.id)

        return ImageHandle(thumbnail, source)

    def save(self, image: ImageHandle, name: str | None = None) -> ImageHandle:
        """Move a staged image into place; thumbnails are recognized by their source link."""

        if image.has_source:
            return self.save_thumbnail(image, name)
        return self.save_source(image, name)

    def save_source(self, image: ImageHandle, name: str | None = None) -> ImageHandle:
        target = self._target_path(image, name, self.source_path)
        return self._move_image(image, target)

    def save_thumbnail(self, image: ImageHandle, name: str | None = None) -> ImageHandle:
        target = self._target_path(image, name, self.thumbnail_path)
        return self._move_image(image, target)

    def _prepare_directory(self, directory: str, role: str) -> str:
        path = Path(directory)

        if not path.is_dir():
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                msg = f'Directory "{path}" with {role} does not exist and cannot be created.'
                raise DirectoryUnavailableError(msg) from e
            self._logger.info("Created %s directory %s", role, path)

        if not os.access(path, os.W_OK):
            raise PermissionDeniedError(f'Directory "{path}" with {role} is not writable.')

        return str(path).rstrip(os.sep) + os.sep

    def _target_path(
        self,
        image: ImageHandle,
        name: str | None,
        resolve: Callable[[str], Path],
    ) -> Path:
        if name:
            return resolve(name)

        target = resolve(create_name(image))
        while target.exists():
            target = resolve(create_name(image))
        return target

    def _move_image(self, image: ImageHandle, target: Path) -> ImageHandle:
        staged = image.path
        if not staged.is_file():
            raise NotFoundError(f'Staged image "{staged}" does not exist.')

        target.parent.mkdir(parents=True, exist_ok=True)
        # single rename; an existing target is replaced atomically
        os.replace(staged, target)
        os.chmod(target, self._file_mode)
        self._logger.debug("Moved %s to %s", staged, target)

        return ImageHandle(target)


__all__ = ["Repository"]
