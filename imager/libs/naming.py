"""Naming helpers shared by every save and fetch path.

The thumbnail encoder and decoder live side by side so that
``parse_name(create_thumbnail_name(...))`` always round-trips.
"""

from __future__ import annotations

import hashlib
import os
import re
import uuid
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from imager.core.errors import InvalidArgumentError
from imager.core.types import ImageHandle, ParsedName, PlainName, ThumbnailName

# Number of hex digest characters used as the shard directory.
SHARD_WIDTH = 2

_THUMBNAIL_PATTERN = re.compile(
    r"^(?P<id>.+)_(?=\d|x\d)(?P<width>\d*)x(?P<height>\d*)(?:_(?P<quality>\d+))?$"
)


def _require_name(name: str | None, what: str) -> str:
    if name is None or not isinstance(name, str) or len(name) == 0:
        raise InvalidArgumentError(f"{what} cannot be empty.")
    return name


def get_sub_path(name: str) -> str:
    """Return the shard directory for ``name`` with a trailing separator.

    The result depends on ``name`` alone, so the same name resolves to the
    same directory at save time and at fetch time.
    """

    name = _require_name(name, "Name of image")
    digest = hashlib.md5(name.encode("utf-8")).hexdigest()
    return digest[:SHARD_WIDTH] + os.sep


def _as_dimension(value: int | None, field_name: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise InvalidArgumentError(f"Thumbnail {field_name} must be a non-negative integer.")
    return str(value)


def create_thumbnail_name(
    source_id: str,
    width: int | None = None,
    height: int | None = None,
    quality: int | None = None,
) -> str:
    """Build a thumbnail name that encodes ``source_id`` and its variant.

    Args:
        source_id: Name of the source image the thumbnail is derived from.
        width: Target width, or None when only the height is fixed.
        height: Target height, or None when only the width is fixed.
            At least one of them is required.
        quality: Optional encoder quality.

    Returns:
        Name in the form ``<source_id>_<width>x<height>[_<quality>]``.
    """

    source_id = _require_name(source_id, "Source id of thumbnail")
    if width is None and height is None:
        raise InvalidArgumentError("Thumbnail needs at least one of width or height.")
    name = f"{source_id}_{_as_dimension(width, 'width')}x{_as_dimension(height, 'height')}"
    if quality is not None:
        name += f"_{_as_dimension(quality, 'quality')}"
    return name


def _optional_int(value: str | None) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def parse_name(name: str) -> ParsedName:
    """Split ``name`` into its parts.

    Returns a ThumbnailName when ``name`` was built by ``create_thumbnail_name``,
    otherwise a PlainName whose ``id`` is None.
    """

    name = _require_name(name, "Name of image")
    match = _THUMBNAIL_PATTERN.match(name)
    if match is None:
        return PlainName(name=name)

    return ThumbnailName(
        name=name,
        id=match.group("id"),
        width=_optional_int(match.group("width")),
        height=_optional_int(match.group("height")),
        quality=_optional_int(match.group("quality")),
    )


def _sniff_extension(path: Path) -> str:
    try:
        with Image.open(path) as img:
            format_name = img.format
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError):
        return ""

    if not format_name:
        return ""
    if format_name == "JPEG":
        return ".jpg"
    extensions = sorted(
        ext for ext, fmt in Image.registered_extensions().items() if fmt == format_name
    )
    candidate = "." + format_name.lower()
    if candidate in extensions:
        return candidate
    return extensions[0] if extensions else ""


def create_name(image: ImageHandle) -> str:
    """Return a fresh unique name for the staged ``image``.

    The name is a random token followed by the staged file's extension. A
    staged file without an extension (e.g. an upload temp file) has its
    format read from the header instead.
    """

    extension = image.path.suffix.lower()
    if not extension:
        extension = _sniff_extension(image.path)
    return uuid.uuid4().hex + extension


__all__ = [
    "SHARD_WIDTH",
    "get_sub_path",
    "create_thumbnail_name",
    "parse_name",
    "create_name",
]
