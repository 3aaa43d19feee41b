"""Core value types shared by the naming helpers and the repository.

Rules:
- an ImageHandle is built only for a file that was confirmed to exist
- handles are immutable; a thumbnail handle links to its source handle
- parsed names are tagged: PlainName for originals, ThumbnailName for derived names
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class ImageHandle:
    """A resolved image file on disk, optionally linked to its source image."""

    path: Path
    source: ImageHandle | None = None

    def __post_init__(self) -> None:
        # frozen dataclass: bypass __setattr__ to normalize the path type
        object.__setattr__(self, "path", Path(self.path))

    @property
    def has_source(self) -> bool:
        return self.source is not None

    @property
    def name(self) -> str:
        return self.path.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "source": self.source.to_dict() if self.source is not None else None,
        }


@dataclass(frozen=True)
class PlainName:
    """A name that carries no reference to a source image."""

    name: str

    @property
    def id(self) -> None:
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name}


@dataclass(frozen=True)
class ThumbnailName:
    """A derived name encoding the source id plus variant parameters."""

    name: str
    id: str
    width: int | None = None
    height: int | None = None
    quality: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "id": self.id,
            "width": self.width,
            "height": self.height,
            "quality": self.quality,
        }


ParsedName = PlainName | ThumbnailName
