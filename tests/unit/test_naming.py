"""Unit tests for naming helpers.

Tests cover:
- Sharding sub-path determinism and shape
- Thumbnail name encoding and parsing
- Fresh name generation (extension kept or sniffed)
"""

import os
from pathlib import Path

import pytest
from PIL import Image

from imager.core.errors import InvalidArgumentError
from imager.core.types import ImageHandle, PlainName, ThumbnailName
from imager.libs.naming import (
    SHARD_WIDTH,
    create_name,
    create_thumbnail_name,
    get_sub_path,
    parse_name,
)


@pytest.mark.unit
class TestGetSubPath:
    """Tests for get_sub_path."""

    def test_is_deterministic(self):
        assert get_sub_path("abc.jpg") == get_sub_path("abc.jpg")

    def test_shape_is_hex_prefix_with_separator(self):
        sub_path = get_sub_path("abc.jpg")

        assert sub_path.endswith(os.sep)
        prefix = sub_path[: -len(os.sep)]
        assert len(prefix) == SHARD_WIDTH
        int(prefix, 16)

    def test_spreads_names_over_several_shards(self):
        shards = {get_sub_path(f"image-{i}.jpg") for i in range(200)}
        assert len(shards) > 50

    @pytest.mark.parametrize("name", ["", None])
    def test_rejects_empty_name(self, name):
        with pytest.raises(InvalidArgumentError):
            get_sub_path(name)


@pytest.mark.unit
class TestThumbnailNames:
    """Tests for create_thumbnail_name / parse_name."""

    def test_create_thumbnail_name_format(self):
        assert create_thumbnail_name("abc.jpg", 100, 100) == "abc.jpg_100x100"
        assert create_thumbnail_name("abc.jpg", 100, None) == "abc.jpg_100x"
        assert create_thumbnail_name("abc.jpg", None, 80, quality=90) == "abc.jpg_x80_90"

    def test_parse_thumbnail_name(self):
        parsed = parse_name("abc.jpg_100x100")

        assert isinstance(parsed, ThumbnailName)
        assert parsed.id == "abc.jpg"
        assert parsed.width == 100
        assert parsed.height == 100
        assert parsed.quality is None

    def test_parse_inverts_create(self):
        name = create_thumbnail_name("my_photo_2.png", 320, None, quality=75)
        parsed = parse_name(name)

        assert parsed.id == "my_photo_2.png"
        assert parsed.width == 320
        assert parsed.height is None
        assert parsed.quality == 75

    def test_parse_plain_name_has_no_id(self):
        parsed = parse_name("abc.jpg")

        assert isinstance(parsed, PlainName)
        assert parsed.id is None
        assert "id" not in parsed.to_dict()

    def test_create_rejects_negative_dimension(self):
        with pytest.raises(InvalidArgumentError, match="width"):
            create_thumbnail_name("abc.jpg", -1, 10)

    def test_create_rejects_empty_source_id(self):
        with pytest.raises(InvalidArgumentError):
            create_thumbnail_name("", 10, 10)

    def test_parse_rejects_empty_name(self):
        with pytest.raises(InvalidArgumentError):
            parse_name("")

    @pytest.mark.parametrize("name", ["logo_x", "logo_x_90", "banner_x.png"])
    def test_parse_name_without_dimensions_is_plain(self, name):
        parsed = parse_name(name)

        assert isinstance(parsed, PlainName)
        assert parsed.id is None

    def test_create_requires_a_dimension(self):
        with pytest.raises(InvalidArgumentError, match="at least one"):
            create_thumbnail_name("abc.jpg")


@pytest.mark.unit
class TestCreateName:
    """Tests for create_name."""

    def test_keeps_lowercased_extension(self, tmp_path: Path):
        staged = tmp_path / "upload.JPG"
        staged.write_bytes(b"data")

        name = create_name(ImageHandle(staged))

        assert name.endswith(".jpg")
        assert len(name) == 32 + len(".jpg")

    def test_names_are_unique(self, tmp_path: Path):
        staged = tmp_path / "upload.png"
        staged.write_bytes(b"data")
        handle = ImageHandle(staged)

        names = {create_name(handle) for _ in range(100)}

        assert len(names) == 100

    def test_sniffs_extension_from_header(self, tmp_path: Path):
        staged = tmp_path / "upload"
        Image.new("RGB", (4, 4), color="red").save(staged, format="PNG")

        name = create_name(ImageHandle(staged))

        assert name.endswith(".png")

    def test_sniffs_jpeg_as_jpg(self, tmp_path: Path):
        staged = tmp_path / "upload"
        Image.new("RGB", (4, 4), color="blue").save(staged, format="JPEG")

        assert create_name(ImageHandle(staged)).endswith(".jpg")

    def test_oversized_image_gets_no_extension(self, tmp_path: Path, monkeypatch):
        staged = tmp_path / "upload"
        Image.new("RGB", (200, 200), color="green").save(staged, format="PNG")
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

        name = create_name(ImageHandle(staged))

        assert "." not in name
        assert len(name) == 32

    def test_unknown_content_gets_no_extension(self, tmp_path: Path):
        staged = tmp_path / "upload"
        staged.write_bytes(b"not an image")

        name = create_name(ImageHandle(staged))

        assert "." not in name
        assert len(name) == 32
