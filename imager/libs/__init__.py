"""Naming helpers exports."""

from imager.libs.naming import create_name, create_thumbnail_name, get_sub_path, parse_name

__all__ = ["get_sub_path", "parse_name", "create_thumbnail_name", "create_name"]
