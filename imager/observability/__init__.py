"""Observability exports."""

from imager.observability.logger import get_logger

__all__ = ["get_logger"]
