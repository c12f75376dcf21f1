"""Utility helpers for reactive_collection."""

from .logging import get_logger

__all__ = ["get_logger"]
