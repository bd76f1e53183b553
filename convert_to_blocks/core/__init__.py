"""Core module containing configuration and shared utilities."""

from convert_to_blocks.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
