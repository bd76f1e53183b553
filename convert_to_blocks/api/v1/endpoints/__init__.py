"""API v1 endpoints package."""

from convert_to_blocks.api.v1.endpoints import content_types, settings

__all__ = ["content_types", "settings"]
