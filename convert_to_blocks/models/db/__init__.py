"""Database models package."""

from convert_to_blocks.models.db.base import Base, TimestampMixin
from convert_to_blocks.models.db.content_type import ContentType
from convert_to_blocks.models.db.option import Option

__all__ = [
    "Base",
    "ContentType",
    "Option",
    "TimestampMixin",
]
