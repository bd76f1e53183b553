"""Option database model."""

from typing import Any

from sqlalchemy import JSON, Boolean, String, true
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from convert_to_blocks.models.db.base import Base, TimestampMixin


class Option(Base, TimestampMixin):
    """A single named, persisted setting.

    The value is stored as JSON and always read and written as a whole;
    concurrent writers resolve as last write wins.
    """

    __tablename__ = "options"

    option_name: Mapped[str] = mapped_column(
        String(191),
        unique=True,
        nullable=False,
        index=True,
    )
    option_value: Mapped[Any] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
    )
    autoload: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )
