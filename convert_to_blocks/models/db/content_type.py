"""Content type registry database model."""

from sqlalchemy import Boolean, String, false
from sqlalchemy.orm import Mapped, mapped_column

from convert_to_blocks.models.db.base import Base, TimestampMixin

# Built-in media type; never offered for conversion
ATTACHMENT = "attachment"


class ContentType(Base, TimestampMixin):
    """A classification of content items (post, page, ...)."""

    __tablename__ = "content_types"

    name: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
    )
    label: Mapped[str] = mapped_column(String(255), nullable=False)
    public: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    builtin: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
