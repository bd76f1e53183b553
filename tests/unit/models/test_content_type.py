"""Tests for ContentType model."""

from convert_to_blocks.models.db.content_type import ATTACHMENT, ContentType


class TestContentTypeModel:
    """Tests for ContentType database model."""

    def test_content_type_creation(self) -> None:
        """Test ContentType model can be instantiated."""
        content_type = ContentType(name="event", label="Events", public=False)

        assert content_type.name == "event"
        assert content_type.label == "Events"
        assert content_type.public is False

    def test_content_type_tablename(self) -> None:
        """Test ContentType model has correct table name."""
        assert ContentType.__tablename__ == "content_types"

    def test_name_length(self) -> None:
        """Test content type names are limited to 20 characters."""
        assert ContentType.__table__.c.name.type.length == 20

    def test_name_unique(self) -> None:
        assert ContentType.__table__.c.name.unique is True

    def test_attachment_constant(self) -> None:
        assert ATTACHMENT == "attachment"
