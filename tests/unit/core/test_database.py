"""Tests for the engine holder."""

import pytest

from convert_to_blocks.core.config import get_settings
from convert_to_blocks.core.database import Database


class TestDatabase:
    async def test_transaction_requires_connect(self) -> None:
        with pytest.raises(RuntimeError, match="not connected"):
            async with Database().transaction():
                pass

    async def test_connect_then_disconnect(self) -> None:
        """Test that connecting creates an engine without opening a connection."""
        database = Database()

        database.connect(get_settings())
        assert database.connected is True

        await database.disconnect()
        assert database.connected is False
