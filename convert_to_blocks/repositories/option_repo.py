"""Repository for option operations."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from convert_to_blocks.models.db.option import Option


class OptionRepository:
    """Repository for named option storage.

    Implements the option store port used by the settings services: values
    are read and written whole, keyed by option name.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, option_name: str) -> Option | None:
        """Get the option row by name.

        Args:
            option_name: The option's unique name

        Returns:
            The option row, or None if nothing is stored under that name
        """
        result = await self.session.execute(
            select(Option).where(Option.option_name == option_name)
        )
        return result.scalar_one_or_none()

    async def get_option(self, option_name: str, default: Any = None) -> Any:
        """Get an option's value, falling back to ``default`` when absent."""
        option = await self.get(option_name)
        if option is None:
            return default
        return option.option_value

    async def update_option(self, option_name: str, value: Any) -> Any:
        """Create or replace an option's value.

        Args:
            option_name: The option's unique name
            value: JSON-serialisable value to store

        Returns:
            The stored value
        """
        option = await self.get(option_name)
        if option is None:
            option = Option(option_name=option_name, option_value=value)
            self.session.add(option)
        else:
            option.option_value = value

        await self.session.flush()
        return option.option_value
