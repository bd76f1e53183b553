"""Repository for content type registry operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from convert_to_blocks.models.db.content_type import ContentType


class ContentTypeRepository:
    """Repository backing the content type registry port."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_content_types(
        self,
        public: bool | None = None,
    ) -> dict[str, ContentType]:
        """List registered content types keyed by name.

        The query runs in a savepoint so a failure leaves the request's
        transaction usable for the option reads that follow.

        Args:
            public: If given, only return types with a matching visibility

        Returns:
            Mapping of content type name to its row, in registration order
        """
        query = select(ContentType)
        if public is not None:
            query = query.where(ContentType.public == public)
        query = query.order_by(ContentType.created_at, ContentType.name)

        async with self.session.begin_nested():
            result = await self.session.execute(query)
            rows = result.scalars().all()
        return {content_type.name: content_type for content_type in rows}
