"""Enumeration of the content types an administrator may select."""

import logging
from collections.abc import Iterable

from convert_to_blocks.core.exceptions import ContentTypeRegistryError
from convert_to_blocks.models.db.content_type import ATTACHMENT
from convert_to_blocks.services.ports import ContentTypeRegistry

logger = logging.getLogger(__name__)


class ContentTypeProvider:
    """Lists public content types, minus the ones that can never be converted."""

    def __init__(
        self,
        registry: ContentTypeRegistry,
        excluded: Iterable[str] = (ATTACHMENT,),
    ) -> None:
        self._registry = registry
        self._excluded = frozenset(excluded)

    async def list_public_content_types(self) -> list[str]:
        """Return the identifiers of public content types in registry order.

        Raises:
            ContentTypeRegistryError: If the registry cannot be queried. The
                call is not retried.
        """
        try:
            content_types = await self._registry.list_content_types(public=True)
        except ContentTypeRegistryError:
            raise
        except Exception as e:
            logger.error("Content type registry lookup failed", extra={"error": str(e)})
            raise ContentTypeRegistryError() from e

        return [name for name in content_types if name not in self._excluded]
