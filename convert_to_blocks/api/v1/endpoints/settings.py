"""Supported post types API endpoints."""

import logging

from fastapi import APIRouter

from convert_to_blocks.api.v1.dependencies import Admin, Provider, Store
from convert_to_blocks.core.exceptions import ContentTypeRegistryError
from convert_to_blocks.models.domain.settings import (
    PostTypesRead,
    PostTypesUpdate,
    SelectionStateItem,
)
from convert_to_blocks.services.content_types import ContentTypeProvider
from convert_to_blocks.services.settings_store import SettingsStore, pair_selection_state

logger = logging.getLogger(__name__)

router = APIRouter()


async def build_post_types_read(
    store: SettingsStore,
    provider: ContentTypeProvider,
) -> PostTypesRead:
    """Combine the stored selection with the public content types."""
    selected = await store.get_selected()
    try:
        content_types = await provider.list_public_content_types()
    except ContentTypeRegistryError:
        logger.warning("Reporting post types without selection state", exc_info=True)
        content_types = []

    return PostTypesRead(
        option_name=store.option_name,
        post_types=selected,
        selection=[
            SelectionStateItem(name=name, selected=is_selected)
            for name, is_selected in pair_selection_state(content_types, selected)
        ],
    )


@router.get("/post-types", response_model=PostTypesRead)
async def get_post_types(
    store: Store,
    provider: Provider,
) -> PostTypesRead:
    """Get the content types selected for conversion.

    Public so the conversion feature can look the selection up.
    """
    return await build_post_types_read(store, provider)


@router.put("/post-types", response_model=PostTypesRead)
async def update_post_types(
    update: PostTypesUpdate,
    admin: Admin,  # noqa: ARG001
    store: Store,
    provider: Provider,
) -> PostTypesRead:
    """Replace the content types selected for conversion.

    The submitted value is sanitized; anything that is not a list saves an
    empty selection rather than failing.
    """
    await store.set_selected(update.post_types)
    return await build_post_types_read(store, provider)
