"""Integration tests for saving and reading the supported post types.

These tests require a running PostgreSQL database.
"""

import pytest
from fastapi import status
from httpx import AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from convert_to_blocks.admin.settings_page import load_page_context
from convert_to_blocks.core.config import get_settings
from convert_to_blocks.core.security import create_form_nonce
from convert_to_blocks.repositories.content_type_repo import ContentTypeRepository
from convert_to_blocks.repositories.option_repo import OptionRepository
from convert_to_blocks.services.content_types import ContentTypeProvider
from convert_to_blocks.services.settings_store import SettingsStore

OPTION = "convert_to_blocks_post_types"


@pytest.mark.integration
class TestOptionStore:
    """Tests for the option table."""

    async def test_missing_option_reads_default(self, db_session: AsyncSession) -> None:
        repo = OptionRepository(db_session)

        assert await repo.get_option(OPTION, []) == []

    async def test_write_then_read(self, db_session: AsyncSession) -> None:
        """Test that values round-trip through JSONB whole."""
        repo = OptionRepository(db_session)

        await repo.update_option(OPTION, ["post"])
        await repo.update_option(OPTION, ["page", "post"])

        assert await repo.get_option(OPTION) == ["page", "post"]


@pytest.mark.integration
class TestContentTypes:
    """Tests for the content type registry table."""

    async def test_public_types_without_attachment(self, db_session: AsyncSession) -> None:
        provider = ContentTypeProvider(ContentTypeRepository(db_session))

        assert sorted(await provider.list_public_content_types()) == ["page", "post"]

    async def test_settings_store_against_database(self, db_session: AsyncSession) -> None:
        """Test sanitize, persist and render against real tables."""
        store = SettingsStore(OptionRepository(db_session))

        saved = await store.set_selected(["post", " <b>page</b> "])
        state = await store.render_selection_state(["post", "page", "event"])

        assert saved == ["post", "page"]
        assert state == [("post", True), ("page", True), ("event", False)]


@pytest.mark.integration
class TestSettingsApi:
    """End-to-end tests through the HTTP surfaces."""

    async def test_put_then_get(self, async_client: AsyncClient) -> None:
        response = await async_client.put(
            "/api/v1/settings/post-types", json={"post_types": [" page "]}
        )
        assert response.status_code == status.HTTP_200_OK

        response = await async_client.get("/api/v1/settings/post-types")

        assert response.json()["post_types"] == ["page"]

    async def test_form_save_then_render(self, async_client: AsyncClient) -> None:
        """Test the admin form save flow and the rendered page afterwards."""
        response = await async_client.post(
            "/admin/options.php",
            data={
                "option_page": "convert_to_blocks_settings",
                "page": "convert-to-blocks",
                "_wpnonce": create_form_nonce(
                    "convert_to_blocks_settings-options", get_settings().admin_api_key
                ),
                f"{OPTION}[]": ["post"],
            },
        )
        assert response.status_code == status.HTTP_303_SEE_OTHER

        response = await async_client.get(response.headers["location"])

        assert response.status_code == status.HTTP_200_OK
        assert "Settings saved." in response.text
        assert f'checked="checked" id="{OPTION}-post"' in response.text
        assert "attachment" not in response.text


@pytest.mark.integration
class TestRegistryFailure:
    """Tests for rendering when the content type table cannot be queried."""

    async def test_page_context_survives_registry_query_error(
        self, db_session: AsyncSession
    ) -> None:
        """Test that the selection is still read after the registry query fails."""
        options = OptionRepository(db_session)
        await options.update_option(OPTION, ["post"])
        await db_session.execute(text("DROP TABLE content_types"))

        context = await load_page_context(
            ContentTypeProvider(ContentTypeRepository(db_session)),
            SettingsStore(options),
        )

        assert context.content_types == []
        assert context.selected == ["post"]
