"""Settings page for choosing which post types are converted to blocks."""

from __future__ import annotations

import html
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from convert_to_blocks.admin.registry import AdminRegistry
from convert_to_blocks.core.config import Settings, get_settings
from convert_to_blocks.core.exceptions import ContentTypeRegistryError
from convert_to_blocks.core.security import MANAGE_OPTIONS, create_form_nonce
from convert_to_blocks.services.content_types import ContentTypeProvider
from convert_to_blocks.services.settings_store import SettingsStore

logger = logging.getLogger(__name__)

SAVE_ACTION = "/admin/options.php"
NONCE_FIELD = "_wpnonce"


def nonce_action(group: str) -> str:
    """Action a settings group's form token is issued for."""
    return f"{group}-options"


@dataclass
class PageContext:
    """Per-request data the page and its fields render from."""

    content_types: list[str] = field(default_factory=list)
    selected: list[Any] = field(default_factory=list)
    updated: bool = False


async def load_page_context(
    provider: ContentTypeProvider,
    store: SettingsStore,
    updated: bool = False,
) -> PageContext:
    """Gather content types and the current selection for one page view.

    A registry failure renders the page with no content types instead of
    failing the request.
    """
    try:
        content_types = await provider.list_public_content_types()
    except ContentTypeRegistryError:
        logger.warning("Rendering settings page without content types", exc_info=True)
        content_types = []

    return PageContext(
        content_types=content_types,
        selected=await store.get_selected(),
        updated=updated,
    )


def _label(content_type: str) -> str:
    return content_type[:1].upper() + content_type[1:]


class SettingsPage:
    """UI for configuring plugin settings."""

    def __init__(
        self,
        settings: Settings | None = None,
        form_action: str = SAVE_ACTION,
    ) -> None:
        self.settings = settings or get_settings()
        self.form_action = form_action
        self.capability = MANAGE_OPTIONS
        self._registry: AdminRegistry | None = None

    @property
    def registry(self) -> AdminRegistry:
        if self._registry is None:
            raise RuntimeError("Settings page not registered. Call register() first.")
        return self._registry

    def can_register(self) -> bool:
        """Only registers in an admin context."""
        return self.settings.admin_enabled

    def register(self, registry: AdminRegistry) -> None:
        """Register the menu entry, section, field and setting."""
        self._registry = registry
        self.add_menu()
        self.register_section()
        self.register_fields()

    def add_menu(self) -> None:
        self.registry.add_options_page(
            page_title=self.settings.plugin_title,
            menu_title=self.settings.plugin_title,
            capability=self.capability,
            menu_slug=self.settings.plugin_slug,
            render=self.render_page,
        )

    def register_section(self) -> None:
        self.registry.add_settings_section(
            section_id=self.settings.settings_section,
            title="",
            page=self.settings.plugin_slug,
        )

    def register_fields(self) -> None:
        option_name = self.settings.post_types_option

        self.registry.add_settings_field(
            field_id=option_name,
            title="Supported Post Types",
            render=self.render_post_types_field,
            page=self.settings.plugin_slug,
            section=self.settings.settings_section,
            args={"label_for": option_name},
        )

        self.registry.register_setting(
            group=self.settings.settings_group,
            option_name=option_name,
            sanitize_callback=SettingsStore.sanitize_callback(self.settings),
        )

    def render_page(self, context: PageContext) -> str:
        title = html.escape(self.settings.plugin_title)
        notice = ""
        if context.updated:
            notice = (
                '<div id="setting-error-settings_updated" class="notice notice-success">'
                "<p><strong>Settings saved.</strong></p></div>"
            )

        sections = self.registry.render_sections(self.settings.plugin_slug, context)
        nonce = create_form_nonce(
            nonce_action(self.settings.settings_group), self.settings.admin_api_key
        )

        return f"""<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>{title}</title></head>
<body>
<div class="wrap">
<h1>{title}</h1>
<hr>
{notice}
<p>Configure plugin by selecting the supported post types.</p>
<form method="post" action="{html.escape(self.form_action)}">
<input type="hidden" name="option_page" value="{html.escape(self.settings.settings_group)}">
<input type="hidden" name="page" value="{html.escape(self.settings.plugin_slug)}">
<input type="hidden" name="{NONCE_FIELD}" value="{nonce}">
{sections}
<p class="submit"><input type="submit" name="submit" id="submit" class="button button-primary" value="Save Changes"></p>
</form>
</div>
</body>
</html>
"""

    def render_post_types_field(
        self,
        context: PageContext,
        args: Mapping[str, Any],  # noqa: ARG002
    ) -> str:
        """Render one checkbox per content type, checked when selected."""
        option_name = html.escape(self.settings.post_types_option)
        rows = []
        for content_type in context.content_types:
            value = html.escape(content_type)
            checked = ' checked="checked"' if content_type in context.selected else ""
            rows.append(
                f'<label for="{option_name}-{value}">'
                f'<input name="{option_name}[]" type="checkbox"{checked} '
                f'id="{option_name}-{value}" value="{value}"> '
                f"{html.escape(_label(content_type))}</label> <br>"
            )
        return f'<fieldset id="{option_name}">' + "".join(rows) + "</fieldset>"
