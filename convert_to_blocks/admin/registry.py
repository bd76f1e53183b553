"""In-process settings API: option pages, sections, fields and settings.

Pages register themselves once at startup; the registry then drives page
rendering and the save flow for submitted settings groups.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from convert_to_blocks.core.exceptions import NotFoundError
from convert_to_blocks.services.ports import OptionStore

logger = logging.getLogger(__name__)

PageRenderer = Callable[[Any], str]
FieldRenderer = Callable[[Any, Mapping[str, Any]], str]
SanitizeCallback = Callable[[Any], Any]


@dataclass
class OptionsPage:
    """A submenu entry under the Settings menu."""

    page_title: str
    menu_title: str
    capability: str
    menu_slug: str
    render: PageRenderer


@dataclass
class SettingsSection:
    id: str
    title: str
    page: str


@dataclass
class SettingsField:
    id: str
    title: str
    render: FieldRenderer
    page: str
    section: str
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class RegisteredSetting:
    """An option saved through a settings group, with its sanitize callback."""

    group: str
    option_name: str
    sanitize_callback: SanitizeCallback | None = None

    def sanitize(self, value: Any) -> Any:
        if self.sanitize_callback is None:
            return value
        return self.sanitize_callback(value)


class AdminRegistry:
    """Records admin pages and settings registered by plugins."""

    def __init__(self) -> None:
        self._pages: dict[str, OptionsPage] = {}
        self._sections: dict[str, list[SettingsSection]] = {}
        self._fields: dict[tuple[str, str], list[SettingsField]] = {}
        self._settings: dict[str, list[RegisteredSetting]] = {}

    def add_options_page(
        self,
        page_title: str,
        menu_title: str,
        capability: str,
        menu_slug: str,
        render: PageRenderer,
    ) -> OptionsPage:
        page = OptionsPage(
            page_title=page_title,
            menu_title=menu_title,
            capability=capability,
            menu_slug=menu_slug,
            render=render,
        )
        self._pages[menu_slug] = page
        logger.debug("Options page registered", extra={"menu_slug": menu_slug})
        return page

    def add_settings_section(self, section_id: str, title: str, page: str) -> SettingsSection:
        section = SettingsSection(id=section_id, title=title, page=page)
        self._sections.setdefault(page, []).append(section)
        return section

    def add_settings_field(
        self,
        field_id: str,
        title: str,
        render: FieldRenderer,
        page: str,
        section: str,
        args: dict[str, Any] | None = None,
    ) -> SettingsField:
        settings_field = SettingsField(
            id=field_id,
            title=title,
            render=render,
            page=page,
            section=section,
            args=args or {},
        )
        self._fields.setdefault((page, section), []).append(settings_field)
        return settings_field

    def register_setting(
        self,
        group: str,
        option_name: str,
        sanitize_callback: SanitizeCallback | None = None,
    ) -> RegisteredSetting:
        setting = RegisteredSetting(
            group=group,
            option_name=option_name,
            sanitize_callback=sanitize_callback,
        )
        self._settings.setdefault(group, []).append(setting)
        logger.debug(
            "Setting registered", extra={"group": group, "option": option_name}
        )
        return setting

    def get_page(self, menu_slug: str) -> OptionsPage:
        """Get a registered options page.

        Raises:
            NotFoundError: If no page is registered under the slug
        """
        page = self._pages.get(menu_slug)
        if page is None:
            raise NotFoundError(resource="Options page", resource_id=menu_slug)
        return page

    def sections_for(self, page: str) -> list[SettingsSection]:
        return list(self._sections.get(page, []))

    def fields_for(self, page: str, section: str) -> list[SettingsField]:
        return list(self._fields.get((page, section), []))

    def settings_for(self, group: str) -> list[RegisteredSetting]:
        """Get the settings saved by a group.

        Raises:
            NotFoundError: If nothing is registered under the group
        """
        settings = self._settings.get(group)
        if not settings:
            raise NotFoundError(resource="Settings group", resource_id=group)
        return list(settings)

    def render_sections(self, page: str, context: Any) -> str:
        """Render every section of a page as a table of labelled fields."""
        parts: list[str] = []
        for section in self.sections_for(page):
            if section.title:
                parts.append(f"<h2>{html.escape(section.title)}</h2>")
            rows = []
            for settings_field in self.fields_for(page, section.id):
                label = html.escape(settings_field.title)
                label_for = settings_field.args.get("label_for")
                if label_for:
                    label = f'<label for="{html.escape(label_for)}">{label}</label>'
                rows.append(
                    f'<tr><th scope="row">{label}</th>'
                    f"<td>{settings_field.render(context, settings_field.args)}</td></tr>"
                )
            if rows:
                parts.append(
                    '<table class="form-table" role="presentation">'
                    + "".join(rows)
                    + "</table>"
                )
        return "\n".join(parts)

    async def save_group(
        self,
        group: str,
        submitted: Mapping[str, Any],
        options: OptionStore,
    ) -> dict[str, Any]:
        """Sanitize and persist every setting registered under a group.

        A setting missing from ``submitted`` is sanitized from ``None``,
        which is how an unchecked checkbox list arrives.

        Args:
            group: The settings group named by the submitted form
            submitted: Raw submitted values keyed by option name
            options: Option store to persist into

        Returns:
            The persisted values keyed by option name
        """
        saved: dict[str, Any] = {}
        for setting in self.settings_for(group):
            value = setting.sanitize(submitted.get(setting.option_name))
            await options.update_option(setting.option_name, value)
            saved[setting.option_name] = value

        logger.info("Settings group saved", extra={"group": group, "options": list(saved)})
        return saved
