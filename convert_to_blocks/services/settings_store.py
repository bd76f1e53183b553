"""Persistence and sanitization of the supported post types setting."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import partial
from typing import Any

from convert_to_blocks.core.config import Settings, get_settings
from convert_to_blocks.services.ports import OptionStore
from convert_to_blocks.services.sanitization import sanitize_text_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SequenceInput:
    """Submitted value that is a list of candidate content types."""

    items: tuple[Any, ...]


@dataclass(frozen=True)
class MalformedInput:
    """Submitted value of any other shape (string, number, mapping, None...)."""

    value: Any


SubmittedSelection = SequenceInput | MalformedInput


def classify_submission(raw: Any) -> SubmittedSelection:
    """Tag a raw submitted value as a sequence or as malformed.

    Strings and bytes are not treated as sequences, and neither are
    mappings or sets.
    """
    match raw:
        case [*items]:
            return SequenceInput(tuple(items))
        case _:
            return MalformedInput(raw)


def sanitize_selection(raw: Any, dedupe: bool = False) -> list[str]:
    """Coerce a raw submitted value into a list of sanitized content types.

    Never raises. Anything that is not a sequence becomes an empty list;
    otherwise every element is passed through ``sanitize_text_field``.

    Args:
        raw: Value as received from the submission layer
        dedupe: Drop repeated entries, keeping the first occurrence

    Returns:
        The sanitized selection
    """
    match classify_submission(raw):
        case SequenceInput(items=items):
            sanitized = [sanitize_text_field(item) for item in items]
        case MalformedInput(value=value):
            logger.debug(
                "Discarding malformed post types submission",
                extra={"input_type": type(value).__name__},
            )
            return []

    if dedupe:
        sanitized = list(dict.fromkeys(sanitized))
    return sanitized


def pair_selection_state(
    all_types: Sequence[str],
    selected: Sequence[Any],
) -> list[tuple[str, bool]]:
    """Pair every known content type with whether it is selected."""
    return [(content_type, content_type in selected) for content_type in all_types]


class SettingsStore:
    """Owns the persisted list of content types selected for conversion.

    Usage:
        store = SettingsStore(OptionRepository(session))
        selected = await store.get_selected()
        saved = await store.set_selected(["post", " page "])
    """

    def __init__(self, options: OptionStore, settings: Settings | None = None) -> None:
        self._options = options
        self.settings = settings or get_settings()

    @property
    def option_name(self) -> str:
        return self.settings.post_types_option

    async def get_selected(self) -> list[Any]:
        """Read the persisted selection.

        Stored values are assumed to be sanitized already and are returned
        as-is. A missing option reads as an empty list, and so does a stored
        value that is not a list.
        """
        value = await self._options.get_option(self.option_name, [])
        match value:
            case [*items]:
                return list(items)
            case _:
                logger.warning(
                    "Stored post types are not a list; treating as empty",
                    extra={"option": self.option_name, "value_type": type(value).__name__},
                )
                return []

    @staticmethod
    def sanitize_callback(settings: Settings) -> Callable[[Any], list[str]]:
        """The sanitizer for the post types option.

        Registered with the settings page and used by ``set_selected``, so a
        form save and an API save clean a submission the same way.
        """
        return partial(sanitize_selection, dedupe=settings.dedupe_selection)

    def sanitize(self, raw: Any) -> list[str]:
        return self.sanitize_callback(self.settings)(raw)

    async def set_selected(self, raw: Any) -> list[str]:
        """Sanitize and persist a submitted selection.

        Persists exactly the returned list, so a following ``get_selected``
        reads the same value back.
        """
        sanitized = self.sanitize(raw)
        await self._options.update_option(self.option_name, sanitized)
        logger.info(
            "Supported post types updated",
            extra={"option": self.option_name, "count": len(sanitized)},
        )
        return sanitized

    async def render_selection_state(
        self, all_types: Sequence[str]
    ) -> list[tuple[str, bool]]:
        """Pair each of ``all_types`` with whether it is currently selected."""
        return pair_selection_state(all_types, await self.get_selected())
