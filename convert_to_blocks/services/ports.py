"""Host collaborator interfaces the settings services depend on."""

from collections.abc import Mapping
from typing import Any, Protocol


class ContentTypeRegistry(Protocol):
    """Lists the content types registered with the host."""

    async def list_content_types(
        self, public: bool | None = None
    ) -> Mapping[str, Any]: ...


class OptionStore(Protocol):
    """Reads and writes whole named options."""

    async def get_option(self, option_name: str, default: Any = None) -> Any: ...

    async def update_option(self, option_name: str, value: Any) -> Any: ...
