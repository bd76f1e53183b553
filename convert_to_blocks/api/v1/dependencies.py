"""FastAPI dependencies shared by the API and admin routes."""

from dataclasses import dataclass
from typing import Annotated, Literal

from fastapi import Cookie, Depends, Header, Request

from convert_to_blocks.admin.registry import AdminRegistry
from convert_to_blocks.core.config import Settings, get_settings
from convert_to_blocks.core.database import DbSession
from convert_to_blocks.core.exceptions import UnauthorizedError
from convert_to_blocks.core.security import MANAGE_OPTIONS, verify_api_key
from convert_to_blocks.repositories.content_type_repo import ContentTypeRepository
from convert_to_blocks.repositories.option_repo import OptionRepository
from convert_to_blocks.services.content_types import ContentTypeProvider
from convert_to_blocks.services.settings_store import SettingsStore

AppSettings = Annotated[Settings, Depends(get_settings)]


@dataclass
class AdminContext:
    """Authenticated admin request."""

    capability: str
    credential_source: Literal["header", "cookie"]


async def require_admin(
    settings: AppSettings,
    x_api_key: Annotated[str | None, Header(alias="X-API-Key")] = None,
    admin_api_key: Annotated[str | None, Cookie()] = None,
) -> AdminContext:
    """Require the configured admin key.

    The key may be sent as an X-API-Key header or, for browser form posts,
    as an ``admin_api_key`` cookie.

    Raises:
        UnauthorizedError: If no key is presented or it does not match
    """
    if x_api_key:
        presented, source = x_api_key, "header"
    elif admin_api_key:
        presented, source = admin_api_key, "cookie"
    else:
        raise UnauthorizedError("Admin key required. Provide X-API-Key header.")

    if not verify_api_key(presented, settings.admin_api_key):
        raise UnauthorizedError("Invalid admin key.")

    return AdminContext(capability=MANAGE_OPTIONS, credential_source=source)


Admin = Annotated[AdminContext, Depends(require_admin)]


def get_option_store(session: DbSession) -> OptionRepository:
    """Get option repository instance."""
    return OptionRepository(session)


Options = Annotated[OptionRepository, Depends(get_option_store)]


def get_content_type_provider(session: DbSession, settings: AppSettings) -> ContentTypeProvider:
    """Get content type provider backed by the registry table."""
    return ContentTypeProvider(
        ContentTypeRepository(session),
        excluded=settings.excluded_content_types,
    )


Provider = Annotated[ContentTypeProvider, Depends(get_content_type_provider)]


def get_settings_store(options: Options, settings: AppSettings) -> SettingsStore:
    """Get settings store instance."""
    return SettingsStore(options, settings)


Store = Annotated[SettingsStore, Depends(get_settings_store)]


def get_admin_registry(request: Request) -> AdminRegistry:
    """Get the admin registry populated at startup."""
    return request.app.state.admin_registry


Registry = Annotated[AdminRegistry, Depends(get_admin_registry)]
