"""Content type API endpoints."""

from fastapi import APIRouter

from convert_to_blocks.api.v1.dependencies import Provider
from convert_to_blocks.models.domain.settings import ContentTypeList

router = APIRouter()


@router.get("", response_model=ContentTypeList)
async def list_content_types(provider: Provider) -> ContentTypeList:
    """List the public content types that may be selected for conversion.

    Returns 502 if the content type registry cannot be queried.
    """
    return ContentTypeList(content_types=await provider.list_public_content_types())
