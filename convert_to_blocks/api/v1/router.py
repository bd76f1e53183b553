"""API v1 router configuration."""

from fastapi import APIRouter

from convert_to_blocks.api.v1.endpoints import content_types, settings

router = APIRouter(prefix="/api/v1")

router.include_router(content_types.router, prefix="/content-types", tags=["content-types"])
router.include_router(settings.router, prefix="/settings", tags=["settings"])
