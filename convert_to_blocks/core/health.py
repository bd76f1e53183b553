"""Readiness checks for the option store and the settings page."""

import logging
import time
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from convert_to_blocks.admin.registry import AdminRegistry
from convert_to_blocks.core.config import Settings
from convert_to_blocks.core.exceptions import NotFoundError
from convert_to_blocks.models.db.option import Option

logger = logging.getLogger(__name__)


class HealthStatus(StrEnum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


@dataclass
class ComponentHealth:
    name: str
    status: HealthStatus
    message: str | None = None
    latency_ms: float | None = None


@dataclass
class HealthReport:
    """Readiness is healthy only while every component is."""

    components: list[ComponentHealth] = field(default_factory=list)

    @property
    def status(self) -> HealthStatus:
        if all(c.status is HealthStatus.HEALTHY for c in self.components):
            return HealthStatus.HEALTHY
        return HealthStatus.UNHEALTHY

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "components": {
                c.name: {
                    "status": c.status.value,
                    "message": c.message,
                    "latency_ms": c.latency_ms,
                }
                for c in self.components
            },
        }


class SettingsHealthCheck:
    """Checks that settings can be read and the settings page can be served."""

    def __init__(
        self, session: AsyncSession, registry: AdminRegistry, settings: Settings
    ) -> None:
        self.session = session
        self.registry = registry
        self.settings = settings

    async def check_option_store(self) -> ComponentHealth:
        started = time.perf_counter()
        try:
            async with self.session.begin_nested():
                await self.session.execute(select(func.count()).select_from(Option))
        except Exception as exc:
            logger.warning("Option store unreachable", extra={"error": str(exc)})
            return ComponentHealth(
                name="option_store",
                status=HealthStatus.UNHEALTHY,
                message=f"Options table unreachable: {exc}",
            )
        return ComponentHealth(
            name="option_store",
            status=HealthStatus.HEALTHY,
            latency_ms=round((time.perf_counter() - started) * 1000, 2),
        )

    def check_settings_page(self) -> ComponentHealth:
        if not self.settings.admin_enabled:
            return ComponentHealth(
                name="settings_page",
                status=HealthStatus.HEALTHY,
                message="Admin disabled",
            )
        try:
            self.registry.get_page(self.settings.plugin_slug)
            self.registry.settings_for(self.settings.settings_group)
        except NotFoundError as exc:
            return ComponentHealth(
                name="settings_page", status=HealthStatus.UNHEALTHY, message=exc.detail
            )
        return ComponentHealth(name="settings_page", status=HealthStatus.HEALTHY)

    async def check(self) -> HealthReport:
        return HealthReport(
            components=[await self.check_option_store(), self.check_settings_page()]
        )
