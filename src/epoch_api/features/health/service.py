"""Service layer for the health module."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from epoch_api.common.logging import log_context
from epoch_api.engine import InvalidTimezoneError, resolve_zone
from epoch_api.settings import Settings

from .schemas import ComponentHealth, HealthCheckResponse

logger = logging.getLogger(__name__)

# A zone with DST rules; UTC alone would not exercise the zone database.
PROBE_ZONE = "America/New_York"


class HealthService:
    """Report whether conversions beyond UTC can be served."""

    def __init__(self, *, settings: Settings) -> None:
        self._settings = settings

    def status(self) -> HealthCheckResponse:
        components = [
            ComponentHealth(name="api", status="available", detail=f"v{self._settings.app_version}"),
            self._zone_database(),
        ]
        logger.debug("health.checked", extra=log_context(component_count=len(components)))
        return HealthCheckResponse(
            timestamp=datetime.now(tz=UTC),
            default_timezone=self._settings.default_timezone,
            components=components,
        )

    def _zone_database(self) -> ComponentHealth:
        try:
            resolve_zone(PROBE_ZONE)
        except InvalidTimezoneError:
            logger.warning("health.zone_database.missing", extra=log_context(timezone=PROBE_ZONE))
            return ComponentHealth(
                name="zone-database",
                status="degraded",
                detail="only UTC conversions are available; install tzdata",
            )
        return ComponentHealth(name="zone-database", status="available")
