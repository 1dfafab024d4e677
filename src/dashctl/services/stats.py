"""StatsService: dashboard summary counters."""

from __future__ import annotations

from datetime import UTC, datetime

from dashctl.domain.timestamps import utc_day
from dashctl.services.base import BaseService
from dashctl.services.result import ServiceResult
from dashctl.services.telemetry import traced


class StatsService(BaseService):
    """Read-only summary over the whole Document."""

    @traced
    async def summary(self, *, today: str | None = None) -> ServiceResult:
        """Totals per collection plus today's focus minutes.

        Args:
            today: UTC day (``YYYY-MM-DD``) to sum focus minutes for.
                Defaults to the current UTC day.
        """
        day = today or datetime.now(UTC).strftime("%Y-%m-%d")
        document = await self._load()
        focus_today = sum(
            session.minutes
            for session in document.focus_sessions
            if utc_day(session.created_at) == day
        )
        return ServiceResult(
            ok=True,
            op="stats",
            data={
                "totalTasks": len(document.tasks),
                "doneTasks": sum(1 for task in document.tasks if task.done),
                "focusMinutesToday": focus_today,
                "journalsCount": len(document.journals),
                "eventsCount": len(document.events),
                "launchpadCount": len(document.launchpad),
            },
        )
