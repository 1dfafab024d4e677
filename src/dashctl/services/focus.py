"""FocusService: completed focus-timer sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dashctl.domain.entities import FocusSession
from dashctl.domain.ids import make_id
from dashctl.domain.timestamps import now_iso
from dashctl.services.base import BaseService
from dashctl.services.result import VALIDATION_FAILED, ServiceResult
from dashctl.services.telemetry import traced

if TYPE_CHECKING:
    from dashctl.domain.entities import Document

DEFAULT_MINUTES = 25


class FocusService(BaseService):
    """Log and list focus sessions."""

    @traced
    async def log(self, minutes: int = DEFAULT_MINUTES) -> ServiceResult:
        """Record a finished session of *minutes* length."""
        op = "log_focus"
        if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0:
            return ServiceResult.failure(
                op, VALIDATION_FAILED, "minutes must be a positive integer", minutes=minutes
            )

        session = FocusSession(id=make_id(), minutes=minutes, created_at=now_iso())

        def mutate(draft: Document) -> ServiceResult:
            draft.focus_sessions.insert(0, session)
            return ServiceResult(ok=True, op=op, data=session.to_raw())

        return await self._update(mutate)

    @traced
    async def list(self) -> ServiceResult:
        """All sessions, newest first."""
        document = await self._load()
        items = [session.to_raw() for session in document.focus_sessions]
        total = sum(session.minutes for session in document.focus_sessions)
        return ServiceResult(
            ok=True,
            op="list_focus",
            data={"items": items, "count": len(items), "total_minutes": total},
        )
