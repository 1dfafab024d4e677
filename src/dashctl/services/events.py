"""EventService: calendar events with a scheduled instant."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dashctl.domain.entities import CalendarEvent
from dashctl.domain.ids import make_id
from dashctl.domain.timestamps import now_iso, parse_iso
from dashctl.services.base import BaseService, not_found, remove_entity
from dashctl.services.result import VALIDATION_FAILED, ServiceResult
from dashctl.services.telemetry import traced

if TYPE_CHECKING:
    from dashctl.domain.entities import Document


class EventService(BaseService):
    """Add, delete and list calendar events."""

    @traced
    async def add(self, title: str, when: str) -> ServiceResult:
        """Schedule an event. *when* is any ISO-8601 date or date-time."""
        op = "add_event"
        clean_title = title.strip()
        if not clean_title:
            return ServiceResult.failure(op, VALIDATION_FAILED, "title is required")
        scheduled = parse_iso(when)
        if scheduled is None:
            return ServiceResult.failure(
                op, VALIDATION_FAILED, "when must be an ISO-8601 date or date-time", when=when
            )

        event = CalendarEvent(id=make_id(), title=clean_title, when=scheduled, created_at=now_iso())

        def mutate(draft: Document) -> ServiceResult:
            draft.events.append(event)
            return ServiceResult(ok=True, op=op, data=event.to_raw())

        return await self._update(mutate)

    @traced
    async def delete(self, event_id: str) -> ServiceResult:
        op = "delete_event"

        def mutate(draft: Document) -> ServiceResult:
            event = remove_entity(draft.events, event_id)
            if event is None:
                return not_found(op, "event", event_id)
            return ServiceResult(ok=True, op=op, data={"id": event.id, "title": event.title})

        return await self._update(mutate)

    @traced
    async def list(self) -> ServiceResult:
        """All events, soonest first."""
        document = await self._load()
        # Canonical timestamps sort chronologically as strings.
        events = sorted(document.events, key=lambda e: e.when)
        items = [event.to_raw() for event in events]
        return ServiceResult(ok=True, op="list_events", data={"items": items, "count": len(items)})
