"""JournalService: free-text journal entries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dashctl.domain.entities import Journal
from dashctl.domain.ids import make_id
from dashctl.domain.timestamps import now_iso
from dashctl.services.base import BaseService, not_found, remove_entity
from dashctl.services.result import VALIDATION_FAILED, ServiceResult
from dashctl.services.telemetry import traced

if TYPE_CHECKING:
    from dashctl.domain.entities import Document


class JournalService(BaseService):
    """Add, delete and list journal entries."""

    @traced
    async def add(self, text: str) -> ServiceResult:
        """Add an entry at the top of the journal."""
        op = "add_journal"
        clean_text = text.strip()
        if not clean_text:
            return ServiceResult.failure(op, VALIDATION_FAILED, "text is required")

        entry = Journal(id=make_id(), text=clean_text, created_at=now_iso())

        def mutate(draft: Document) -> ServiceResult:
            draft.journals.insert(0, entry)
            return ServiceResult(ok=True, op=op, data=entry.to_raw())

        return await self._update(mutate)

    @traced
    async def delete(self, entry_id: str) -> ServiceResult:
        op = "delete_journal"

        def mutate(draft: Document) -> ServiceResult:
            entry = remove_entity(draft.journals, entry_id)
            if entry is None:
                return not_found(op, "journal entry", entry_id)
            return ServiceResult(ok=True, op=op, data={"id": entry.id})

        return await self._update(mutate)

    @traced
    async def list(self) -> ServiceResult:
        document = await self._load()
        items = [entry.to_raw() for entry in document.journals]
        return ServiceResult(
            ok=True, op="list_journals", data={"items": items, "count": len(items)}
        )
