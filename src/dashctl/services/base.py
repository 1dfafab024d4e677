"""BaseService: abstract foundation for all dashctl services.

Every service receives a :class:`DocumentStore` at construction time.
Read-only operations call ``self._load()``; anything that creates, edits
or deletes an entity goes through ``self._update(mutate)`` with a closure
that performs exactly the validation and mutation for that request and
returns a ServiceResult.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeVar

from dashctl.services.result import NOT_FOUND, ServiceResult
from dashctl.services.telemetry import trace_span

if TYPE_CHECKING:
    from dashctl.domain.entities import Document, Entity
    from dashctl.infrastructure.store import DocumentStore

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound="Entity")


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class TaskService(BaseService):
            async def delete(self, task_id: str) -> ServiceResult:
                def mutate(draft: Document) -> ServiceResult:
                    ...
                return await self._update(mutate)
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def _load(self) -> Document:
        with trace_span("store.load"):
            return await self._store.load()

    async def _update(
        self, mutate: Callable[[Document], ServiceResult | Awaitable[ServiceResult]]
    ) -> ServiceResult:
        with trace_span("store.update") as span:
            if span:
                span.annotate("queued", self._store.pending)
            return await self._store.update(mutate)


def find_entity(entities: list[_E], entity_id: str) -> _E | None:
    """The entity with *entity_id*, or None."""
    for entity in entities:
        if entity.id == entity_id:
            return entity
    return None


def remove_entity(entities: list[_E], entity_id: str) -> _E | None:
    """Remove and return the entity with *entity_id* from *entities* in place."""
    for index, entity in enumerate(entities):
        if entity.id == entity_id:
            return entities.pop(index)
    return None


def not_found(op: str, kind: str, entity_id: str) -> ServiceResult:
    """The NOT_FOUND result shared by every edit/delete operation."""
    logger.debug("%s %s not found", kind, entity_id)
    return ServiceResult.failure(op, NOT_FOUND, f"{kind} not found: {entity_id}", id=entity_id)
