"""TaskService: to-do items with a done flag and a priority."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dashctl.domain.entities import Task
from dashctl.domain.ids import make_id
from dashctl.domain.timestamps import now_iso
from dashctl.domain.types import DEFAULT_PRIORITY, Priority
from dashctl.services.base import BaseService, find_entity, not_found, remove_entity
from dashctl.services.result import VALIDATION_FAILED, ServiceResult
from dashctl.services.telemetry import traced

if TYPE_CHECKING:
    from dashctl.domain.entities import Document

_PRIORITIES = [str(p) for p in Priority]


def _parse_priority(op: str, value: str) -> Priority | ServiceResult:
    try:
        return Priority(value.strip().lower())
    except ValueError:
        return ServiceResult.failure(
            op,
            VALIDATION_FAILED,
            f"priority must be one of {', '.join(_PRIORITIES)}",
            priority=value,
        )


class TaskService(BaseService):
    """Create, edit, delete and list tasks."""

    @traced
    async def add(self, title: str, *, priority: str = str(DEFAULT_PRIORITY)) -> ServiceResult:
        """Add a task at the top of the list."""
        op = "add_task"
        clean_title = title.strip()
        if not clean_title:
            return ServiceResult.failure(op, VALIDATION_FAILED, "title is required")
        level = _parse_priority(op, priority)
        if isinstance(level, ServiceResult):
            return level

        task = Task(id=make_id(), title=clean_title, priority=level, created_at=now_iso())

        def mutate(draft: Document) -> ServiceResult:
            draft.tasks.insert(0, task)
            return ServiceResult(ok=True, op=op, data=task.to_raw())

        return await self._update(mutate)

    @traced
    async def edit(
        self,
        task_id: str,
        *,
        title: str | None = None,
        done: bool | None = None,
        priority: str | None = None,
    ) -> ServiceResult:
        """Change any of *title*, *done* and *priority* on an existing task."""
        op = "edit_task"
        clean_title = title.strip() if title is not None else None
        if clean_title == "":
            return ServiceResult.failure(op, VALIDATION_FAILED, "title cannot be empty")
        level: Priority | None = None
        if priority is not None:
            parsed = _parse_priority(op, priority)
            if isinstance(parsed, ServiceResult):
                return parsed
            level = parsed

        def mutate(draft: Document) -> ServiceResult:
            task = find_entity(draft.tasks, task_id)
            if task is None:
                return not_found(op, "task", task_id)
            changed: list[str] = []
            if clean_title is not None and clean_title != task.title:
                task.title = clean_title
                changed.append("title")
            if done is not None and done != task.done:
                task.done = done
                changed.append("done")
            if level is not None and level != task.priority:
                task.priority = level
                changed.append("priority")
            return ServiceResult(
                ok=True, op=op, data={**task.to_raw(), "fields_changed": changed}
            )

        return await self._update(mutate)

    @traced
    async def delete(self, task_id: str) -> ServiceResult:
        """Remove a task."""
        op = "delete_task"

        def mutate(draft: Document) -> ServiceResult:
            task = remove_entity(draft.tasks, task_id)
            if task is None:
                return not_found(op, "task", task_id)
            return ServiceResult(ok=True, op=op, data={"id": task.id, "title": task.title})

        return await self._update(mutate)

    @traced
    async def list(self) -> ServiceResult:
        """All tasks, newest first."""
        document = await self._load()
        items = [task.to_raw() for task in document.tasks]
        return ServiceResult(ok=True, op="list_tasks", data={"items": items, "count": len(items)})
