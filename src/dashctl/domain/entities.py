"""Entity models and the Document aggregate.

Attributes are snake_case in Python and camelCase on disk
(``created_at`` <-> ``createdAt``). Models are mutable: a loaded Document
is a draft that a mutation closure edits in place before the store
re-normalizes and persists it.

Models perform no validation of their own beyond field types. The
invariants (non-blank text, canonical timestamps, unique ids) are
established by :mod:`dashctl.domain.normalize` on every load and every
write.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dashctl.domain.types import DEFAULT_PRIORITY, Collection, Priority

_TRAILING_KEYS = ("createdAt", "updatedAt")


class Entity(BaseModel):
    """Fields shared by every stored entity."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    created_at: str

    def to_raw(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys, timestamps last."""
        raw = self.model_dump(mode="json", by_alias=True, warnings=False)
        for key in _TRAILING_KEYS:
            if key in raw:
                raw[key] = raw.pop(key)
        return raw


class Task(Entity):
    title: str
    done: bool = False
    priority: Priority = DEFAULT_PRIORITY


class FocusSession(Entity):
    minutes: int


class Journal(Entity):
    text: str


class CalendarEvent(Entity):
    title: str
    when: str


class LaunchpadItem(Entity):
    name: str
    url: str
    description: str = ""
    enabled: bool = True
    launch_count: int = 0
    last_launched_at: str | None = None
    updated_at: str


class Document(BaseModel):
    """Root aggregate: the five collections persisted as one JSON object."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tasks: list[Task] = Field(default_factory=list)
    focus_sessions: list[FocusSession] = Field(default_factory=list)
    journals: list[Journal] = Field(default_factory=list)
    events: list[CalendarEvent] = Field(default_factory=list)
    launchpad: list[LaunchpadItem] = Field(default_factory=list)

    def collection(self, name: Collection) -> list[Any]:
        """The live list backing *name* (mutations are visible to the draft)."""
        return getattr(self, _ATTRIBUTES[name])

    def counts(self) -> dict[str, int]:
        """Entity count per collection, keyed by persisted name."""
        return {str(name): len(self.collection(name)) for name in Collection}

    def to_raw(self) -> dict[str, Any]:
        """JSON-ready dict in persisted key order."""
        return {
            str(name): [entity.to_raw() for entity in self.collection(name)]
            for name in Collection
        }


_ATTRIBUTES: dict[Collection, str] = {
    Collection.TASKS: "tasks",
    Collection.FOCUS_SESSIONS: "focus_sessions",
    Collection.JOURNALS: "journals",
    Collection.EVENTS: "events",
    Collection.LAUNCHPAD: "launchpad",
}
