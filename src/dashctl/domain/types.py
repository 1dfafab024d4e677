"""Enumerations shared by the entity models and the normalizer."""

from __future__ import annotations

from enum import StrEnum


class Priority(StrEnum):
    """Task priority levels."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


DEFAULT_PRIORITY = Priority.MEDIUM


class Collection(StrEnum):
    """The five collections of a Document, keyed by their persisted name."""

    TASKS = "tasks"
    FOCUS_SESSIONS = "focusSessions"
    JOURNALS = "journals"
    EVENTS = "events"
    LAUNCHPAD = "launchpad"


# Short prefixes used when an id has to be derived for a stored entity.
ID_PREFIXES: dict[Collection, str] = {
    Collection.TASKS: "task",
    Collection.FOCUS_SESSIONS: "focus",
    Collection.JOURNALS: "journal",
    Collection.EVENTS: "event",
    Collection.LAUNCHPAD: "launch",
}
