"""Normalizer: untrusted JSON in, valid Document out.

INVARIANT: ``normalize()`` never raises, whatever it is given.

Each ``normalize_<entity>(raw, index)`` is a parse-and-filter step that
returns the entity or None when the element cannot be salvaged; the
collection keeps only the present results. Salvage rules:

- A non-object element, or a required text field that is blank after
  trimming, drops the element.
- Enum values outside the allowed set fall back to a default
  (priority -> ``medium``), matched case-insensitively.
- Unparseable timestamps become the current instant. A launchpad item's
  ``updatedAt`` falls back to its ``createdAt``; an unparseable
  ``lastLaunchedAt`` becomes null.
- Booleans are coerced by truthiness; a missing ``done`` is False and a
  missing ``enabled`` is True.
- Counters are floored to integers and clamped to >= 0. Numeric strings
  are accepted; booleans, NaN and infinities are not numbers. A focus
  session must end up with at least one minute.
- Missing, blank or duplicate ids are re-derived from the entity's
  position and content (see :func:`dashctl.domain.ids.claim_id`).

Cross-entity rules such as launchpad URL uniqueness are not enforced
here; they belong to the mutation that has the request context.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any, TypeVar

from dashctl.domain.entities import (
    CalendarEvent,
    Document,
    Entity,
    FocusSession,
    Journal,
    LaunchpadItem,
    Task,
)
from dashctl.domain.ids import claim_id
from dashctl.domain.launchpad import (
    LAUNCHPAD_DESCRIPTION_MAX,
    LAUNCHPAD_NAME_MAX,
    clip,
    normalize_launchpad_url,
)
from dashctl.domain.timestamps import now_iso, parse_iso
from dashctl.domain.types import DEFAULT_PRIORITY, Collection, Priority

_E = TypeVar("_E", bound=Entity)

# ---------------------------------------------------------------------------
# Field coercions
# ---------------------------------------------------------------------------


def _text(value: Any) -> str | None:
    """Trimmed string, or None for non-strings and blanks."""
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text.isascii():
        # Lone surrogates from JSON escapes cannot be written back as UTF-8.
        text = text.encode("utf-8", "replace").decode("utf-8")
    return text or None


def _raw_id(value: Any) -> str | None:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return _text(value)


def _flag(raw: dict[str, Any], key: str, *, default: bool) -> bool:
    if key not in raw or raw[key] is None:
        return default
    return bool(raw[key])


def _count(value: Any) -> int | None:
    """Floor *value* to a non-negative int; None if it is not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return max(0, math.floor(value))


def _priority(value: Any) -> Priority:
    text = _text(value)
    if text is None:
        return DEFAULT_PRIORITY
    try:
        return Priority(text.lower())
    except ValueError:
        return DEFAULT_PRIORITY


def _timestamp(value: Any, *, fallback: str | None = None) -> str:
    parsed = parse_iso(value)
    if parsed is not None:
        return parsed
    return fallback if fallback is not None else now_iso()


# ---------------------------------------------------------------------------
# Per-entity parse-and-filter steps
# ---------------------------------------------------------------------------


def normalize_task(raw: Any, index: int) -> Task | None:
    if not isinstance(raw, dict):
        return None
    title = _text(raw.get("title"))
    if title is None:
        return None
    return Task(
        id=_raw_id(raw.get("id")) or "",
        title=title,
        done=_flag(raw, "done", default=False),
        priority=_priority(raw.get("priority")),
        created_at=_timestamp(raw.get("createdAt")),
    )


def normalize_focus_session(raw: Any, index: int) -> FocusSession | None:
    if not isinstance(raw, dict):
        return None
    minutes = _count(raw.get("minutes"))
    if not minutes:
        return None
    return FocusSession(
        id=_raw_id(raw.get("id")) or "",
        minutes=minutes,
        created_at=_timestamp(raw.get("createdAt")),
    )


def normalize_journal(raw: Any, index: int) -> Journal | None:
    if not isinstance(raw, dict):
        return None
    text = _text(raw.get("text"))
    if text is None:
        return None
    return Journal(
        id=_raw_id(raw.get("id")) or "",
        text=text,
        created_at=_timestamp(raw.get("createdAt")),
    )


def normalize_event(raw: Any, index: int) -> CalendarEvent | None:
    if not isinstance(raw, dict):
        return None
    title = _text(raw.get("title"))
    if title is None:
        return None
    return CalendarEvent(
        id=_raw_id(raw.get("id")) or "",
        title=title,
        when=_timestamp(raw.get("when")),
        created_at=_timestamp(raw.get("createdAt")),
    )


def normalize_launchpad_item(raw: Any, index: int) -> LaunchpadItem | None:
    if not isinstance(raw, dict):
        return None
    name = _text(raw.get("name"))
    url = normalize_launchpad_url(_text(raw.get("url")))
    if name is None or url is None:
        return None
    created_at = _timestamp(raw.get("createdAt"))
    return LaunchpadItem(
        id=_raw_id(raw.get("id")) or "",
        name=clip(name, LAUNCHPAD_NAME_MAX),
        url=url,
        description=clip(_text(raw.get("description")) or "", LAUNCHPAD_DESCRIPTION_MAX),
        enabled=_flag(raw, "enabled", default=True),
        launch_count=_count(raw.get("launchCount")) or 0,
        last_launched_at=parse_iso(raw.get("lastLaunchedAt")),
        created_at=created_at,
        updated_at=_timestamp(raw.get("updatedAt"), fallback=created_at),
    )


# ---------------------------------------------------------------------------
# Collections and the Document
# ---------------------------------------------------------------------------


def _identity(entity: Entity) -> str:
    """Content used to derive an id for *entity*."""
    for attr in ("title", "text", "url"):
        value = getattr(entity, attr, None)
        if isinstance(value, str):
            return value
    return str(getattr(entity, "minutes", ""))


def normalize_collection(
    raw: Any,
    collection: Collection,
    step: Callable[[Any, int], _E | None],
) -> list[_E]:
    """Run *step* over every element of *raw*, keeping the present results.

    Ids are claimed in order, so the first holder of a duplicate id keeps it.
    """
    if not isinstance(raw, list):
        return []
    kept: list[_E] = []
    taken: set[str] = set()
    for index, element in enumerate(raw):
        entity = step(element, index)
        if entity is None:
            continue
        entity.id = claim_id(
            entity.id,
            taken,
            collection=collection,
            index=index,
            content=_identity(entity),
        )
        taken.add(entity.id)
        kept.append(entity)
    return kept


_STEPS: dict[Collection, Callable[[Any, int], Entity | None]] = {
    Collection.TASKS: normalize_task,
    Collection.FOCUS_SESSIONS: normalize_focus_session,
    Collection.JOURNALS: normalize_journal,
    Collection.EVENTS: normalize_event,
    Collection.LAUNCHPAD: normalize_launchpad_item,
}


def normalize(raw: Any) -> Document:
    """Build a valid Document from arbitrary input.

    Accepts decoded JSON or an existing Document (re-normalized through its
    raw form, so edits made by a mutation closure are validated too).
    Anything that is not an object yields an empty Document.
    """
    if isinstance(raw, Document):
        raw = raw.to_raw()
    if not isinstance(raw, dict):
        return Document()
    return Document.model_validate(
        {
            str(name): normalize_collection(raw.get(str(name)), name, step)
            for name, step in _STEPS.items()
        }
    )
