"""LaunchpadService: named URL shortcuts with launch tracking.

INVARIANT: Launchpad URLs are unique across the collection. Uniqueness is
checked inside the mutation closure against the collection as it is at
that moment, so two overlapping requests cannot both add the same URL.

URLs are compared in canonical form (see
:func:`dashctl.domain.launchpad.normalize_launchpad_url`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dashctl.domain.entities import LaunchpadItem
from dashctl.domain.ids import make_id
from dashctl.domain.launchpad import (
    LAUNCHPAD_DESCRIPTION_MAX,
    LAUNCHPAD_NAME_MAX,
    normalize_launchpad_url,
)
from dashctl.domain.timestamps import now_iso
from dashctl.services.base import BaseService, find_entity, not_found, remove_entity
from dashctl.services.result import CONFLICT, DISABLED, VALIDATION_FAILED, ServiceResult
from dashctl.services.telemetry import traced

if TYPE_CHECKING:
    from dashctl.domain.entities import Document


# ---------------------------------------------------------------------------
# Request validation
# ---------------------------------------------------------------------------


def _check_name(op: str, name: str) -> str | ServiceResult:
    clean = name.strip()
    if not clean:
        return ServiceResult.failure(op, VALIDATION_FAILED, "name is required")
    if len(clean) > LAUNCHPAD_NAME_MAX:
        return ServiceResult.failure(
            op,
            VALIDATION_FAILED,
            f"name must be at most {LAUNCHPAD_NAME_MAX} characters",
            length=len(clean),
        )
    return clean


def _check_url(op: str, url: str) -> str | ServiceResult:
    canonical = normalize_launchpad_url(url)
    if canonical is None:
        return ServiceResult.failure(
            op, VALIDATION_FAILED, "url must be an absolute http or https URL", url=url
        )
    return canonical


def _check_description(op: str, description: str) -> str | ServiceResult:
    clean = description.strip()
    if len(clean) > LAUNCHPAD_DESCRIPTION_MAX:
        return ServiceResult.failure(
            op,
            VALIDATION_FAILED,
            f"description must be at most {LAUNCHPAD_DESCRIPTION_MAX} characters",
            length=len(clean),
        )
    return clean


def _url_conflict(
    op: str, items: list[LaunchpadItem], url: str, *, exclude: str | None = None
) -> ServiceResult | None:
    for item in items:
        if item.url == url and item.id != exclude:
            return ServiceResult.failure(
                op,
                CONFLICT,
                f"a launchpad item already uses {url}",
                url=url,
                existing_id=item.id,
            )
    return None


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class LaunchpadService(BaseService):
    """Create, edit, launch, delete and list launchpad items."""

    @traced
    async def create(self, name: str, url: str, description: str = "") -> ServiceResult:
        """Add a shortcut. Fails with CONFLICT if the URL is already present."""
        op = "create_launchpad"
        checked: list[str | ServiceResult] = [
            _check_name(op, name),
            _check_url(op, url),
            _check_description(op, description),
        ]
        for value in checked:
            if isinstance(value, ServiceResult):
                return value
        clean_name, canonical_url, clean_description = (str(v) for v in checked)

        def mutate(draft: Document) -> ServiceResult:
            conflict = _url_conflict(op, draft.launchpad, canonical_url)
            if conflict is not None:
                return conflict
            now = now_iso()
            item = LaunchpadItem(
                id=make_id(),
                name=clean_name,
                url=canonical_url,
                description=clean_description,
                created_at=now,
                updated_at=now,
            )
            draft.launchpad.insert(0, item)
            return ServiceResult(ok=True, op=op, data=item.to_raw())

        return await self._update(mutate)

    @traced
    async def edit(
        self,
        item_id: str,
        *,
        name: str | None = None,
        url: str | None = None,
        description: str | None = None,
        enabled: bool | None = None,
    ) -> ServiceResult:
        """Change fields of an existing item; ``updatedAt`` moves only on change."""
        op = "edit_launchpad"
        changes: dict[str, Any] = {}
        for field_name, value, check in (
            ("name", name, _check_name),
            ("url", url, _check_url),
            ("description", description, _check_description),
        ):
            if value is None:
                continue
            checked = check(op, value)
            if isinstance(checked, ServiceResult):
                return checked
            changes[field_name] = checked
        if enabled is not None:
            changes["enabled"] = enabled

        def mutate(draft: Document) -> ServiceResult:
            item = find_entity(draft.launchpad, item_id)
            if item is None:
                return not_found(op, "launchpad item", item_id)
            if "url" in changes:
                conflict = _url_conflict(op, draft.launchpad, changes["url"], exclude=item.id)
                if conflict is not None:
                    return conflict
            changed = [key for key, value in changes.items() if getattr(item, key) != value]
            for key in changed:
                setattr(item, key, changes[key])
            if changed:
                item.updated_at = now_iso()
            return ServiceResult(ok=True, op=op, data={**item.to_raw(), "fields_changed": changed})

        return await self._update(mutate)

    @traced
    async def launch(self, item_id: str) -> ServiceResult:
        """Count a launch of an enabled item and return its URL."""
        op = "launch"

        def mutate(draft: Document) -> ServiceResult:
            item = find_entity(draft.launchpad, item_id)
            if item is None:
                return not_found(op, "launchpad item", item_id)
            if not item.enabled:
                return ServiceResult.failure(
                    op, DISABLED, f"launchpad item is disabled: {item_id}", id=item_id
                )
            now = now_iso()
            item.launch_count += 1
            item.last_launched_at = now
            item.updated_at = now
            return ServiceResult(ok=True, op=op, data=item.to_raw())

        return await self._update(mutate)

    @traced
    async def delete(self, item_id: str) -> ServiceResult:
        op = "delete_launchpad"

        def mutate(draft: Document) -> ServiceResult:
            item = remove_entity(draft.launchpad, item_id)
            if item is None:
                return not_found(op, "launchpad item", item_id)
            return ServiceResult(ok=True, op=op, data={"id": item.id, "name": item.name})

        return await self._update(mutate)

    @traced
    async def list(self) -> ServiceResult:
        """All items, most recently updated first."""
        document = await self._load()
        ordered = sorted(document.launchpad, key=lambda item: item.updated_at, reverse=True)
        items = [item.to_raw() for item in ordered]
        return ServiceResult(
            ok=True, op="list_launchpad", data={"items": items, "count": len(items)}
        )
