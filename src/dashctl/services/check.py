"""CheckService: report the health of the document files.

Read-only: reports what ``load()`` would find without triggering its
recovery. A primary that is not ``ok`` is repaired by the next load or
transaction.
"""

from __future__ import annotations

from dashctl.services.base import BaseService
from dashctl.services.result import ServiceResult
from dashctl.services.telemetry import traced


class CheckService(BaseService):
    """Diagnose the primary, backup and staging files."""

    @traced
    async def check(self) -> ServiceResult:
        report = await self._store.diagnose()
        warnings: list[str] = []
        if report["primary"] != "ok":
            warnings.append(f"primary document is {report['primary']}; next load will recover it")
        if report["backup"] not in ("ok", "not_found"):
            warnings.append(f"backup document is {report['backup']}")
        if report["staging_present"]:
            warnings.append("an unfinished write left a staging file behind")
        report["healthy"] = not warnings
        return ServiceResult(ok=True, op="check", data=report, warnings=warnings)
