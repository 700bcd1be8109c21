"""Typed views over GitHub Actions API payloads."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

COMPLETED_STATUS = "completed"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 API timestamp into an aware UTC datetime."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Workflow:
    """A workflow definition in a repository."""

    id: int
    name: str
    path: str
    state: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Workflow":
        return cls(
            id=int(payload["id"]),
            name=str(payload.get("name") or ""),
            path=str(payload.get("path") or ""),
            state=payload.get("state"),
        )


@dataclass(frozen=True)
class WorkflowRun:
    """A snapshot of one workflow run."""

    id: int
    status: str
    conclusion: Optional[str]
    created_at: Optional[datetime]
    html_url: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED_STATUS

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "WorkflowRun":
        return cls(
            id=int(payload["id"]),
            status=str(payload.get("status") or ""),
            conclusion=payload.get("conclusion"),
            created_at=parse_timestamp(payload.get("created_at")),
            html_url=payload.get("html_url"),
        )
