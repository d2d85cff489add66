"""Attempt data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum


class AttemptStatus(str, Enum):
    """How an attempt ended."""

    DRAFTED = "drafted"
    APPLICATIONS_CLOSED = "applications_closed"


@dataclass
class AttemptResult:
    """Result of one end-to-end drafting attempt for a job target."""

    job: str
    status: AttemptStatus
    job_description: str
    cv_markdown: str | None = None
    covering_letter: str | None = None
    # The submission outcome is decided by a human outside this tool.
    hired: bool = False
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    completed_at: datetime | None = None

    @property
    def drafted(self) -> bool:
        return self.status is AttemptStatus.DRAFTED
