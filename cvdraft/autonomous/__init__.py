"""Attempt orchestration and reapplication scheduling."""

from cvdraft.autonomous.models import AttemptResult, AttemptStatus
from cvdraft.autonomous.runner import AttemptRunner
from cvdraft.autonomous.scheduler import RetryScheduler

__all__ = [
    "AttemptResult",
    "AttemptRunner",
    "AttemptStatus",
    "RetryScheduler",
]
