"""Reapplication scheduling between attempts."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta

from cvdraft.autonomous.models import AttemptResult
from cvdraft.config.job_config import JobConfig

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]
Attempt = Callable[[], Awaitable[AttemptResult]]

MIN_SLEEP_SECONDS = 1.0


def _utcnow() -> datetime:
    return datetime.now(UTC)


class RetryScheduler:
    """Runs attempts with a random reapply delay between them.

    The process is idle while waiting; stopping the process is the only way
    to cancel a pending wait.
    """

    def __init__(
        self,
        job_config: JobConfig,
        *,
        rng: random.Random | None = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.job_config = job_config
        self.rng = rng or random.Random()
        self.sleep = sleep
        self.clock = clock

    def next_delay(self) -> timedelta:
        """Uniformly random whole days within the configured window (inclusive)."""
        days = self.rng.randint(
            self.job_config.min_reapply_days, self.job_config.max_reapply_days
        )
        return timedelta(days=days)

    async def run(self, attempt: Attempt, *, continuous: bool) -> list[AttemptResult]:
        """Run attempts until hired, out of attempts, or single-shot.

        Args:
            attempt: Coroutine factory running one attempt.
            continuous: Keep rescheduling; when False exactly one attempt runs.

        Returns:
            Results of every attempt, in order.
        """
        max_attempts = self.job_config.max_attempts
        results: list[AttemptResult] = []

        while True:
            number = len(results) + 1
            logger.info("Attempt %d at %s", number, self.clock().isoformat())
            result = await attempt()
            results.append(result)

            if result.hired:
                logger.info("Job secured. Stopping.")
                break

            delay = self.next_delay()
            next_run = self.clock() + delay

            if not continuous:
                logger.info(
                    "Single run finished; consider reapplying in ~%d days, around %s",
                    delay.days,
                    next_run.isoformat(),
                )
                break
            if number >= max_attempts:
                logger.info("All %d attempts used. Stopping.", max_attempts)
                break

            logger.info(
                "Will try again in ~%d days, around %s",
                delay.days,
                next_run.isoformat(),
            )
            seconds = max(delay.total_seconds(), MIN_SLEEP_SECONDS)
            logger.info("Sleeping for %d seconds", round(seconds))
            await self.sleep(seconds)

        return results
