"""Single end-to-end attempt for a job target."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from cvdraft.autonomous.models import AttemptResult, AttemptStatus
from cvdraft.drafting.composer import DocumentComposer
from cvdraft.drafting.config import DraftingConfig, get_drafting_config
from cvdraft.drafting.llm import ModelGateway
from cvdraft.drafting.profile import ProfileService
from cvdraft.drafting.research import JobResearchService
from cvdraft.drafting.service import DraftingService
from cvdraft.hitl.review import InputFn
from cvdraft.utils.reporting import ConsoleReporter, Reporter

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AttemptRunner:
    """Runs one attempt: research, open check, CV, covering letter, output.

    Errors from any step propagate; an attempt is never partially retried.
    """

    def __init__(
        self,
        *,
        config: DraftingConfig | None = None,
        gateway: ModelGateway | None = None,
        reporter: Reporter | None = None,
        input_fn: InputFn = input,
        clock: Callable[[], datetime] = _utcnow,
        profile_service: ProfileService | None = None,
        research_service: JobResearchService | None = None,
        drafting_service: DraftingService | None = None,
        composer: DocumentComposer | None = None,
    ) -> None:
        self.config = config or get_drafting_config()
        self.gateway = gateway or ModelGateway(config=self.config)
        self.reporter = reporter or ConsoleReporter()
        self.clock = clock

        self.profile_service = profile_service or ProfileService()
        self.research_service = research_service or JobResearchService(
            config=self.config, gateway=self.gateway
        )
        self.drafting_service = drafting_service or DraftingService(
            config=self.config,
            gateway=self.gateway,
            reporter=self.reporter,
            input_fn=input_fn,
        )
        self.composer = composer or DocumentComposer(
            config=self.config, gateway=self.gateway
        )

    async def run_once(
        self,
        job: str,
        *,
        profile_path: Path | str,
        notes_path: Path | str,
    ) -> AttemptResult:
        """Draft the CV and covering letter for `job` and print them."""
        started_at = self.clock()
        logger.info('Starting job application process for: "%s"', job)

        logger.info("Reading covering letter notes from: %s", notes_path)
        notes = self.profile_service.load_notes(notes_path)

        logger.info("Reading CV base data from: %s", profile_path)
        profile = self.profile_service.load_profile(profile_path)
        for warning in self.profile_service.validate_profile(profile):
            logger.warning("CV base data: %s", warning)

        logger.info('Fetching job description for: "%s"', job)
        research = await self.research_service.fetch_job_description(job)
        logger.info("Job description fetched for role: %s", research.role_title)

        logger.info('Checking if applications are still open for: "%s"', job)
        status = await self.research_service.check_applications_open(
            job, now=self.clock()
        )
        if not status.open:
            logger.warning(
                'Applications are closed for: "%s" (confidence %.2f)',
                job,
                status.confidence,
            )
            return AttemptResult(
                job=job,
                status=AttemptStatus.APPLICATIONS_CLOSED,
                job_description=research.job_description,
                started_at=started_at,
                completed_at=self.clock(),
            )
        logger.info("Applications are still open (confidence %.2f)", status.confidence)

        logger.info("Drafting CV tailored to the job description")
        cv_markdown = await self.drafting_service.draft_cv(
            profile, research.job_description
        )
        logger.info("CV drafted successfully")

        logger.info("Drafting covering letter tailored to the job description")
        covering_letter = await self.composer.compose_covering_letter(
            profile, notes, research.job_description
        )
        logger.info("Covering letter drafted successfully")

        self.reporter.document("COVERING LETTER", covering_letter)
        self.reporter.document("CV (Markdown)", cv_markdown)

        return AttemptResult(
            job=job,
            status=AttemptStatus.DRAFTED,
            job_description=research.job_description,
            cv_markdown=cv_markdown,
            covering_letter=covering_letter,
            started_at=started_at,
            completed_at=self.clock(),
        )
