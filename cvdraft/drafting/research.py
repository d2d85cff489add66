"""Job research: find the job description and check it is still open."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from cvdraft.drafting.config import DraftingConfig, get_drafting_config
from cvdraft.drafting.llm import ModelGateway
from cvdraft.drafting.models import ApplicationStatus, JobResearch
from cvdraft.drafting.prompts import (
    JOB_RESEARCH_INSTRUCTIONS,
    OPEN_STATUS_INSTRUCTIONS,
    build_job_research_prompt,
    build_open_status_prompt,
)

logger = logging.getLogger(__name__)


class JobResearchService:
    """Looks up a job target through the model (optionally with web search)."""

    def __init__(
        self,
        config: DraftingConfig | None = None,
        gateway: ModelGateway | None = None,
    ):
        self.config = config or get_drafting_config()
        self.gateway = gateway or ModelGateway(config=self.config)

    async def fetch_job_description(self, job: str) -> JobResearch:
        """Fetch a condensed job description for the target, with sources."""
        research = await self.gateway.invoke(
            [{"role": "user", "content": build_job_research_prompt(job)}],
            instructions=JOB_RESEARCH_INSTRUCTIONS,
            output_model=JobResearch,
            web_search=True,
        )
        logger.debug(
            "Job research for %r found %d source(s)", job, len(research.sources)
        )
        return research

    async def check_applications_open(
        self, job: str, now: datetime | None = None
    ) -> ApplicationStatus:
        """Ask whether applications for the job are open as of `now`."""
        now = now or datetime.now(UTC)
        return await self.gateway.invoke(
            [{"role": "user", "content": build_open_status_prompt(job, now)}],
            instructions=OPEN_STATUS_INSTRUCTIONS,
            output_model=ApplicationStatus,
            web_search=True,
        )
