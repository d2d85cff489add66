"""CV drafting pipeline.

Selects and orders the candidate's CV content for a job, composes the
Markdown CV, and runs the suggestion review round:

1. Score skills and achievements, keep the top N of each
2. Score past roles, drop descriptions of low-relevance roles
3. Compose the Markdown CV
4. Ask for suggested edits and let the operator review them
5. Apply the approved edits (if any)
"""

from __future__ import annotations

import logging

from cvdraft.drafting.composer import DocumentComposer
from cvdraft.drafting.config import DraftingConfig, get_drafting_config
from cvdraft.drafting.llm import ModelGateway
from cvdraft.drafting.models import CandidateProfile, PastRole, TailoredCV
from cvdraft.drafting.scoring import (
    RelevanceScorer,
    rank_top,
    redact_role,
    sort_roles_by_start,
)
from cvdraft.drafting.suggestions import EditApplier, SuggestionEngine
from cvdraft.hitl.review import InputFn, review_suggestions
from cvdraft.utils.reporting import ConsoleReporter, Reporter

logger = logging.getLogger(__name__)

MAX_RELEVANCE_SCORE = 10


class DraftingService:
    """Produces a reviewed, job-tailored Markdown CV."""

    def __init__(
        self,
        config: DraftingConfig | None = None,
        gateway: ModelGateway | None = None,
        *,
        reporter: Reporter | None = None,
        input_fn: InputFn = input,
    ):
        """Initialize the drafting service.

        Args:
            config: Optional DraftingConfig. Uses global config if not provided.
            gateway: Model gateway shared by every sub-service.
            reporter: Output sink for the preview and the review prompts.
            input_fn: Line reader used by the review loop.
        """
        self.config = config or get_drafting_config()
        self.gateway = gateway or ModelGateway(config=self.config)
        self.reporter = reporter or ConsoleReporter()
        self.input_fn = input_fn

        self.scorer = RelevanceScorer(config=self.config, gateway=self.gateway)
        self.composer = DocumentComposer(config=self.config, gateway=self.gateway)
        self.suggestion_engine = SuggestionEngine(config=self.config, gateway=self.gateway)
        self.edit_applier = EditApplier(config=self.config, gateway=self.gateway)

        if self.config.role_relevance_threshold > MAX_RELEVANCE_SCORE:
            # Kept as configured; scores never reach it so every role is redacted.
            logger.warning(
                "Role relevance threshold %d is above the %d-point scale; "
                "every role description will be omitted",
                self.config.role_relevance_threshold,
                MAX_RELEVANCE_SCORE,
            )

    async def draft_cv(self, profile: CandidateProfile, job_description: str) -> str:
        """Build, compose and polish a CV for the job."""
        cv = await self.build_tailored_cv(profile, job_description)
        cv_markdown = await self.composer.compose_cv(cv)
        return await self.polish_cv(cv_markdown)

    async def build_tailored_cv(
        self, profile: CandidateProfile, job_description: str
    ) -> TailoredCV:
        """Select the most relevant content from the profile."""
        limit = self.config.top_items

        logger.info("Assessing relevance of skills to the job description")
        skills = await self.scorer.score_all(profile.skills, job_description, kind="skill")
        top_skills = [item.text for item in rank_top(skills, limit)]
        logger.info("Top %d relevant skills selected", len(top_skills))

        logger.info("Assessing relevance of achievements to the job description")
        achievements = await self.scorer.score_all(
            profile.achievements, job_description, kind="achievement"
        )
        top_achievements = [item.text for item in rank_top(achievements, limit)]
        logger.info("Top %d relevant achievements selected", len(top_achievements))

        roles = await self._select_roles(profile.past_job_roles, job_description)

        return TailoredCV(
            personal_details=profile.personal_details,
            qualifications=profile.qualifications,
            skills=top_skills,
            achievements=top_achievements,
            past_job_roles=roles,
        )

    async def polish_cv(self, cv_markdown: str) -> str:
        """Run one suggestion review round over the composed CV.

        Returns the original Markdown when there is nothing to apply.
        """
        self.reporter.line("\nPreview of your CV in Markdown format:")
        self.reporter.line("=" * 65)
        self.reporter.line(cv_markdown)

        suggestions = await self.suggestion_engine.suggest(cv_markdown)
        if not suggestions:
            logger.info("No suggestions; keeping the CV as composed")
            return cv_markdown

        outcome = review_suggestions(
            suggestions, input_fn=self.input_fn, reporter=self.reporter
        )
        if not outcome.has_edits:
            logger.info("No approved edits; keeping the CV as composed")
            return cv_markdown

        return await self.edit_applier.apply(cv_markdown, outcome.approved)

    async def _select_roles(
        self, roles: list[PastRole], job_description: str
    ) -> list[PastRole]:
        logger.info("Assessing relevance of past job roles to the job description")
        threshold = self.config.role_relevance_threshold
        selected: list[PastRole] = []
        for role in roles:
            logger.info('Assessing role: "%s" (%s)', role.job_title, role.period)
            scored = await self.scorer.score_role(role, job_description)
            logger.info('Role "%s" scored %d/10', role.job_title, scored.score)
            if scored.score < threshold and role.description:
                logger.info(
                    'Role "%s" is less relevant; omitting description', role.job_title
                )
            selected.append(redact_role(role, scored.score, threshold))

        ordered = sort_roles_by_start(selected)
        logger.info("Past job roles sorted by start date")
        return ordered
