"""Relevance scoring of CV items against a job description.

Every call is an independent model query; nothing is cached, so the same
item may score differently across runs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from cvdraft.drafting.config import DraftingConfig, get_drafting_config
from cvdraft.drafting.llm import ModelGateway
from cvdraft.drafting.models import PastRole, RelevanceAssessment, ScoredItem
from cvdraft.drafting.prompts import (
    JSON_ONLY_SYSTEM_PROMPT,
    build_item_relevance_prompt,
    build_role_relevance_prompt,
)

logger = logging.getLogger(__name__)


class RelevanceScorer:
    """Rates CV items on a 1-10 scale against a target job description."""

    def __init__(
        self,
        config: DraftingConfig | None = None,
        gateway: ModelGateway | None = None,
    ):
        self.config = config or get_drafting_config()
        self.gateway = gateway or ModelGateway(config=self.config)

    async def score(self, text: str, job_description: str) -> ScoredItem:
        """Score a skill or achievement statement."""
        assessment = await self._assess(build_item_relevance_prompt(text, job_description))
        return ScoredItem(text=text, score=assessment.score, rationale=assessment.rationale)

    async def score_role(self, role: PastRole, job_description: str) -> ScoredItem:
        """Score a past role; the item text is the role's job title."""
        assessment = await self._assess(build_role_relevance_prompt(role, job_description))
        return ScoredItem(
            text=role.job_title, score=assessment.score, rationale=assessment.rationale
        )

    async def score_all(
        self, texts: Iterable[str], job_description: str, *, kind: str = "item"
    ) -> list[ScoredItem]:
        """Score items one at a time, in input order."""
        scored: list[ScoredItem] = []
        for text in texts:
            logger.info('Assessing %s: "%s"', kind, text)
            item = await self.score(text, job_description)
            logger.info(
                '%s "%s" scored %d/10. Rationale: %s',
                kind.capitalize(),
                text,
                item.score,
                item.rationale,
            )
            scored.append(item)
        return scored

    async def _assess(self, prompt: str) -> RelevanceAssessment:
        return await self.gateway.invoke(
            [
                {"role": "system", "content": JSON_ONLY_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            output_model=RelevanceAssessment,
        )


def rank_top(items: Iterable[ScoredItem], limit: int) -> list[ScoredItem]:
    """Return the `limit` highest-scoring items, highest first.

    The sort is stable, so items with equal scores keep their input order.
    """
    return sorted(items, key=lambda item: item.score, reverse=True)[:limit]


def redact_role(role: PastRole, score: int, threshold: int) -> PastRole:
    """Drop the role description when its score is below the threshold."""
    if score < threshold:
        return role.model_copy(update={"description": None})
    return role


def sort_roles_by_start(roles: Iterable[PastRole]) -> list[PastRole]:
    """Most recent first, by the start date string; undated roles last."""
    return sorted(roles, key=lambda role: role.start or "", reverse=True)
