"""Document composer: structured CV data to prose."""

from __future__ import annotations

import logging

from cvdraft.drafting.config import DraftingConfig, get_drafting_config
from cvdraft.drafting.llm import ModelGateway
from cvdraft.drafting.models import (
    CandidateProfile,
    CoveringLetterResponse,
    CVMarkdownResponse,
    TailoredCV,
)
from cvdraft.drafting.prompts import (
    COVERING_LETTER_INSTRUCTIONS,
    CV_INSTRUCTIONS,
    build_covering_letter_prompt,
    build_cv_prompt,
)

logger = logging.getLogger(__name__)


class DocumentComposer:
    """Turns structured CV data into a Markdown CV and a covering letter.

    Inputs are never modified. Gateway errors propagate unchanged.
    """

    def __init__(
        self,
        config: DraftingConfig | None = None,
        gateway: ModelGateway | None = None,
    ):
        self.config = config or get_drafting_config()
        self.gateway = gateway or ModelGateway(config=self.config)

    async def compose_cv(self, cv: TailoredCV) -> str:
        """Compose a Markdown CV from the tailored CV data."""
        response = await self.gateway.invoke(
            [{"role": "user", "content": build_cv_prompt(cv, self.config.cv_locale)}],
            instructions=CV_INSTRUCTIONS,
            output_model=CVMarkdownResponse,
        )
        return response.cv_markdown

    async def compose_covering_letter(
        self,
        profile: CandidateProfile,
        notes: str,
        job_description: str,
    ) -> str:
        """Compose a covering letter guided by the operator's tone notes."""
        prompt = build_covering_letter_prompt(
            profile=profile,
            notes=notes,
            job_description=job_description,
            language=self.config.letter_language,
            min_words=self.config.cover_letter_min_words,
            max_words=self.config.cover_letter_max_words,
        )
        response = await self.gateway.invoke(
            [{"role": "user", "content": prompt}],
            instructions=COVERING_LETTER_INSTRUCTIONS,
            output_model=CoveringLetterResponse,
        )
        word_count = len(response.covering_letter.split())
        logger.info("Covering letter drafted (%d words)", word_count)
        return response.covering_letter
