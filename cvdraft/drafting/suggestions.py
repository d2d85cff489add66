"""Suggestion engine and edit applier for a drafted CV."""

from __future__ import annotations

import logging

from cvdraft.drafting.config import DraftingConfig, get_drafting_config
from cvdraft.drafting.llm import ModelGateway
from cvdraft.drafting.models import CVMarkdownResponse, Suggestion, SuggestionsResponse
from cvdraft.drafting.prompts import (
    APPLY_EDITS_INSTRUCTIONS,
    SUGGESTION_INSTRUCTIONS,
    build_apply_edits_prompt,
    build_suggestions_prompt,
)

logger = logging.getLogger(__name__)


class SuggestionEngine:
    """Asks the model for categorized edits to a Markdown document."""

    def __init__(
        self,
        config: DraftingConfig | None = None,
        gateway: ModelGateway | None = None,
    ):
        self.config = config or get_drafting_config()
        self.gateway = gateway or ModelGateway(config=self.config)

    async def suggest(self, cv_markdown: str) -> list[Suggestion]:
        """Return suggested edits in the order the model gave them (may be empty)."""
        response = await self.gateway.invoke(
            [{"role": "user", "content": build_suggestions_prompt(cv_markdown)}],
            instructions=SUGGESTION_INSTRUCTIONS,
            output_model=SuggestionsResponse,
        )
        logger.info("Received %d suggestion(s)", len(response.suggestions))
        return response.suggestions


class EditApplier:
    """Merges an approved edit set into the original document.

    Staying within the approved edits is a prompt-level instruction only;
    it cannot be checked mechanically.
    """

    def __init__(
        self,
        config: DraftingConfig | None = None,
        gateway: ModelGateway | None = None,
    ):
        self.config = config or get_drafting_config()
        self.gateway = gateway or ModelGateway(config=self.config)

    async def apply(self, cv_markdown: str, approved: list[Suggestion]) -> str:
        """Return the revised Markdown.

        Raises:
            ValueError: If `approved` is empty; an empty set means apply nothing.
        """
        if not approved:
            raise ValueError("approved edit set is empty")

        logger.info("Applying %d approved edit(s)", len(approved))
        response = await self.gateway.invoke(
            [{"role": "user", "content": build_apply_edits_prompt(cv_markdown, approved)}],
            instructions=APPLY_EDITS_INSTRUCTIONS,
            output_model=CVMarkdownResponse,
        )
        return response.cv_markdown
