"""CV and covering letter drafting.

This module provides functionality for:
- Calling the language model with schema-validated structured output
- Researching the target job and checking applications are open
- Scoring and ranking CV content against the job description
- Composing the Markdown CV and covering letter
- Suggesting and applying operator-approved CV edits

Main Entry Point:
    DraftingService - Produces a reviewed, job-tailored Markdown CV

Example:
    from cvdraft.drafting import DraftingService

    service = DraftingService()
    cv_markdown = await service.draft_cv(profile, job_description)
"""

from cvdraft.drafting.composer import DocumentComposer
from cvdraft.drafting.config import DraftingConfig, get_drafting_config
from cvdraft.drafting.llm import (
    MalformedModelOutput,
    ModelGateway,
    ModelGatewayError,
    ModelTransportError,
)
from cvdraft.drafting.models import (
    ApplicationStatus,
    CandidateProfile,
    JobResearch,
    PastRole,
    ScoredItem,
    Suggestion,
    TailoredCV,
)
from cvdraft.drafting.profile import ProfileError, ProfileService
from cvdraft.drafting.research import JobResearchService
from cvdraft.drafting.scoring import RelevanceScorer, rank_top, redact_role
from cvdraft.drafting.service import DraftingService
from cvdraft.drafting.suggestions import EditApplier, SuggestionEngine

__all__ = [
    # Main service
    "DraftingService",
    # Configuration
    "DraftingConfig",
    "get_drafting_config",
    # Gateway
    "ModelGateway",
    "ModelGatewayError",
    "MalformedModelOutput",
    "ModelTransportError",
    # Sub-services
    "JobResearchService",
    "RelevanceScorer",
    "DocumentComposer",
    "SuggestionEngine",
    "EditApplier",
    "ProfileService",
    "ProfileError",
    "rank_top",
    "redact_role",
    # Models
    "ApplicationStatus",
    "CandidateProfile",
    "JobResearch",
    "PastRole",
    "ScoredItem",
    "Suggestion",
    "TailoredCV",
]
