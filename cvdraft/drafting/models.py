"""Data models for the Drafting module.

Contains Pydantic models for:
- CandidateProfile / PastRole: the structured CV base data
- TailoredCV: the job-specific selection passed to the CV composer
- Suggestion: a categorized edit proposed for the CV
- LLM response schemas (job research, open status, relevance, CV, letter)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

SuggestionCategory = Literal[
    "clarity", "typo", "formatting", "impact", "consistency", "tone", "other"
]
SUGGESTION_CATEGORIES: tuple[str, ...] = get_args(SuggestionCategory)


class PastRole(BaseModel):
    """A past job role from the candidate's CV base data."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    job_title: str = Field(..., alias="jobTitle", description="Job title")
    start: str | None = Field(default=None, alias="from", description="Start date")
    end: str | None = Field(default=None, alias="to", description="End date")
    description: str | None = Field(default=None, description="Role description")

    @property
    def period(self) -> str:
        return f"{self.start or '?'} - {self.end or 'Present'}"


class CandidateProfile(BaseModel):
    """Candidate's CV base data. Loaded once per run and never mutated."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    personal_details: dict[str, Any] = Field(
        default_factory=dict, alias="personalDetails"
    )
    qualifications: list[Any] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    past_job_roles: list[PastRole] = Field(
        default_factory=list, alias="pastJobRoles"
    )

    def to_prompt_json(self) -> str:
        """Serialize in the on-disk camelCase shape for use in prompts."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


class TailoredCV(BaseModel):
    """CV content selected and ordered for a specific job."""

    model_config = ConfigDict(populate_by_name=True)

    personal_details: dict[str, Any] = Field(
        default_factory=dict, alias="personalDetails"
    )
    qualifications: list[Any] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    past_job_roles: list[PastRole] = Field(
        default_factory=list, alias="pastJobRoles"
    )

    def to_prompt_json(self) -> str:
        """Serialize for the composer prompt; redacted fields are omitted."""
        return self.model_dump_json(by_alias=True, exclude_none=True, indent=2)


@dataclass(frozen=True)
class ScoredItem:
    """A CV item with its relevance score (1-10) for the target job."""

    text: str
    score: int
    rationale: str


class Suggestion(BaseModel):
    """A single suggested edit to the CV."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    category: SuggestionCategory = Field(
        ..., alias="type", description="Kind of improvement"
    )
    location: str = Field(..., description="Heading or brief excerpt")
    suggestion: str = Field(..., description="The suggested change")


# LLM response schemas. Every field is required and extra keys are
# forbidden so the JSON schema is accepted by strict structured outputs.


class JobSource(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str
    url: str
    publisher: str


class JobResearch(BaseModel):
    """Job description found for the target job."""

    model_config = ConfigDict(extra="forbid")

    role_title: str = Field(..., description="Title of the role")
    job_description: str = Field(..., description="Condensed job description")
    sources: list[JobSource] = Field(..., description="Sources consulted")


class ApplicationStatus(BaseModel):
    """Whether applications for the job are currently open."""

    model_config = ConfigDict(extra="forbid")

    open: bool
    confidence: float = Field(..., ge=0.0, le=1.0)


class RelevanceAssessment(BaseModel):
    model_config = ConfigDict(extra="forbid")

    score: int = Field(
        ..., ge=1, le=10, description="1 (not very relevant) to 10 (highly relevant)"
    )
    rationale: str = Field(..., description="One-sentence rationale")


class CVMarkdownResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cv_markdown: str


class SuggestionsResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    suggestions: list[Suggestion]


class CoveringLetterResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    covering_letter: str
