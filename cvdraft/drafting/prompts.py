"""Prompt builders for the drafting pipeline."""

from __future__ import annotations

import json
from datetime import datetime

from cvdraft.drafting.models import (
    SUGGESTION_CATEGORIES,
    CandidateProfile,
    PastRole,
    Suggestion,
    TailoredCV,
)

SEPARATOR = "=" * 29

JSON_ONLY_SYSTEM_PROMPT = "Return JSON only."

JOB_RESEARCH_INSTRUCTIONS = (
    "Extract and condense faithfully; include sources when possible."
)
OPEN_STATUS_INSTRUCTIONS = "Return a careful, up-to-date assessment."
CV_INSTRUCTIONS = "Write professional CV Markdown."
SUGGESTION_INSTRUCTIONS = "Provide actionable, concise suggestions."
APPLY_EDITS_INSTRUCTIONS = (
    "Apply edits faithfully; do not introduce new content unless necessary "
    "to implement an edit."
)
COVERING_LETTER_INSTRUCTIONS = (
    "Produce a concise, persuasive letter aligned to the role."
)


def _fenced(text: str) -> list[str]:
    return [SEPARATOR, text, SEPARATOR]


def build_job_research_prompt(job: str) -> str:
    return (
        f'Find the current job description for: "{job}". Return concise text '
        "and any sources consulted. If multiple postings exist, pick the most "
        "authoritative and most recent."
    )


def build_open_status_prompt(job: str, now: datetime) -> str:
    return (
        f'Check whether applications are currently open for: "{job}". '
        f"Today is {now.isoformat()}."
    )


def build_item_relevance_prompt(item: str, job_description: str) -> str:
    """Prompt for rating a skill or achievement against the job."""
    return "\n".join(
        [
            "I am considering applying for the following job. Here is the job description:",
            *_fenced(job_description),
            "",
            "Please can you rate the relevance of the following item from my CV for this job:",
            *_fenced(item),
            "Please provide a score from 1 (not very relevant) to 10 (highly relevant) "
            "and provide a one-sentence rationale.",
        ]
    )


def build_role_relevance_prompt(role: PastRole, job_description: str) -> str:
    """Prompt for rating a past role against the job."""
    return "\n".join(
        [
            "I am considering applying for the following job. Here is the job description:",
            *_fenced(job_description),
            "",
            "Please can you assess the relevance of the following past role from my CV to this job:",
            SEPARATOR,
            f"Job Title: {role.job_title}",
            f"From: {role.start or 'unknown'} To: {role.end or 'Present'}",
            f"Description: {role.description or '(no description provided)'}",
            SEPARATOR,
            "Please provide a score from 1 (not very relevant) to 10 (highly relevant) "
            "and provide a one-sentence rationale.",
        ]
    )


def build_cv_prompt(cv: TailoredCV, locale: str) -> str:
    return "\n".join(
        [
            "Here is my CV as structured data (JSON):",
            *_fenced(cv.to_prompt_json()),
            f"Please convert this to a clean, well-formatted Markdown CV suitable for "
            f"{locale} applications. Include dates in dd/mm/yyyy format.",
        ]
    )


def build_suggestions_prompt(cv_markdown: str) -> str:
    return "\n".join(
        [
            "Here is my current CV (Markdown). Please suggest specific improvements, "
            "corrections, or formatting fixes.",
            f"Label each suggestion with one type: {', '.join(SUGGESTION_CATEGORIES)}.",
            "",
            *_fenced(cv_markdown),
        ]
    )


def build_apply_edits_prompt(cv_markdown: str, approved: list[Suggestion]) -> str:
    edits = json.dumps(
        [s.model_dump(mode="json", by_alias=True) for s in approved], indent=2
    )
    return "\n".join(
        [
            "Revise the CV applying ONLY the approved edits below.",
            "",
            "Original CV:",
            *_fenced(cv_markdown),
            "",
            "Approved edits (JSON):",
            *_fenced(edits),
            "Return the final edited Markdown only in the schema.",
        ]
    )


def build_covering_letter_prompt(
    *,
    profile: CandidateProfile,
    notes: str,
    job_description: str,
    language: str,
    min_words: int,
    max_words: int,
) -> str:
    return "\n".join(
        [
            "I am applying for this job:",
            *_fenced(job_description),
            "",
            "Here is some background about me (CV data):",
            *_fenced(profile.to_prompt_json()),
            "",
            "Here are personal notes to guide tone and emphasis:",
            *_fenced(notes),
            "",
            f"Write a persuasive, tailored covering letter in {language}, "
            f"{min_words}-{max_words} words.",
        ]
    )
