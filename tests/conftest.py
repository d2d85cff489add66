"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any

import pytest

from cvdraft.config.settings import reset_settings
from cvdraft.drafting.config import DraftingConfig, reset_drafting_config
from cvdraft.drafting.models import CandidateProfile, PastRole
from cvdraft.utils.logging import reset_logging

# Keys to remove for isolated tests (prevents fallback to OPENAI_* settings)
ENV_KEYS_TO_REMOVE = [
    "DRAFTING_LLM_PROVIDER",
    "DRAFTING_LLM_MODEL",
    "DRAFTING_LLM_API_KEY",
    "DRAFTING_LLM_BASE_URL",
    "DRAFTING_LLM_TEMPERATURE",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_TEMPERATURE",
    "DEBUG",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def _reset_singletons():
    yield
    reset_settings()
    reset_drafting_config()
    reset_logging()


@pytest.fixture
def isolated_env():
    """Remove LLM env vars for isolated testing."""
    saved = {k: os.environ.pop(k, None) for k in ENV_KEYS_TO_REMOVE}
    reset_drafting_config()
    yield
    for k, v in saved.items():
        if v is not None:
            os.environ[k] = v
        elif k in os.environ:
            del os.environ[k]
    reset_drafting_config()


@pytest.fixture
def drafting_config(isolated_env) -> DraftingConfig:
    """Config with a dummy key and no .env file."""
    return DraftingConfig(_env_file=None, llm_api_key="test-key")


@pytest.fixture
def sample_profile() -> CandidateProfile:
    """Candidate profile in the on-disk camelCase shape."""
    return CandidateProfile.model_validate(
        {
            "personalDetails": {"name": "Alex Morgan", "email": "alex@example.com"},
            "qualifications": [{"title": "BSc Computer Science", "year": 2015}],
            "skills": ["Airflow pipelines", "Postgres tuning", "Power BI reporting"],
            "achievements": ["Cut ETL runtime by 80%", "Migrated 30 reports"],
            "pastJobRoles": [
                {
                    "jobTitle": "Data Analyst",
                    "from": "2016-09-01",
                    "to": "2021-02-28",
                    "description": "Weekly trading reports.",
                },
                {
                    "jobTitle": "Senior Data Engineer",
                    "from": "2021-03-01",
                    "description": "Own the batch data platform.",
                },
            ],
        }
    )


@pytest.fixture
def sample_role() -> PastRole:
    return PastRole(
        job_title="Senior Data Engineer",
        start="2021-03-01",
        description="Own the batch data platform.",
    )


class ScriptedGateway:
    """Stands in for ModelGateway; replies are chosen by output model.

    A reply may be a fixed value or a callable receiving the last prompt.
    """

    def __init__(self, replies: dict[Any, Any] | None = None) -> None:
        self.replies = dict(replies or {})
        self.calls: list[dict[str, Any]] = []

    async def invoke(
        self,
        messages,
        *,
        instructions=None,
        output_model=None,
        web_search=False,
    ):
        prompt = messages[-1]["content"]
        self.calls.append(
            {
                "messages": messages,
                "prompt": prompt,
                "instructions": instructions,
                "output_model": output_model,
                "web_search": web_search,
            }
        )
        if output_model not in self.replies:
            raise AssertionError(f"unexpected model call for {output_model}")
        reply = self.replies[output_model]
        if isinstance(reply, BaseException):
            raise reply
        return reply(prompt) if callable(reply) else reply

    def calls_for(self, output_model) -> list[dict[str, Any]]:
        return [call for call in self.calls if call["output_model"] is output_model]


@pytest.fixture
def scripted_gateway() -> Callable[..., ScriptedGateway]:
    """Factory for a scripted stand-in gateway."""
    return ScriptedGateway
