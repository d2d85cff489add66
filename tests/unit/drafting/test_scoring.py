"""Unit tests for relevance scoring and selection helpers."""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import ValidationError

from cvdraft.drafting.llm import MalformedModelOutput, ModelGateway
from cvdraft.drafting.models import PastRole, RelevanceAssessment, ScoredItem
from cvdraft.drafting.scoring import (
    RelevanceScorer,
    rank_top,
    redact_role,
    sort_roles_by_start,
)


def _scores(mapping):
    """Reply with the score of the first mapped text found in the prompt."""

    def reply(prompt):
        for text, score in mapping.items():
            if text in prompt:
                return RelevanceAssessment(score=score, rationale=f"{text} fits")
        raise AssertionError(f"no score for prompt: {prompt}")

    return reply


class TestRankTop:
    def test_highest_first(self):
        items = [ScoredItem("a", 7, ""), ScoredItem("b", 3, ""), ScoredItem("c", 9, "")]
        assert [i.text for i in rank_top(items, 10)] == ["c", "a", "b"]

    def test_ties_keep_input_order(self):
        items = [ScoredItem("a", 5, ""), ScoredItem("b", 8, ""), ScoredItem("c", 5, "")]
        assert [i.text for i in rank_top(items, 10)] == ["b", "a", "c"]

    def test_limit(self):
        items = [ScoredItem(str(n), n, "") for n in range(1, 11)]
        top = rank_top(items, 3)
        assert [i.score for i in top] == [10, 9, 8]

    def test_empty(self):
        assert rank_top([], 10) == []


class TestRoleHelpers:
    def test_redact_below_threshold(self):
        role = PastRole(job_title="Barista", description="Coffee.")
        redacted = redact_role(role, 3, threshold=5)

        assert redacted.description is None
        assert redacted.job_title == "Barista"
        # Original untouched
        assert role.description == "Coffee."

    def test_keep_at_threshold(self):
        role = PastRole(job_title="Analyst", description="Reports.")
        assert redact_role(role, 5, threshold=5) is role

    def test_sort_by_start_descending(self):
        roles = [
            PastRole(job_title="Old", start="2010-01-01"),
            PastRole(job_title="Undated"),
            PastRole(job_title="New", start="2021-03-01"),
        ]
        assert [r.job_title for r in sort_roles_by_start(roles)] == [
            "New",
            "Old",
            "Undated",
        ]


class TestRelevanceScorer:
    @pytest.mark.asyncio
    async def test_score_item(self, drafting_config, scripted_gateway):
        gateway = scripted_gateway({RelevanceAssessment: _scores({"Airflow": 8})})
        scorer = RelevanceScorer(config=drafting_config, gateway=gateway)

        item = await scorer.score("Airflow pipelines", "Build data pipelines")

        assert item == ScoredItem("Airflow pipelines", 8, "Airflow fits")
        call = gateway.calls[0]
        assert call["messages"][0] == {"role": "system", "content": "Return JSON only."}
        assert "Build data pipelines" in call["prompt"]
        assert "score from 1 (not very relevant) to 10" in call["prompt"]

    @pytest.mark.asyncio
    async def test_score_role_uses_title_as_text(
        self, drafting_config, scripted_gateway, sample_role
    ):
        gateway = scripted_gateway({RelevanceAssessment: _scores({"Senior": 9})})
        scorer = RelevanceScorer(config=drafting_config, gateway=gateway)

        item = await scorer.score_role(sample_role, "JD")

        assert item.text == "Senior Data Engineer"
        prompt = gateway.calls[0]["prompt"]
        assert "Job Title: Senior Data Engineer" in prompt
        assert "From: 2021-03-01 To: Present" in prompt
        assert "Description: Own the batch data platform." in prompt

    @pytest.mark.asyncio
    async def test_role_without_description(self, drafting_config, scripted_gateway):
        gateway = scripted_gateway({RelevanceAssessment: _scores({"Intern": 2})})
        scorer = RelevanceScorer(config=drafting_config, gateway=gateway)

        await scorer.score_role(PastRole(job_title="Intern"), "JD")

        assert "(no description provided)" in gateway.calls[0]["prompt"]

    @pytest.mark.asyncio
    async def test_score_all_in_input_order(
        self, drafting_config, scripted_gateway, caplog
    ):
        gateway = scripted_gateway(
            {RelevanceAssessment: _scores({"one": 2, "two": 9, "three": 5})}
        )
        scorer = RelevanceScorer(config=drafting_config, gateway=gateway)
        caplog.set_level(logging.INFO, logger="cvdraft")

        scored = await scorer.score_all(["one", "two", "three"], "JD", kind="skill")

        assert [(s.text, s.score) for s in scored] == [("one", 2), ("two", 9), ("three", 5)]
        assert len(gateway.calls) == 3
        assert 'Assessing skill: "two"' in caplog.text
        assert 'Skill "two" scored 9/10' in caplog.text


class TestScoreBounds:
    @pytest.mark.parametrize("score", [0, 11])
    def test_out_of_scale_scores_rejected(self, score):
        with pytest.raises(ValidationError):
            RelevanceAssessment(score=score, rationale="x")

    @pytest.mark.asyncio
    async def test_gateway_rejects_out_of_scale_reply(self, drafting_config):
        gateway = ModelGateway(config=drafting_config)
        reply = MagicMock(
            choices=[MagicMock(message=MagicMock(content='{"score": 80, "rationale": "x"}'))]
        )

        with patch("cvdraft.drafting.llm.acompletion", new_callable=AsyncMock) as mock_completion:
            mock_completion.return_value = reply
            with pytest.raises(MalformedModelOutput):
                await RelevanceScorer(config=drafting_config, gateway=gateway).score("SQL", "JD")
