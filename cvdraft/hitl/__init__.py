"""Human-in-the-loop review helpers."""

from cvdraft.hitl.review import (
    ReviewOutcome,
    ReviewSession,
    ReviewState,
    parse_index_list,
    review_suggestions,
)

__all__ = [
    "ReviewOutcome",
    "ReviewSession",
    "ReviewState",
    "parse_index_list",
    "review_suggestions",
]
