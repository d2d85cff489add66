"""Interactive review of suggested CV edits.

The operator sees the numbered suggestion list and issues commands until they
either continue (forward every surviving suggestion) or quit (forward none).
Nothing is committed part-way through a session.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum

from cvdraft.drafting.models import Suggestion
from cvdraft.utils.reporting import ConsoleReporter, Reporter

logger = logging.getLogger(__name__)

COMMAND_HELP = "Commands: d <idx[,..]|a> delete | e <idx> edit | c continue | q quit"

InputFn = Callable[[str], str]


class ReviewState(str, Enum):
    """Review session state."""

    REVIEWING = "reviewing"
    APPLYING = "applying"
    ABORTED = "aborted"


@dataclass
class ReviewOutcome:
    """Terminal state of a review session and the approved edit set."""

    state: ReviewState
    approved: list[Suggestion] = field(default_factory=list)

    @property
    def has_edits(self) -> bool:
        return bool(self.approved)


def parse_index_list(text: str, max_index: int) -> list[int]:
    """Parse "1, 3-5" style input into sorted, unique 0-based indices.

    Ranges may be given in either order. Indices outside [1, max_index] and
    unparseable parts are ignored.
    """
    selected: set[int] = set()
    for part in re.split(r"\s*,\s*", text.strip()):
        if not part:
            continue
        if "-" in part:
            low_text, _, high_text = part.partition("-")
            try:
                low, high = int(low_text), int(high_text)
            except ValueError:
                continue
            start, end = max(min(low, high), 1), min(max(low, high), max_index)
            selected.update(i - 1 for i in range(start, end + 1))
        else:
            try:
                number = int(part)
            except ValueError:
                continue
            if 1 <= number <= max_index:
                selected.add(number - 1)
    return sorted(selected)


def format_suggestions(suggestions: Iterable[Suggestion]) -> list[str]:
    """Render the numbered list shown to the operator."""
    lines = ["", "Suggested edits:"]
    for number, item in enumerate(suggestions, start=1):
        location = f" @ {item.location}" if item.location else ""
        lines.append(f"{number}. [{item.category}]{location}")
        lines.append(f"   {item.suggestion}")
        lines.append("")
    return lines


class ReviewSession:
    """One operator review over a private copy of the suggestion list."""

    def __init__(
        self,
        suggestions: Iterable[Suggestion],
        *,
        input_fn: InputFn = input,
        reporter: Reporter | None = None,
    ) -> None:
        self.suggestions: list[Suggestion] = list(suggestions)
        self.state = ReviewState.REVIEWING
        self._input = input_fn
        self._reporter = reporter or ConsoleReporter()

    def run(self) -> ReviewOutcome:
        """Prompt for commands until the operator continues or quits."""
        while self.state is ReviewState.REVIEWING:
            self._show()
            try:
                line = self._input("> ")
            except EOFError:
                line = "q"
            self.handle(line)
        return self.outcome()

    def outcome(self) -> ReviewOutcome:
        if self.state is ReviewState.APPLYING:
            return ReviewOutcome(state=self.state, approved=list(self.suggestions))
        return ReviewOutcome(state=self.state)

    def handle(self, line: str) -> None:
        """Apply a single command line to the session."""
        if self.state is not ReviewState.REVIEWING:
            raise RuntimeError(f"review session already {self.state.value}")

        parts = line.strip().split(maxsplit=1)
        if not parts:
            return
        command = parts[0]
        argument = parts[1].strip() if len(parts) > 1 else ""

        if command == "q":
            logger.info("Review aborted; no edits will be applied")
            self.state = ReviewState.ABORTED
        elif command == "c":
            logger.info("Review finished with %d approved edit(s)", len(self.suggestions))
            self.state = ReviewState.APPLYING
        elif command == "d":
            self._delete(argument)
        elif command == "e":
            self._edit(argument)
        else:
            self._reporter.line("Unknown command.")

    def _delete(self, argument: str) -> None:
        if argument == "a":
            self.suggestions.clear()
            return

        indices = set(parse_index_list(argument, len(self.suggestions)))
        if not indices:
            self._reporter.line("No valid indices.")
            return
        self.suggestions = [
            item for i, item in enumerate(self.suggestions) if i not in indices
        ]

    def _edit(self, argument: str) -> None:
        try:
            index = int(argument) - 1
        except ValueError:
            index = -1
        if not 0 <= index < len(self.suggestions):
            self._reporter.line("Out of range.")
            return

        current = self.suggestions[index]
        self._reporter.line(f"\nEditing #{index + 1}")
        self._reporter.line(f"Current suggestion: {current.suggestion}")
        try:
            replacement = self._input(
                "Enter new suggestion (leave blank to keep current): "
            ).strip()
        except EOFError:
            replacement = ""
        if replacement:
            self.suggestions[index] = current.model_copy(
                update={"suggestion": replacement}
            )

    def _show(self) -> None:
        for text in format_suggestions(self.suggestions):
            self._reporter.line(text)
        self._reporter.line(COMMAND_HELP)


def review_suggestions(
    suggestions: Iterable[Suggestion],
    *,
    input_fn: InputFn = input,
    reporter: Reporter | None = None,
) -> ReviewOutcome:
    """Run an interactive review session and return its outcome."""
    return ReviewSession(suggestions, input_fn=input_fn, reporter=reporter).run()
