"""Console output sink for drafted documents and operator prompts."""

from __future__ import annotations

import sys
from typing import Protocol, TextIO

RULE = "=" * 30


class Reporter(Protocol):
    """Anything that can show text to the operator."""

    def line(self, text: str = "") -> None: ...

    def document(self, title: str, body: str) -> None: ...


class ConsoleReporter:
    """Write operator-facing text to a stream (stdout by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys replacement of sys.stdout is honoured
        return self._stream if self._stream is not None else sys.stdout

    def line(self, text: str = "") -> None:
        print(text, file=self.stream)

    def document(self, title: str, body: str) -> None:
        """Print a titled document framed by horizontal rules."""
        self.line(f"\n{title}:")
        self.line(RULE)
        self.line(body)
        self.line(RULE)
