"""Commit message reconstruction strategies.

``git log`` hands us a subject and a body separately. Some tools squash a
list of changes into a single line joined with `` - ``; the default
formatter detects that shape and turns it back into a bulleted message.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

LIST_DELIMITER = " - "
BULLET = "- "
MAX_TITLE_LENGTH = 100
LONG_SEGMENT_LENGTH = 20
MIN_SEGMENT_LENGTH = 3
SENTENCE_PUNCTUATION = ".。!！?？;；"


class MessageFormatter(ABC):
    """Turns a commit subject and body into the displayed message."""

    @abstractmethod
    def format(self, subject: str, body: str = "") -> str:
        """Return the full message for ``subject`` and ``body``."""


class PlainFormatter(MessageFormatter):
    """Subject and body joined by a newline, never reformatted."""

    def format(self, subject: str, body: str = "") -> str:
        subject = subject.strip()
        body = body.rstrip()
        if not body:
            return subject
        return f"{subject}\n{body}"


class DelimitedListFormatter(MessageFormatter):
    """Expands `` - ``-joined single lines into a title plus bullet lines.

    Only single-line bodies, or subjects without any body, are considered.
    Multi-line bodies are kept verbatim.
    """

    def __init__(
        self,
        delimiter: str = LIST_DELIMITER,
        bullet: str = BULLET,
        max_title_length: int = MAX_TITLE_LENGTH,
    ):
        self.delimiter = delimiter
        self.bullet = bullet
        self.max_title_length = max_title_length

    def format(self, subject: str, body: str = "") -> str:
        subject = subject.strip()
        body = body.rstrip()

        if not body:
            items = self.split_list(subject)
            if items is None:
                return subject
            return self._render(items)

        if "\n" in body.strip():
            return f"{subject}\n{body}"

        items = self.split_list(body.strip())
        if items is None:
            return f"{subject}\n{body.strip()}"
        return f"{subject}\n{self._render(items)}"

    def split_list(self, line: str) -> Optional[List[str]]:
        """Return ``[title, item, ...]`` if ``line`` is a joined list, else None."""
        if self.delimiter not in line:
            return None

        segments = [segment.strip() for segment in line.split(self.delimiter)]
        if len(segments) < 2:
            return None

        title, items = segments[0], segments[1:]
        if len(title) > self.max_title_length:
            return None
        if not all(self.looks_like_item(item) for item in items):
            return None
        return segments

    def looks_like_item(self, segment: str) -> bool:
        if len(segment) < MIN_SEGMENT_LENGTH:
            return False
        return (
            any(mark in segment for mark in SENTENCE_PUNCTUATION)
            or len(segment) > LONG_SEGMENT_LENGTH
            or len(segment.split()) >= 2
        )

    def _render(self, segments: List[str]) -> str:
        title, items = segments[0], segments[1:]
        lines = [title] + [f"{self.bullet}{item}" for item in items]
        return "\n".join(lines)
