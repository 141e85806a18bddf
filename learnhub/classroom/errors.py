"""
Error types raised by the classroom components.

ContentLoadError is collected per document during loading rather than
raised out of the repository. The quiz and progress errors signal caller
misuse and propagate. PersistenceError is raised by storage adapters and
handled by the trackers, which fall back to in-memory state.
"""

from pathlib import Path
from typing import Union


class LearnHubError(Exception):
    """Base class for LearnHub errors."""


class ContentLoadError(LearnHubError):
    """A content document could not be loaded or failed validation."""

    def __init__(self, source: Union[str, Path], reason: str):
        self.source = Path(source)
        self.reason = reason
        super().__init__(f"{self.source}: {reason}")


class DocumentNotFoundError(LearnHubError, LookupError):
    """No loaded document has the given slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Content not found: {slug}")


class UnknownItemError(LearnHubError, KeyError):
    def __init__(self, slug: str, item_id: str):
        self.slug = slug
        self.item_id = item_id
        super().__init__(f"Document '{slug}' has no progress item '{item_id}'")

    def __str__(self):
        return self.args[0]


class UnknownQuestionError(LearnHubError, KeyError):
    def __init__(self, slug: str, question_id: int):
        self.slug = slug
        self.question_id = question_id
        super().__init__(f"Document '{slug}' has no question {question_id}")

    def __str__(self):
        return self.args[0]


class InvalidOptionError(LearnHubError, ValueError):
    def __init__(self, question_id: int, option_index: int, option_count: int):
        self.question_id = question_id
        self.option_index = option_index
        self.option_count = option_count
        super().__init__(
            f"Option {option_index} is out of range for question {question_id} "
            f"({option_count} options)"
        )


class NoSelectionError(LearnHubError, RuntimeError):
    def __init__(self, question_id: int):
        self.question_id = question_id
        super().__init__(f"Question {question_id} has no selected answer to reveal")


class PersistenceError(LearnHubError):
    """Reader-state storage is unavailable or returned unreadable data."""
