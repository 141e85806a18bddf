"""
QuizEngine - Self-check questions attached to content documents.

Per question: unanswered -> answered(option) -> revealed. Selecting an
option again, even after reveal, goes back to answered with the new
option; re-attempts are allowed.

Attempts are kept for the session only unless a store is given, in which
case each document's attempts are persisted as one blob keyed by slug.
"""

import logging
from typing import Optional

from learnhub.schemas import (
    AttemptState,
    ContentDocument,
    Question,
    QuizScore,
    RevealResult,
)

from .errors import (
    DocumentNotFoundError,
    InvalidOptionError,
    NoSelectionError,
    PersistenceError,
    UnknownQuestionError,
)
from .loader import ContentRepository
from .storage import KeyValueStore


logger = logging.getLogger(__name__)


class QuizEngine:
    """Answer selection, reveal and scoring for a single reader."""

    def __init__(self, repository: ContentRepository, store: Optional[KeyValueStore] = None):
        self.repository = repository
        self.store = store
        self._attempts: dict[str, dict[int, AttemptState]] = {}
        self._degraded = False

    @property
    def persistent(self) -> bool:
        return self.store is not None and not self._degraded

    def _require_document(self, slug: str) -> ContentDocument:
        document = self.repository.get_by_slug(slug)
        if document is None:
            raise DocumentNotFoundError(slug)
        return document

    def _require_question(self, slug: str, question_id: int) -> Question:
        question = self._require_document(slug).get_question(question_id)
        if question is None:
            raise UnknownQuestionError(slug, question_id)
        return question

    # ---------- storage ----------

    def _degrade(self, error: PersistenceError):
        if not self._degraded:
            logger.warning(f"Quiz storage unavailable, keeping attempts in memory: {error}")
        self._degraded = True

    def _load(self, slug: str) -> dict[int, AttemptState]:
        if slug in self._attempts:
            return self._attempts[slug]

        attempts: dict[int, AttemptState] = {}
        if self.persistent:
            try:
                stored = self.store.get(slug)
            except PersistenceError as e:
                self._degrade(e)
                stored = None
            if stored is not None:
                attempts = self._parse_stored(self._require_document(slug), stored)

        self._attempts[slug] = attempts
        return attempts

    @staticmethod
    def _parse_stored(document: ContentDocument, stored) -> dict[int, AttemptState]:
        """Rebuild attempts, dropping entries for questions or options that no longer exist."""
        attempts: dict[int, AttemptState] = {}
        if not isinstance(stored, dict):
            logger.warning(f"Ignoring unreadable quiz attempts for '{document.slug}'")
            return attempts

        for key, raw in stored.items():
            try:
                question_id = int(key)
                if isinstance(raw.get("selected_option"), bool):
                    continue
                attempt = AttemptState(
                    question_id=question_id,
                    selected_option=raw.get("selected_option"),
                    revealed=raw.get("revealed") is True,
                )
            except (TypeError, ValueError, AttributeError):
                continue
            question = document.get_question(question_id)
            if question is None or attempt.selected_option is None:
                continue
            if not 0 <= attempt.selected_option < len(question.options):
                continue
            attempts[question_id] = attempt
        return attempts

    def _save(self, slug: str, attempts: dict[int, AttemptState]):
        if self.persistent:
            blob = {
                str(question_id): {
                    "selected_option": attempt.selected_option,
                    "revealed": attempt.revealed,
                }
                for question_id, attempt in attempts.items()
            }
            try:
                self.store.set(slug, blob)
            except PersistenceError as e:
                self._degrade(e)
        self._attempts[slug] = attempts

    # ---------- public API ----------

    def get_attempt(self, slug: str, question_id: int) -> AttemptState:
        self._require_question(slug, question_id)
        attempt = self._load(slug).get(question_id)
        return attempt or AttemptState(question_id=question_id)

    def get_attempts(self, slug: str) -> dict[int, AttemptState]:
        """Attempt state for every question of the document, in question order."""
        document = self._require_document(slug)
        attempts = self._load(slug)
        return {
            q.id: attempts.get(q.id) or AttemptState(question_id=q.id)
            for q in document.test_questions
        }

    def select_answer(self, slug: str, question_id: int, option_index: int) -> AttemptState:
        """
        Record the reader's choice for a question.

        Raises:
            InvalidOptionError: If option_index is not an int index into the options
        """
        question = self._require_question(slug, question_id)
        if (
            isinstance(option_index, bool)
            or not isinstance(option_index, int)
            or not 0 <= option_index < len(question.options)
        ):
            raise InvalidOptionError(question_id, option_index, len(question.options))

        attempt = AttemptState(question_id=question_id, selected_option=option_index)
        attempts = dict(self._load(slug))
        attempts[question_id] = attempt
        self._save(slug, attempts)
        return attempt

    def reveal(self, slug: str, question_id: int) -> RevealResult:
        """
        Disclose correctness and explanation for the selected answer.

        Raises:
            NoSelectionError: If no answer has been selected yet
        """
        question = self._require_question(slug, question_id)
        attempts = dict(self._load(slug))
        attempt = attempts.get(question_id)
        if attempt is None or attempt.selected_option is None:
            raise NoSelectionError(question_id)

        if not attempt.revealed:
            attempts[question_id] = attempt.model_copy(update={"revealed": True})
            self._save(slug, attempts)

        return RevealResult(
            question_id=question_id,
            correct=attempt.selected_option == question.correct_answer,
            explanation=question.explanation,
            selected_option=attempt.selected_option,
            correct_answer=question.correct_answer,
        )

    def score(self, slug: str) -> QuizScore:
        """Correct revealed answers out of all questions of the document."""
        document = self._require_document(slug)
        attempts = self._load(slug)
        correct = 0
        answered = 0
        for question in document.test_questions:
            attempt = attempts.get(question.id)
            if attempt is None or not attempt.revealed:
                continue
            answered += 1
            if attempt.selected_option == question.correct_answer:
                correct += 1
        return QuizScore(correct=correct, total=len(document.test_questions), answered=answered)

    def reset(self, slug: str):
        """Start the document's quiz over."""
        self._require_document(slug)
        if self.persistent:
            try:
                self.store.delete(slug)
            except PersistenceError as e:
                self._degrade(e)
        self._attempts[slug] = {}
