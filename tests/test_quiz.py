"""
Quiz engine tests.

Question 1 of the closures fixture has four options with correctAnswer 1;
question 2 has three options with correctAnswer 0.
"""

import pytest

from learnhub.classroom import (
    DocumentNotFoundError,
    InvalidOptionError,
    MemoryStore,
    NoSelectionError,
    QuizEngine,
    UnknownQuestionError,
)
from learnhub.schemas import AttemptStatus

from conftest import FailingStore


SLUG = "javascript-closures"


@pytest.fixture
def engine(repository):
    return QuizEngine(repository)


class TestSelectAnswer:
    """Test answer selection."""

    def test_initial_attempt_is_unanswered(self, engine):
        attempt = engine.get_attempt(SLUG, 1)
        assert attempt.status == AttemptStatus.UNANSWERED
        assert attempt.selected_option is None

    def test_select(self, engine):
        attempt = engine.select_answer(SLUG, 1, 2)
        assert attempt.selected_option == 2
        assert attempt.status == AttemptStatus.ANSWERED
        assert engine.get_attempt(SLUG, 1) == attempt

    @pytest.mark.parametrize("option", [-1, 4, 5])
    def test_invalid_option(self, engine, option):
        with pytest.raises(InvalidOptionError) as exc_info:
            engine.select_answer(SLUG, 1, option)
        assert exc_info.value.option_count == 4
        assert engine.get_attempt(SLUG, 1).selected_option is None

    @pytest.mark.parametrize("option", [True, False, 1.0, "1", None])
    def test_non_int_option(self, engine, option):
        with pytest.raises(InvalidOptionError):
            engine.select_answer(SLUG, 1, option)
        assert engine.get_attempt(SLUG, 1).selected_option is None

    def test_invalid_option_keeps_previous_choice(self, engine):
        engine.select_answer(SLUG, 1, 3)
        with pytest.raises(ValueError):
            engine.select_answer(SLUG, 1, 5)
        assert engine.get_attempt(SLUG, 1).selected_option == 3

    def test_unknown_question(self, engine):
        with pytest.raises(UnknownQuestionError):
            engine.select_answer(SLUG, 99, 0)

    def test_unknown_document(self, engine):
        with pytest.raises(DocumentNotFoundError):
            engine.select_answer("no-such-lesson", 1, 0)

    def test_get_attempts_covers_every_question(self, engine):
        engine.select_answer(SLUG, 2, 0)
        attempts = engine.get_attempts(SLUG)
        assert list(attempts) == [1, 2]
        assert attempts[1].status == AttemptStatus.UNANSWERED
        assert attempts[2].status == AttemptStatus.ANSWERED


class TestReveal:
    """Test revealing correctness and explanations."""

    def test_reveal_correct_answer(self, engine):
        engine.select_answer(SLUG, 1, 1)
        result = engine.reveal(SLUG, 1)
        assert result.correct is True
        assert result.explanation == "Closures keep references to variables."
        assert result.correct_answer == 1
        assert engine.get_attempt(SLUG, 1).status == AttemptStatus.REVEALED

    def test_reveal_wrong_answer(self, engine):
        engine.select_answer(SLUG, 1, 0)
        result = engine.reveal(SLUG, 1)
        assert result.correct is False
        assert result.selected_option == 0

    def test_reveal_without_selection(self, engine):
        with pytest.raises(NoSelectionError):
            engine.reveal(SLUG, 1)
        assert engine.get_attempt(SLUG, 1).status == AttemptStatus.UNANSWERED

    def test_reveal_is_idempotent(self, engine):
        engine.select_answer(SLUG, 1, 1)
        assert engine.reveal(SLUG, 1) == engine.reveal(SLUG, 1)

    def test_reselect_after_reveal_hides_result(self, engine):
        engine.select_answer(SLUG, 1, 0)
        engine.reveal(SLUG, 1)
        attempt = engine.select_answer(SLUG, 1, 1)
        assert attempt.revealed is False
        assert attempt.status == AttemptStatus.ANSWERED
        assert engine.reveal(SLUG, 1).correct is True

    def test_same_option_again_resets_reveal(self, engine):
        engine.select_answer(SLUG, 1, 1)
        engine.reveal(SLUG, 1)
        assert engine.select_answer(SLUG, 1, 1).revealed is False


class TestScore:
    """Test scoring."""

    def test_score_counts_revealed_correct(self, engine):
        engine.select_answer(SLUG, 1, 1)
        engine.reveal(SLUG, 1)
        score = engine.score(SLUG)
        assert score.correct == 1
        assert score.total == 2
        assert score.answered == 1
        assert score.percent == 50
        assert score.accuracy == 100

    def test_unrevealed_answers_do_not_count(self, engine):
        engine.select_answer(SLUG, 1, 1)
        engine.select_answer(SLUG, 2, 0)
        score = engine.score(SLUG)
        assert score.correct == 0
        assert score.answered == 0

    def test_total_is_question_count(self, engine, repository):
        assert engine.score(SLUG).total == len(repository.get_by_slug(SLUG).test_questions)

    def test_document_without_questions(self, engine):
        score = engine.score("frontend-checklist")
        assert score.total == 0
        assert score.percent == 0

    def test_all_correct(self, engine):
        engine.select_answer(SLUG, 1, 1)
        engine.reveal(SLUG, 1)
        engine.select_answer(SLUG, 2, 0)
        engine.reveal(SLUG, 2)
        score = engine.score(SLUG)
        assert score.percent == 100
        assert score.is_complete
        assert score.feedback == "Excellent!"

    def test_reset(self, engine):
        engine.select_answer(SLUG, 1, 1)
        engine.reveal(SLUG, 1)
        engine.reset(SLUG)
        assert engine.score(SLUG).answered == 0
        assert engine.get_attempt(SLUG, 1).status == AttemptStatus.UNANSWERED


class TestQuizPersistence:
    """Attempts are session-only unless a store is given."""

    def test_session_only_by_default(self, repository):
        engine = QuizEngine(repository)
        engine.select_answer(SLUG, 1, 1)
        assert not engine.persistent
        assert QuizEngine(repository).get_attempt(SLUG, 1).selected_option is None

    def test_persisted_with_store(self, repository):
        store = MemoryStore()
        engine = QuizEngine(repository, store)
        engine.select_answer(SLUG, 1, 1)
        engine.reveal(SLUG, 1)

        reloaded = QuizEngine(repository, store)
        assert reloaded.persistent
        attempt = reloaded.get_attempt(SLUG, 1)
        assert attempt.selected_option == 1
        assert attempt.revealed is True
        assert reloaded.score(SLUG).correct == 1

    def test_stale_entries_are_dropped(self, repository):
        store = MemoryStore()
        store.set(SLUG, {
            "1": {"selected_option": 9, "revealed": True},
            "2": {"selected_option": 0, "revealed": False},
            "42": {"selected_option": 0, "revealed": True},
            "oops": "garbage",
        })
        attempts = QuizEngine(repository, store).get_attempts(SLUG)
        assert attempts[1].status == AttemptStatus.UNANSWERED
        assert attempts[2].selected_option == 0

    def test_reset_clears_store(self, repository):
        store = MemoryStore()
        engine = QuizEngine(repository, store)
        engine.select_answer(SLUG, 1, 1)
        engine.reset(SLUG)
        assert store.get(SLUG) is None

    def test_stored_bool_option_is_dropped(self, repository):
        store = MemoryStore()
        store.set(SLUG, {"1": {"selected_option": True, "revealed": True}})
        assert QuizEngine(repository, store).get_attempt(SLUG, 1).status == AttemptStatus.UNANSWERED

    def test_stored_revealed_must_be_true(self, repository):
        store = MemoryStore()
        store.set(SLUG, {"1": {"selected_option": 1, "revealed": "false"}})
        assert QuizEngine(repository, store).get_attempt(SLUG, 1).status == AttemptStatus.ANSWERED


class TestQuizDegradedMode:
    """Storage failures fall back to session-only attempts."""

    def test_quiz_still_works(self, repository, caplog):
        engine = QuizEngine(repository, FailingStore())
        engine.select_answer(SLUG, 1, 1)
        result = engine.reveal(SLUG, 1)
        assert result.correct is True
        assert engine.score(SLUG).correct == 1
        assert not engine.persistent
        assert "keeping attempts in memory" in caplog.text

    def test_store_is_not_retried(self, repository, caplog):
        store = FailingStore()
        engine = QuizEngine(repository, store)
        engine.select_answer(SLUG, 1, 1)
        engine.reveal(SLUG, 1)
        engine.select_answer(SLUG, 2, 0)
        engine.reset(SLUG)
        engine.get_attempts("frontend-checklist")
        assert store.calls == 1
        assert caplog.text.count("keeping attempts in memory") == 1

    def test_failing_save_keeps_attempt(self, repository):
        store = FailingStore()
        engine = QuizEngine(repository, store)
        engine._attempts[SLUG] = {}
        engine.select_answer(SLUG, 1, 2)
        assert store.calls == 1
        assert not engine.persistent
        assert engine.get_attempt(SLUG, 1).selected_option == 2

    def test_reset_after_failure(self, repository):
        engine = QuizEngine(repository, FailingStore())
        engine.select_answer(SLUG, 1, 1)
        engine.reset(SLUG)
        assert engine.get_attempt(SLUG, 1).status == AttemptStatus.UNANSWERED
