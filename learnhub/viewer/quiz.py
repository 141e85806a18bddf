"""
Quiz renderer - Self-check question display.

Provides:
- Question rendering with option states after reveal
- Explanation box
- Score card
"""

import html
from typing import Optional

from learnhub.schemas import AttemptState, Question, QuizScore, RevealResult


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-container {
        background: #e3f2fd;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1.5em 0;
        border-left: 4px solid #1976D2;
    }
    .quiz-title {
        font-weight: 600;
        color: #1565C0;
        font-size: 1.1em;
        margin-bottom: 0.6em;
    }
    .quiz-question {
        font-size: 1.05em;
        color: #333;
        margin-bottom: 1em;
        line-height: 1.6;
    }
    .quiz-option {
        padding: 0.4em 0.8em;
        margin: 0.3em 0;
        border-radius: 6px;
        background: white;
        border: 1px solid #ddd;
    }
    .quiz-option-selected {
        border-color: #1976D2;
    }
    .quiz-option-correct {
        background: #e8f5e9;
        border-color: #388E3C;
    }
    .quiz-option-wrong {
        background: #ffebee;
        border-color: #d32f2f;
    }
    .quiz-explanation {
        background: white;
        border: 1px solid #ddd;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1em;
    }
    .quiz-verdict-correct {
        font-weight: 600;
        color: #388E3C;
        margin-bottom: 0.5em;
    }
    .quiz-verdict-wrong {
        font-weight: 600;
        color: #d32f2f;
        margin-bottom: 0.5em;
    }
    .quiz-score-box {
        background: #e8f5e9;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #388E3C;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    </style>
    """


def _option_class(index: int, question: Question, attempt: Optional[AttemptState]) -> str:
    if attempt is None or attempt.selected_option is None:
        return "quiz-option"
    if attempt.revealed:
        if index == question.correct_answer:
            return "quiz-option quiz-option-correct"
        if index == attempt.selected_option:
            return "quiz-option quiz-option-wrong"
        return "quiz-option"
    if index == attempt.selected_option:
        return "quiz-option quiz-option-selected"
    return "quiz-option"


def render_quiz_result(result: RevealResult) -> str:
    """Render the verdict and explanation for a revealed question."""
    if result.correct:
        verdict = '<div class="quiz-verdict-correct">Correct!</div>'
    else:
        verdict = '<div class="quiz-verdict-wrong">Not quite.</div>'
    return (
        f'<div class="quiz-explanation">{verdict}'
        f'{html.escape(result.explanation)}</div>'
    )


def render_quiz_question(
    question: Question,
    number: int,
    attempt: Optional[AttemptState] = None,
    result: Optional[RevealResult] = None,
) -> str:
    """
    Render a single quiz question.

    Args:
        question: Question from the document
        number: 1-based position shown in the title
        attempt: Reader's attempt, used to mark options
        result: Reveal result; when given, the explanation is shown

    Returns:
        HTML string for the question
    """
    parts = ['<div class="quiz-container">']
    parts.append(f'<div class="quiz-title">Question {number}</div>')
    parts.append(f'<div class="quiz-question">{html.escape(question.question)}</div>')

    for index, option in enumerate(question.options):
        css_class = _option_class(index, question, attempt)
        parts.append(f'<div class="{css_class}">{html.escape(option)}</div>')

    if result is not None:
        parts.append(render_quiz_result(result))

    parts.append('</div>')
    return ''.join(parts)


def render_quiz_score(score: QuizScore) -> str:
    """Render quiz score display."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{score.percent}%</div>
        <div class="quiz-score-label">{score.correct} of {score.total} correct ({score.answered} answered)</div>
        <div class="quiz-score-label">{html.escape(score.feedback)}</div>
    </div>
    """
