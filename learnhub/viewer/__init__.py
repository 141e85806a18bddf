"""
LearnHub Viewer - Rendering components for lesson display.

This module provides:
- Block and document rendering
- Quiz question and score display
"""

from .blocks import (
    BLOCK_RENDERERS,
    CODE_LINE_NUMBER_THRESHOLD,
    register_block_renderer,
    get_content_css,
    render_heading,
    render_paragraph,
    render_list,
    render_code,
    highlight_code,
    render_unknown,
    render_block,
    render_blocks,
    render_section,
    render_document,
)

from .quiz import (
    get_quiz_css,
    render_quiz_question,
    render_quiz_result,
    render_quiz_score,
)

__all__ = [
    # Blocks
    "BLOCK_RENDERERS",
    "CODE_LINE_NUMBER_THRESHOLD",
    "register_block_renderer",
    "get_content_css",
    "render_heading",
    "render_paragraph",
    "render_list",
    "render_code",
    "highlight_code",
    "render_unknown",
    "render_block",
    "render_blocks",
    "render_section",
    "render_document",
    # Quiz
    "get_quiz_css",
    "render_quiz_question",
    "render_quiz_result",
    "render_quiz_score",
]
