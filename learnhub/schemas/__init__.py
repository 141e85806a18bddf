"""
LearnHub Schemas - Pydantic models for the learning-content site.

This module exports all schema classes for:
- Content: lesson documents, sections, blocks, test questions
- Progress: per-document completion state
- Quiz: attempt state and scores
"""

# Content schemas
from .content import (
    SLUG_PATTERN,
    KNOWN_BLOCK_TYPES,
    BlockBase,
    HeadingBlock,
    ParagraphBlock,
    ListBlock,
    CodeBlock,
    UnknownBlock,
    Block,
    block_tag,
    skill_item_id,
    Section,
    Question,
    ContentDocument,
    ContentSummary,
)

# Progress schemas
from .progress import (
    compute_percent,
    ProgressItem,
    ProgressState,
    ProgressSummary,
)

# Quiz schemas
from .quiz import (
    AttemptStatus,
    AttemptState,
    RevealResult,
    QuizScore,
)

__all__ = [
    # Content
    'SLUG_PATTERN',
    'KNOWN_BLOCK_TYPES',
    'BlockBase',
    'HeadingBlock',
    'ParagraphBlock',
    'ListBlock',
    'CodeBlock',
    'UnknownBlock',
    'Block',
    'block_tag',
    'skill_item_id',
    'Section',
    'Question',
    'ContentDocument',
    'ContentSummary',
    # Progress
    'compute_percent',
    'ProgressItem',
    'ProgressState',
    'ProgressSummary',
    # Quiz
    'AttemptStatus',
    'AttemptState',
    'RevealResult',
    'QuizScore',
]
