"""
LearnHub - Personal learning-content site.

Static lesson documents with typed content blocks, reader progress tracking
and self-check quizzes.
"""

__version__ = "0.1.0"
