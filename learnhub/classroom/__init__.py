"""
LearnHub Classroom - Runtime components for content and reader state.

This module provides:
- ContentRepository: Load and validate lesson documents
- ProgressTracker: Track completed skills and sections
- QuizEngine: Answer, reveal and score self-check questions
- ListingService: Summaries and search for index pages
- KeyValueStore adapters for reader-local persistence
"""

from .errors import (
    LearnHubError,
    ContentLoadError,
    DocumentNotFoundError,
    UnknownItemError,
    UnknownQuestionError,
    InvalidOptionError,
    NoSelectionError,
    PersistenceError,
)

from .storage import (
    KeyValueStore,
    MemoryStore,
    SQLiteStore,
    open_store,
)

from .loader import (
    ContentRecord,
    DirectoryContentStore,
    ContentRepository,
    get_repository,
)

from .progress import (
    ProgressTracker,
    list_progress_items,
)

from .quiz import QuizEngine

from .listing import (
    ListingService,
    filter_summaries,
)

__all__ = [
    # Errors
    "LearnHubError",
    "ContentLoadError",
    "DocumentNotFoundError",
    "UnknownItemError",
    "UnknownQuestionError",
    "InvalidOptionError",
    "NoSelectionError",
    "PersistenceError",
    # Storage
    "KeyValueStore",
    "MemoryStore",
    "SQLiteStore",
    "open_store",
    # Loader
    "ContentRecord",
    "DirectoryContentStore",
    "ContentRepository",
    "get_repository",
    # Progress
    "ProgressTracker",
    "list_progress_items",
    # Quiz
    "QuizEngine",
    # Listing
    "ListingService",
    "filter_summaries",
]
