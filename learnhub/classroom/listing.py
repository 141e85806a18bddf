"""
Listing and search over loaded documents.

Summaries are a pure projection of the repository; filtering is a plain
case-insensitive substring match, with no ranking.
"""

from typing import Optional

from learnhub.schemas import ContentSummary

from .loader import ContentRepository


def filter_summaries(summaries: list[ContentSummary], query: str) -> list[ContentSummary]:
    """
    Filter summaries by search query.

    Searches in: title, description
    """
    if not query or not query.strip():
        return summaries

    needle = query.strip().lower()
    return [
        summary for summary in summaries
        if needle in summary.title.lower() or needle in summary.description.lower()
    ]


class ListingService:
    """Index-page data derived from a ContentRepository."""

    def __init__(self, repository: ContentRepository):
        self.repository = repository

    def list_summaries(self, category: Optional[str] = None) -> list[ContentSummary]:
        """Summaries of all documents (optionally one category), ordered by slug."""
        return [
            ContentSummary.from_document(document)
            for document in self.repository.load_all()
            if category is None or document.category == category
        ]

    def search(self, query: str, category: Optional[str] = None) -> list[ContentSummary]:
        return filter_summaries(self.list_summaries(category), query)

    @staticmethod
    def to_index(summaries: list[ContentSummary]) -> list[dict]:
        """JSON-ready list for the content-list endpoint."""
        return [summary.model_dump() for summary in summaries]
