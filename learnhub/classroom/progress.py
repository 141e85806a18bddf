"""
ProgressTracker - Track which skills and sections a reader has done.

Each document's state is one blob {item_id: done} in a KeyValueStore keyed
by slug. Progress items are derived from the document:
- one item per skill, id "<section_id>-<index>"
- one item for each section without skills, id "<section_id>"

If the store fails, tracking carries on in memory for the rest of the
session.
"""

import logging
from typing import Optional

from learnhub.schemas import (
    ContentDocument,
    ProgressItem,
    ProgressState,
    ProgressSummary,
    compute_percent,
    skill_item_id,
)

from .errors import DocumentNotFoundError, PersistenceError, UnknownItemError
from .loader import ContentRepository
from .storage import KeyValueStore, MemoryStore


logger = logging.getLogger(__name__)


def list_progress_items(document: ContentDocument) -> list[ProgressItem]:
    """Trackable items of a document, in document order."""
    items = []
    for section in document.sections:
        if section.skills:
            for index, skill in enumerate(section.skills):
                items.append(ProgressItem(
                    id=skill_item_id(section.id, index),
                    section_id=section.id,
                    label=skill,
                ))
        else:
            items.append(ProgressItem(id=section.id, section_id=section.id, label=section.title))
    return items


class ProgressTracker:
    """
    Per-document completion tracking for a single reader.

    Items start not done; toggle() is the only transition.
    """

    def __init__(self, repository: ContentRepository, store: Optional[KeyValueStore] = None):
        """
        Initialize progress tracker.

        Args:
            repository: Loaded content, used to resolve progress items
            store: Durable key-value store (default: in-memory only)
        """
        self.repository = repository
        self.store = store if store is not None else MemoryStore()
        self._flags: dict[str, dict[str, bool]] = {}
        self._degraded = False

    @property
    def degraded(self) -> bool:
        """True once storage has failed and progress is kept in memory only."""
        return self._degraded

    def _degrade(self, error: PersistenceError):
        if not self._degraded:
            logger.warning(f"Progress storage unavailable, keeping progress in memory: {error}")
        self._degraded = True

    def _require_document(self, slug: str) -> ContentDocument:
        document = self.repository.get_by_slug(slug)
        if document is None:
            raise DocumentNotFoundError(slug)
        return document

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    def _load_flags(self, slug: str) -> dict[str, bool]:
        if slug in self._flags:
            return self._flags[slug]

        stored = None
        if not self._degraded:
            try:
                stored = self.store.get(slug)
            except PersistenceError as e:
                self._degrade(e)

        flags: dict[str, bool] = {}
        if isinstance(stored, dict):
            # Only a literal true marks an item done; "false", 0 and the like do not
            flags = {str(key): value is True for key, value in stored.items()}
        elif stored is not None:
            logger.warning(f"Ignoring unreadable progress for '{slug}'")

        self._flags[slug] = flags
        return flags

    def _save_flags(self, slug: str, flags: dict[str, bool]):
        """Persist the whole blob first, then publish it in memory."""
        if not self._degraded:
            try:
                self.store.set(slug, flags)
            except PersistenceError as e:
                self._degrade(e)
        self._flags[slug] = flags

    # -------------------------------------------------------------------------
    # Document Progress
    # -------------------------------------------------------------------------

    def get_items(self, slug: str) -> list[ProgressItem]:
        return list_progress_items(self._require_document(slug))

    def get_state(self, slug: str) -> ProgressState:
        """Done flags for every current item; stale stored keys are ignored."""
        items = self.get_items(slug)
        flags = self._load_flags(slug)
        return ProgressState(
            slug=slug,
            items={item.id: flags.get(item.id, False) for item in items},
        )

    def toggle(self, slug: str, item_id: str) -> ProgressState:
        """Flip one item and persist the document's full state."""
        items = self.get_items(slug)
        if item_id not in {item.id for item in items}:
            raise UnknownItemError(slug, item_id)

        flags = dict(self._load_flags(slug))
        flags[item_id] = not flags.get(item_id, False)
        self._save_flags(slug, flags)
        return self.get_state(slug)

    def clear(self, slug: str):
        """Forget all progress for a document."""
        self._require_document(slug)
        if not self._degraded:
            try:
                self.store.delete(slug)
            except PersistenceError as e:
                self._degrade(e)
        self._flags[slug] = {}

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    def get_summary(self, slug: str) -> ProgressSummary:
        state = self.get_state(slug)
        done = len(state.done_ids)
        total = len(state.items)
        return ProgressSummary(
            percent=compute_percent(done, total),
            done_count=done,
            total_count=total,
        )

    def get_overall_summary(self) -> ProgressSummary:
        """Completion across every loaded document."""
        done = 0
        total = 0
        for document in self.repository.load_all():
            summary = self.get_summary(document.slug)
            done += summary.done_count
            total += summary.total_count
        return ProgressSummary(
            percent=compute_percent(done, total),
            done_count=done,
            total_count=total,
        )
