"""
ContentRepository - Load lesson documents from the content directory.

Provides read-only access to:
- All valid documents, ordered by slug
- Lookup by slug
- Available slugs and categories

Documents live in <content_dir>/<category>/<slug>.json (or .yaml/.yml).
Malformed documents are rejected one by one; the rest still load.
"""

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from learnhub.config import get_settings
from learnhub.schemas import ContentDocument

from .errors import ContentLoadError


logger = logging.getLogger(__name__)

CONTENT_SUFFIXES = (".json", ".yaml", ".yml")


@dataclass
class ContentRecord:
    """Raw document read from the content store, before validation."""
    slug: str
    category: Optional[str]
    source: Path
    data: dict[str, Any]


class DirectoryContentStore:
    """Content store backed by a directory tree of JSON/YAML files."""

    def __init__(self, root: str | Path):
        self.root = Path(root)
        if not self.root.is_dir():
            raise FileNotFoundError(f"Content directory not found: {root}")

    def iter_paths(self) -> list[Path]:
        """All content files under the root, in sorted path order."""
        return sorted(
            path for path in self.root.rglob("*")
            if path.is_file() and path.suffix.lower() in CONTENT_SUFFIXES
        )

    def read(self, path: Path) -> ContentRecord:
        """
        Parse one content file.

        Raises:
            ContentLoadError: If the file cannot be read or is not a mapping
        """
        try:
            text = path.read_text(encoding="utf-8-sig")
            if path.suffix.lower() == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ContentLoadError(path, f"unreadable document: {e}") from e

        if not isinstance(data, dict):
            raise ContentLoadError(path, "top level must be a mapping")

        parent = path.parent.relative_to(self.root)
        category = parent.as_posix() if parent.parts else None
        return ContentRecord(slug=path.stem, category=category, source=path, data=data)


def _format_validation_error(error: ValidationError, limit: int = 5) -> str:
    """Compact one-line summary of a pydantic validation error."""
    messages = []
    for item in error.errors()[:limit]:
        location = ".".join(str(part) for part in item["loc"]) or "document"
        messages.append(f"{location}: {item['msg']}")
    if error.error_count() > limit:
        messages.append(f"... and {error.error_count() - limit} more")
    return "; ".join(messages)


class ContentRepository:
    """
    Read-only collection of validated content documents.

    Loads lazily on first access (or on an explicit load_all()) and never
    changes afterwards.
    """

    def __init__(self, content_dir: str | Path):
        """
        Initialize repository over a content directory.

        Args:
            content_dir: Root directory of the content store
        """
        self.store = DirectoryContentStore(content_dir)
        self._documents: dict[str, ContentDocument] = {}
        self._errors: list[ContentLoadError] = []
        self._loaded = False

    @property
    def content_dir(self) -> Path:
        return self.store.root

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def _ensure_loaded(self):
        if not self._loaded:
            self._load()

    def _load(self):
        documents: dict[str, ContentDocument] = {}
        sources: dict[str, Path] = {}
        errors: list[ContentLoadError] = []

        for path in self.store.iter_paths():
            try:
                document = self._build_document(self.store.read(path))
            except ContentLoadError as e:
                errors.append(e)
                continue

            if document.slug in documents:
                errors.append(ContentLoadError(
                    path,
                    f"duplicate slug '{document.slug}' (already loaded from {sources[document.slug]})",
                ))
                continue

            documents[document.slug] = document
            sources[document.slug] = path

        for error in errors:
            logger.warning(f"Rejected content document {error}")
        logger.info(
            f"Loaded {len(documents)} content documents from {self.content_dir}"
            + (f" ({len(errors)} rejected)" if errors else "")
        )

        self._documents = dict(sorted(documents.items()))
        self._errors = errors
        self._loaded = True

    @staticmethod
    def _build_document(record: ContentRecord) -> ContentDocument:
        """Validate a raw record; the filename decides the slug, the folder the category."""
        data = dict(record.data)
        declared_slug = data.pop("slug", None)
        if declared_slug is not None and declared_slug != record.slug:
            raise ContentLoadError(
                record.source,
                f"slug '{declared_slug}' does not match file name '{record.slug}'",
            )
        data["slug"] = record.slug
        data["category"] = record.category

        try:
            return ContentDocument.model_validate(data)
        except ValidationError as e:
            raise ContentLoadError(record.source, _format_validation_error(e)) from e

    def load_all(self) -> list[ContentDocument]:
        """All valid documents, ordered by slug."""
        self._ensure_loaded()
        return list(self._documents.values())

    @property
    def load_errors(self) -> list[ContentLoadError]:
        """Documents rejected while loading."""
        self._ensure_loaded()
        return list(self._errors)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get_by_slug(self, slug: str) -> Optional[ContentDocument]:
        """Document for a slug, or None if there is no such document."""
        self._ensure_loaded()
        return self._documents.get(slug)

    def list_available_slugs(self) -> list[str]:
        self._ensure_loaded()
        return list(self._documents)

    def list_categories(self) -> list[str]:
        """Distinct categories of loaded documents, sorted."""
        self._ensure_loaded()
        return sorted({doc.category for doc in self._documents.values() if doc.category})

    @property
    def document_count(self) -> int:
        self._ensure_loaded()
        return len(self._documents)


@lru_cache(maxsize=None)
def _cached_repository(content_dir: Path) -> ContentRepository:
    repository = ContentRepository(content_dir)
    repository.load_all()
    return repository


def get_repository(content_dir: Optional[str | Path] = None) -> ContentRepository:
    """
    Process-wide repository for a content directory, loaded once.

    Defaults to the configured content directory.
    """
    if content_dir is None:
        content_dir = get_settings().content_dir
    return _cached_repository(Path(content_dir).resolve())
