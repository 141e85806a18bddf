"""Shared fixtures: a small content store built in a temporary directory."""

import copy
import json
from pathlib import Path

import pytest

from learnhub.classroom import ContentRepository, KeyValueStore, PersistenceError


CLOSURES = {
    "title": "JavaScript Closures",
    "description": "Functions that remember the scope they were created in.",
    "sections": [
        {
            "id": "intro",
            "title": "Introduction",
            "content": [
                {"type": "heading", "text": "What is a closure?"},
                {"type": "paragraph", "text": "A function plus the variables it captured."},
                {"type": "list", "items": ["private state", "callbacks"]},
                {"type": "code", "language": "javascript", "text": "const f = () => x;"},
            ],
        },
        {
            "id": "practice",
            "title": "Practice",
            "content": [{"type": "paragraph", "text": "Try these."}],
            "skills": ["Write a counter", "Explain the var loop bug"],
        },
    ],
    "testQuestions": [
        {
            "id": 1,
            "question": "What does a closure capture?",
            "options": ["Copies", "References", "Globals only", "Nothing"],
            "correctAnswer": 1,
            "explanation": "Closures keep references to variables.",
        },
        {
            "id": 2,
            "question": "Which keyword is block scoped?",
            "options": ["let", "var", "function"],
            "correctAnswer": 0,
            "explanation": "let is block scoped.",
        },
    ],
}

CHECKLIST = {
    "title": "Frontend Checklist",
    "description": "Skills for a junior frontend developer.",
    "sections": [
        {
            "id": "css",
            "title": "CSS",
            "content": [{"type": "paragraph", "text": "Layout basics."}],
            "skills": ["Flexbox", "Grid"],
        },
    ],
}


def write_document(root: Path, category: str, slug: str, data, suffix: str = ".json") -> Path:
    """Write one content file; category may be empty for the store root."""
    folder = root / category if category else root
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / f"{slug}{suffix}"
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture
def closures_data():
    return copy.deepcopy(CLOSURES)


@pytest.fixture
def content_dir(tmp_path):
    root = tmp_path / "content"
    write_document(root, "basic-knowledge", "javascript-closures", CLOSURES)
    write_document(root, "frontend-roadmap", "frontend-checklist", CHECKLIST)
    return root


@pytest.fixture
def repository(content_dir):
    return ContentRepository(content_dir)


class FailingStore(KeyValueStore):
    """Store whose every operation fails."""

    def __init__(self):
        self.calls = 0

    def _fail(self, *args):
        self.calls += 1
        raise PersistenceError("disk is gone")

    get = set = delete = clear = _fail
