"""
Content repository tests.

Loading runs against a temporary content store written by the fixtures in
conftest.py.
"""

import pytest

from learnhub.classroom import ContentLoadError, ContentRepository, get_repository
from learnhub.classroom.loader import _cached_repository
from learnhub.schemas import CodeBlock, UnknownBlock

from conftest import write_document


class TestLoadAll:
    """Test loading the whole content store."""

    def test_loads_valid_documents_sorted_by_slug(self, repository):
        documents = repository.load_all()
        assert [doc.slug for doc in documents] == ["frontend-checklist", "javascript-closures"]
        assert repository.load_errors == []

    def test_category_comes_from_folder(self, repository):
        assert repository.get_by_slug("javascript-closures").category == "basic-knowledge"
        assert repository.list_categories() == ["basic-knowledge", "frontend-roadmap"]

    def test_document_at_store_root_has_no_category(self, content_dir, closures_data):
        write_document(content_dir, "", "root-lesson", closures_data)
        repository = ContentRepository(content_dir)
        assert repository.get_by_slug("root-lesson").category is None

    def test_yaml_document(self, content_dir):
        write_document(content_dir, "to-be-senior", "caching", (
            "title: Caching\n"
            "description: Keep results close\n"
            "sections:\n"
            "  - id: basics\n"
            "    title: Basics\n"
            "    content:\n"
            "      - type: code\n"
            "        language: python\n"
            "        text: cache = {}\n"
        ), suffix=".yaml")
        repository = ContentRepository(content_dir)
        document = repository.get_by_slug("caching")
        assert document.category == "to-be-senior"
        assert isinstance(document.sections[0].content[0], CodeBlock)

    def test_unknown_block_type_still_loads(self, content_dir, closures_data):
        closures_data["sections"][0]["content"].append({"type": "video", "url": "https://example.com"})
        write_document(content_dir, "basic-knowledge", "with-video", closures_data)
        repository = ContentRepository(content_dir)
        block = repository.get_by_slug("with-video").sections[0].content[-1]
        assert isinstance(block, UnknownBlock)

    def test_other_files_are_ignored(self, content_dir):
        (content_dir / "README.md").write_text("# notes", encoding="utf-8")
        repository = ContentRepository(content_dir)
        assert repository.document_count == 2
        assert repository.load_errors == []

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ContentRepository(tmp_path / "nowhere")


class TestRejectedDocuments:
    """Malformed documents are rejected one by one; the rest still load."""

    def test_out_of_range_correct_answer(self, content_dir, closures_data):
        closures_data["testQuestions"][0]["correctAnswer"] = 10
        path = write_document(content_dir, "basic-knowledge", "broken-quiz", closures_data)
        repository = ContentRepository(content_dir)

        assert repository.get_by_slug("broken-quiz") is None
        assert repository.document_count == 2
        assert len(repository.load_errors) == 1
        error = repository.load_errors[0]
        assert isinstance(error, ContentLoadError)
        assert error.source == path
        assert "correctAnswer" in error.reason

    def test_unreadable_json(self, content_dir):
        write_document(content_dir, "basic-knowledge", "garbled", "{not json")
        repository = ContentRepository(content_dir)
        assert repository.list_available_slugs() == ["frontend-checklist", "javascript-closures"]
        assert "unreadable" in repository.load_errors[0].reason

    def test_top_level_must_be_mapping(self, content_dir):
        write_document(content_dir, "basic-knowledge", "a-list", [1, 2, 3])
        repository = ContentRepository(content_dir)
        assert repository.get_by_slug("a-list") is None
        assert "mapping" in repository.load_errors[0].reason

    def test_missing_block_type(self, content_dir, closures_data):
        closures_data["sections"][0]["content"].append({"text": "no type"})
        write_document(content_dir, "basic-knowledge", "untagged", closures_data)
        repository = ContentRepository(content_dir)
        assert repository.get_by_slug("untagged") is None
        assert len(repository.load_errors) == 1

    @pytest.mark.parametrize("tag", [["heading"], {"name": "heading"}, 3])
    def test_non_string_block_type(self, content_dir, closures_data, tag):
        closures_data["sections"][0]["content"].append({"type": tag, "text": "x"})
        path = write_document(content_dir, "basic-knowledge", "odd-tag", closures_data)
        repository = ContentRepository(content_dir)

        assert repository.document_count == 2
        assert repository.get_by_slug("odd-tag") is None
        assert len(repository.load_errors) == 1
        assert repository.load_errors[0].source == path

    def test_declared_slug_must_match_file_name(self, content_dir, closures_data):
        closures_data["slug"] = "something-else"
        write_document(content_dir, "basic-knowledge", "mismatch", closures_data)
        repository = ContentRepository(content_dir)
        assert repository.get_by_slug("mismatch") is None
        assert repository.get_by_slug("something-else") is None
        assert "does not match" in repository.load_errors[0].reason

    def test_matching_declared_slug_is_accepted(self, content_dir, closures_data):
        closures_data["slug"] = "declared"
        write_document(content_dir, "basic-knowledge", "declared", closures_data)
        repository = ContentRepository(content_dir)
        assert repository.get_by_slug("declared") is not None

    def test_duplicate_slug_first_path_wins(self, content_dir, closures_data):
        write_document(content_dir, "aaa", "dup", closures_data)
        closures_data["title"] = "Second copy"
        write_document(content_dir, "zzz", "dup", closures_data)
        repository = ContentRepository(content_dir)

        assert repository.get_by_slug("dup").category == "aaa"
        assert len(repository.load_errors) == 1
        assert "duplicate slug" in repository.load_errors[0].reason


class TestLookup:
    """Test slug lookup."""

    def test_get_by_slug(self, repository):
        document = repository.get_by_slug("javascript-closures")
        assert document.title == "JavaScript Closures"
        assert len(document.test_questions) == 2

    def test_get_by_unknown_slug(self, repository):
        assert repository.get_by_slug("no-such-lesson") is None

    def test_every_listed_slug_resolves(self, repository):
        for slug in repository.list_available_slugs():
            assert repository.get_by_slug(slug).slug == slug

    def test_load_all_is_stable(self, repository):
        assert repository.load_all() == repository.load_all()


class TestGetRepository:
    """Test the process-wide repository."""

    def test_same_directory_returns_same_repository(self, content_dir):
        _cached_repository.cache_clear()
        first = get_repository(content_dir)
        second = get_repository(str(content_dir))
        assert first is second
        assert first.document_count == 2
        _cached_repository.cache_clear()
