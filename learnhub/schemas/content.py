"""
Content schemas for LearnHub.

Defines Pydantic models for lesson documents including:
- Content blocks (heading, paragraph, list, code, and unknown variants)
- Sections with optional skill checklists
- Self-check test questions
- Lightweight summaries for index pages
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_validator,
    model_validator,
)
from typing import Annotated, Any, Literal, Optional, Union


SLUG_PATTERN = r'^[a-z0-9]+(?:-[a-z0-9]+)*$'


# -----------------------------------------------------------------------------
# Block types
# -----------------------------------------------------------------------------

class BlockBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str


class HeadingBlock(BlockBase):
    type: Literal["heading"] = "heading"
    text: str


class ParagraphBlock(BlockBase):
    type: Literal["paragraph"] = "paragraph"
    text: str


class ListBlock(BlockBase):
    type: Literal["list"] = "list"
    items: list[str]
    ordered: bool = False


class CodeBlock(BlockBase):
    """Code sample. The text is display content only and is never executed."""
    type: Literal["code"] = "code"
    text: str
    language: str = "text"


class UnknownBlock(BlockBase):
    """
    Block whose type tag this version does not recognise.

    All raw fields are kept (extra="allow") so the block can still be shown
    and so a renderer registered later for the tag can read them.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    type: str


KNOWN_BLOCK_TYPES = frozenset({"heading", "paragraph", "list", "code"})


def block_tag(value: Any) -> Optional[str]:
    """Discriminator for Block: known tags map to themselves, anything else to 'unknown'."""
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "type", None)
    if tag is None:
        return None
    # Non-string tags go to UnknownBlock, whose `type: str` rejects them
    if isinstance(tag, str) and tag in KNOWN_BLOCK_TYPES:
        return tag
    return "unknown"


Block = Annotated[
    Union[
        Annotated[HeadingBlock, Tag("heading")],
        Annotated[ParagraphBlock, Tag("paragraph")],
        Annotated[ListBlock, Tag("list")],
        Annotated[CodeBlock, Tag("code")],
        Annotated[UnknownBlock, Tag("unknown")],
    ],
    Discriminator(block_tag),
]


# -----------------------------------------------------------------------------
# Sections and questions
# -----------------------------------------------------------------------------

def skill_item_id(section_id: str, index: int) -> str:
    """Progress item id for the index-th skill of a section."""
    return f"{section_id}-{index}"


class Section(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str
    content: list[Block]
    skills: list[str] = []  # checklist entries the reader can tick off


class Question(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    question: str
    options: list[str] = Field(..., min_length=2)
    correct_answer: int = Field(..., alias="correctAnswer")
    explanation: str

    @model_validator(mode='after')
    def correct_answer_in_range(self):
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError(
                f'correctAnswer {self.correct_answer} out of range for '
                f'{len(self.options)} options'
            )
        return self


# -----------------------------------------------------------------------------
# Main document schema
# -----------------------------------------------------------------------------

class ContentDocument(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    slug: str = Field(..., pattern=SLUG_PATTERN)
    title: str
    description: str
    sections: list[Section]
    test_questions: list[Question] = Field(default_factory=list, alias="testQuestions")
    category: Optional[str] = None  # content-store folder, e.g. "basic-knowledge"

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, v):
        if not v.strip():
            raise ValueError('title must not be empty')
        return v

    @model_validator(mode='after')
    def ids_unique(self):
        section_ids = [section.id for section in self.sections]
        duplicates = sorted({sid for sid in section_ids if section_ids.count(sid) > 1})
        if duplicates:
            raise ValueError(f'duplicate section ids: {", ".join(duplicates)}')

        question_ids = [q.id for q in self.test_questions]
        duplicates = sorted({qid for qid in question_ids if question_ids.count(qid) > 1})
        if duplicates:
            raise ValueError(f'duplicate question ids: {", ".join(map(str, duplicates))}')

        skill_ids = {
            skill_item_id(section.id, index)
            for section in self.sections
            for index in range(len(section.skills))
        }
        clashes = sorted(skill_ids & set(section_ids))
        if clashes:
            raise ValueError(f'section ids clash with skill item ids: {", ".join(clashes)}')
        return self

    def get_section(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def get_question(self, question_id: int) -> Optional[Question]:
        for question in self.test_questions:
            if question.id == question_id:
                return question
        return None

    @property
    def block_count(self) -> int:
        return sum(len(section.content) for section in self.sections)


class ContentSummary(BaseModel):
    """Lightweight document info for index and search pages."""
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    description: str
    category: Optional[str] = None

    @classmethod
    def from_document(cls, document: ContentDocument) -> "ContentSummary":
        return cls(
            slug=document.slug,
            title=document.title,
            description=document.description,
            category=document.category,
        )
