"""
Block renderer - Generate HTML for lesson documents.

Features:
- One rendering rule per block type, looked up by type tag
- Inert fallback for block types this version does not know
- Code samples highlighted per language with a language label
- Section and document composition
"""

from typing import Callable
import html
import json
import logging

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from learnhub.schemas import (
    BlockBase,
    CodeBlock,
    ContentDocument,
    HeadingBlock,
    ListBlock,
    ParagraphBlock,
    Section,
)


logger = logging.getLogger(__name__)

# Code samples longer than this get line numbers
CODE_LINE_NUMBER_THRESHOLD = 10

# Token spans only (nowrap); classes are prefixed to stay clear of page styles
CODE_STYLE = "monokai"
CODE_FORMATTER = HtmlFormatter(nowrap=True, classprefix="tok-", style=CODE_STYLE)

# Renderers share the signature (block, heading_level) -> html
BLOCK_RENDERERS: dict[str, Callable[[BlockBase, int], str]] = {}


def register_block_renderer(block_type: str):
    """
    Register the rendering rule for a block type tag.

    Blocks with a tag outside the built-in set arrive as UnknownBlock, with
    their raw fields available as attributes.
    """
    def decorator(func):
        BLOCK_RENDERERS[block_type] = func
        return func
    return decorator


def get_content_css() -> str:
    """Get CSS styles for lesson display."""
    return """
    <style>
    .lesson-description {
        color: #666;
        font-style: italic;
    }
    .content-section {
        margin: 2em 0;
    }
    .block-heading {
        margin-top: 2em;
        padding-left: 0.8em;
        border-left: 4px solid #3b82f6;
        color: #1f2937;
    }
    .block-paragraph {
        line-height: 1.7;
        color: #374151;
    }
    .block-list li {
        margin: 0.4em 0;
        line-height: 1.6;
    }
    .block-code {
        margin: 1.2em 0;
        border-radius: 8px;
        overflow: hidden;
        border: 1px solid #374151;
    }
    .code-language {
        background: #1f2937;
        color: #d1d5db;
        font-size: 0.85em;
        padding: 0.4em 1em;
        text-transform: capitalize;
    }
    .block-code pre {
        background: #111827;
        color: #d4d4d4;
        margin: 0;
        padding: 1em;
        overflow-x: auto;
        font-size: 0.9em;
        line-height: 1.5;
    }
    .code-line-number {
        display: inline-block;
        width: 2.5em;
        margin-right: 1em;
        color: #6b7280;
        text-align: right;
        user-select: none;
    }
    .block-unknown {
        background: #fff8e1;
        border: 1px dashed #f59e0b;
        border-radius: 6px;
        padding: 0.8em 1em;
        font-size: 0.85em;
        color: #92400e;
        white-space: pre-wrap;
    }
    .section-skills {
        background: #f5f5f5;
        border-radius: 8px;
        padding: 1em 1em 1em 2.5em;
    }
    """ + CODE_FORMATTER.get_style_defs(".block-code code") + """
    </style>
    """


@register_block_renderer("heading")
def render_heading(block: HeadingBlock, heading_level: int = 3) -> str:
    level = min(max(heading_level, 1), 6)
    return f'<h{level} class="block-heading">{html.escape(block.text)}</h{level}>'


@register_block_renderer("paragraph")
def render_paragraph(block: ParagraphBlock, heading_level: int = 3) -> str:
    content = html.escape(block.text).replace('\n', '<br>')
    return f'<p class="block-paragraph">{content}</p>'


@register_block_renderer("list")
def render_list(block: ListBlock, heading_level: int = 3) -> str:
    tag = "ol" if block.ordered else "ul"
    items = ''.join(f'<li>{html.escape(item)}</li>' for item in block.items)
    return f'<{tag} class="block-list">{items}</{tag}>'


def highlight_code(text: str, language: str) -> list[str]:
    """
    Highlight a code sample, one HTML string per source line.

    Pygments escapes the source and only adds token <span>s, so the result
    is inert. Languages without a lexer come back as escaped plain text.
    """
    try:
        lexer = get_lexer_by_name(language, stripnl=False, ensurenl=False)
    except ClassNotFound:
        logger.debug(f"No lexer for language '{language}', showing plain text")
        return [html.escape(line) for line in text.split('\n')]
    return highlight(text, lexer, CODE_FORMATTER).split('\n')


@register_block_renderer("code")
def render_code(block: CodeBlock, heading_level: int = 3) -> str:
    """Render a code sample as display text; it is never evaluated."""
    lines = highlight_code(block.text, block.language)
    if len(lines) > CODE_LINE_NUMBER_THRESHOLD:
        body = '\n'.join(
            f'<span class="code-line-number">{number}</span>{line}'
            for number, line in enumerate(lines, 1)
        )
    else:
        body = '\n'.join(lines)

    language = html.escape(block.language)
    return (
        f'<div class="block-code">'
        f'<div class="code-language">{language}</div>'
        f'<pre><code class="language-{language}">{body}</code></pre>'
        f'</div>'
    )


def render_unknown(block: BlockBase, heading_level: int = 3) -> str:
    """Show an unrecognised block as an escaped dump of its fields."""
    logger.debug(f"No renderer for block type '{block.type}', showing raw fields")
    dumped = json.dumps(block.model_dump(), indent=2, ensure_ascii=False, default=str)
    return (
        f'<pre class="block-unknown" data-block-type="{html.escape(block.type)}">'
        f'{html.escape(dumped)}</pre>'
    )


def render_block(block: BlockBase, heading_level: int = 3) -> str:
    """Render any block; types without a registered rule use the fallback."""
    renderer = BLOCK_RENDERERS.get(block.type, render_unknown)
    return renderer(block, heading_level)


def render_blocks(blocks: list[BlockBase], heading_level: int = 3) -> list[str]:
    """Render each block; the result has exactly one entry per block."""
    return [render_block(block, heading_level) for block in blocks]


def render_section(section: Section, level: int = 2) -> str:
    """Render a section title, its blocks one level deeper, and its skill checklist."""
    level = min(max(level, 1), 5)
    parts = [f'<section class="content-section" id="{html.escape(section.id)}">']
    parts.append(f'<h{level}>{html.escape(section.title)}</h{level}>')
    parts.extend(render_blocks(section.content, heading_level=level + 1))

    if section.skills:
        skills = ''.join(f'<li>{html.escape(skill)}</li>' for skill in section.skills)
        parts.append(f'<ul class="section-skills">{skills}</ul>')

    parts.append('</section>')
    return ''.join(parts)


def render_document(document: ContentDocument) -> str:
    """
    Render a complete document as HTML.

    Args:
        document: ContentDocument object

    Returns:
        Complete HTML string including styles
    """
    parts = [get_content_css()]
    parts.append(f'<h1>{html.escape(document.title)}</h1>')
    parts.append(f'<p class="lesson-description">{html.escape(document.description)}</p>')

    for section in document.sections:
        parts.append(render_section(section))

    return ''.join(parts)

