"""
LearnHub - Personal Learning-Content Site

Streamlit application for reading lessons, ticking off progress and taking
the self-check quizzes.

Usage:
    streamlit run app.py
"""

from typing import Optional

import streamlit as st

from learnhub.classroom import (
    ListingService,
    ProgressTracker,
    QuizEngine,
    get_repository,
    open_store,
)
from learnhub.config import get_settings
from learnhub.log import setup_logging
from learnhub.viewer import (
    get_quiz_css,
    render_document,
    render_quiz_question,
    render_quiz_score,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

settings = get_settings()
setup_logging(settings.log_level)

st.set_page_config(
    page_title="LearnHub",
    page_icon="📚",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "repository" not in st.session_state:
        if settings.content_dir.is_dir():
            st.session_state.repository = get_repository(settings.content_dir)
        else:
            st.session_state.repository = None

    repository = st.session_state.repository

    if "listing" not in st.session_state and repository:
        st.session_state.listing = ListingService(repository)

    if "progress" not in st.session_state and repository:
        st.session_state.progress = ProgressTracker(
            repository,
            open_store(settings.progress_db, namespace="progress"),
        )

    if "quiz" not in st.session_state and repository:
        quiz_store = open_store(settings.progress_db, namespace="quiz") if settings.persist_quiz else None
        st.session_state.quiz = QuizEngine(repository, quiz_store)

    if "current_slug" not in st.session_state:
        st.session_state.current_slug = None


# -----------------------------------------------------------------------------
# Sidebar: Library
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with overall progress and content search."""
    st.sidebar.title("📚 LearnHub")

    repository = st.session_state.repository
    if not repository:
        st.sidebar.error(f"Content directory not found: {settings.content_dir}")
        return

    stats = st.session_state.progress.get_overall_summary()
    st.sidebar.markdown(
        f"**Progress:** {stats.done_count}/{stats.total_count} items ({stats.percent}%)"
    )
    st.sidebar.progress(stats.percent / 100)
    if st.session_state.progress.degraded:
        st.sidebar.caption("Progress is not being saved in this session.")

    st.sidebar.divider()

    categories = ["All"] + repository.list_categories()
    category = st.sidebar.selectbox("Category", categories)
    query = st.sidebar.text_input("Search", placeholder="e.g. closures, caching")

    summaries = st.session_state.listing.search(
        query,
        category=None if category == "All" else category,
    )
    st.sidebar.caption(f"{len(summaries)} documents")

    for summary in summaries:
        if st.sidebar.button(summary.title, key=f"doc_{summary.slug}", use_container_width=True):
            select_document(summary.slug)


def select_document(slug: Optional[str]):
    st.session_state.current_slug = slug
    st.rerun()


# -----------------------------------------------------------------------------
# Main Content: Library View
# -----------------------------------------------------------------------------

def render_library_view():
    """Render the document index."""
    st.title("Library")
    for summary in st.session_state.listing.list_summaries():
        with st.container(border=True):
            st.markdown(f"### {summary.title}")
            if summary.category:
                st.caption(summary.category)
            st.markdown(summary.description)
            if st.button("Open", key=f"open_{summary.slug}"):
                select_document(summary.slug)


# -----------------------------------------------------------------------------
# Main Content: Document View
# -----------------------------------------------------------------------------

def render_document_view(slug: str):
    """Render one document with its checklist and practice test."""
    document = st.session_state.repository.get_by_slug(slug)
    if document is None:
        st.error(f"Content not found: {slug}")
        if st.button("Back to library"):
            select_document(None)
        return

    if st.button("← Library"):
        select_document(None)

    tabs = ["Learning Content", "Progress"]
    if document.test_questions:
        tabs.append(f"Practice Test ({len(document.test_questions)} Questions)")
    tab_views = st.tabs(tabs)

    with tab_views[0]:
        st.markdown(render_document(document), unsafe_allow_html=True)

    with tab_views[1]:
        render_progress_section(slug)

    if document.test_questions:
        with tab_views[2]:
            render_quiz_section(document)


def render_progress_section(slug: str):
    """Checklist of progress items for the document."""
    tracker = st.session_state.progress
    summary = tracker.get_summary(slug)
    state = tracker.get_state(slug)

    st.markdown(f"**{summary.done_count} of {summary.total_count} done** ({summary.percent}%)")
    st.progress(summary.percent / 100)

    for item in tracker.get_items(slug):
        st.checkbox(
            item.label,
            value=state.is_done(item.id),
            key=f"progress_{slug}_{item.id}",
            on_change=tracker.toggle,
            args=(slug, item.id),
        )

    if summary.done_count and st.button("Clear progress"):
        tracker.clear(slug)
        for item in tracker.get_items(slug):
            st.session_state.pop(f"progress_{slug}_{item.id}", None)
        st.rerun()


def _on_answer_selected(slug: str, question_id: int, key: str):
    option = st.session_state.get(key)
    if option is not None:
        st.session_state.quiz.select_answer(slug, question_id, option)


def render_quiz_section(document):
    """Render the practice test."""
    engine = st.session_state.quiz
    slug = document.slug
    st.markdown(get_quiz_css(), unsafe_allow_html=True)

    attempts = engine.get_attempts(slug)
    for number, question in enumerate(document.test_questions, 1):
        attempt = attempts[question.id]
        result = engine.reveal(slug, question.id) if attempt.revealed else None
        st.markdown(render_quiz_question(question, number, attempt, result), unsafe_allow_html=True)

        key = f"quiz_{slug}_{question.id}"
        st.radio(
            "Your answer",
            options=list(range(len(question.options))),
            format_func=lambda index, options=question.options: options[index],
            index=attempt.selected_option,
            key=key,
            on_change=_on_answer_selected,
            args=(slug, question.id, key),
            label_visibility="collapsed",
        )

        if not attempt.revealed:
            if st.button(
                "Check answer",
                key=f"reveal_{slug}_{question.id}",
                disabled=attempt.selected_option is None,
            ):
                engine.reveal(slug, question.id)
                st.rerun()

    score = engine.score(slug)
    if score.answered:
        st.markdown(render_quiz_score(score), unsafe_allow_html=True)

    if st.button("Restart test"):
        engine.reset(slug)
        for question in document.test_questions:
            st.session_state.pop(f"quiz_{slug}_{question.id}", None)
        st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    if not st.session_state.repository:
        st.error("No content found. Set LEARNHUB_CONTENT_DIR or add documents to data/content.")
        return

    if st.session_state.current_slug:
        render_document_view(st.session_state.current_slug)
    else:
        render_library_view()


if __name__ == "__main__":
    main()
