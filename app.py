"""
DigiBook - Interactive Book Reader

Streamlit host for one interactive book. The query string stands in for the
URL fragment, so deep links and browser back/forward drive the same
navigation controller as the sidebar and the previous/next buttons.

Usage:
    streamlit run app.py
"""

import logging
from pathlib import Path
from typing import Callable

import streamlit as st
from dotenv import load_dotenv

from digibook.reader import (
    DigiBook,
    HashChanged,
    QuestionSection,
    RequestChapter,
    SectionCompleted,
    MarkChapterRead,
    CoverRemoved,
    hashcodec,
)
from digibook.schemas import ReportVerb
from digibook.utils import get_log_level, get_settings, load_book_config
from digibook.viewer import (
    PageState,
    SidebarState,
    StatusBarState,
    render_chapter,
    render_chapter_menu,
    render_status_bar,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

load_dotenv(Path(__file__).parent / ".env")
SETTINGS = get_settings()

logging.basicConfig(
    level=get_log_level(SETTINGS),
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="DigiBook",
    page_icon="📖",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Query string as the address fragment
# -----------------------------------------------------------------------------

class QueryParamLocation:
    """Location backed by st.query_params (Streamlit pages have no fragment)."""

    def __init__(self):
        self._listeners: list[Callable[[str], None]] = []
        self._last_seen = self.get_hash()

    def get_hash(self) -> str:
        params = st.query_params.to_dict()
        if not params:
            return ""
        return "#" + "&".join(f"{k}={v}" for k, v in params.items())

    def set_hash(self, fragment: str):
        if fragment == self.get_hash():
            return
        decoded = hashcodec.decode(fragment)
        st.query_params.from_dict({k: v for k, v in decoded.items() if v is not None})
        self._last_seen = self.get_hash()
        for listener in list(self._listeners):
            listener(self._last_seen)

    def subscribe(self, listener: Callable[[str], None]):
        self._listeners.append(listener)

    def poll(self) -> str | None:
        """Return the fragment if the reader changed it since the last run."""
        current = self.get_hash()
        if current == self._last_seen:
            return None
        self._last_seen = current
        return current


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Build the book once per browser session."""
    if "book" in st.session_state:
        return

    try:
        config = load_book_config(SETTINGS["DIGIBOOK_BOOK"], Path(SETTINGS["DIGIBOOK_BOOKS_DIR"]))
    except FileNotFoundError as e:
        logger.error(f"{e}")
        st.session_state.book = None
        return

    location = QueryParamLocation()
    page = PageState()
    sidebar = SidebarState()
    status_bar = StatusBarState(
        active_chapter_source=lambda: st.session_state.book.active_chapter,
        chapter_count=len(config.chapters),
    )
    st.session_state.reports = []
    st.session_state.location = location
    st.session_state.book = DigiBook(
        config,
        page_content=page,
        sidebar=sidebar,
        status_bar=status_bar,
        location=location,
        reporter=st.session_state.reports.append,
    )
    st.session_state.book.start()


def sync_location():
    """Feed back/forward and pasted links into the controller."""
    fragment = st.session_state.location.poll()
    if fragment is not None:
        st.session_state.book.dispatch(HashChanged(fragment))


# -----------------------------------------------------------------------------
# Sidebar: Chapter Menu
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the chapter menu and the book score."""
    book = st.session_state.book
    st.sidebar.title(f"📖 {book.config.title}")

    score, max_score = book.get_score(), book.get_max_score()
    st.sidebar.markdown(f"**Score:** {score}/{max_score}")
    st.sidebar.progress(score / max_score if max_score else 0.0)

    st.sidebar.divider()
    st.sidebar.markdown(
        render_chapter_menu(book.loader.get_chapter_summaries(), book.sidebar),
        unsafe_allow_html=True,
    )
    for summary in book.loader.get_chapter_summaries():
        if st.sidebar.button(summary.title, key=f"chapter_{summary.index}", use_container_width=True):
            book.dispatch(RequestChapter(summary.index, book_id=book.content_id))
            st.rerun()

    st.sidebar.divider()
    if st.sidebar.button("Reset progress"):
        book.reset_task()
        st.rerun()


# -----------------------------------------------------------------------------
# Main Content
# -----------------------------------------------------------------------------

def render_cover():
    book = st.session_state.book
    st.title(book.config.title)
    if book.config.cover_description:
        st.markdown(book.config.cover_description)
    if st.button(book.config.labels.read, type="primary"):
        book.dispatch(CoverRemoved())
        st.rerun()


def render_navigation_bar():
    """Render status bar with prev/next buttons."""
    book = st.session_state.book
    status_bar = book.status_bar
    chapter = book.chapters[book.active_chapter]

    st.markdown(render_status_bar(status_bar, chapter.title, book.config.labels), unsafe_allow_html=True)
    col1, col2 = st.columns(2)
    with col1:
        if status_bar.has_previous and st.button(f"← {book.config.labels.previous_page}",
                                                 use_container_width=True):
            book.navigator.previous_chapter()
            st.rerun()
    with col2:
        if status_bar.has_next and st.button(f"{book.config.labels.next_page} →",
                                             use_container_width=True):
            book.navigator.next_chapter()
            st.rerun()
    st.divider()


def render_chapter_view():
    """Render the active chapter and its tasks."""
    book = st.session_state.book
    chapter = book.chapters[book.active_chapter]
    column = chapter.instance

    st.markdown(render_chapter(column, book.page_content.target_section), unsafe_allow_html=True)

    for section in column.sections:
        if not isinstance(section, QuestionSection) or section.answered:
            continue
        if st.button(f"Answer: {section.title or section.sub_content_id}",
                     key=f"answer_{section.sub_content_id}"):
            section.answer(section.max_score)
            book.dispatch(SectionCompleted(section.sub_content_id, ReportVerb.ANSWERED))
            st.rerun()

    if not book.config.behaviour.progress_auto and not book.navigator.is_current_chapter_read():
        if st.checkbox(book.config.labels.mark_as_finished, key=f"read_{book.active_chapter}"):
            book.dispatch(MarkChapterRead())
            st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    if not st.session_state.book:
        st.error("Book definition not found. Check DIGIBOOK_BOOK and DIGIBOOK_BOOKS_DIR.")
        return

    sync_location()
    book = st.session_state.book
    if book.cover_present:
        render_cover()
        return

    render_sidebar()
    render_navigation_bar()
    render_chapter_view()


if __name__ == "__main__":
    main()
