"""
NavigationController - Active chapter, URL fragment sync and chapter switches.

Provides:
- Internal chapter/section requests (reader clicks)
- Browser history requests (fragment changes)
- In-page section jumps that skip the fragment rewrite
- Progress indicator refresh after every switch

Three inbound channels end up in a single commit path guarded by the
AnimationLock, so at most one chapter switch is in flight.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from digibook.schemas import ChapterStatus, NavigationRequest, NavigatorState, ReportVerb

from . import hashcodec
from .collaborators import Location, PageContent, Sidebar, StatusBar
from .errors import (
    ConcurrentTransitionRejected,
    ForeignBookId,
    MalformedHash,
    NavigationError,
    OutOfRangeChapter,
)
from .lock import AnimationLock
from .progress import ProgressTracker


logger = logging.getLogger(__name__)


@dataclass
class BookSession:
    """Navigation state of one book session."""
    active_chapter: int = 0
    pending: Optional[NavigationRequest] = None
    last_committed: Optional[NavigationRequest] = None
    state: NavigatorState = NavigatorState.IDLE
    commits: int = 0
    cover_present: bool = False


class NavigationController:
    """
    Single authority for which chapter is displayed.

    The fragment is a single global slot; this controller is its only
    writer, and each write comes from a request it produced itself.
    """

    def __init__(
        self,
        book_id: int,
        tracker: ProgressTracker,
        page_content: PageContent,
        sidebar: Sidebar,
        status_bar: StatusBar,
        location: Location,
        progress_indicators: bool = True,
        progress_auto: bool = True,
    ):
        """
        Initialize controller and subscribe to fragment changes.

        Args:
            book_id: Content id of this book (h5pbookid in the fragment)
            tracker: Progress of the book's chapters
            page_content: Switches the displayed chapter
            sidebar: Chapter/section indicators and menu
            status_bar: Header/footer navigation
            location: Address fragment
            progress_indicators: Track section completion
            progress_auto: Derive chapter status from section completion
        """
        self.book_id = book_id
        self.tracker = tracker
        self.page_content = page_content
        self.sidebar = sidebar
        self.status_bar = status_bar
        self.location = location
        self.progress_indicators = progress_indicators
        self.progress_auto = progress_auto

        self.session = BookSession()
        self.lock = AnimationLock()
        self.location.subscribe(self.on_hash_change)

    @property
    def active_chapter(self) -> int:
        return self.session.active_chapter

    @property
    def state(self) -> NavigatorState:
        return self.session.state

    @property
    def chapter_count(self) -> int:
        return self.tracker.chapter_count

    def _check_range(self, chapter: int):
        if not self.tracker.has_chapter(chapter):
            raise OutOfRangeChapter(chapter, self.chapter_count)

    # -------------------------------------------------------------------------
    # Session start
    # -------------------------------------------------------------------------

    def start(self) -> bool:
        """
        Honour a deep link present when the book loads.

        Returns True if the fragment moved the book to another chapter.
        """
        decoded = hashcodec.decode(self.location.get_hash())
        request = None
        if hashcodec.has_book_id(decoded):
            try:
                request = hashcodec.parse_request(decoded, self.book_id)
                self._check_range(request.chapter)
            except NavigationError as e:
                logger.info(f"Ignoring fragment on load: {e}")
                request = None

        if request is None:
            self.status_bar.update_status_bar()
            self.sidebar.refresh(self.session.active_chapter)
            return False

        self.session.pending = request
        return self._commit(redirect_on_load=True)

    # -------------------------------------------------------------------------
    # Inbound: reader requests
    # -------------------------------------------------------------------------

    def request_chapter(self, chapter: int, section: Optional[str] = None,
                        book_id: Optional[int] = None) -> bool:
        """
        Handle a chapter/section link clicked inside this book.

        Returns True if the request was accepted as a chapter transition.
        A same-chapter section jump to the fragment already shown only
        scrolls and returns False.
        """
        if book_id is not None and book_id != self.book_id:
            logger.debug(f"Ignoring request for book {book_id}")
            return False

        try:
            request = NavigationRequest(
                h5pbookid=self.book_id,
                chapter=chapter,
                section=section,
                redirect_from_component=True,
            )
            self._check_range(request.chapter)
            if self.lock.held:
                raise ConcurrentTransitionRejected(f"Dropped request for chapter {request.chapter}")
        except NavigationError as e:
            logger.info(f"Ignoring chapter request: {e}")
            return False
        except ValidationError as e:
            logger.warning(f"Ignoring invalid chapter request: {e}")
            return False

        if request.chapter == self.session.active_chapter:
            current = hashcodec.decode(self.location.get_hash())
            if hashcodec.is_same_target(current, request):
                self._switch_page(False, request)
                return False

        return self._commit_or_defer(request)

    def next_chapter(self) -> bool:
        if not self.tracker.has_chapter(self.session.active_chapter + 1):
            return False
        return self.request_chapter(self.session.active_chapter + 1)

    def previous_chapter(self) -> bool:
        if self.session.active_chapter <= 0:
            return False
        return self.request_chapter(self.session.active_chapter - 1)

    # -------------------------------------------------------------------------
    # Inbound: browser history
    # -------------------------------------------------------------------------

    def on_hash_change(self, fragment: str) -> bool:
        """
        Handle a fragment change.

        The change is either the confirmation of our own pending write, a
        repeat of the target just committed (no-op), or a genuine history
        navigation. Fragments naming another book are ignored entirely; an
        empty fragment means back to chapter 0.

        Returns True if a transition was committed.
        """
        if self.lock.held:
            logger.info(f"Dropped fragment change during transition: {fragment!r}")
            return False

        decoded = hashcodec.decode(fragment)
        if hashcodec.has_book_id(decoded) and not hashcodec.belongs_to_this_book(decoded, self.book_id):
            logger.debug(f"Fragment belongs to another book: {fragment!r}")
            return False

        pending = self.session.pending
        if pending is not None and pending.redirect_from_component:
            return self._commit(redirect_on_load=False)

        try:
            request = self._history_request(decoded)
            self._check_range(request.chapter)
        except (ForeignBookId, MalformedHash, OutOfRangeChapter) as e:
            logger.info(f"Ignoring fragment {fragment!r}: {e}")
            return False

        last = self.session.last_committed
        if (last is not None and last.same_target(request)
                and self.session.active_chapter == request.chapter):
            logger.debug(f"Fragment confirms chapter {request.chapter}")
            return False

        self.session.pending = request
        return self._commit(redirect_on_load=False)

    def _history_request(self, decoded: dict[str, Optional[str]]) -> NavigationRequest:
        if not hashcodec.has_book_id(decoded):
            # Empty history entry: back to the first chapter
            return NavigationRequest(h5pbookid=self.book_id, chapter=0)
        return hashcodec.parse_request(decoded, self.book_id)

    # -------------------------------------------------------------------------
    # Commit
    # -------------------------------------------------------------------------

    def _commit_or_defer(self, request: NavigationRequest) -> bool:
        if self.lock.held:
            logger.info(f"Dropped request for chapter {request.chapter}: transition in flight")
            return False

        self.session.pending = request
        fragment = hashcodec.to_fragment(request)
        if fragment == self.location.get_hash():
            # Browsers stay silent when the fragment does not change
            return self._commit(redirect_on_load=False)

        self.location.set_hash(fragment)
        return True

    def _switch_page(self, redirect_on_load: bool, request: NavigationRequest):
        try:
            self.page_content.change_chapter(redirect_on_load, request)
        except Exception:
            logger.exception(f"Page content failed to show chapter {request.chapter}")

    def _commit(self, redirect_on_load: bool) -> bool:
        request = self.session.pending
        if request is None:
            return False

        previous = self.session.active_chapter
        try:
            with self.lock.hold():
                self.session.state = NavigatorState.TRANSITIONING
                self.session.active_chapter = request.chapter
                try:
                    self._switch_page(redirect_on_load, request)
                finally:
                    self.session.state = NavigatorState.IDLE
        except ConcurrentTransitionRejected as e:
            logger.info(f"{e}")
            return False

        self.session.commits += 1
        self.session.last_committed = request
        logger.info(f"Chapter {previous} -> {request.chapter}"
                    + (f" (section {request.section})" if request.section else ""))

        if previous != request.chapter and not redirect_on_load:
            self.update_chapter_progress(previous, has_changed_chapter=True)
        self.status_bar.update_status_bar()
        self.sidebar.refresh(request.chapter)
        request.redirect_from_component = False
        return True

    # -------------------------------------------------------------------------
    # Progress
    # -------------------------------------------------------------------------

    def update_chapter_progress(self, chapter: int,
                                has_changed_chapter: bool = False) -> Optional[ChapterStatus]:
        """Recompute a chapter's status and push it to the sidebar."""
        if not (self.progress_indicators and self.progress_auto):
            return None
        try:
            status = self.tracker.compute_chapter_status(chapter, has_changed_chapter)
        except OutOfRangeChapter as e:
            logger.warning(f"Ignoring progress update: {e}")
            return None
        self.sidebar.update_chapter_progress_indicator(chapter, status)
        return status

    def record_section_event(self, sub_content_id: str, verb=ReportVerb.COMPLETED,
                             chapter: Optional[int] = None) -> bool:
        """
        Handle an answered/completed report from a nested instance.

        Returns True if it completed a section for the first time.
        """
        if verb not in (ReportVerb.ANSWERED, ReportVerb.COMPLETED):
            return False
        if not self.progress_indicators:
            return False

        chapter = self.session.active_chapter if chapter is None else chapter
        if not self.tracker.record_section_completion(chapter, sub_content_id):
            return False

        self.sidebar.set_section_marker(chapter, self.tracker.section_index(chapter, sub_content_id))
        if self.progress_auto:
            self.update_chapter_progress(chapter)
        return True

    def is_current_chapter_read(self) -> bool:
        return self.tracker.is_chapter_read(self.session.active_chapter)

    def set_current_chapter_read(self):
        self.tracker.set_chapter_read(self.session.active_chapter)
        self.sidebar.set_chapter_indicator_complete(self.session.active_chapter)

    # -------------------------------------------------------------------------
    # Chrome
    # -------------------------------------------------------------------------

    def toggle_menu(self):
        self.sidebar.toggle_menu()

    def scroll_to_top(self):
        self.status_bar.scroll_to_top()

    def show_cover(self):
        self.session.cover_present = True
        self.page_content.set_hidden(True)

    def remove_cover(self):
        self.session.cover_present = False
        self.page_content.set_hidden(False)
        self.status_bar.update_status_bar()
