"""
DigiBook - One interactive book: chapters, navigation and the score contract.

Combines BookLoader (chapters), ProgressTracker (progress) and
NavigationController (active chapter) behind the interface the hosting
runtime talks to: score, max score, answer given, reset, solutions and
report data.
"""

import logging
from typing import Callable, Optional

from digibook.schemas import BookConfig, ReportVerb, ScoreReport

from .collaborators import Location, PageContent, Sidebar, StatusBar
from .events import Message, dispatch
from .instances import ColumnInstance
from .loader import BookLoader
from .navigator import NavigationController
from .progress import ProgressTracker


logger = logging.getLogger(__name__)


class DigiBook:
    """
    Host-facing book object.

    One instance per book on the page; nothing is shared between instances.
    """

    def __init__(
        self,
        config: BookConfig,
        page_content: PageContent,
        sidebar: Sidebar,
        status_bar: StatusBar,
        location: Location,
        columns: Optional[list[ColumnInstance]] = None,
        reporter: Optional[Callable[[ScoreReport], None]] = None,
    ):
        """
        Initialize book.

        Args:
            config: Declared book configuration
            page_content: Page area collaborator
            sidebar: Sidebar collaborator
            status_bar: Status bar collaborator
            location: Address fragment
            columns: Host-provided chapter instances (default: built from config)
            reporter: Receives "completed" chapter reports
        """
        self.config = config
        self.content_id = config.content_id
        self.page_content = page_content
        self.sidebar = sidebar
        self.status_bar = status_bar
        self.loader = BookLoader(config)

        behaviour = config.behaviour
        self.chapters = self.loader.build_chapters(columns)
        self.progress = ProgressTracker(
            self.chapters,
            progress_auto=behaviour.progress_auto,
            reporter=reporter,
        )
        self.navigator = NavigationController(
            config.content_id,
            self.progress,
            page_content,
            sidebar,
            status_bar,
            location,
            progress_indicators=behaviour.progress_indicators,
            progress_auto=behaviour.progress_auto,
        )

    def start(self) -> bool:
        """Hide behind the cover if there is one, then honour any deep link."""
        if self.config.show_cover_page:
            self.navigator.show_cover()
        return self.navigator.start()

    def dispatch(self, message: Message):
        return dispatch(self.navigator, message)

    @property
    def active_chapter(self) -> int:
        return self.navigator.active_chapter

    @property
    def cover_present(self) -> bool:
        return self.navigator.session.cover_present

    # -------------------------------------------------------------------------
    # Score contract
    # -------------------------------------------------------------------------

    def get_score(self) -> int:
        return self.progress.book_score()[0]

    def get_max_score(self) -> int:
        return self.progress.book_score()[1]

    def get_answer_given(self) -> bool:
        return self.progress.get_answer_given()

    def show_solutions(self):
        self.progress.show_solutions()

    def reset_task(self):
        """Clear all nested task state and chapter indicators."""
        self.progress.reset()
        self.sidebar.reset_indicators()

    def get_report_data(self) -> ScoreReport:
        """Book-level answered report with one child per reporting chapter."""
        score, max_score = self.progress.book_score()
        return ScoreReport(
            verb=ReportVerb.ANSWERED,
            score=score,
            max_score=max_score,
            children=self.progress.child_reports(),
        )
