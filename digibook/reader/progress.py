"""
ProgressTracker - Track chapter and section completion for one book session.

Owns the per-chapter task counters and per-section done flags:
- Section completion (idempotent per section)
- Chapter status (BLANK / STARTED / DONE)
- Book-level score aggregation
- Reset and solutions across nested instances
"""

import logging
import weakref
from dataclasses import dataclass, field
from typing import Callable, Optional

from digibook.schemas import ChapterProgress, ChapterStatus, ReportVerb, ScoreReport

from .errors import OutOfRangeChapter
from .instances import Capability, NestedInstance


logger = logging.getLogger(__name__)


@dataclass
class SectionRef:
    """Weak handle on a nested instance plus its task flag."""
    instance_ref: weakref.ref
    sub_content_id: str
    is_task: bool = True
    task_done: bool = False

    @classmethod
    def of(cls, instance: NestedInstance, is_task: bool = True) -> "SectionRef":
        return cls(
            instance_ref=weakref.ref(instance),
            sub_content_id=instance.sub_content_id,
            is_task=is_task,
        )

    @property
    def instance(self) -> Optional[NestedInstance]:
        return self.instance_ref()


@dataclass
class ChapterState:
    """Progress state of one chapter. Created at load, never destroyed."""
    id: str
    instance: NestedInstance
    title: str = ""
    completed: bool = False
    max_tasks: Optional[int] = None     # None: tracking disabled
    tasks_left: int = 0
    section_instances: list[SectionRef] = field(default_factory=list)

    def __post_init__(self):
        if self.max_tasks is not None:
            self.tasks_left = self.max_tasks


def chapter_status(max_tasks: Optional[int], tasks_left: int,
                   has_just_changed_chapter: bool = False) -> ChapterStatus:
    """
    Status of a chapter from its task counters.

    - max_tasks > 0: BLANK if nothing done, DONE if nothing left, else STARTED
    - max_tasks == 0: DONE once the reader has moved through it, else BLANK
    - max_tasks is None: always DONE
    """
    if max_tasks is None:
        return ChapterStatus.DONE
    if max_tasks == 0:
        return ChapterStatus.DONE if has_just_changed_chapter else ChapterStatus.BLANK
    if tasks_left == max_tasks:
        return ChapterStatus.BLANK
    if tasks_left == 0:
        return ChapterStatus.DONE
    return ChapterStatus.STARTED


class ProgressTracker:
    """
    Track progress across the chapters of one book.

    The chapter list is fixed at construction. The navigation controller
    only feeds completion signals in and reads aggregates out.
    """

    def __init__(
        self,
        chapters: list[ChapterState],
        progress_auto: bool = True,
        reporter: Optional[Callable[[ScoreReport], None]] = None,
    ):
        """
        Initialize progress tracker.

        Args:
            chapters: Chapter states in reading order
            progress_auto: Emit a "completed" report when a chapter turns DONE
            reporter: Receives scored reports (default: log only)
        """
        if not chapters:
            raise ValueError("A book needs at least one chapter")
        self.chapters = chapters
        self.progress_auto = progress_auto
        self.reporter = reporter
        self._last_status: dict[int, ChapterStatus] = {}

    @property
    def chapter_count(self) -> int:
        return len(self.chapters)

    def has_chapter(self, chapter: int) -> bool:
        if not isinstance(chapter, int) or isinstance(chapter, bool):
            return False
        return 0 <= chapter < len(self.chapters)

    def chapter(self, chapter: int) -> ChapterState:
        """State of one chapter; negative indexes are out of range too."""
        if not self.has_chapter(chapter):
            raise OutOfRangeChapter(chapter, len(self.chapters))
        return self.chapters[chapter]

    # -------------------------------------------------------------------------
    # Section completion
    # -------------------------------------------------------------------------

    def section_index(self, chapter: int, sub_content_id: str) -> Optional[int]:
        """Position of a section inside its chapter, or None."""
        if not self.has_chapter(chapter):
            return None
        for idx, section in enumerate(self.chapters[chapter].section_instances):
            if section.sub_content_id == sub_content_id:
                return idx
        return None

    def record_section_completion(self, chapter: int, sub_content_id: str) -> bool:
        """
        Mark a section's task as done.

        Returns True only the first time a given task section is completed;
        repeated signals, unknown ids and non-task sections return False.
        """
        idx = self.section_index(chapter, sub_content_id)
        if idx is None:
            logger.debug(f"No section {sub_content_id!r} in chapter {chapter}")
            return False

        state = self.chapters[chapter]
        section = state.section_instances[idx]
        if section.task_done or not section.is_task:
            return False

        section.task_done = True
        if state.max_tasks is not None and state.tasks_left > 0:
            state.tasks_left -= 1
        logger.info(f"Chapter {chapter}: section {sub_content_id} done ({state.tasks_left} left)")
        return True

    # -------------------------------------------------------------------------
    # Chapter status
    # -------------------------------------------------------------------------

    def compute_chapter_status(self, chapter: int, has_just_changed_chapter: bool = False) -> ChapterStatus:
        """
        Compute a chapter's status and emit a "completed" report on the
        step into DONE.

        The report is sent once per transition into DONE, not on every
        recomputation.
        """
        state = self.chapter(chapter)
        status = chapter_status(state.max_tasks, state.tasks_left, has_just_changed_chapter)

        previous = self._last_status.get(chapter)
        self._last_status[chapter] = status
        if status == ChapterStatus.DONE and previous != ChapterStatus.DONE and self.progress_auto:
            self._emit(self.chapter_report(chapter, ReportVerb.COMPLETED))
        return status

    def last_status(self, chapter: int) -> ChapterStatus:
        """Most recently computed status (BLANK if never computed)."""
        return self._last_status.get(chapter, ChapterStatus.BLANK)

    def is_chapter_read(self, chapter: int) -> bool:
        return self.chapter(chapter).completed

    def set_chapter_read(self, chapter: int):
        """Manual "I have finished this page" flag."""
        self.chapter(chapter).completed = True

    def get_chapter_progress(self, chapter: int) -> ChapterProgress:
        state = self.chapter(chapter)
        return ChapterProgress(
            chapter=chapter,
            title=state.title,
            status=self.last_status(chapter),
            max_tasks=state.max_tasks,
            tasks_left=state.tasks_left,
            completed=state.completed,
        )

    # -------------------------------------------------------------------------
    # Book aggregates
    # -------------------------------------------------------------------------

    def _instances_with(self, capability: Capability) -> list[NestedInstance]:
        return [c.instance for c in self.chapters if c.instance.supports(capability)]

    def chapter_score(self, chapter: int) -> tuple[int, int]:
        instance = self.chapter(chapter).instance
        if not instance.supports(Capability.SCORE):
            return 0, 0
        return instance.get_score(), instance.get_max_score()

    def book_score(self) -> tuple[int, int]:
        """(score, max_score) summed over chapters that can be scored."""
        score = 0
        max_score = 0
        for chapter in range(len(self.chapters)):
            chapter_score, chapter_max = self.chapter_score(chapter)
            score += chapter_score
            max_score += chapter_max
        return score, max_score

    def get_answer_given(self) -> bool:
        """True if every instance that can tell reports an answer (vacuously True)."""
        return all(i.get_answer_given() for i in self._instances_with(Capability.ANSWER_GIVEN))

    def chapter_report(self, chapter: int, verb: ReportVerb) -> ScoreReport:
        score, max_score = self.chapter_score(chapter)
        return ScoreReport(
            verb=verb,
            score=score,
            max_score=max_score,
            chapter=chapter,
            sub_content_id=self.chapter(chapter).instance.sub_content_id,
        )

    def child_reports(self) -> list[ScoreReport]:
        return [i.get_report_data() for i in self._instances_with(Capability.REPORT)]

    # -------------------------------------------------------------------------
    # Solutions and reset
    # -------------------------------------------------------------------------

    def show_solutions(self):
        """Show solutions everywhere, with read-speaker on around each instance."""
        for state in self.chapters:
            instance = state.instance
            speaker = instance.supports(Capability.READ_SPEAKER)
            if speaker:
                instance.toggle_read_speaker(True)
            if instance.supports(Capability.SOLUTIONS):
                instance.show_solutions()
            if speaker:
                instance.toggle_read_speaker(False)

    def reset(self):
        """Clear every task flag, counter and resettable instance."""
        for instance in self._instances_with(Capability.RESET):
            instance.reset_task()
        for state in self.chapters:
            state.completed = False
            if state.max_tasks is not None:
                state.tasks_left = state.max_tasks
            for section in state.section_instances:
                section.task_done = False
        self._last_status.clear()
        logger.info("Progress reset")

    def _emit(self, report: ScoreReport):
        logger.info(f"Chapter {report.chapter} completed ({report.score}/{report.max_score})")
        if self.reporter is not None:
            self.reporter(report)
