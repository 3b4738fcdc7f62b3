"""
BookLoader - Turn a declared BookConfig into runtime chapter state.

Provides:
- Nested instances for each declared section (when the host has none)
- ChapterState entries with task counts derived from the sections
"""

from dataclasses import dataclass
from typing import Optional

from digibook.schemas import Behaviour, BookConfig, ChapterConfig, SectionConfig

from .instances import ColumnInstance, NestedInstance, QuestionSection, TextSection
from .progress import ChapterState, SectionRef


@dataclass
class ChapterSummary:
    """Lightweight chapter info for navigation menus."""
    index: int
    title: str
    section_titles: list[str]


def build_section(section: SectionConfig) -> NestedInstance:
    """Default instance for a declared section."""
    if section.is_task:
        return QuestionSection(
            section.sub_content_id,
            max_score=section.max_score if section.max_score is not None else 1,
            library=section.library,
            title=section.title,
        )
    return TextSection(
        section.sub_content_id,
        text=section.text or "",
        library=section.library,
        title=section.title,
    )


def build_column(index: int, chapter: ChapterConfig) -> ColumnInstance:
    return ColumnInstance(
        chapter.sub_content_id or f"chapter-{index}",
        sections=[build_section(s) for s in chapter.sections],
        title=chapter.title,
    )


def count_tasks(chapter: ChapterConfig, behaviour: Behaviour) -> Optional[int]:
    """
    Number of trackable tasks in a chapter.

    None when progress indicators are off; an explicit max_tasks of 0
    disables task tracking for the chapter.
    """
    if not behaviour.progress_indicators:
        return None
    if chapter.max_tasks is not None:
        return chapter.max_tasks
    return chapter.task_count


class BookLoader:
    """
    Build the runtime chapter list for a book.

    Instances are created from the configuration unless the host passes its
    own ColumnInstance per chapter.
    """

    def __init__(self, config: BookConfig):
        self.config = config

    def build_columns(self) -> list[ColumnInstance]:
        return [build_column(idx, ch) for idx, ch in enumerate(self.config.chapters)]

    def build_chapters(self, columns: Optional[list[ColumnInstance]] = None) -> list[ChapterState]:
        """
        Create one ChapterState per declared chapter.

        Args:
            columns: Host-provided chapter instances, in chapter order

        Raises:
            ValueError: if the number of columns does not match the chapters
        """
        columns = columns if columns is not None else self.build_columns()
        if len(columns) != len(self.config.chapters):
            raise ValueError(
                f"Expected {len(self.config.chapters)} chapter instances, got {len(columns)}"
            )

        chapters = []
        for idx, (chapter, column) in enumerate(zip(self.config.chapters, columns)):
            task_ids = {s.sub_content_id for s in chapter.sections if s.is_task}
            chapters.append(ChapterState(
                id=column.sub_content_id,
                instance=column,
                title=chapter.title,
                max_tasks=count_tasks(chapter, self.config.behaviour),
                section_instances=[
                    SectionRef.of(section, is_task=section.sub_content_id in task_ids)
                    for section in column.sections
                ],
            ))
        return chapters

    def get_chapter_summaries(self) -> list[ChapterSummary]:
        return [
            ChapterSummary(
                index=idx,
                title=chapter.title,
                section_titles=[s.title or s.sub_content_id for s in chapter.sections],
            )
            for idx, chapter in enumerate(self.config.chapters)
        ]
