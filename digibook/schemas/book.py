"""
Book definition schemas for DigiBook.

Defines Pydantic models for the declared book configuration:
- Behaviour switches (progress indicators, automatic progress)
- Chapters and their sections
- Localised labels used by the status bar and page content
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional


# Libraries that never count as a task for progress tracking
NON_TASK_LIBRARIES = {
    'H5P.AdvancedText',
    'H5P.Image',
    'H5P.Audio',
    'H5P.Video',
    'H5P.Link',
    'H5P.Table',
}


class Behaviour(BaseModel):
    progress_indicators: bool = True
    progress_auto: bool = True
    display_summary: bool = False
    # The book never offers these itself; it only hosts sub-content that may
    enable_solutions_button: bool = Field(default=False, validate_default=True)
    enable_retry: bool = Field(default=False, validate_default=True)

    # validate_default on both fields, so this also runs when they are omitted
    @field_validator('enable_solutions_button', 'enable_retry')
    @classmethod
    def always_disabled(cls, v):
        return False


class SectionConfig(BaseModel):
    sub_content_id: str = Field(..., min_length=1)
    library: str = 'H5P.AdvancedText'
    title: str = ''
    text: Optional[str] = None
    max_score: Optional[int] = Field(default=None, ge=0)

    @property
    def is_task(self) -> bool:
        return self.library not in NON_TASK_LIBRARIES


class ChapterConfig(BaseModel):
    title: str
    sub_content_id: Optional[str] = None
    # 0 turns task tracking off for the chapter; it is then done once read
    max_tasks: Optional[int] = Field(default=None, ge=0)
    sections: list[SectionConfig] = []

    @property
    def task_count(self) -> int:
        return sum(1 for s in self.sections if s.is_task)

    @model_validator(mode="after")
    def max_tasks_matches_sections(self):
        if self.max_tasks not in (None, 0, self.task_count):
            raise ValueError(
                f"max_tasks must be 0 or {self.task_count} (the number of task sections), "
                f"got {self.max_tasks}"
            )
        return self


class Labels(BaseModel):
    next_page: str = 'Next page'
    previous_page: str = 'Previous page'
    navigate_to_top: str = 'Navigate to the top'
    mark_as_finished: str = 'I have finished this page'
    read: str = 'Read'


class BookConfig(BaseModel):
    """Declared configuration of one book."""
    content_id: int = Field(..., ge=0)
    title: str
    show_cover_page: bool = False
    cover_description: str = ''
    behaviour: Behaviour = Behaviour()
    labels: Labels = Labels()
    chapters: list[ChapterConfig] = Field(..., min_length=1)

    @field_validator('chapters')
    @classmethod
    def unique_section_ids(cls, v):
        seen = set()
        for chapter in v:
            for section in chapter.sections:
                if section.sub_content_id in seen:
                    raise ValueError(f'Duplicate sub_content_id: {section.sub_content_id}')
                seen.add(section.sub_content_id)
        return v
