"""
Progress tracking schemas for DigiBook.

Defines Pydantic models for reader progress including:
- Chapter status tracking
- Scored reports handed to the hosting report layer
"""

from pydantic import BaseModel, Field, computed_field
from typing import Optional
from enum import Enum


class ChapterStatus(str, Enum):
    BLANK = "BLANK"
    STARTED = "STARTED"
    DONE = "DONE"


class ReportVerb(str, Enum):
    ANSWERED = "answered"
    COMPLETED = "completed"


class ScoreReport(BaseModel):
    """Score/completion values the book supplies to the report layer."""
    verb: ReportVerb
    score: int = Field(..., ge=0)
    max_score: int = Field(..., ge=0)
    chapter: Optional[int] = None   # None for the book-level report
    sub_content_id: Optional[str] = None
    children: list["ScoreReport"] = []

    @computed_field
    @property
    def success(self) -> bool:
        return self.score == self.max_score


class ChapterProgress(BaseModel):
    """Snapshot of one chapter's progress, for summaries and display."""
    chapter: int
    title: str = ""
    status: ChapterStatus = ChapterStatus.BLANK
    max_tasks: Optional[int] = None
    tasks_left: int = 0
    completed: bool = False
