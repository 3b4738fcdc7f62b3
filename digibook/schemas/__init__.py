"""
DigiBook Schemas - Pydantic models for the interactive book controller.

This module exports all schema classes for:
- Book: declared chapters, sections, behaviour and labels
- Navigation: navigation requests and controller state
- Progress: chapter status and score reports
"""

# Book schemas
from .book import (
    Behaviour,
    SectionConfig,
    ChapterConfig,
    Labels,
    BookConfig,
    NON_TASK_LIBRARIES,
)

# Navigation schemas
from .navigation import (
    NavigatorState,
    NavigationRequest,
)

# Progress schemas
from .progress import (
    ChapterStatus,
    ReportVerb,
    ScoreReport,
    ChapterProgress,
)

__all__ = [
    # Book
    'Behaviour',
    'SectionConfig',
    'ChapterConfig',
    'Labels',
    'BookConfig',
    'NON_TASK_LIBRARIES',
    # Navigation
    'NavigatorState',
    'NavigationRequest',
    # Progress
    'ChapterStatus',
    'ReportVerb',
    'ScoreReport',
    'ChapterProgress',
]
