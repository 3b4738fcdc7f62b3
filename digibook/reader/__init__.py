"""
DigiBook Reader - Runtime components for navigating and tracking a book.

This module provides:
- HashCodec: URL fragment parsing and building
- ProgressTracker: Chapter and section progress
- NavigationController: Active chapter and chapter switches
- DigiBook: Host-facing book object
"""

from . import hashcodec

from .errors import (
    NavigationError,
    MalformedHash,
    ForeignBookId,
    OutOfRangeChapter,
    ConcurrentTransitionRejected,
)

from .instances import (
    Capability,
    NestedInstance,
    TextSection,
    QuestionSection,
    ColumnInstance,
)

from .progress import (
    ProgressTracker,
    ChapterState,
    SectionRef,
    chapter_status,
)

from .lock import AnimationLock

from .collaborators import (
    PageContent,
    Sidebar,
    StatusBar,
    Location,
    MemoryLocation,
)

from .events import (
    RequestChapter,
    HashChanged,
    SectionCompleted,
    MarkChapterRead,
    ToggleMenu,
    ScrollToTop,
    CoverRemoved,
    dispatch,
)

from .loader import BookLoader, ChapterSummary

from .navigator import NavigationController, BookSession

from .book import DigiBook

__all__ = [
    "hashcodec",
    # Errors
    "NavigationError",
    "MalformedHash",
    "ForeignBookId",
    "OutOfRangeChapter",
    "ConcurrentTransitionRejected",
    # Instances
    "Capability",
    "NestedInstance",
    "TextSection",
    "QuestionSection",
    "ColumnInstance",
    # Progress
    "ProgressTracker",
    "ChapterState",
    "SectionRef",
    "chapter_status",
    "AnimationLock",
    # Collaborators
    "PageContent",
    "Sidebar",
    "StatusBar",
    "Location",
    "MemoryLocation",
    # Events
    "RequestChapter",
    "HashChanged",
    "SectionCompleted",
    "MarkChapterRead",
    "ToggleMenu",
    "ScrollToTop",
    "CoverRemoved",
    "dispatch",
    # Loader
    "BookLoader",
    "ChapterSummary",
    # Navigator
    "NavigationController",
    "BookSession",
    "DigiBook",
]
