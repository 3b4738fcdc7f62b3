"""
Navigation errors.

None of these are fatal: the controller catches them at its entry points,
logs them and keeps the current state.
"""


class NavigationError(Exception):
    """Base class for rejected navigation."""


class MalformedHash(NavigationError):
    """Fragment carries no usable navigation intent."""


class ForeignBookId(NavigationError):
    """Fragment addresses another book on the same page."""

    def __init__(self, book_id, expected: int):
        super().__init__(f"Fragment is for book {book_id!r}, not {expected}")
        self.book_id = book_id
        self.expected = expected


class OutOfRangeChapter(NavigationError):
    """Request targets a chapter the book does not have."""

    def __init__(self, chapter: int, chapter_count: int):
        super().__init__(f"Chapter {chapter} out of range (0..{chapter_count - 1})")
        self.chapter = chapter
        self.chapter_count = chapter_count


class ConcurrentTransitionRejected(NavigationError):
    """A chapter switch is already in flight."""
