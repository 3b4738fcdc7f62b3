"""
Messages into the book and their dispatch.

Each inbound stimulus is one message type; dispatch() routes it to the
controller through a single handler table.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Union

from digibook.schemas import ReportVerb


@dataclass(frozen=True)
class RequestChapter:
    """Reader clicked a chapter or section link."""
    chapter: int
    section: Optional[str] = None
    book_id: Optional[int] = None


@dataclass(frozen=True)
class HashChanged:
    """The address fragment changed (back/forward, pasted link, our own write)."""
    fragment: str


@dataclass(frozen=True)
class SectionCompleted:
    """A nested instance reported an answer or completion."""
    sub_content_id: str
    verb: ReportVerb = ReportVerb.COMPLETED


@dataclass(frozen=True)
class MarkChapterRead:
    """Reader ticked "I have finished this page"."""


@dataclass(frozen=True)
class ToggleMenu:
    pass


@dataclass(frozen=True)
class ScrollToTop:
    pass


@dataclass(frozen=True)
class CoverRemoved:
    pass


Message = Union[
    RequestChapter,
    HashChanged,
    SectionCompleted,
    MarkChapterRead,
    ToggleMenu,
    ScrollToTop,
    CoverRemoved,
]


_HANDLERS: dict[type, Callable] = {
    RequestChapter: lambda c, m: c.request_chapter(m.chapter, m.section, book_id=m.book_id),
    HashChanged: lambda c, m: c.on_hash_change(m.fragment),
    SectionCompleted: lambda c, m: c.record_section_event(m.sub_content_id, m.verb),
    MarkChapterRead: lambda c, m: c.set_current_chapter_read(),
    ToggleMenu: lambda c, m: c.toggle_menu(),
    ScrollToTop: lambda c, m: c.scroll_to_top(),
    CoverRemoved: lambda c, m: c.remove_cover(),
}


def dispatch(controller, message: Message):
    """
    Route a message to the controller.

    Returns whatever the handler returns.

    Raises:
        TypeError: for objects that are not one of the message types
    """
    handler = _HANDLERS.get(type(message))
    if handler is None:
        raise TypeError(f"Unknown message: {message!r}")
    return handler(controller, message)
