"""
Collaborator interfaces - what the controller calls, not how it is drawn.

Provides:
- PageContent, Sidebar, StatusBar: rendering collaborators
- Location: the single global fragment slot
- MemoryLocation: in-process Location with a history stack
"""

import logging
from typing import Callable, Optional, Protocol

from digibook.schemas import ChapterStatus, NavigationRequest


logger = logging.getLogger(__name__)


class PageContent(Protocol):
    def change_chapter(self, redirect_on_load: bool, request: NavigationRequest) -> None: ...

    def set_hidden(self, hidden: bool) -> None: ...


class Sidebar(Protocol):
    def set_section_marker(self, chapter: int, section_index: int) -> None: ...

    def update_chapter_progress_indicator(self, chapter: int, status: ChapterStatus) -> None: ...

    def set_chapter_indicator_complete(self, chapter: int) -> None: ...

    def reset_indicators(self) -> None: ...

    def toggle_menu(self) -> None: ...

    def refresh(self, active_chapter: int) -> None: ...


class StatusBar(Protocol):
    def update_status_bar(self) -> None: ...

    def scroll_to_top(self) -> None: ...


class Location(Protocol):
    """The address fragment. Only the controller writes it."""

    def get_hash(self) -> str: ...

    def set_hash(self, fragment: str) -> None: ...

    def subscribe(self, listener: Callable[[str], None]) -> None: ...


HashListener = Callable[[str], None]


class MemoryLocation:
    """
    In-process stand-in for the browser location.

    Writing a different fragment pushes a history entry and notifies
    listeners, like a browser's hashchange. Writing the current fragment
    again is silent. With synchronous=False notifications queue up until
    flush(), which is how browsers deliver hashchange after the writer's
    handler has returned.
    """

    def __init__(self, initial: str = "", synchronous: bool = True):
        self._history: list[str] = [self._normalize(initial)]
        self._forward: list[str] = []
        self._listeners: list[HashListener] = []
        self._queued: list[str] = []
        self.synchronous = synchronous
        self.writes: list[str] = []

    @staticmethod
    def _normalize(fragment: Optional[str]) -> str:
        if not fragment or fragment == "#":
            return ""
        return fragment if fragment.startswith("#") else "#" + fragment

    def get_hash(self) -> str:
        return self._history[-1]

    def set_hash(self, fragment: str):
        fragment = self._normalize(fragment)
        if fragment == self.get_hash():
            return
        self.writes.append(fragment)
        self._history.append(fragment)
        self._forward.clear()
        self._notify(fragment)

    def subscribe(self, listener: HashListener):
        self._listeners.append(listener)

    @property
    def history(self) -> list[str]:
        return list(self._history)

    def back(self) -> bool:
        """Go back one history entry. Returns True if navigation occurred."""
        if len(self._history) <= 1:
            return False
        self._forward.append(self._history.pop())
        self._notify(self.get_hash())
        return True

    def forward(self) -> bool:
        """Go forward one history entry. Returns True if navigation occurred."""
        if not self._forward:
            return False
        self._history.append(self._forward.pop())
        self._notify(self.get_hash())
        return True

    def flush(self) -> int:
        """Deliver queued notifications. Returns how many were delivered."""
        delivered = 0
        while self._queued:
            fragment = self._queued.pop(0)
            self._deliver(fragment)
            delivered += 1
        return delivered

    def _notify(self, fragment: str):
        if self.synchronous:
            self._deliver(fragment)
        else:
            self._queued.append(fragment)

    def _deliver(self, fragment: str):
        logger.debug(f"hashchange -> {fragment!r}")
        for listener in list(self._listeners):
            listener(fragment)
