"""
Status bar renderer - Chapter position and previous/next labels.
"""

import html
from dataclasses import dataclass
from typing import Callable

from digibook.schemas import Labels


@dataclass
class StatusBarState:
    """Status bar collaborator: reads the active chapter when refreshed."""
    active_chapter_source: Callable[[], int]
    chapter_count: int
    current: int = 0
    updates: int = 0
    scroll_requests: int = 0

    def update_status_bar(self):
        self.current = self.active_chapter_source()
        self.updates += 1

    def scroll_to_top(self):
        self.scroll_requests += 1

    @property
    def has_previous(self) -> bool:
        return self.current > 0

    @property
    def has_next(self) -> bool:
        return self.current + 1 < self.chapter_count


def render_status_bar(state: StatusBarState, chapter_title: str, labels: Labels) -> str:
    """Render the header line: position, title and navigation hints."""
    prev_label = html.escape(labels.previous_page) if state.has_previous else ""
    next_label = html.escape(labels.next_page) if state.has_next else ""
    return f"""
    <div class="digibook-status-bar">
        <span class="digibook-prev">{prev_label}</span>
        <span class="digibook-position">{state.current + 1} / {state.chapter_count}</span>
        <span class="digibook-title">{html.escape(chapter_title)}</span>
        <span class="digibook-next">{next_label}</span>
    </div>
    """
