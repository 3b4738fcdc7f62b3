"""
Sidebar renderer - Chapter menu with progress indicators.

Provides:
- SidebarState: records what the controller asks the sidebar to show
- Chapter menu HTML with status indicators and section markers
"""

import html
from dataclasses import dataclass, field
from typing import Optional

from digibook.reader.loader import ChapterSummary
from digibook.schemas import ChapterStatus


STATUS_ICONS = {
    ChapterStatus.BLANK: "○",
    ChapterStatus.STARTED: "◐",
    ChapterStatus.DONE: "●",
}


@dataclass
class SidebarState:
    """Sidebar collaborator: indicator state for rendering."""
    chapter_status: dict[int, ChapterStatus] = field(default_factory=dict)
    section_markers: dict[int, set[int]] = field(default_factory=dict)
    completed_chapters: set[int] = field(default_factory=set)
    menu_hidden: bool = False
    active_chapter: int = 0
    refreshes: int = 0

    def set_section_marker(self, chapter: int, section_index: int):
        self.section_markers.setdefault(chapter, set()).add(section_index)

    def update_chapter_progress_indicator(self, chapter: int, status: ChapterStatus):
        self.chapter_status[chapter] = status

    def set_chapter_indicator_complete(self, chapter: int):
        self.completed_chapters.add(chapter)
        self.chapter_status[chapter] = ChapterStatus.DONE

    def reset_indicators(self):
        self.chapter_status.clear()
        self.section_markers.clear()
        self.completed_chapters.clear()

    def toggle_menu(self):
        self.menu_hidden = not self.menu_hidden

    def refresh(self, active_chapter: int):
        self.active_chapter = active_chapter
        self.refreshes += 1

    def status_of(self, chapter: int) -> ChapterStatus:
        return self.chapter_status.get(chapter, ChapterStatus.BLANK)


def get_sidebar_css() -> str:
    """Get CSS styles for the chapter menu."""
    return """
    <style>
    .digibook-chapter {
        padding: 0.4em 0.6em;
        border-radius: 6px;
    }
    .digibook-chapter.current {
        background: #e3f2fd;
        font-weight: 600;
    }
    .digibook-status-DONE { color: #388E3C; }
    .digibook-status-STARTED { color: #F57C00; }
    .digibook-status-BLANK { color: #999; }
    .digibook-section {
        margin-left: 1.5em;
        font-size: 0.9em;
        color: #555;
    }
    .digibook-section.done::before {
        content: "✓ ";
        color: #388E3C;
    }
    </style>
    """


def render_chapter_menu(
    chapters: list[ChapterSummary],
    state: SidebarState,
    book_id: Optional[int] = None,
) -> str:
    """
    Render the chapter menu.

    Args:
        chapters: Chapter summaries in reading order
        state: Current sidebar state
        book_id: When given, entries link to their fragment

    Returns:
        HTML string for the menu (empty if the menu is hidden)
    """
    if state.menu_hidden:
        return ""

    parts = [get_sidebar_css(), '<nav class="digibook-menu">']
    for chapter in chapters:
        status = state.status_of(chapter.index)
        current = " current" if chapter.index == state.active_chapter else ""
        title = html.escape(chapter.title)
        if book_id is not None:
            title = f'<a href="#h5pbookid={book_id}&chapter={chapter.index}">{title}</a>'
        parts.append(f'<div class="digibook-chapter{current}">')
        parts.append(f'<span class="digibook-status-{status.value}">{STATUS_ICONS[status]}</span> {title}')
        parts.append('</div>')

        done = state.section_markers.get(chapter.index, set())
        for idx, section_title in enumerate(chapter.section_titles):
            css = "digibook-section done" if idx in done else "digibook-section"
            parts.append(f'<div class="{css}">{html.escape(section_title)}</div>')

    parts.append('</nav>')
    return ''.join(parts)
