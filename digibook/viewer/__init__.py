"""
DigiBook Viewer - Collaborator state and rendering for the book chrome.

This module provides:
- Sidebar: chapter menu with progress indicators
- Status bar: chapter position and previous/next labels
- Page: active chapter content
"""

from .sidebar import (
    STATUS_ICONS,
    SidebarState,
    get_sidebar_css,
    render_chapter_menu,
)

from .statusbar import (
    StatusBarState,
    render_status_bar,
)

from .page import (
    PageState,
    render_chapter,
)

__all__ = [
    # Sidebar
    "STATUS_ICONS",
    "SidebarState",
    "get_sidebar_css",
    "render_chapter_menu",
    # Status bar
    "StatusBarState",
    "render_status_bar",
    # Page
    "PageState",
    "render_chapter",
]
