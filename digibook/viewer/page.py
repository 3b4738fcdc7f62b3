"""
Page renderer - Shows the active chapter and scrolls to a section.

Provides:
- PageState: page content collaborator recording each switch
- Chapter HTML for the active chapter
"""

import html
from dataclasses import dataclass, field
from typing import Optional

from digibook.reader.instances import ColumnInstance, QuestionSection, TextSection
from digibook.schemas import NavigationRequest


@dataclass
class PageState:
    """Page content collaborator."""
    chapter: int = 0
    target_section: Optional[str] = None
    hidden: bool = False
    redirect_on_load: bool = False
    switches: list[NavigationRequest] = field(default_factory=list)

    def change_chapter(self, redirect_on_load: bool, request: NavigationRequest):
        self.chapter = request.chapter
        self.target_section = request.section
        self.redirect_on_load = redirect_on_load
        self.switches.append(request.model_copy())

    def set_hidden(self, hidden: bool):
        self.hidden = hidden


def render_chapter(column: ColumnInstance, target_section: Optional[str] = None) -> str:
    """
    Render a chapter's sections.

    The targeted section carries the anchor the browser scrolls to.
    """
    parts = [f'<article class="digibook-chapter-content"><h2>{html.escape(column.title)}</h2>']
    for section in column.sections:
        anchor = ' id="digibook-target"' if section.sub_content_id == target_section else ""
        parts.append(f'<section data-id="{html.escape(section.sub_content_id)}"{anchor}>')
        if section.title:
            parts.append(f'<h3>{html.escape(section.title)}</h3>')
        if isinstance(section, TextSection) and section.text:
            parts.append(f'<p>{html.escape(section.text)}</p>')
        elif isinstance(section, QuestionSection):
            state = "answered" if section.answered else "open"
            parts.append(
                f'<p class="digibook-task {state}">{section.score} / {section.max_score}</p>'
            )
        parts.append('</section>')
    parts.append('</article>')
    return ''.join(parts)
