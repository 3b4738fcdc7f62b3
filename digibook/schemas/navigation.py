"""
Navigation schemas for DigiBook.

Defines Pydantic models for navigation intent:
- Navigation requests (what the reader asked to see)
- Controller state (idle or mid-transition)
"""

from pydantic import BaseModel, Field
from typing import Optional
from enum import Enum


class NavigatorState(str, Enum):
    IDLE = "idle"
    TRANSITIONING = "transitioning"


class NavigationRequest(BaseModel):
    """
    Normalized "go to chapter X, optionally section Y".

    redirect_from_component is True when the controller produced the request
    itself (already canonical) and False when it came from browser history.
    """
    h5pbookid: int
    chapter: int = Field(..., ge=0)       # 0-based chapter index
    section: Optional[str] = Field(default=None, pattern=r'^[^&=#]+$')  # anchor inside the chapter
    redirect_from_component: bool = False

    def same_target(self, other: "NavigationRequest") -> bool:
        """Compare book, chapter and section; ignores where the request came from."""
        return (
            self.h5pbookid == other.h5pbookid
            and self.chapter == other.chapter
            and self.section == other.section
        )
