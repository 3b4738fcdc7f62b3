"""
Nested content instances and their capabilities.

Every nested instance declares the optional capabilities it supports up
front, so callers check `Capability.SCORE in instance.capabilities` instead of
probing for methods. Calling a method the instance has not declared raises
NotImplementedError.

Provides:
- Capability flags
- NestedInstance base class
- TextSection: static content with no capabilities
- QuestionSection: a scored task
- ColumnInstance: chapter container aggregating its sections
"""

from enum import Enum
from typing import Iterable, Optional

from digibook.schemas import ReportVerb, ScoreReport


class Capability(str, Enum):
    SCORE = "score"                 # get_score / get_max_score
    ANSWER_GIVEN = "answer_given"   # get_answer_given
    RESET = "reset"                 # reset_task
    SOLUTIONS = "solutions"         # show_solutions
    READ_SPEAKER = "read_speaker"   # toggle_read_speaker
    REPORT = "report"               # get_report_data


class NestedInstance:
    """Base class for content nested inside a chapter."""

    capabilities: frozenset[Capability] = frozenset()

    def __init__(self, sub_content_id: str, library: str = "", title: str = ""):
        self.sub_content_id = sub_content_id
        self.library = library
        self.title = title

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def _unsupported(self, capability: Capability):
        raise NotImplementedError(
            f"{type(self).__name__} {self.sub_content_id!r} does not support {capability.value}"
        )

    def get_score(self) -> int:
        self._unsupported(Capability.SCORE)

    def get_max_score(self) -> int:
        self._unsupported(Capability.SCORE)

    def get_answer_given(self) -> bool:
        self._unsupported(Capability.ANSWER_GIVEN)

    def reset_task(self):
        self._unsupported(Capability.RESET)

    def show_solutions(self):
        self._unsupported(Capability.SOLUTIONS)

    def toggle_read_speaker(self, enabled: bool):
        self._unsupported(Capability.READ_SPEAKER)

    def get_report_data(self) -> ScoreReport:
        self._unsupported(Capability.REPORT)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.sub_content_id!r})"


class TextSection(NestedInstance):
    """Static section (text, image, ...)."""

    def __init__(self, sub_content_id: str, text: str = "", library: str = "H5P.AdvancedText",
                 title: str = ""):
        super().__init__(sub_content_id, library, title)
        self.text = text


class QuestionSection(NestedInstance):
    """A scored task the reader answers."""

    capabilities = frozenset({
        Capability.SCORE,
        Capability.ANSWER_GIVEN,
        Capability.RESET,
        Capability.SOLUTIONS,
        Capability.REPORT,
    })

    def __init__(self, sub_content_id: str, max_score: int = 1, library: str = "H5P.MultiChoice",
                 title: str = ""):
        super().__init__(sub_content_id, library, title)
        self.max_score = max_score
        self.score = 0
        self.answered = False
        self.solutions_shown = False

    def answer(self, score: int):
        """Record an answer; score is clamped to [0, max_score]."""
        self.score = max(0, min(score, self.max_score))
        self.answered = True

    def get_score(self) -> int:
        return self.score

    def get_max_score(self) -> int:
        return self.max_score

    def get_answer_given(self) -> bool:
        return self.answered

    def reset_task(self):
        self.score = 0
        self.answered = False
        self.solutions_shown = False

    def show_solutions(self):
        self.solutions_shown = True

    def get_report_data(self) -> ScoreReport:
        return ScoreReport(
            verb=ReportVerb.ANSWERED,
            score=self.score,
            max_score=self.max_score,
            sub_content_id=self.sub_content_id,
        )


class ColumnInstance(NestedInstance):
    """
    Chapter container.

    Aggregates its sections: score is the sum over sections that are scored,
    an answer counts as given only when every section that can tell says so.
    """

    capabilities = frozenset(Capability)

    def __init__(self, sub_content_id: str, sections: Iterable[NestedInstance] = (),
                 title: str = ""):
        super().__init__(sub_content_id, "H5P.Column", title)
        self.sections: list[NestedInstance] = list(sections)
        self.read_speaker = False

    def _with(self, capability: Capability) -> list[NestedInstance]:
        return [s for s in self.sections if s.supports(capability)]

    def get_score(self) -> int:
        return sum(s.get_score() for s in self._with(Capability.SCORE))

    def get_max_score(self) -> int:
        return sum(s.get_max_score() for s in self._with(Capability.SCORE))

    def get_answer_given(self) -> bool:
        return all(s.get_answer_given() for s in self._with(Capability.ANSWER_GIVEN))

    def reset_task(self):
        for section in self._with(Capability.RESET):
            section.reset_task()

    def show_solutions(self):
        for section in self._with(Capability.SOLUTIONS):
            section.show_solutions()

    def toggle_read_speaker(self, enabled: bool):
        self.read_speaker = enabled

    def get_report_data(self) -> ScoreReport:
        return ScoreReport(
            verb=ReportVerb.ANSWERED,
            score=self.get_score(),
            max_score=self.get_max_score(),
            sub_content_id=self.sub_content_id,
            children=[s.get_report_data() for s in self._with(Capability.REPORT)],
        )

    def find_section(self, sub_content_id: str) -> Optional[NestedInstance]:
        for section in self.sections:
            if section.sub_content_id == sub_content_id:
                return section
        return None
