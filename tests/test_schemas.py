"""
Schema validation tests for DigiBook.

Tests all Pydantic models to ensure they validate correctly.
"""

import pytest

from digibook.schemas import (
    # Book
    Behaviour,
    SectionConfig,
    ChapterConfig,
    BookConfig,
    # Navigation
    NavigatorState,
    NavigationRequest,
    # Progress
    ChapterStatus,
    ReportVerb,
    ScoreReport,
    ChapterProgress,
)


class TestNavigationSchemas:
    """Test navigation request validation."""

    def test_request_defaults(self):
        request = NavigationRequest(h5pbookid=1, chapter=0)
        assert request.section is None
        assert request.redirect_from_component is False

    def test_request_coerces_strings(self):
        request = NavigationRequest(h5pbookid="42", chapter="3")
        assert request.h5pbookid == 42
        assert request.chapter == 3

    def test_request_negative_chapter(self):
        with pytest.raises(ValueError):
            NavigationRequest(h5pbookid=1, chapter=-1)

    def test_request_section_cannot_break_fragment(self):
        with pytest.raises(ValueError):
            NavigationRequest(h5pbookid=1, chapter=0, section="a&chapter=3")
        with pytest.raises(ValueError):
            NavigationRequest(h5pbookid=1, chapter=0, section="")

    def test_same_target_ignores_origin(self):
        a = NavigationRequest(h5pbookid=1, chapter=2, section="x", redirect_from_component=True)
        b = NavigationRequest(h5pbookid=1, chapter=2, section="x")
        assert a.same_target(b)
        assert not a.same_target(NavigationRequest(h5pbookid=1, chapter=2))

    def test_navigator_states(self):
        assert NavigatorState.IDLE.value == "idle"
        assert NavigatorState.TRANSITIONING.value == "transitioning"


class TestProgressSchemas:
    """Test progress-related schemas."""

    def test_status_values(self):
        assert [s.value for s in ChapterStatus] == ["BLANK", "STARTED", "DONE"]

    def test_score_report_success(self):
        assert ScoreReport(verb=ReportVerb.COMPLETED, score=3, max_score=3).success
        assert not ScoreReport(verb=ReportVerb.ANSWERED, score=1, max_score=3).success

    def test_score_report_negative(self):
        with pytest.raises(ValueError):
            ScoreReport(verb="answered", score=-1, max_score=3)

    def test_score_report_children(self):
        child = ScoreReport(verb="answered", score=1, max_score=1, sub_content_id="q")
        report = ScoreReport(verb="answered", score=1, max_score=1, children=[child])
        assert report.children[0].sub_content_id == "q"
        assert report.model_dump()["children"][0]["success"] is True

    def test_chapter_progress_defaults(self):
        progress = ChapterProgress(chapter=0)
        assert progress.status == ChapterStatus.BLANK
        assert progress.max_tasks is None


class TestBookSchemas:
    """Test book configuration schemas."""

    def test_minimal_book(self):
        config = BookConfig(content_id=1, title="T", chapters=[ChapterConfig(title="C")])
        assert config.behaviour.progress_indicators is True
        assert config.show_cover_page is False
        assert config.labels.next_page == "Next page"

    def test_book_needs_chapters(self):
        with pytest.raises(ValueError):
            BookConfig(content_id=1, title="T", chapters=[])

    def test_duplicate_section_ids(self):
        with pytest.raises(ValueError):
            BookConfig(content_id=1, title="T", chapters=[
                ChapterConfig(title="A", sections=[SectionConfig(sub_content_id="s")]),
                ChapterConfig(title="B", sections=[SectionConfig(sub_content_id="s")]),
            ])

    def test_task_libraries(self):
        assert not SectionConfig(sub_content_id="t").is_task
        assert not SectionConfig(sub_content_id="i", library="H5P.Image").is_task
        assert SectionConfig(sub_content_id="q", library="H5P.MultiChoice").is_task

    def test_solutions_and_retry_forced_off(self):
        behaviour = Behaviour(enable_solutions_button=True, enable_retry=True)
        assert behaviour.enable_solutions_button is False
        assert behaviour.enable_retry is False

    def test_negative_max_tasks(self):
        with pytest.raises(ValueError):
            ChapterConfig(title="C", max_tasks=-1)

    def test_max_tasks_matches_task_sections(self):
        quiz = SectionConfig(sub_content_id="q", library="H5P.MultiChoice")
        text = SectionConfig(sub_content_id="t")
        assert ChapterConfig(title="C", max_tasks=1, sections=[quiz, text]).task_count == 1
        assert ChapterConfig(title="C", max_tasks=0, sections=[quiz]).max_tasks == 0
        with pytest.raises(ValueError):
            ChapterConfig(title="C", max_tasks=3, sections=[quiz])
        with pytest.raises(ValueError):
            ChapterConfig(title="C", max_tasks=1, sections=[
                quiz, SectionConfig(sub_content_id="q2", library="H5P.TrueFalse"),
            ])

    def test_disabled_flags_validated_when_omitted(self):
        fields = Behaviour.model_fields
        assert fields["enable_solutions_button"].validate_default is True
        assert fields["enable_retry"].validate_default is True
        assert Behaviour().enable_retry is False
