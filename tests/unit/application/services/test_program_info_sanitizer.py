"""Tests for program info sanitizing."""

from src.application.services.program_info_sanitizer import (
    sanitize_program_info,
    strip_html,
)
from src.domain.value_objects.candidate_profile import ProgramInfo


class TestStripHtml:
    def test_plain_text_is_unchanged(self) -> None:
        assert strip_html("Research for all") == "Research for all"

    def test_tags_are_removed(self) -> None:
        assert strip_html("<p><b>Research</b> for all</p>") == "Research for all"

    def test_script_content_is_dropped(self) -> None:
        """script要素は中身ごと削除されること."""
        value = "Hello <script>alert('x')</script>world"
        assert strip_html(value) == "Hello world"

    def test_style_content_is_dropped(self) -> None:
        assert strip_html("<style>p {color: red}</style>Text") == "Text"

    def test_none(self) -> None:
        assert strip_html(None) is None


class TestSanitizeProgramInfo:
    def test_sanitizes_title_and_body(self) -> None:
        program = ProgramInfo(
            title="<h1>Science</h1>",
            body='<a href="javascript:alert(1)">Research</a>',
        )

        result = sanitize_program_info(program)

        assert result == ProgramInfo(title="Science", body="Research")

    def test_none(self) -> None:
        assert sanitize_program_info(None) is None

    def test_partial(self) -> None:
        result = sanitize_program_info(ProgramInfo(title="<i>Only title</i>"))
        assert result == ProgramInfo(title="Only title", body=None)
