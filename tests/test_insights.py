import pytest

from response_sections.models import BulletItem, Section, TextItem
from response_sections.parsing.insights import parse_insights


def test_heading_with_titled_bullet_and_continuation() -> None:
    text = (
        "#### 1. Productivity Patterns\n"
        "* **Morning Focus:** You complete 70% of tasks before noon.\n"
        "Keep mornings meeting-free."
    )
    assert parse_insights(text) == [
        Section(
            title="Productivity Patterns",
            items=[
                BulletItem(
                    title="Morning Focus",
                    content=["You complete 70% of tasks before noon.", "Keep mornings meeting-free."],
                )
            ],
        )
    ]


def test_text_before_first_heading_opens_summary_section() -> None:
    sections = parse_insights("You logged **38 hours**.\n### Empty Heading\n")
    assert sections == [Section(title="Summary", items=[TextItem(content="You logged 38 hours.")])]


def test_titled_bullet_without_section_uses_summary() -> None:
    sections = parse_insights("* **Energy**\n- slump around 3pm")
    assert sections == [Section(title="Summary", items=[BulletItem(title="Energy", content=["slump around 3pm"])])]


def test_heading_closes_open_bullet_item() -> None:
    sections = parse_insights("* **Streak:** 5 days\n## Skills\nPython improved.")
    assert [section.title for section in sections] == ["Summary", "Skills"]
    assert sections[1].items == [TextItem(content="Python improved.")]


def test_numbered_lines_keep_their_number() -> None:
    sections = parse_insights("## Steps\n1. Plan the week\n2. Review on Friday")
    assert sections[0].items == [TextItem(content="1. Plan the week"), TextItem(content="2. Review on Friday")]


def test_numbered_bold_heading_trailing_text_becomes_item() -> None:
    sections = parse_insights("1. **Balance:** Weekends are quiet.")
    assert sections == [Section(title="Balance", items=[TextItem(content="Weekends are quiet.")])]


def test_separator_lines_are_discarded() -> None:
    sections = parse_insights("## Notes\n---\nline one\n---\n")
    assert sections == [Section(title="Notes", items=[TextItem(content="line one")])]
    for section in sections:
        for item in section.items:
            assert "---" not in item.model_dump_json()


def test_bold_separator_is_discarded() -> None:
    assert parse_insights("## Notes\n**---**\nline one") == [Section(title="Notes", items=[TextItem(content="line one")])]


def test_line_of_only_emphasis_markers_is_kept_verbatim() -> None:
    assert parse_insights("**") == [Section(title="Summary", items=[TextItem(content="**")])]
    assert parse_insights("## Notes\n* **Tip:** rest\n****") == [
        Section(title="Notes", items=[BulletItem(title="Tip", content=["rest", "****"])])
    ]


def test_order_is_preserved_and_sections_are_never_empty() -> None:
    text = "\n".join(
        [
            "# Overview",
            "First point.",
            "## Unused",
            "## Details",
            "* **A:** one",
            "* **B:** two",
            "Last words.",
        ]
    )
    sections = parse_insights(text)
    assert [section.title for section in sections] == ["Overview", "Details"]
    assert all(section.items for section in sections)
    assert [item.title for item in sections[1].items] == ["A", "B"]
    assert sections[1].items[1].content == ["two", "Last words."]


@pytest.mark.parametrize("text", ["", "   \n\n\t", None, "\x00", "####", "* ", "**", "1.", "🎯", "---"])
def test_parser_is_total(text) -> None:  # noqa: ANN001
    sections = parse_insights(text)
    assert isinstance(sections, list)
    assert all(section.items for section in sections)
