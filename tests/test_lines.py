from response_sections.models import InlineSpan, split_inline
from response_sections.parsing.lines import (
    BulletWithTitle,
    GenericBullet,
    Heading,
    NumberedBoldHeading,
    NumberedLine,
    PlainText,
    classify,
    content_text,
    normalize_bullets,
    strip_emphasis,
)


def test_classify_enumerated_heading() -> None:
    assert classify("#### 1. Productivity Patterns") == Heading(level=4, text="Productivity Patterns", number="1")
    assert classify("## **Weekly Focus**") == Heading(level=2, text="Weekly Focus")


def test_classify_numbered_bold_heading_keeps_trailing_text() -> None:
    assert classify("2. **Track Skills**") == NumberedBoldHeading(number="2", text="Track Skills")
    assert classify("3. **Rest:** take breaks") == NumberedBoldHeading(number="3", text="Rest", rest="take breaks")


def test_classify_bullet_with_title_after_glyph_normalization() -> None:
    assert classify("• **Morning Focus:** You start early.") == BulletWithTitle(
        title="Morning Focus", rest="You start early."
    )
    assert classify("- **Energy**") == BulletWithTitle(title="Energy")


def test_classify_generic_lines() -> None:
    assert classify("- plain item") == GenericBullet(text="plain item")
    assert classify("3. step three") == NumberedLine(number="3", text="step three")


def test_unrecognized_syntax_is_plain_text() -> None:
    assert classify("##### too deep") == PlainText(text="##### too deep")
    assert classify("**Bold line**") == PlainText(text="**Bold line**")
    assert classify("---") == PlainText(text="---")
    assert classify("") == PlainText(text="")


def test_normalize_bullets_handles_misdecoded_glyph() -> None:
    assert normalize_bullets("â€¢ item") == "* item"
    assert normalize_bullets("•item") == "* item"
    assert normalize_bullets("no bullet") == "no bullet"


def test_strip_emphasis() -> None:
    assert strip_emphasis("Use **deep work** blocks") == "Use deep work blocks"
    assert strip_emphasis("**dangling") == "dangling"


def test_content_text_keeps_marker_only_lines() -> None:
    assert content_text(classify("**")) == "**"
    assert content_text(classify("**---**")) == "---"
    assert content_text(classify("3. **Plan** ahead")) == "3. Plan ahead"


def test_split_inline_marks_strong_spans() -> None:
    assert split_inline("Use **deep work** blocks") == [
        InlineSpan(text="Use "),
        InlineSpan(text="deep work", strong=True),
        InlineSpan(text=" blocks"),
    ]
    assert split_inline("") == []
