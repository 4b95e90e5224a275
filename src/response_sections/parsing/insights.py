from __future__ import annotations

from dataclasses import dataclass, field

from response_sections.models import BulletItem, Section, TextItem
from response_sections.parsing.lines import (
    SEPARATOR,
    BulletWithTitle,
    Heading,
    LineKind,
    NumberedBoldHeading,
    Rule,
    always,
    apply_rules,
    classify,
    content_text,
    discard,
    is_separator,
    split_lines,
    strip_emphasis,
)

IMPLICIT_SECTION_TITLE = "Summary"


@dataclass(slots=True)
class _InsightsState:
    sections: list[Section] = field(default_factory=list)
    current_section: Section | None = None
    current_subsection: BulletItem | None = None


def parse_insights(text: str | None) -> list[Section]:
    """Parse heading-delimited insight text into sections.

    Blank lines and ``---`` separators carry no structure and are dropped.
    Sections that end up without items are not returned.
    """
    state = _InsightsState()
    for line in split_lines(text):
        if not line:
            continue
        apply_rules(_RULES, state, classify(line))
    return [section for section in state.sections if section.items]


def ensure_open_section(state: _InsightsState) -> Section:
    if state.current_section is None:
        _start_section(state, IMPLICIT_SECTION_TITLE)
    return state.current_section


def _start_section(state: _InsightsState, title: str) -> Section:
    section = Section(title=title)
    state.sections.append(section)
    state.current_section = section
    state.current_subsection = None
    return section


def _is_heading(state: _InsightsState, kind: LineKind) -> bool:
    return isinstance(kind, (Heading, NumberedBoldHeading))


def _is_titled_bullet(state: _InsightsState, kind: LineKind) -> bool:
    return isinstance(kind, BulletWithTitle)


def _open_section(state: _InsightsState, kind: LineKind) -> None:
    section = _start_section(state, kind.text)
    if isinstance(kind, NumberedBoldHeading) and kind.rest:
        rest = strip_emphasis(kind.rest)
        if rest:
            section.items.append(TextItem(content=rest))


def _open_bullet(state: _InsightsState, kind: BulletWithTitle) -> None:
    section = ensure_open_section(state)
    item = BulletItem(title=kind.title)
    rest = strip_emphasis(kind.rest)
    if rest:
        item.content.append(rest)
    section.items.append(item)
    state.current_subsection = item


def _append_text(state: _InsightsState, kind: LineKind) -> None:
    text = content_text(kind)
    if not text or text == SEPARATOR:
        return
    if state.current_subsection is not None:
        state.current_subsection.content.append(text)
        return
    ensure_open_section(state).items.append(TextItem(content=text))


_RULES: list[Rule] = [
    (_is_heading, _open_section),
    (_is_titled_bullet, _open_bullet),
    (is_separator, discard),
    (always, _append_text),
]
