from __future__ import annotations

import logging
from dataclasses import dataclass, field

from response_sections.models import RecItemSection, RecommendationItem
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

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _RecommendationsState:
    items: list[RecommendationItem] = field(default_factory=list)
    current_item: RecommendationItem | None = None
    current_section: RecItemSection | None = None
    skipped: int = 0


def parse_recommendations(text: str | None) -> list[RecommendationItem]:
    """Parse numbered recommendation text into items.

    An item starts on ``1. **Title**`` (optionally after ``#`` markers) or on
    ``### 1. Title``. Text before the first item belongs to no item and is
    skipped. An empty result means nothing was recognized; callers show the raw
    text instead.
    """
    state = _RecommendationsState()
    for line in split_lines(text):
        if not line:
            continue
        apply_rules(_RULES, state, classify(line))
    _commit_item(state)
    if state.skipped:
        logger.debug("Skipped %d line(s) outside any recommendation item", state.skipped)
    return state.items


def _starts_item(state: _RecommendationsState, kind: LineKind) -> bool:
    if isinstance(kind, NumberedBoldHeading):
        return True
    return isinstance(kind, Heading) and kind.number is not None


def _no_open_item(state: _RecommendationsState, kind: LineKind) -> bool:
    return state.current_item is None


def _is_titled_bullet(state: _RecommendationsState, kind: LineKind) -> bool:
    return isinstance(kind, BulletWithTitle)


def _commit_item(state: _RecommendationsState) -> None:
    if state.current_item is not None:
        state.items.append(state.current_item)
    state.current_item = None
    state.current_section = None


def _open_item(state: _RecommendationsState, kind: LineKind) -> None:
    _commit_item(state)
    item = RecommendationItem(number=kind.number, title=kind.text)
    rest = strip_emphasis(kind.rest) if isinstance(kind, NumberedBoldHeading) else ""
    if rest:
        item.sections.append(RecItemSection(content=[rest]))
    state.current_item = item


def _skip(state: _RecommendationsState, kind: LineKind) -> None:
    state.skipped += 1


def _open_titled_section(state: _RecommendationsState, kind: BulletWithTitle) -> None:
    section = RecItemSection(title=kind.title)
    rest = strip_emphasis(kind.rest)
    if rest:
        section.content.append(rest)
    state.current_item.sections.append(section)
    state.current_section = section


def _append_text(state: _RecommendationsState, kind: LineKind) -> None:
    text = content_text(kind)
    if not text or text == SEPARATOR:
        return
    if state.current_section is not None:
        state.current_section.content.append(text)
        return
    state.current_item.sections.append(RecItemSection(content=[text]))


_RULES: list[Rule] = [
    (_starts_item, _open_item),
    (is_separator, discard),
    (_no_open_item, _skip),
    (_is_titled_bullet, _open_titled_section),
    (always, _append_text),
]
