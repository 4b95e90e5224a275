"""Chat-style assistant messages.

A message is rendered in exactly one of two modes. The structured mode
recognizes the "intro / key observations / data points / summary" layout the
assistant is prompted to produce and extracts labelled metrics from it. Any
message without those anchors goes through the generic line renderer.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable

from response_sections.models import (
    BulletList,
    Callout,
    DataPoint,
    FallbackElement,
    Heading,
    LinesResult,
    MessageResult,
    NumberedList,
    Paragraph,
    Spacer,
    StructuredMessage,
    StructuredResult,
)
from response_sections.parsing.lines import apply_rules, normalize_bullets, split_lines, strip_emphasis

logger = logging.getLogger(__name__)

CALLOUT_GLYPHS = ("⚠", "💡", "✨", "🎯", "📌", "🔍")

_GREETING = re.compile(r"^(?:hi|hello|hey|hiya|greetings)\b[,!]?\s*", re.IGNORECASE)
_OBSERVATIONS_ANCHOR = re.compile(r"^key observations?\b[^:]*:$", re.IGNORECASE)
_DATA_ANCHOR = re.compile(r"^(?:specific data points?|key metrics?)\b[^:]*:$", re.IGNORECASE)
_SUMMARY_ANCHOR = re.compile(r"^(?:in\s+summary\b|summary\s*(?::|$))", re.IGNORECASE)
_SUMMARY_PREFIX = re.compile(r"^(?:in\s+summary|summary)\s*[:,]?\s*", re.IGNORECASE)
_BASED_ON = re.compile(r"^based on\b", re.IGNORECASE)
_LIST_MARKER = re.compile(r"^(?:[*-]\s+|(?:•|â€¢)\s*)")
_PERCENT = re.compile(r"[+-]?\d+(?:\.\d+)?%")
_PARENTHETICAL = re.compile(r"\(([^)]*)\)")
_TRAILING_PARENTHETICAL = re.compile(r"\s*\([^)]*\)\s*$")

_HASH_HEADING = re.compile(r"^#{1,3}\s+(.+)")
_BOLD_HEADING = re.compile(r"^\*\*(.+?)\*\*:?\s*$")
_BULLET = re.compile(r"^([*-])\s+(.+)")
_NUMBERED = re.compile(r"^\d+\.\s+(.+)")


def parse_message(text: str | None) -> MessageResult:
    structured = try_parse_structured(text)
    if structured is not None:
        return StructuredResult(message=structured)
    logger.debug("No structured anchors found, using line renderer")
    return LinesResult(elements=parse_fallback(text))


# Structured mode


def try_parse_structured(text: str | None) -> StructuredMessage | None:
    """Return the structured reading of ``text`` or ``None`` when no anchor line exists."""
    lines = [line for line in split_lines(text) if line]
    lines = _strip_greeting(lines)
    anchor_texts = [_anchor_text(line) for line in lines]

    idx_obs = _find_anchor(anchor_texts, _OBSERVATIONS_ANCHOR)
    idx_data = _find_anchor(anchor_texts, _DATA_ANCHOR)
    idx_summary = _find_anchor(anchor_texts, _SUMMARY_ANCHOR)
    present = [idx for idx in (idx_obs, idx_data, idx_summary) if idx >= 0]
    if not present:
        return None

    intro = " ".join(lines[: min(present)])
    intro = re.sub(r":\s*$", "", intro).strip()
    intro = _BASED_ON.sub("Based on", intro)

    observations: list[str] = []
    if idx_obs >= 0:
        end = _next_anchor(len(lines), idx_data, idx_summary)
        observations = [item for item in map(normalize_list_line, lines[idx_obs + 1 : end]) if item]

    data_points: list[DataPoint] = []
    if idx_data >= 0:
        end = _next_anchor(len(lines), idx_summary)
        data_points = [parse_data_point(item) for item in map(normalize_list_line, lines[idx_data + 1 : end]) if item]

    summary = ""
    if idx_summary >= 0:
        head = _SUMMARY_PREFIX.sub("", anchor_texts[idx_summary])
        summary = " ".join(part for part in [head, *lines[idx_summary + 1 :]] if part).strip()

    return StructuredMessage(intro=intro, observations=observations, data_points=data_points, summary=summary)


def normalize_list_line(line: str) -> str:
    return _LIST_MARKER.sub("", line.strip(), count=1).strip()


def parse_data_point(line: str) -> DataPoint:
    """Split ``Label: Value (Extra) +N%`` into its parts.

    ``percent`` and ``extra`` are extracted independently, so a parenthetical
    holding only a percentage fills both.
    """
    label, separator, value_str = strip_emphasis(line).partition(": ")
    if not separator:
        value_str = ""
    percent = _PERCENT.search(value_str)
    extra = _PARENTHETICAL.search(value_str)
    return DataPoint(
        label=label.strip(),
        value=_TRAILING_PARENTHETICAL.sub("", value_str).strip(),
        percent=percent.group(0) if percent else None,
        extra=(extra.group(1).strip() or None) if extra else None,
        raw=line,
    )


def _strip_greeting(lines: list[str]) -> list[str]:
    remaining = list(lines)
    while remaining and _GREETING.match(remaining[0]):
        rest = _GREETING.sub("", remaining[0], count=1).strip()
        if rest:
            remaining[0] = rest
        else:
            remaining.pop(0)
    return remaining


def _anchor_text(line: str) -> str:
    return strip_emphasis(line.lstrip("#").strip())


def _find_anchor(anchor_texts: list[str], pattern: re.Pattern[str]) -> int:
    return next((idx for idx, text in enumerate(anchor_texts) if pattern.match(text)), -1)


def _next_anchor(default: int, *candidates: int) -> int:
    return next((idx for idx in candidates if idx >= 0), default)


# Fallback mode


@dataclass(slots=True)
class _FallbackState:
    elements: list[FallbackElement] = field(default_factory=list)
    list_buffer: list[str] = field(default_factory=list)
    list_type: str | None = None


def parse_fallback(text: str | None) -> list[FallbackElement]:
    """Tokenize ``text`` line by line into headings, lists, callouts and paragraphs.

    Consecutive bullet or numbered lines are coalesced into one list; a blank
    line, a heading, any other line or a change of list marker closes it.
    """
    if not text:
        return []
    state = _FallbackState()
    for line in split_lines(text):
        apply_rules(_FALLBACK_RULES, state, normalize_bullets(line))
    _flush_list(state)
    return state.elements


def _flush_list(state: _FallbackState) -> None:
    if state.list_type and state.list_buffer:
        if state.list_type == "bullet":
            state.elements.append(BulletList(items=state.list_buffer))
        else:
            state.elements.append(NumberedList(items=state.list_buffer))
    state.list_buffer = []
    state.list_type = None


def _push_list_item(state: _FallbackState, list_type: str, item: str) -> None:
    if state.list_type and state.list_type != list_type:
        _flush_list(state)
    state.list_type = list_type
    state.list_buffer.append(item)


def _heading_text(line: str) -> str:
    match = _HASH_HEADING.match(line) or _BOLD_HEADING.match(line)
    heading = re.sub(r"^\*\*", "", match.group(1))
    heading = re.sub(r"\*\*:?:?\s*$", "", heading)
    return strip_emphasis(heading).rstrip(":").strip()


def _on_blank(state: _FallbackState, line: str) -> None:
    _flush_list(state)
    state.elements.append(Spacer())


def _on_heading(state: _FallbackState, line: str) -> None:
    _flush_list(state)
    state.elements.append(Heading(text=_heading_text(line)))


def _on_bullet(state: _FallbackState, line: str) -> None:
    _push_list_item(state, "bullet", _BULLET.match(line).group(2))


def _on_numbered(state: _FallbackState, line: str) -> None:
    _push_list_item(state, "numbered", _NUMBERED.match(line).group(1))


def _on_callout(state: _FallbackState, line: str) -> None:
    _flush_list(state)
    state.elements.append(Callout(text=line))


def _on_paragraph(state: _FallbackState, line: str) -> None:
    _flush_list(state)
    state.elements.append(Paragraph(text=line))


_FALLBACK_RULES: list[tuple[Callable[[_FallbackState, str], bool], Callable[[_FallbackState, str], None]]] = [
    (lambda state, line: not line, _on_blank),
    (lambda state, line: bool(_HASH_HEADING.match(line) or _BOLD_HEADING.match(line)), _on_heading),
    (lambda state, line: bool(_BULLET.match(line)), _on_bullet),
    (lambda state, line: bool(_NUMBERED.match(line)), _on_numbered),
    (lambda state, line: line.startswith(CALLOUT_GLYPHS), _on_callout),
    (lambda state, line: True, _on_paragraph),
]
