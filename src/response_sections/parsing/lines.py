"""Line classification shared by the insights, recommendations and message parsers.

Every parser works on trimmed lines and asks :func:`classify` which syntactic
role a line plays. Classification never fails: text that matches no structural
pattern comes back as :class:`PlainText`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Union

SEPARATOR = "---"

# "•" plus the form it takes when UTF-8 text is decoded as cp1252.
_BULLET_GLYPHS = re.compile(r"^(?:•|â€¢)\s*")

_HEADING = re.compile(r"^(#{1,4})\s+(?:(\d+)\.\s+)?(.+)$")
_NUMBERED_BOLD = re.compile(r"^(\d+)\.\s*\*\*(.+?):?\*\*:?\s*(.*)$")
_BULLET_WITH_TITLE = re.compile(r"^[*-]\s+\*\*(.+?):?\*\*:?\s*(.*)$")
_GENERIC_BULLET = re.compile(r"^[*-]\s+(.+)$")
_NUMBERED_LINE = re.compile(r"^(\d+)\.\s+(.+)$")
_EMPHASIS_PAIR = re.compile(r"\*\*(.+?)\*\*")


@dataclass(slots=True)
class Heading:
    level: int
    text: str
    number: str | None = None


@dataclass(slots=True)
class NumberedBoldHeading:
    number: str
    text: str
    rest: str = ""


@dataclass(slots=True)
class BulletWithTitle:
    title: str
    rest: str = ""


@dataclass(slots=True)
class GenericBullet:
    text: str


@dataclass(slots=True)
class NumberedLine:
    number: str
    text: str


@dataclass(slots=True)
class PlainText:
    text: str


LineKind = Union[Heading, NumberedBoldHeading, BulletWithTitle, GenericBullet, NumberedLine, PlainText]

# (predicate, action) pairs; both receive the parser state and the classified line.
Rule = tuple[Callable[[Any, LineKind], bool], Callable[[Any, LineKind], None]]


def normalize_bullets(line: str) -> str:
    if _BULLET_GLYPHS.match(line):
        return _BULLET_GLYPHS.sub("* ", line, count=1)
    return line


def strip_emphasis(text: str) -> str:
    """Remove ``**`` emphasis markers, keeping the emphasized text."""
    stripped = _EMPHASIS_PAIR.sub(r"\1", text)
    return stripped.replace("**", "").strip()


def split_lines(text: str | None) -> list[str]:
    return [raw.strip() for raw in (text or "").split("\n")]


def classify(line: str) -> LineKind:
    line = normalize_bullets(line.strip())

    match = _HEADING.match(line)
    if match:
        return Heading(level=len(match.group(1)), text=strip_emphasis(match.group(3)), number=match.group(2))

    match = _NUMBERED_BOLD.match(line)
    if match:
        return NumberedBoldHeading(
            number=match.group(1),
            text=strip_emphasis(match.group(2)),
            rest=match.group(3).strip(),
        )

    match = _BULLET_WITH_TITLE.match(line)
    if match:
        return BulletWithTitle(title=strip_emphasis(match.group(1)), rest=match.group(2).strip())

    match = _GENERIC_BULLET.match(line)
    if match:
        return GenericBullet(text=match.group(1))

    match = _NUMBERED_LINE.match(line)
    if match:
        return NumberedLine(number=match.group(1), text=match.group(2))

    return PlainText(text=line)


def content_text(kind: LineKind) -> str:
    """Body text for a line appended to a section, with emphasis stripped.

    Bullet markers are dropped; numbered lines keep their number so the
    enumeration survives in the body. A line made only of emphasis markers
    keeps its raw text.
    """
    if isinstance(kind, Heading):
        raw = kind.text
    elif isinstance(kind, NumberedBoldHeading):
        raw = " ".join(part for part in (f"{kind.number}. {kind.text}", kind.rest) if part)
    elif isinstance(kind, BulletWithTitle):
        raw = " ".join(part for part in (f"{kind.title}:", kind.rest) if part)
    elif isinstance(kind, NumberedLine):
        raw = f"{kind.number}. {kind.text}"
    else:
        raw = kind.text
    return strip_emphasis(raw) or raw.strip()


def is_separator(state: Any, kind: LineKind) -> bool:
    return isinstance(kind, PlainText) and kind.text == SEPARATOR


def always(state: Any, kind: LineKind) -> bool:
    return True


def discard(state: Any, kind: LineKind) -> None:
    return None


def apply_rules(rules: Sequence[Rule], state: Any, kind: LineKind) -> None:
    """Run the action of the first rule whose predicate accepts the line."""
    for predicate, action in rules:
        if predicate(state, kind):
            action(state, kind)
            return
