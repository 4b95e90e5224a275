from __future__ import annotations

import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, computed_field

_STRONG_SPLIT = re.compile(r"(\*\*[^*]+\*\*)")


class InlineSpan(BaseModel):
    text: str
    strong: bool = False


def split_inline(text: str) -> list[InlineSpan]:
    """Split display text on ``**bold**`` boundaries, keeping bold spans marked."""
    spans: list[InlineSpan] = []
    for part in _STRONG_SPLIT.split(text or ""):
        if not part:
            continue
        if part.startswith("**") and part.endswith("**") and len(part) > 4:
            spans.append(InlineSpan(text=part[2:-2], strong=True))
        else:
            spans.append(InlineSpan(text=part))
    return spans


# Insights profile


class BulletItem(BaseModel):
    kind: Literal["bullet"] = "bullet"
    title: str
    content: list[str] = Field(default_factory=list)


class TextItem(BaseModel):
    kind: Literal["text"] = "text"
    content: str


SectionItem = Annotated[Union[BulletItem, TextItem], Field(discriminator="kind")]


class Section(BaseModel):
    title: str
    items: list[SectionItem] = Field(default_factory=list)


# Recommendations profile


class RecItemSection(BaseModel):
    title: str | None = None
    content: list[str] = Field(default_factory=list)


class RecommendationItem(BaseModel):
    number: str
    title: str
    sections: list[RecItemSection] = Field(default_factory=list)


# Message profile, structured mode


class DataPoint(BaseModel):
    label: str
    value: str
    percent: str | None = None
    extra: str | None = None
    raw: str


class StructuredMessage(BaseModel):
    intro: str = ""
    observations: list[str] = Field(default_factory=list)
    data_points: list[DataPoint] = Field(default_factory=list)
    summary: str = ""

    @computed_field
    @property
    def intro_spans(self) -> list[InlineSpan]:
        return split_inline(self.intro)

    @computed_field
    @property
    def observation_spans(self) -> list[list[InlineSpan]]:
        return [split_inline(line) for line in self.observations]


# Message profile, fallback mode


class Heading(BaseModel):
    kind: Literal["heading"] = "heading"
    text: str


class BulletList(BaseModel):
    kind: Literal["bullet_list"] = "bullet_list"
    items: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def item_spans(self) -> list[list[InlineSpan]]:
        return [split_inline(item) for item in self.items]


class NumberedList(BaseModel):
    kind: Literal["numbered_list"] = "numbered_list"
    items: list[str] = Field(default_factory=list)

    @computed_field
    @property
    def item_spans(self) -> list[list[InlineSpan]]:
        return [split_inline(item) for item in self.items]


class Callout(BaseModel):
    kind: Literal["callout"] = "callout"
    text: str

    @computed_field
    @property
    def spans(self) -> list[InlineSpan]:
        return split_inline(self.text)


class Paragraph(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    text: str

    @computed_field
    @property
    def spans(self) -> list[InlineSpan]:
        return split_inline(self.text)


class Spacer(BaseModel):
    kind: Literal["spacer"] = "spacer"


FallbackElement = Annotated[
    Union[Heading, BulletList, NumberedList, Callout, Paragraph, Spacer],
    Field(discriminator="kind"),
]


class StructuredResult(BaseModel):
    kind: Literal["structured"] = "structured"
    message: StructuredMessage


class LinesResult(BaseModel):
    kind: Literal["lines"] = "lines"
    elements: list[FallbackElement] = Field(default_factory=list)


MessageResult = Annotated[Union[StructuredResult, LinesResult], Field(discriminator="kind")]


# Surface documents


class Stat(BaseModel):
    label: str
    value: int


class Notice(BaseModel):
    severity: str
    title: str
    message: str


class SurfaceDocument(BaseModel):
    surface_id: str
    title: str
    subtitle: str = ""
    profile: str
    sections: list[Section] = Field(default_factory=list)
    recommendations: list[RecommendationItem] = Field(default_factory=list)
    message: MessageResult | None = None
    raw_text: str | None = None
    empty_state: str | None = None
    focus_area: str | None = None
    stats: list[Stat] = Field(default_factory=list)
    notices: list[Notice] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)
