import pytest

from response_sections.models import RecItemSection, RecommendationItem
from response_sections.parsing.recommendations import parse_recommendations


def test_numbered_items_with_titled_and_untitled_sections() -> None:
    text = (
        "1. **Improve Focus**\n"
        "* **Action:** Block calendar mornings.\n"
        "Also silence notifications.\n"
        "2. **Track Skills**\n"
        "Review weekly."
    )
    assert parse_recommendations(text) == [
        RecommendationItem(
            number="1",
            title="Improve Focus",
            sections=[
                RecItemSection(
                    title="Action",
                    content=["Block calendar mornings.", "Also silence notifications."],
                )
            ],
        ),
        RecommendationItem(
            number="2",
            title="Track Skills",
            sections=[RecItemSection(title=None, content=["Review weekly."])],
        ),
    ]


def test_heading_prefixed_items() -> None:
    items = parse_recommendations("### 1. **Sleep Earlier**\n### 2. Plan Ahead\nUse Sunday evenings.")
    assert [(item.number, item.title) for item in items] == [("1", "Sleep Earlier"), ("2", "Plan Ahead")]
    assert items[1].sections == [RecItemSection(content=["Use Sunday evenings."])]


def test_untitled_lines_each_form_their_own_section() -> None:
    items = parse_recommendations("1. **Hydrate**\nDrink water.\nKeep a bottle nearby.")
    assert items[0].sections == [
        RecItemSection(content=["Drink water."]),
        RecItemSection(content=["Keep a bottle nearby."]),
    ]


def test_trailing_text_on_item_line_becomes_untitled_section() -> None:
    items = parse_recommendations("1. **Stretch:** every hour")
    assert items == [
        RecommendationItem(number="1", title="Stretch", sections=[RecItemSection(content=["every hour"])])
    ]


def test_titled_section_without_rest_collects_following_lines() -> None:
    items = parse_recommendations("1. **Skills**\n* **Why**\n- Python is **core** to your role")
    assert items[0].sections == [RecItemSection(title="Why", content=["Python is core to your role"])]


def test_preamble_and_separators_are_ignored() -> None:
    text = "Here are my suggestions:\n---\n1. **Batch Email**\n---\n* **How:** twice a day\n---"
    items = parse_recommendations(text)
    assert items == [
        RecommendationItem(
            number="1",
            title="Batch Email",
            sections=[RecItemSection(title="How", content=["twice a day"])],
        )
    ]
    assert "---" not in str([item.model_dump() for item in items])


def test_bold_separator_is_discarded() -> None:
    items = parse_recommendations("1. **Batch Email**\n**---**\ntwice a day")
    assert items[0].sections == [RecItemSection(content=["twice a day"])]


def test_line_of_only_emphasis_markers_is_kept_verbatim() -> None:
    items = parse_recommendations("1. **Batch Email**\n**\n* **How:** twice a day\n**")
    assert items[0].sections == [
        RecItemSection(content=["**"]),
        RecItemSection(title="How", content=["twice a day", "**"]),
    ]


def test_text_without_items_yields_empty_list() -> None:
    assert parse_recommendations("Keep up the good work!\n- nothing numbered here") == []


@pytest.mark.parametrize("text", ["", None, "\n\n", "\x00\x01", "1.", "### 1.", "* **x**"])
def test_parser_is_total(text) -> None:  # noqa: ANN001
    assert isinstance(parse_recommendations(text), list)
