import json

import pytest

from trip_planner.itinerary import RawItinerary, StructuredItinerary, extract_itinerary
from trip_planner.itinerary.extractor import find_json_span

from tests.conftest import KYOTO_ITINERARY


def test_extracts_object_surrounded_by_noise():
    text = "noise " + json.dumps(KYOTO_ITINERARY) + " noise"
    result = extract_itinerary(text)

    assert isinstance(result, StructuredItinerary)
    assert result.data == KYOTO_ITINERARY


def test_extracts_object_from_markdown_fence():
    text = "Here is your plan:\n```json\n" + json.dumps(KYOTO_ITINERARY, indent=2) + "\n```\nEnjoy!"
    result = extract_itinerary(text)

    assert isinstance(result, StructuredItinerary)
    assert result.to_payload() == KYOTO_ITINERARY


def test_passes_unexpected_shape_through():
    result = extract_itinerary('{"days": "not a list", "extra": 1}')
    assert result == StructuredItinerary(data={"days": "not a list", "extra": 1})


@pytest.mark.parametrize(
    "text",
    [
        "Day 1: wander Gion. Day 2: Arashiyama bamboo grove.",
        "",
        "a closing brace } before an opening one {",
        '{"summary": "unterminated"',
        '{"summary": "ok"} and then {"more": "json"}',
        "{not json at all}",
        '{"cost": NaN}',
    ],
)
def test_falls_back_to_raw_text(text):
    result = extract_itinerary(text)

    assert isinstance(result, RawItinerary)
    assert result.raw == text
    assert result.to_payload() == {"raw": text}


def test_trailing_prose_with_braces_degrades_to_raw():
    # First '{' to last '}' swallows the trailing aside.
    text = json.dumps({"summary": "x"}) + " (prices in {USD})"
    assert isinstance(extract_itinerary(text), RawItinerary)


def test_find_json_span_bounds():
    assert find_json_span("xx {a} yy {b} zz") == "{a} yy {b}"
    assert find_json_span("no braces") is None
    assert find_json_span("}{") is None
