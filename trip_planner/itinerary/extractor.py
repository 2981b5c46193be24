import json
import logging
from typing import Optional

from trip_planner.itinerary.models import Itinerary, RawItinerary, StructuredItinerary

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    # NaN / Infinity are not JSON and cannot be sent back to the client.
    raise ValueError(f"Non-standard JSON constant: {name}")


def find_json_span(text: str) -> Optional[str]:
    """Return the substring from the first '{' to the last '}', or None."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start:end + 1]


def extract_itinerary(text: str) -> Itinerary:
    """Best-effort extraction of the itinerary object from model output.

    Never raises: anything that does not parse to a JSON object comes back as
    the raw variant carrying the original text.
    """
    span = find_json_span(text)
    if span is None:
        logger.warning("No JSON object found in completion (%d chars), returning raw text", len(text))
        return RawItinerary(raw=text)

    try:
        parsed = json.loads(span, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        logger.warning("Failed to parse itinerary JSON (%s), returning raw text", e)
        return RawItinerary(raw=text)

    if not isinstance(parsed, dict):
        logger.warning("Itinerary JSON is a %s, not an object; returning raw text", type(parsed).__name__)
        return RawItinerary(raw=text)

    return StructuredItinerary(data=parsed)
