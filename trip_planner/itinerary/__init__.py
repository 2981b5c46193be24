from trip_planner.itinerary.extractor import extract_itinerary
from trip_planner.itinerary.models import (
    Itinerary,
    RawItinerary,
    StructuredItinerary,
    TripRequest,
    itinerary_from_payload,
)
from trip_planner.itinerary.prompt_builder import build_prompts

__all__ = [
    "build_prompts",
    "extract_itinerary",
    "itinerary_from_payload",
    "Itinerary",
    "RawItinerary",
    "StructuredItinerary",
    "TripRequest",
]
