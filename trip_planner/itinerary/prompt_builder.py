from typing import Optional, Tuple

from trip_planner.itinerary.models import TripRequest
from trip_planner.prompts.itinerary_prompt import SYSTEM_PROMPT, USER_PROMPT


def _text(value: Optional[str]) -> str:
    return value if value is not None else ""


def build_prompts(trip: TripRequest) -> Tuple[str, str]:
    """Return (system_prompt, user_prompt) for a trip request.

    Missing fields render as empty strings rather than failing.
    """
    user_prompt = USER_PROMPT.format(
        destination=_text(trip.destination),
        start_date=_text(trip.start_date),
        end_date=_text(trip.end_date),
        budget=_text(trip.budget),
        interests=", ".join(trip.interests),
    )
    return SYSTEM_PROMPT, user_prompt
