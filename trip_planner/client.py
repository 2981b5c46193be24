"""HTTP client and form helpers for the itinerary presentation layer."""

import logging
import os
import re
from datetime import date
from typing import Any, Dict, List

import requests

from trip_planner.itinerary.models import BudgetTier, Itinerary, TripRequest, itinerary_from_payload

logger = logging.getLogger(__name__)

API_BASE_URL = os.environ.get("API_BASE_URL", "http://localhost:8000")
ITINERARY_PATH = "/generate-itinerary"
REQUEST_TIMEOUT = 90
FALLBACK_ERROR_MESSAGE = "Failed to generate itinerary. Please try again."

INTEREST_OPTIONS = {
    "culture": "🏛️ Culture & History",
    "food": "🍽️ Food & Dining",
    "adventure": "🏔️ Adventure",
    "relaxation": "🧘 Relaxation",
    "nature": "🌿 Nature",
    "nightlife": "🌙 Nightlife",
    "shopping": "🛍️ Shopping",
    "photography": "📸 Photography",
}

BUDGET_OPTIONS = {
    BudgetTier.BUDGET: ("Budget", "Under $100/day"),
    BudgetTier.MODERATE: ("Moderate", "$100-250/day"),
    BudgetTier.LUXURY: ("Luxury", "$250+/day"),
}

_TIME_RE = re.compile(r"^\s*(\d{1,2})(?::\d{2})?\s*([AaPp][Mm])?")


class ItineraryRequestError(Exception):
    """Raised with a user-facing message when an itinerary could not be fetched."""


def validate_trip(trip: TripRequest) -> List[str]:
    """Return the problems that should block submission (empty when valid)."""
    problems = []
    if not trip.destination or not trip.destination.strip():
        problems.append("Please enter a destination.")
    if not trip.start_date:
        problems.append("Please choose a start date.")
    if not trip.end_date:
        problems.append("Please choose an end date.")
    if not trip.budget:
        problems.append("Please choose a budget.")
    if not trip.interests:
        problems.append("Please select at least one interest.")

    if trip.start_date and trip.end_date:
        try:
            if date.fromisoformat(trip.end_date) < date.fromisoformat(trip.start_date):
                problems.append("End date must be on or after the start date.")
        except ValueError:
            problems.append("Dates must be in YYYY-MM-DD format.")
    return problems


def request_itinerary(trip: TripRequest, base_url: str = API_BASE_URL,
                      timeout: float = REQUEST_TIMEOUT) -> Itinerary:
    """POST the trip to the itinerary service and return the itinerary variant."""
    try:
        resp = requests.post(f"{base_url}{ITINERARY_PATH}", json=trip.to_payload(), timeout=timeout)
    except requests.exceptions.ConnectionError as e:
        logger.error("Could not reach itinerary service at %s: %s", base_url, e)
        raise ItineraryRequestError("Could not reach the server. Is the API running?") from e
    except requests.exceptions.Timeout as e:
        raise ItineraryRequestError("The request timed out. Please try again.") from e
    except requests.exceptions.RequestException as e:
        raise ItineraryRequestError(FALLBACK_ERROR_MESSAGE) from e

    try:
        data: Dict[str, Any] = resp.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    if resp.status_code != 200 or data.get("error"):
        message = data.get("error") or FALLBACK_ERROR_MESSAGE
        logger.warning("Itinerary service returned %d: %s", resp.status_code, message)
        raise ItineraryRequestError(message)

    itinerary = data.get("itinerary")
    if not isinstance(itinerary, dict):
        raise ItineraryRequestError(FALLBACK_ERROR_MESSAGE)
    return itinerary_from_payload(itinerary)


def time_of_day(time_text: str) -> str:
    """Bucket a free-form activity time into morning, afternoon or evening."""
    match = _TIME_RE.match(time_text or "")
    if not match:
        return "morning"
    hour = int(match.group(1))
    meridiem = (match.group(2) or "").lower()
    if meridiem == "pm" and hour < 12:
        hour += 12
    elif meridiem == "am" and hour == 12:
        hour = 0
    if hour < 12:
        return "morning"
    if hour < 18:
        return "afternoon"
    return "evening"
