from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BudgetTier(str, Enum):
    BUDGET = "budget"
    MODERATE = "moderate"
    LUXURY = "luxury"


class TripRequest(BaseModel):
    """Trip parameters as posted by the planner form.

    Every field is optional: the form validates before posting, and the
    model can still produce something useful from a partial request.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    destination: Optional[str] = None
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    budget: Optional[str] = Field(None, description="One of the BudgetTier values; not enforced.")
    interests: List[str] = Field(default_factory=list)

    @field_validator("destination", "start_date", "end_date", "budget", mode="before")
    @classmethod
    def stringify_scalars(cls, value: Any) -> Optional[str]:
        # Whatever was posted goes into the prompt as text.
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("interests", mode="before")
    @classmethod
    def stringify_interests(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, (str, int, float, bool, dict)):
            value = [value]
        return ["" if v is None else v if isinstance(v, str) else str(v) for v in value]

    @classmethod
    def from_payload(cls, payload: Any) -> "TripRequest":
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise ValueError(f"Expected a JSON object, got {type(payload).__name__}")
        return cls.model_validate(payload)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# Documented itinerary shape. The model is asked for this, but nothing
# guarantees it; only the presentation layer coerces into these.

class Activity(BaseModel):
    model_config = ConfigDict(extra="allow")

    time: str = Field("", description="Free-form clock time, e.g. '9:00 AM'.")
    activity: str = ""
    description: str = ""
    tip: Optional[str] = None
    estimatedCost: Optional[str] = None


class Day(BaseModel):
    model_config = ConfigDict(extra="allow")

    day: int = Field(..., ge=1)
    title: str = ""
    activities: List[Activity] = Field(default_factory=list)


class BudgetBreakdown(BaseModel):
    model_config = ConfigDict(extra="allow")

    accommodation: str = ""
    food: str = ""
    activities: str = ""
    transportation: str = ""


class ItineraryPlan(BaseModel):
    model_config = ConfigDict(extra="allow")

    summary: str = ""
    days: List[Day] = Field(default_factory=list)
    packingTips: List[str] = Field(default_factory=list)
    budgetBreakdown: Optional[BudgetBreakdown] = None


@dataclass(frozen=True)
class StructuredItinerary:
    """Parsed JSON object from the model, passed through unvalidated."""
    data: Dict[str, Any]

    def to_payload(self) -> Dict[str, Any]:
        return self.data

    def plan(self) -> ItineraryPlan:
        """Coerce into the documented shape; raises pydantic.ValidationError."""
        return ItineraryPlan.model_validate(self.data)


@dataclass(frozen=True)
class RawItinerary:
    """Fallback variant: the model's text, unchanged."""
    raw: str

    def to_payload(self) -> Dict[str, Any]:
        return {"raw": self.raw}


Itinerary = Union[StructuredItinerary, RawItinerary]


def itinerary_from_payload(payload: Dict[str, Any]) -> Itinerary:
    """Rebuild the variant from its wire form.

    The wire form is ambiguous: a model reply that parsed to exactly
    ``{"raw": "<text>"}`` is indistinguishable from the fallback and comes
    back as RawItinerary.
    """
    if set(payload) == {"raw"} and isinstance(payload["raw"], str):
        return RawItinerary(raw=payload["raw"])
    return StructuredItinerary(data=payload)
