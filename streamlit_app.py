from datetime import date, timedelta

import streamlit as st
from pydantic import ValidationError

from trip_planner.client import (
    API_BASE_URL,
    BUDGET_OPTIONS,
    INTEREST_OPTIONS,
    ItineraryRequestError,
    request_itinerary,
    time_of_day,
    validate_trip,
)
from trip_planner.itinerary import RawItinerary, StructuredItinerary, TripRequest

st.set_page_config(page_title="AI Trip Planner", layout="centered")

# Initialise session state
if "itinerary" not in st.session_state:
    st.session_state.itinerary = None
if "destination" not in st.session_state:
    st.session_state.destination = ""

# ── Itinerary rendering ──────────────────────────────────────────────────────

_TIME_ICONS = {
    "morning": ":sunny:",
    "afternoon": ":city_sunset:",
    "evening": ":crescent_moon:",
}


def _render_activity(activity):
    """Render one activity in a day's timeline."""
    icon = _TIME_ICONS[time_of_day(activity.time)]
    header = f"{icon} **{activity.time}** &mdash; {activity.activity}"
    if activity.estimatedCost:
        header += f"  \n:moneybag: {activity.estimatedCost}"
    st.markdown(header)
    if activity.description:
        st.caption(activity.description)
    if activity.tip:
        st.info(activity.tip, icon="💡")


def _render_structured(itinerary: StructuredItinerary, destination: str):
    try:
        plan = itinerary.plan()
    except ValidationError:
        # Parsed JSON that doesn't follow the documented shape.
        st.subheader(f"Your {destination} Itinerary")
        st.json(itinerary.data)
        return

    st.subheader(f"Your {destination} Adventure")
    if plan.summary:
        st.write(plan.summary)

    for day in plan.days:
        with st.expander(f"Day {day.day}: {day.title}", expanded=True):
            for i, activity in enumerate(day.activities):
                if i > 0:
                    st.divider()
                _render_activity(activity)

    if plan.budgetBreakdown:
        st.markdown("### :dollar: Estimated Budget")
        breakdown = plan.budgetBreakdown.model_dump()
        cols = st.columns(len(breakdown))
        for col, (key, value) in zip(cols, breakdown.items()):
            col.metric(key.capitalize(), value or "-")

    if plan.packingTips:
        st.markdown("### :luggage: Packing Tips")
        st.markdown("\n".join(f"{i}. {tip}" for i, tip in enumerate(plan.packingTips, start=1)))


def _render_raw(itinerary: RawItinerary, destination: str):
    st.subheader(f"Your {destination} Itinerary")
    st.text(itinerary.raw)


# ── Result view ──────────────────────────────────────────────────────────────

if st.session_state.itinerary is not None:
    if st.button("← Plan Another Trip"):
        st.session_state.itinerary = None
        st.rerun()

    itinerary = st.session_state.itinerary
    if isinstance(itinerary, RawItinerary):
        _render_raw(itinerary, st.session_state.destination)
    else:
        _render_structured(itinerary, st.session_state.destination)
    st.stop()

# ── Planner form ─────────────────────────────────────────────────────────────

st.title("Your Dream Trip, Perfectly Planned")
st.caption("Tell me your destination, dates, budget, and interests. I'll craft a personalized itinerary just for you.")

with st.form("trip_form"):
    destination = st.text_input(":round_pushpin: Where do you want to go?", placeholder="e.g., Tokyo, Japan")
    col_start, col_end = st.columns(2)
    start_date = col_start.date_input(":calendar: Start Date", value=date.today() + timedelta(days=30))
    end_date = col_end.date_input(":calendar: End Date", value=date.today() + timedelta(days=33))
    budget = st.radio(
        ":moneybag: What's your budget?",
        options=list(BUDGET_OPTIONS),
        format_func=lambda tier: "{} ({})".format(*BUDGET_OPTIONS[tier]),
        horizontal=True,
    )
    interests = st.multiselect(
        ":heart: What are you interested in?",
        options=list(INTEREST_OPTIONS),
        format_func=INTEREST_OPTIONS.get,
    )
    submitted = st.form_submit_button("✨ Generate My Itinerary", type="primary")

if submitted:
    trip = TripRequest(
        destination=destination.strip(),
        startDate=start_date.isoformat() if start_date else None,
        endDate=end_date.isoformat() if end_date else None,
        budget=budget.value if budget else None,
        interests=interests,
    )
    problems = validate_trip(trip)
    if problems:
        for problem in problems:
            st.warning(problem)
    else:
        with st.spinner("Creating your perfect trip…"):
            try:
                result = request_itinerary(trip, base_url=API_BASE_URL)
            except ItineraryRequestError as e:
                st.error(f"Oops! Something went wrong: {e}")
                result = None
        if result is not None:
            st.session_state.itinerary = result
            st.session_state.destination = trip.destination
            st.rerun()

