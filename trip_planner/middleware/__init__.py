from trip_planner.middleware.cors import CORS_HEADERS, add_cors_headers
from trip_planner.middleware.stage_tracker import Stage, advance, format_stages, get_stages, reset_stages

__all__ = [
    "CORS_HEADERS",
    "add_cors_headers",
    "Stage",
    "advance",
    "format_stages",
    "get_stages",
    "reset_stages",
]
