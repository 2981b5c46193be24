from typing import Optional

GENERIC_ERROR_MESSAGE = "Failed to generate itinerary. Please try again."


class ItineraryError(Exception):
    """Base for failures the request handler turns into an error response.

    ``status_code`` and ``client_message`` are what the caller sees; the
    exception text itself is only logged.
    """
    status_code = 500
    client_message = GENERIC_ERROR_MESSAGE


class Misconfigured(ItineraryError):
    client_message = "Itinerary service is not configured. Please try again later."


class UpstreamError(ItineraryError):
    client_message = "AI gateway error. Please try again later."

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class RateLimited(UpstreamError):
    status_code = 429
    client_message = "Rate limit exceeded. Please try again in a moment."


class QuotaExceeded(UpstreamError):
    status_code = 402
    client_message = "Service temporarily unavailable. Please try again later."


class UpstreamTimeout(UpstreamError):
    client_message = "The AI gateway took too long to respond. Please try again."


class EmptyCompletion(UpstreamError):
    pass


class ClientDisconnected(ItineraryError):
    status_code = 499
    client_message = "Client closed request."
