import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from trip_planner.config import Settings, load_settings
from trip_planner.errors import GENERIC_ERROR_MESSAGE, ClientDisconnected, ItineraryError, Misconfigured, UpstreamError
from trip_planner.itinerary import TripRequest, build_prompts, extract_itinerary
from trip_planner.middleware import Stage, add_cors_headers, advance, format_stages, reset_stages
from trip_planner.tools.external.completion_gateway import CompletionClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)


async def _wait_for_disconnect(request: Request) -> None:
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return


async def _complete_unless_disconnected(request: Request, client: CompletionClient,
                                        system_prompt: str, user_prompt: str) -> str:
    """Run the completion, abandoning it if the caller goes away first."""
    completion = asyncio.ensure_future(client.complete(system_prompt, user_prompt))
    watcher = asyncio.ensure_future(_wait_for_disconnect(request))
    try:
        done, _ = await asyncio.wait({completion, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for task in (completion, watcher):
            if not task.done():
                task.cancel()
    if completion in done:
        return completion.result()
    raise ClientDisconnected("Client disconnected before the completion finished")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(settings: Optional[Settings] = None,
               transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """Build the itinerary service.

    ``settings`` defaults to the environment; ``transport`` lets tests stub
    the completion gateway.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        resolved = settings or load_settings()
        app.state.completion_client = None
        app.state.startup_error = None
        try:
            app.state.completion_client = CompletionClient(resolved, transport=transport)
        except Misconfigured as e:
            logger.error("Itinerary service misconfigured: %s. Every itinerary request will fail.", e)
            app.state.startup_error = e
        logger.info("Itinerary service started (gateway=%s, model=%s)", resolved.gateway_url, resolved.model)
        yield
        if app.state.completion_client is not None:
            await app.state.completion_client.aclose()
        logger.info("Itinerary service shutting down")

    app = FastAPI(title="Trip Itinerary Planner", lifespan=lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        start = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000
        logger.info("%s %s completed %d in %.2fms", request.method, request.url.path, response.status_code, duration_ms)
        return response

    # Registered last so it wraps everything, including the logging middleware.
    app.middleware("http")(add_cors_headers)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.options("/{path:path}")
    async def preflight(path: str):
        return Response(status_code=200)

    @app.post("/{path:path}")
    async def generate_itinerary(request: Request, path: str):
        reset_stages()
        try:
            trip = TripRequest.from_payload(await request.json())
            logger.info("Generating itinerary for: %s", trip.to_payload())

            client = request.app.state.completion_client
            if client is None:
                raise Misconfigured(str(request.app.state.startup_error or "Completion client is not available"))

            system_prompt, user_prompt = build_prompts(trip)
            advance(Stage.PROMPTED)

            advance(Stage.COMPLETING)
            content = await _complete_unless_disconnected(request, client, system_prompt, user_prompt)

            itinerary = extract_itinerary(content)
            advance(Stage.EXTRACTED)
        except UpstreamError as e:
            advance(Stage.RESPONDED)
            logger.error("Error generating itinerary: %s (upstream status=%s) [%s]", e, e.status, format_stages())
            return _error_response(e.status_code, e.client_message)
        except ClientDisconnected as e:
            advance(Stage.RESPONDED)
            logger.warning("%s, outbound call abandoned [%s]", e, format_stages())
            return _error_response(e.status_code, e.client_message)
        except ItineraryError as e:
            advance(Stage.RESPONDED)
            logger.error("Error generating itinerary: %s [%s]", e, format_stages())
            return _error_response(e.status_code, e.client_message)
        except Exception:
            advance(Stage.RESPONDED)
            logger.exception("Unexpected error generating itinerary [%s]", format_stages())
            return _error_response(500, GENERIC_ERROR_MESSAGE)

        advance(Stage.RESPONDED)
        logger.info("Successfully generated %s itinerary [%s]", type(itinerary).__name__, format_stages())
        return JSONResponse(content={"itinerary": itinerary.to_payload()})

    return app


app = create_app()
