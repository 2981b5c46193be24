from fastapi import Request

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


async def add_cors_headers(request: Request, call_next):
    """Stamp the CORS header set on every response, success or error."""
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response
