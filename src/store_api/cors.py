"""Cross-origin headers for every response, including preflight and errors."""
from fastapi import Request, Response, status

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,DELETE,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
}


async def add_cors_headers(request: Request, call_next):
    # Preflight is answered for any path, matched or not
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)

    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response
