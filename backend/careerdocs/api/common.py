from typing import Dict, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from ..config import cors_origins
from ..errors import TranslatedError
from ..schemas import ErrorOut

ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type"

ERROR_RESPONSES = {
    402: {"model": ErrorOut, "description": "AI credits depleted"},
    429: {"model": ErrorOut, "description": "Rate limit exceeded"},
    500: {"model": ErrorOut, "description": "Gateway or internal failure"},
}


def cors_headers(origin: Optional[str] = None) -> Dict[str, str]:
    """CORS headers for replies built by hand, honouring ``CORS_ORIGINS``."""
    origins = cors_origins()
    headers = {"Access-Control-Allow-Headers": ALLOWED_HEADERS}
    if "*" in origins:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin and origin in origins:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers


def preflight_response(request: Request) -> Response:
    return Response(status_code=200, headers=cors_headers(request.headers.get("origin")))


def error_response(translated: TranslatedError, request: Request) -> JSONResponse:
    return JSONResponse(
        translated.payload,
        status_code=translated.http_status,
        headers=cors_headers(request.headers.get("origin")),
    )
