import logging

from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

logger = logging.getLogger(__name__)

NO_TEXT_PROVIDED = "No transcription text provided."


class ClientInputError(Exception):
    """Request rejected before any provider call (missing file, unsupported format, empty text)."""


class ProviderError(Exception):
    """An upstream provider call failed or returned a non-success response."""


def as_http_400(e: ClientInputError) -> HTTPException:
    """Return a 400 HTTPException carrying the client input error message."""
    return HTTPException(status_code=400, detail=str(e))


def as_http_500(e: Exception, message: str = "Internal server error", request_id: str = "unknown") -> HTTPException:
    """Log exception and return a generic 500 HTTPException (no provider details leaked)."""
    logger.error("provider_call_failed request_id=%s: %s", request_id, e, exc_info=e)
    return HTTPException(status_code=500, detail=message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed request bodies as 400 {"error": msg}. A bad /summarize body gets the same message as empty text."""
    if request.url.path == "/summarize":
        message = NO_TEXT_PROVIDED
    else:
        first = exc.errors()[0] if exc.errors() else {}
        message = f"Invalid request: {first.get('msg', 'malformed body')}"
    return JSONResponse(status_code=400, content={"error": message})


async def error_envelope_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTPException as {"error": detail} instead of FastAPI's {"detail": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )
