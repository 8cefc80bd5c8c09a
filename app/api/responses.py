import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core import schemas
from app.core.errors import GatewayError, NotFound

logger = logging.getLogger(__name__)

ALLOW_METHODS = "GET,POST,OPTIONS"
ALLOW_HEADERS = "Content-Type"


class CorsPolicy:
    """
    Computes the CORS headers sent on every response.

    Args:
        allowed_origins: Comma separated list, "*" allows every origin.

    Example:
        policy = CorsPolicy("https://client.example")
        policy.headers_for("https://client.example")
    """

    def __init__(self, allowed_origins: str):
        self.allowed = [o.strip() for o in allowed_origins.split(",") if o.strip()]
        self.wildcard = not self.allowed or "*" in self.allowed

    def allow_origin(self, origin: Optional[str]) -> str:
        if self.wildcard:
            return "*"
        if origin and origin in self.allowed:
            return origin
        # Unknown origins are never reflected, the browser will block them
        return self.allowed[0]

    def headers_for(self, origin: Optional[str]) -> Dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.allow_origin(origin),
            "Vary": "Origin",
            "Access-Control-Allow-Methods": ALLOW_METHODS,
            "Access-Control-Allow-Headers": ALLOW_HEADERS,
        }


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=schemas.ErrorResponse(error=message).model_dump(),
    )


async def gateway_error_handler(request: Request, exc: GatewayError):
    if exc.status_code >= 500:
        logger.error(f"{exc.kind} on {request.method} {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.message)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # Unknown path and known path with the wrong method are both "not found"
    if exc.status_code in (
        status.HTTP_404_NOT_FOUND,
        status.HTTP_405_METHOD_NOT_ALLOWED,
    ):
        return error_response(NotFound.status_code, NotFound.default_message)
    return error_response(exc.status_code, str(exc.detail))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
