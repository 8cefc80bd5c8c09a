import logging

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.responses import CorsPolicy, error_response

logger = logging.getLogger(__name__)

GENERIC_ERROR = "internal server error"


class CORSPolicyMiddleware(BaseHTTPMiddleware):
    """
    Outermost boundary of every request.
    Answers pre-flight probes, adds CORS headers and turns any uncaught
    exception into a 500 JSON error so one request can never take the server down.
    """

    def __init__(self, app, policy: CorsPolicy, expose_error_details: bool = True):
        super().__init__(app)
        self.policy = policy
        self.expose_error_details = expose_error_details

    async def dispatch(self, request: Request, call_next):
        headers = self.policy.headers_for(request.headers.get("origin"))

        # Preflight
        if request.method == "OPTIONS":
            return Response(status_code=status.HTTP_204_NO_CONTENT, headers=headers)

        try:
            response = await call_next(request)
        except Exception as error:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            message = str(error) if self.expose_error_details else GENERIC_ERROR
            response = error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR, message or GENERIC_ERROR
            )

        response.headers.update(headers)
        return response
