from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Error interno del servidor"


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turn exceptions no handler claimed into a generic 500.

    Must be the innermost user middleware so CORS and request-id headers
    are still applied to the response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled exception on %s %s",
                request.method,
                request.url.path,
            )
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})
