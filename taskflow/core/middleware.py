"""CORS, request-id and request logging middleware."""

import uuid
import time
import logging

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from taskflow.core.config import settings

logger = logging.getLogger("taskflow")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log API calls with the acting user.

    ``request.state.user_id`` is filled in by the auth dependency, so it is
    only present once a bearer token resolved to a stored user.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        response: Response = await call_next(request)

        duration = round((time.time() - start_time) * 1000, 2)
        response.headers["X-Request-Id"] = request_id
        response.headers["X-Response-Time-Ms"] = str(duration)

        user_id = getattr(request.state, "user_id", None)
        if user_id:
            response.headers["X-User-Id"] = user_id

        if request.url.path.startswith("/api"):
            logger.info(
                "%s %s %s %sms user=%s request_id=%s",
                request.method,
                request.url.path,
                response.status_code,
                duration,
                user_id or "-",
                request_id,
            )
        return response


def setup_middleware(app: FastAPI) -> None:
    """Configure all middleware for the application."""
    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID + timing
    app.add_middleware(RequestContextMiddleware)
