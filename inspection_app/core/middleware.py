from __future__ import annotations

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from inspection_app.core.logging import get_logger, log_http_request


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of every request."""

    def __init__(self, app, exclude_paths: list | None = None):
        super().__init__(app)
        self.logger = get_logger("http")
        self.exclude_paths = exclude_paths or ["/docs", "/redoc", "/openapi.json", "/favicon.ico"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if any(request.url.path.startswith(p) for p in self.exclude_paths):
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        log_http_request(
            self.logger,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            response_time=time.perf_counter() - start,
            client_ip=request.client.host if request.client else None,
        )
        return response
