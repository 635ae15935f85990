from __future__ import annotations

from fastapi import Response
from fastapi.responses import JSONResponse, PlainTextResponse


class AppError(Exception):
    """Error carrying the HTTP status it maps to."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class ExternalServiceError(AppError):
    """Failure while extracting text, calling the model or converting an export."""

    status_code = 500


def error_response(message: str, status_code: int, fmt: str = "json") -> Response:
    if fmt == "text":
        return PlainTextResponse(message, status_code=status_code)
    return JSONResponse({"error": message}, status_code=status_code)


def method_not_allowed(allow: str = "POST") -> Response:
    return Response(status_code=405, headers={"Allow": allow})
