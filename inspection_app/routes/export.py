from __future__ import annotations

import json

from fastapi import APIRouter, Depends, Request, Response

from inspection_app.core.errors import (
    AppError,
    ExternalServiceError,
    ValidationError,
    error_response,
)
from inspection_app.core.logging import get_logger
from inspection_app.schemas.report import ExportRequest
from inspection_app.services.exporter import ReportExporter

router = APIRouter(prefix="/api", tags=["export"])
logger = get_logger("routes.export")

EXPORT_TYPES = ("csv", "pdf")


def get_exporter(request: Request) -> ReportExporter:
    return request.app.state.exporter


def _is_missing(data) -> bool:
    # empty arrays and objects still count as data
    return data is None or (not isinstance(data, (list, dict)) and not data)


async def _read_payload(request: Request) -> ExportRequest:
    raw = await request.body()
    body = json.loads(raw) if raw else {}
    return ExportRequest.model_validate(body if isinstance(body, dict) else {})


@router.post(
    "/export",
    responses={
        200: {"content": {"text/csv": {}, "application/pdf": {}}},
        400: {"content": {"text/plain": {}}},
        500: {"content": {"text/plain": {}}},
    },
)
async def export_report(request: Request, exporter: ReportExporter = Depends(get_exporter)):
    """JSON body ``{"data": ..., "type": "csv" | "pdf"}``; responds with a downloadable report."""
    fmt = exporter.settings.export_error_format
    try:
        payload = await _read_payload(request)
        if _is_missing(payload.data):
            raise ValidationError("No data to export")
        if payload.type not in EXPORT_TYPES:
            raise ValidationError("Invalid export type")

        content, media_type, filename = exporter.export(payload.data, payload.type)
        logger.info(
            "Report exported",
            extra={"event_type": "export", "export_type": payload.type, "length": len(content)},
        )
        return Response(
            content=content,
            media_type=media_type,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
    except AppError as e:
        return error_response(e.message, e.status_code, fmt)
    except Exception as e:
        logger.exception("Export failed")
        err = ExternalServiceError(str(e))
        return error_response(err.message, err.status_code, fmt)

