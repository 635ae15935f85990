from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from inspection_app.core.errors import AppError, ExternalServiceError, error_response
from inspection_app.core.logging import get_logger
from inspection_app.schemas.report import AnalysisReport, ErrorBody
from inspection_app.services.analyzer import ReportAnalyzer, combine_text
from inspection_app.services.uploads import staged_upload

router = APIRouter(prefix="/api", tags=["analyze"])
logger = get_logger("routes.analyze")

FILE_FIELD = "file"
TEXT_FIELD = "text"


def get_analyzer(request: Request) -> ReportAnalyzer:
    return request.app.state.analyzer


def _single_upload(form) -> Optional[UploadFile]:
    uploads = [(k, v) for k, v in form.multi_items() if isinstance(v, UploadFile)]
    for key, _ in uploads:
        if key != FILE_FIELD:
            raise ValueError(f"Unexpected field: {key}")
    if len(uploads) > 1:
        raise ValueError(f"Unexpected field: {FILE_FIELD}")
    return uploads[0][1] if uploads else None


def _extract_upload(analyzer: ReportAnalyzer, upload: UploadFile) -> str:
    with staged_upload(upload.file, analyzer.settings.upload_dir) as path:
        data = path.read_bytes()
        return analyzer.extract(data, upload.content_type or "", upload.filename or "")


@router.post(
    "/analyze",
    response_model=AnalysisReport,
    responses={400: {"model": ErrorBody}, 500: {"model": ErrorBody}},
)
async def analyze_report(request: Request, analyzer: ReportAnalyzer = Depends(get_analyzer)):
    """
    Multipart body with an optional ``file`` and an optional ``text`` field.
    Returns the model's JSON findings, or ``{"summary": raw}`` when it did not answer in JSON.
    """
    fmt = analyzer.settings.analyze_error_format
    try:
        async with request.form() as form:
            text = form.get(TEXT_FIELD)
            text = text if isinstance(text, str) else ""

            upload = _single_upload(form)
            document_text = None
            if upload is not None:
                document_text = await run_in_threadpool(_extract_upload, analyzer, upload)

        result = await run_in_threadpool(analyzer.analyze, combine_text(text, document_text))
        return JSONResponse(result, status_code=200)
    except AppError as e:
        if e.status_code >= 500:
            logger.error("Analysis failed: %s", e.message)
        return error_response(e.message, e.status_code, fmt)
    except Exception as e:
        logger.exception("Analysis failed")
        err = ExternalServiceError(str(e))
        return error_response(err.message, err.status_code, fmt)

