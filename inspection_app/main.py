from __future__ import annotations

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from inspection_app.api_routes import router as api_router
from inspection_app.core.errors import method_not_allowed
from inspection_app.core.logging import get_logger, setup_logging
from inspection_app.core.middleware import RequestLoggingMiddleware
from inspection_app.core.settings import Settings
from inspection_app.services.analyzer import ReportAnalyzer
from inspection_app.services.exporter import ReportExporter
from inspection_app.services.llm_client import CompletionClient


def create_app(settings: Optional[Settings] = None, llm: Optional[CompletionClient] = None) -> FastAPI:
    settings = settings or Settings()
    setup_logging(settings.log_level, settings.log_json)

    app = FastAPI(title="Home Inspection Report Analyzer")
    app.state.settings = settings
    app.state.analyzer = ReportAnalyzer(settings, llm=llm)
    app.state.exporter = ReportExporter(settings)

    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(api_router)

    @app.exception_handler(StarletteHTTPException)
    async def empty_method_not_allowed(request: Request, exc: StarletteHTTPException):
        # 405 carries no body, whatever the verb
        if exc.status_code == 405:
            return method_not_allowed((exc.headers or {}).get("Allow", "POST"))
        return await http_exception_handler(request, exc)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    get_logger("app").info(
        "Application configured",
        extra={"llm_provider": settings.llm_provider, "llm_model": settings.llm_model},
    )
    return app


app = create_app()
