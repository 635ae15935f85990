from __future__ import annotations
from fastapi import APIRouter
from inspection_app.routes.analyze import router as analyze_router
from inspection_app.routes.export import router as export_router

router = APIRouter()
router.include_router(analyze_router)
router.include_router(export_router)
