from pydantic import BaseModel, Field
from typing import Any

class Category(BaseModel):
    name: str
    issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)

class AnalysisReport(BaseModel):
    """Shape requested from the model. Responses are not validated against it."""
    summary: str
    categories: list[Category] = Field(default_factory=list)
    priority_repairs: list[str] = Field(default_factory=list)

class ErrorBody(BaseModel):
    error: str

class ExportRequest(BaseModel):
    data: Any = None
    type: Any = None  # "csv" or "pdf"; anything else is rejected by the route
