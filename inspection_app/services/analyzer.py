from __future__ import annotations

import json
import re
import time
from typing import Any, Optional

from inspection_app.core.errors import ValidationError
from inspection_app.core.logging import get_logger, log_llm_interaction
from inspection_app.core.settings import Settings
from inspection_app.services.file_extractor import extract_document_text
from inspection_app.services.llm_client import CompletionClient, LLMConfig, build_llm

logger = get_logger("analyzer")

PROMPT_TEMPLATE = """
You are a Home Inspection Analysis Expert GPT.
Analyze the following report text and return structured findings in JSON format:
{{
  "summary": "Brief overview of the property condition",
  "categories": [
    {{"name": "Structural", "issues": ["..."], "recommendations": ["..."]}},
    {{"name": "Plumbing", "issues": ["..."], "recommendations": ["..."]}},
    {{"name": "Electrical", "issues": ["..."], "recommendations": ["..."]}}
  ],
  "priority_repairs": ["...", "..."]
}}
Text: {text}
"""


def build_prompt(text: str) -> str:
    return PROMPT_TEMPLATE.format(text=text)


def combine_text(text: Optional[str], document_text: Optional[str]) -> str:
    """Supplied text first, extracted document text after it on a new line."""
    text = text or ""
    if document_text is None:
        return text
    return f"{text}\n{document_text}" if text else document_text


def parse_model_output(raw: str) -> Any:
    """
    Strict parse → extract {...} → fall back to ``{"summary": raw}``.
    """
    try:
        return json.loads(raw)
    except ValueError:
        pass

    # models sometimes wrap the object in a markdown fence
    m = re.search(r"\{.*\}", raw, re.DOTALL)
    if m:
        try:
            return json.loads(m.group(0))
        except ValueError:
            pass

    return {"summary": raw}


class ReportAnalyzer:
    def __init__(self, settings: Settings, llm: Optional[CompletionClient] = None):
        self.settings = settings
        self._llm = llm

    @property
    def llm(self) -> CompletionClient:
        # built on first use so a missing key only fails analysis requests
        if self._llm is None:
            self._llm = build_llm(
                LLMConfig(
                    provider=self.settings.llm_provider,
                    model=self.settings.llm_model,
                    temperature=self.settings.llm_temperature,
                    max_tokens=self.settings.llm_max_tokens,
                    openai_api_key=self.settings.OPENAI_API_KEY,
                    gemini_api_key=self.settings.GEMINI_API_KEY,
                )
            )
        return self._llm

    def extract(self, data: bytes, content_type: str = "", filename: str = "") -> str:
        text = extract_document_text(data, content_type, filename)
        logger.info(
            "Document text extracted",
            extra={
                "event_type": "document_extraction",
                "document_filename": filename,
                "content_type": content_type,
                "file_size_bytes": len(data),
                "text_length": len(text),
            },
        )
        return text

    def analyze(self, text: str) -> Any:
        if not text or not text.strip():
            raise ValidationError("No text provided")

        prompt = build_prompt(text)
        llm = self.llm

        start = time.perf_counter()
        raw = llm.generate_text(prompt)
        log_llm_interaction(
            logger,
            prompt=prompt,
            response=raw,
            model=getattr(llm, "model", self.settings.llm_model),
            temperature=getattr(llm, "temperature", self.settings.llm_temperature),
            execution_time=time.perf_counter() - start,
        )
        return parse_model_output(raw)
