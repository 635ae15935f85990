from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


class CompletionClient(Protocol):
    model: str
    temperature: float

    def generate_text(self, prompt: str) -> str: ...


@dataclass
class LLMConfig:
    provider: str
    model: str
    temperature: float = 0.4
    max_tokens: Optional[int] = None
    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None


class OpenAILLM:
    def __init__(self, api_key: str, model: str, temperature: float, max_tokens: Optional[int] = None):
        from openai import OpenAI

        self.client = OpenAI(api_key=api_key)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def generate_text(self, prompt: str) -> str:
        kwargs = {}
        if self.max_tokens:
            kwargs["max_output_tokens"] = self.max_tokens

        resp = self.client.responses.create(
            model=self.model,
            input=prompt,
            temperature=self.temperature,
            **kwargs,
        )
        return resp.output_text or ""


class GeminiLLM:
    def __init__(self, api_key: str, model: str, temperature: float, max_tokens: Optional[int] = None):
        from google import genai
        from google.genai import types

        self._types = types
        self.client = genai.Client(api_key=api_key)
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def generate_text(self, prompt: str) -> str:
        resp = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
            config=self._types.GenerateContentConfig(
                temperature=self.temperature,
                max_output_tokens=self.max_tokens,
            ),
        )
        return resp.text or ""


def build_llm(cfg: LLMConfig) -> CompletionClient:
    provider = (cfg.provider or "").lower().strip()

    if provider == "openai":
        if not cfg.openai_api_key:
            raise ValueError("OPENAI_API_KEY is missing. Add it to .env")
        return OpenAILLM(
            api_key=cfg.openai_api_key,
            model=cfg.model,
            temperature=cfg.temperature,
            max_tokens=cfg.max_tokens,
        )

    if provider == "gemini":
        if not cfg.gemini_api_key:
            raise ValueError("GEMINI_API_KEY is missing. Add it to .env")
        return GeminiLLM(
            api_key=cfg.gemini_api_key,
            model=cfg.model,
            temperature=cfg.temperature,
            max_tokens=cfg.max_tokens,
        )

    raise ValueError(f"Unsupported llm provider: {cfg.provider}. Use provider: openai or gemini")
