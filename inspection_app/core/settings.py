from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_yaml_config(path: Optional[Path] = None) -> dict:
    cfg_path = path or Path(__file__).resolve().parents[2] / "config.yaml"  # project root
    if not cfg_path.exists():
        return {}
    with open(cfg_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _yaml_overrides(cfg: dict) -> dict:
    """Flatten the config.yaml sections into Settings field names."""
    llm = cfg.get("llm") or {}
    upload = cfg.get("upload") or {}
    export = cfg.get("export") or {}
    errors = cfg.get("errors") or {}
    logging_cfg = cfg.get("logging") or {}

    pairs = {
        "llm_provider": llm.get("provider"),
        "llm_model": llm.get("model"),
        "llm_temperature": llm.get("temperature"),
        "llm_max_tokens": llm.get("max_tokens"),
        "upload_dir": upload.get("dir"),
        "report_title": export.get("title"),
        "analyze_error_format": errors.get("analyze"),
        "export_error_format": errors.get("export"),
        "log_level": logging_cfg.get("level"),
        "log_json": logging_cfg.get("json"),
    }
    return {k: v for k, v in pairs.items() if v is not None}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # LLM
    llm_provider: str = "openai"
    llm_model: str = "gpt-5"
    llm_temperature: float = 0.4
    llm_max_tokens: Optional[int] = None

    # API keys
    OPENAI_API_KEY: Optional[str] = None
    GEMINI_API_KEY: Optional[str] = None

    # Uploads are staged here and removed after extraction
    upload_dir: Path = Path(tempfile.gettempdir())

    # Export
    report_title: str = "Home Inspection Analysis Report"

    # Error body format per route
    analyze_error_format: Literal["json", "text"] = "json"
    export_error_format: Literal["json", "text"] = "text"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    def __init__(self, config_path: Optional[Path] = None, **kwargs):
        cfg = _load_yaml_config(config_path)
        super().__init__(**{**_yaml_overrides(cfg), **kwargs})
