"""
Structured logging for the service: JSON records on stderr, one logger per component.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

ROOT_LOGGER = "inspection"


def setup_logging(level: str = "INFO", json: bool = True) -> logging.Logger:
    """Configure the ``inspection`` logger hierarchy. Safe to call repeatedly."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())

    # avoid duplicate handlers when the app factory runs more than once
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    if json:
        handler.setFormatter(
            JsonFormatter(
                "%(asctime)s %(levelname)s %(name)s %(message)s",
                rename_fields={"levelname": "level", "name": "logger", "asctime": "timestamp"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_logger(component: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")


def log_llm_interaction(
    logger: logging.Logger,
    prompt: str,
    response: str,
    model: str,
    temperature: float,
    execution_time: float,
    metadata: Optional[Dict[str, Any]] = None,
):
    logger.info(
        "LLM interaction completed",
        extra={
            "event_type": "llm_interaction",
            "model": model,
            "temperature": temperature,
            "execution_time_seconds": round(execution_time, 3),
            "prompt_length": len(prompt),
            "response_length": len(response),
            "response_preview": response[:200] + "..." if len(response) > 200 else response,
            "metadata": metadata or {},
        },
    )


def log_http_request(
    logger: logging.Logger,
    method: str,
    path: str,
    status_code: int,
    response_time: float,
    client_ip: Optional[str] = None,
):
    logger.info(
        "HTTP request processed",
        extra={
            "event_type": "http_request",
            "method": method,
            "path": path,
            "status_code": status_code,
            "response_time_ms": round(response_time * 1000, 2),
            "client_ip": client_ip,
            "success": 200 <= status_code < 400,
        },
    )
