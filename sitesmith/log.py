"""Structured JSON logging for the generation service.

Gateway calls and pipeline stages log a short event name plus a ``data``
payload, rendered as one JSON object per line.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

LOGGER_NAME = "sitesmith"


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if hasattr(record, "data"):
            entry["data"] = record.data  # type: ignore[attr-defined]
        if record.exc_info and record.exc_info[1]:
            entry["error"] = str(record.exc_info[1])
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: int | str = logging.INFO, *, json_output: bool = True) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Logging level (name or number).
        json_output: Emit JSON lines instead of the plain text format.

    Returns:
        The root 'sitesmith' logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Avoid duplicate handlers on repeated calls
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger


class GatewayCallLogger:
    """Context manager for logging a single gateway call."""

    def __init__(self, model: str, kind: str):
        self.model = model
        self.kind = kind
        self.start_time = 0.0
        self._logger = logging.getLogger(f"{LOGGER_NAME}.gateway")

    def __enter__(self) -> GatewayCallLogger:
        self.start_time = time.monotonic()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        pass

    def _elapsed(self) -> float:
        return round(time.monotonic() - self.start_time, 3)

    def success(self, status_code: int, content_len: int = 0) -> None:
        self._logger.info(
            "gateway_call",
            extra={"data": {
                "model": self.model,
                "kind": self.kind,
                "elapsed_s": self._elapsed(),
                "status": status_code,
                "content_len": content_len,
            }},
        )

    def error(self, error: str, status_code: int | None = None) -> None:
        self._logger.warning(
            "gateway_call_error",
            extra={"data": {
                "model": self.model,
                "kind": self.kind,
                "elapsed_s": self._elapsed(),
                "status": status_code,
                "error": error,
            }},
        )


def log_stage(stage: str, **data: Any) -> None:
    """Log a completed pipeline stage."""
    logger = logging.getLogger(f"{LOGGER_NAME}.pipeline")
    logger.info("pipeline_stage", extra={"data": {"stage": stage, **data}})


__all__ = ["JSONFormatter", "GatewayCallLogger", "LOGGER_NAME", "log_stage", "setup_logging"]
