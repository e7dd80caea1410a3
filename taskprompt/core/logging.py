# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
Structured Logging — JSON format with correlation context and redaction.

Records are emitted as one JSON object per line. Extra fields passed via
``extra=`` are sanitized before serialization: secrets are replaced with
``[REDACTED]`` and filesystem paths are reduced to their basename.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import Any, Optional

SENSITIVE_FIELDS = (
    "password",
    "token",
    "apikey",
    "api_key",
    "secret",
    "authorization",
    "cookie",
    "session",
    "jwt",
    "bearer",
    "privatekey",
    "private_key",
    "credentials",
)

PATH_FIELDS = {"path", "file_path", "filePath"}

REDACTED = "[REDACTED]"
CIRCULAR = "[CIRCULAR]"

# Attached to records by callers via extra={...}
CONTEXT_FIELDS = ("correlation_id", "component", "template_path", "details")


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in SENSITIVE_FIELDS)


def _basename(value: str) -> str:
    parts = [p for p in re.split(r"[/\\]", value) if p]
    return parts[-1] if parts else "[PATH]"


def sanitize_log_data(data: Any, _seen: Optional[set] = None) -> Any:
    """Return a sanitized copy of ``data`` safe to write to logs."""
    if _seen is None:
        _seen = set()

    if isinstance(data, (list, tuple)):
        if id(data) in _seen:
            return CIRCULAR
        _seen.add(id(data))
        return [sanitize_log_data(item, _seen) for item in data]

    if isinstance(data, dict):
        if id(data) in _seen:
            return CIRCULAR
        _seen.add(id(data))
        sanitized = {}
        for key, value in data.items():
            key_str = str(key)
            if _is_sensitive(key_str) and isinstance(value, (str, int, float)):
                sanitized[key] = REDACTED
            elif key_str in PATH_FIELDS:
                sanitized[key] = _basename(value) if isinstance(value, str) else value
            else:
                sanitized[key] = sanitize_log_data(value, _seen)
        return sanitized

    return data


class StructuredFormatter(logging.Formatter):
    """JSON log formatter with correlation/component context."""

    def __init__(self, include_stack: bool = True) -> None:
        super().__init__()
        self.include_stack = include_stack

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "module": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            val = getattr(record, key, None)
            if val:
                log_entry[key] = sanitize_log_data(val)

        if record.exc_info and record.exc_info[0]:
            exc = record.exc_info[1]
            if self.include_stack:
                log_entry["exception"] = self.formatException(record.exc_info)
            else:
                log_entry["exception"] = f"{record.exc_info[0].__name__}: {exc}"

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", production: bool = False) -> None:
    """Configure structured JSON logging for the process."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter(include_stack=not production))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)
