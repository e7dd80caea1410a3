# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
Error Taxonomy — Unified error structure for path and template failures.

Messages are safe to surface to callers: they never contain absolute
filesystem paths. Offending inputs are kept as attributes for logging.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

TEMPLATES_HINT = "templates/v1/templates_en/"


class TaskPromptError(Exception):
    """Base error with a machine-readable code."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class AccessDeniedError(TaskPromptError):
    """A requested path escapes, or is not allowed under, its root."""

    def __init__(self, requested_path: str, reason: str = "resolves outside allowed directory"):
        self.requested_path = requested_path
        self.reason = reason
        super().__init__(
            code="ACCESS_DENIED",
            message=f"Access denied: path {reason}",
        )


class TemplateNotFoundError(TaskPromptError):
    def __init__(self, template_path: str, hint_dir: str = TEMPLATES_HINT):
        self.template_path = template_path
        super().__init__(
            code="TEMPLATE_NOT_FOUND",
            message=(
                f"Template not found: {template_path}. "
                f"Ensure the file exists in {hint_dir}"
            ),
            details={"template_path": template_path},
        )


class TemplateReadError(TaskPromptError):
    """Any read failure other than a missing file. The cause is chained."""

    def __init__(self, template_path: str):
        self.template_path = template_path
        super().__init__(
            code="TEMPLATE_READ_ERROR",
            message=f"Failed to load template: {template_path}",
            details={"template_path": template_path},
        )
