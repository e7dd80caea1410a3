# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
TaskPrompt Configuration — Environment-driven settings.

All configuration is loaded from environment variables (or .env file).
Components never read the environment themselves; they receive values
from this object at construction time.
"""

from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class TaskPromptSettings(BaseSettings):
    """Process-wide configuration loaded from environment."""

    # --- Filesystem ---
    MCP_WORKSPACE_ROOT: str = Field(
        default="",
        description="Workspace root override (empty = cwd, or home if cwd is a system dir)",
    )
    DATA_DIR: str = Field(
        default=".mcp-tasks",
        description="Data-store directory, absolute or relative to the workspace root",
    )
    TEMPLATES_DIR: str = Field(
        default="",
        description="Templates root override (empty = bundled templates)",
    )
    TEMPLATE_EXTENSIONS: List[str] = Field(
        default_factory=lambda: [".md"],
        description="File suffixes accepted for template paths",
    )
    PRELOAD_ON_STARTUP: bool = Field(
        default=True,
        description="Warm the template cache with the common templates at startup",
    )

    # --- Platform ---
    LOG_LEVEL: str = Field(default="INFO")
    TASKPROMPT_ENV: str = Field(
        default="dev",
        description="Environment: dev | prod",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    @property
    def is_production(self) -> bool:
        return self.TASKPROMPT_ENV.lower() == "prod"


# Global singleton
settings = TaskPromptSettings()
