# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
Shared test fixtures for all TaskPrompt tests.
"""

import pytest

from taskprompt.core.config import TaskPromptSettings
from taskprompt.core.context import reset_container
from taskprompt.core.metrics import TemplateMetrics
from taskprompt.kernel.path_resolver import PathResolver
from taskprompt.kernel.template_loader import TemplateLoader


@pytest.fixture
def templates_root(tmp_path):
    """A temporary templates directory with a few known files."""
    root = tmp_path / "templates"
    (root / "tests").mkdir(parents=True)
    (root / "tests" / "basic.md").write_text("Hello {name}!\n", encoding="utf-8")
    (root / "tests" / "other.md").write_text("Other {value}\n", encoding="utf-8")
    (root / "notes.txt").write_text("not a template\n", encoding="utf-8")
    return root


@pytest.fixture
def metrics():
    return TemplateMetrics()


@pytest.fixture
def loader(templates_root, metrics):
    resolver = PathResolver(templates_root, extensions=(".md",))
    return TemplateLoader(resolver, metrics=metrics)


@pytest.fixture
def test_settings(tmp_path):
    """Settings isolated from any .env file, rooted in tmp_path."""
    return TaskPromptSettings(
        _env_file=None,
        MCP_WORKSPACE_ROOT=str(tmp_path),
        DATA_DIR=".mcp-tasks",
        TEMPLATES_DIR="",
        PRELOAD_ON_STARTUP=True,
    )


@pytest.fixture(autouse=True)
def _reset_global_container():
    yield
    reset_container()
