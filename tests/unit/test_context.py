# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.
"""Unit tests for the service container and bootstrap."""

import logging
import os

import pytest

from taskprompt.core.config import TaskPromptSettings
from taskprompt.core.context import (
    ServiceContainer,
    get_container,
    init_container,
    reset_container,
)
from taskprompt.core.metrics import TemplateMetrics
from taskprompt.kernel.path_resolver import BUNDLED_TEMPLATES_DIR
from taskprompt.kernel.template_loader import DEFAULT_PRELOAD_TEMPLATES
from taskprompt.main import bootstrap


class TestServiceContainer:
    def test_wiring(self, test_settings, tmp_path):
        c = ServiceContainer(test_settings, metrics=TemplateMetrics())
        assert c.template_resolver.root == str(BUNDLED_TEMPLATES_DIR)
        assert c.template_resolver.extensions == (".md",)
        assert c.data_resolver.root == os.path.join(str(tmp_path), ".mcp-tasks")
        assert c.template_loader.cache is c.template_cache
        assert len(c.template_cache) == 0

    def test_ensure_data_dir(self, test_settings):
        c = ServiceContainer(test_settings, metrics=TemplateMetrics())
        assert os.path.isdir(c.ensure_data_dir())

    @pytest.mark.asyncio
    async def test_startup_preloads_bundled_templates(self, test_settings):
        c = ServiceContainer(test_settings, metrics=TemplateMetrics())
        report = await c.startup()
        assert report.total == len(DEFAULT_PRELOAD_TEMPLATES)
        assert report.failed == 0
        assert len(c.template_cache) == len(DEFAULT_PRELOAD_TEMPLATES)

    @pytest.mark.asyncio
    async def test_startup_disabled(self, tmp_path):
        s = TaskPromptSettings(_env_file=None, MCP_WORKSPACE_ROOT=str(tmp_path), PRELOAD_ON_STARTUP=False)
        c = ServiceContainer(s, metrics=TemplateMetrics())
        assert await c.startup() is None
        assert len(c.template_cache) == 0

    @pytest.mark.asyncio
    async def test_render_template(self, test_settings):
        c = ServiceContainer(test_settings, metrics=TemplateMetrics())
        assert await c.render_template("tests/basic.md", {"name": "World"}) == "Hello World!\n"

    @pytest.mark.asyncio
    async def test_custom_templates_dir(self, tmp_path, templates_root):
        s = TaskPromptSettings(_env_file=None, MCP_WORKSPACE_ROOT=str(tmp_path), TEMPLATES_DIR=str(templates_root))
        c = ServiceContainer(s, metrics=TemplateMetrics())
        assert await c.render_template("tests/other.md", {"value": 7}) == "Other 7\n"

    @pytest.mark.asyncio
    async def test_metrics_snapshot_tracks_loads(self, test_settings):
        c = ServiceContainer(test_settings, metrics=TemplateMetrics())
        await c.render_template("tests/basic.md", {"name": "A"})
        await c.render_template("tests/basic.md", {"name": "B"})
        snap = c.metrics_snapshot()
        assert snap["cache"]["misses"] == 1
        assert snap["cache"]["hits"] == 1
        assert snap["cache"]["size"] == 1
        assert snap["cache"]["hit_ratio"] == 0.5
        assert snap["load_ms"]["count"] == 1

    def test_separate_containers_do_not_share_cache(self, test_settings):
        a = ServiceContainer(test_settings, metrics=TemplateMetrics())
        b = ServiceContainer(test_settings, metrics=TemplateMetrics())
        assert a.template_cache is not b.template_cache


class TestGlobalContainer:
    def test_not_initialized(self):
        reset_container()
        with pytest.raises(RuntimeError, match="not initialized"):
            get_container()

    def test_init_and_get(self, test_settings):
        c = init_container(test_settings)
        assert get_container() is c


class TestBootstrap:
    @pytest.mark.asyncio
    async def test_bootstrap(self, test_settings):
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level
        try:
            container = await bootstrap(test_settings)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
        assert get_container() is container
        assert len(container.template_cache) == len(DEFAULT_PRELOAD_TEMPLATES)
