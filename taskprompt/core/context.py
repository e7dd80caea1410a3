# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
Service Container — Holds the resolver, template cache, loader and engine.

Created once at startup and passed to consumers. The template cache lives
here, not in a module global.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from taskprompt.core.config import TaskPromptSettings, settings as default_settings
from taskprompt.core.metrics import TemplateMetrics
from taskprompt.kernel.path_resolver import (
    PathResolver,
    default_templates_root,
    ensure_directory,
    resolve_data_dir,
)
from taskprompt.kernel.template_engine import RenderContext, TemplateEngine
from taskprompt.kernel.template_loader import PreloadReport, TemplateCache, TemplateLoader
from taskprompt.prompts.task_builders import AnalyzeTaskPromptBuilder, ReflectTaskPromptBuilder
from taskprompt.prompts.thought_builders import ProcessThoughtPromptBuilder, ResearchModePromptBuilder


class ServiceContainer:
    """
    Composition root for the prompt subsystem.
    """

    def __init__(
        self,
        settings: Optional[TaskPromptSettings] = None,
        metrics: Optional[TemplateMetrics] = None,
    ) -> None:
        self.settings = settings or default_settings
        self.metrics = metrics if metrics is not None else TemplateMetrics()

        self.template_resolver = PathResolver(
            default_templates_root(self.settings),
            extensions=self.settings.TEMPLATE_EXTENSIONS or None,
        )
        self.data_resolver = PathResolver(resolve_data_dir(self.settings))

        self.template_cache = TemplateCache()
        self.template_loader = TemplateLoader(
            self.template_resolver,
            cache=self.template_cache,
            metrics=self.metrics,
        )
        self.engine = TemplateEngine()

        self.analyze_task = AnalyzeTaskPromptBuilder(self.template_loader, self.engine)
        self.reflect_task = ReflectTaskPromptBuilder(self.template_loader, self.engine)
        self.process_thought = ProcessThoughtPromptBuilder(self.template_loader, self.engine)
        self.research_mode = ResearchModePromptBuilder(self.template_loader, self.engine)

    async def render_template(self, template_path: str, context: RenderContext) -> str:
        """Load a template and render it in one call."""
        template = await self.template_loader.load_template(template_path)
        return self.engine.render(template, context)

    def ensure_data_dir(self) -> str:
        ensure_directory(self.data_resolver.root)
        return self.data_resolver.root

    def metrics_snapshot(self) -> Dict[str, Any]:
        """Cache counters, hit ratio and load latency for this container."""
        return self.metrics.snapshot()

    async def startup(self) -> Optional[PreloadReport]:
        """Warm the template cache when enabled."""
        if not self.settings.PRELOAD_ON_STARTUP:
            return None
        return await self.template_loader.preload_templates()


# ── Global singleton ────────────────────────────────────────

_container: Optional[ServiceContainer] = None


def init_container(settings: Optional[TaskPromptSettings] = None) -> ServiceContainer:
    global _container
    _container = ServiceContainer(settings)
    return _container


def get_container() -> ServiceContainer:
    if _container is None:
        raise RuntimeError("ServiceContainer not initialized. Call init_container() first.")
    return _container


def reset_container() -> None:
    """Drop the global container (tests)."""
    global _container
    _container = None
