# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
BasePromptBuilder — Shared plumbing for all prompt builders.

A builder owns no state beyond its collaborators: the loader (and through
it the shared template cache) and the engine.
"""

from __future__ import annotations

from typing import List, Optional

from taskprompt.kernel.template_engine import RenderContext, TemplateEngine, default_engine
from taskprompt.kernel.template_loader import TemplateLoader


class BasePromptBuilder:
    """
    Subclasses set ``template_path`` and implement ``build()``.
    """

    template_path: str = ""

    def __init__(self, loader: TemplateLoader, engine: Optional[TemplateEngine] = None) -> None:
        self._loader = loader
        self._engine = engine or default_engine

    async def render_template(self, template_path: str, context: RenderContext) -> str:
        template = await self._loader.load_template(template_path)
        return self._engine.render(template, context)


def yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def numbered_list(items: Optional[List[str]], empty: str = "none") -> str:
    if not items:
        return empty
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))
