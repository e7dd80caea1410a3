# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""Prompt builders for the task analysis tools."""

from __future__ import annotations

from typing import Optional

from taskprompt.prompts.base import BasePromptBuilder


class AnalyzeTaskPromptBuilder(BasePromptBuilder):
    template_path = "analyzeTask/index.md"
    iteration_path = "analyzeTask/iteration.md"

    async def build(
        self,
        summary: str,
        initial_concept: str,
        previous_analysis: Optional[str] = None,
    ) -> str:
        iteration_prompt = await self._build_iteration(previous_analysis)
        return await self.render_template(self.template_path, {
            "summary": summary,
            "initialConcept": initial_concept,
            "iterationPrompt": iteration_prompt,
        })

    async def _build_iteration(self, previous_analysis: Optional[str]) -> str:
        if not previous_analysis or not previous_analysis.strip():
            return ""
        return await self.render_template(self.iteration_path, {
            "previousAnalysis": previous_analysis,
        })


class ReflectTaskPromptBuilder(BasePromptBuilder):
    template_path = "reflectTask/index.md"

    async def build(self, summary: str, analysis: str) -> str:
        return await self.render_template(self.template_path, {
            "summary": summary,
            "analysis": analysis,
        })
