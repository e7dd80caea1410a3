# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
Prompt builders for structured thinking and research mode.
"""

from __future__ import annotations

from typing import List, Optional

from taskprompt.prompts.base import BasePromptBuilder, numbered_list, yes_no


class ProcessThoughtPromptBuilder(BasePromptBuilder):
    template_path = "processThought/index.md"

    async def build(
        self,
        thought: str,
        thought_number: int,
        total_thoughts: int,
        stage: str,
        next_thought_needed: bool,
        tags: Optional[List[str]] = None,
        axioms_used: Optional[List[str]] = None,
        assumptions_challenged: Optional[List[str]] = None,
    ) -> str:
        return await self.render_template(self.template_path, {
            "thought": thought,
            "thoughtNumber": thought_number,
            "totalThoughts": total_thoughts,
            "stage": stage,
            "nextThoughtNeeded": yes_no(next_thought_needed),
            "tags": ", ".join(tags) if tags else "none",
            "axioms": numbered_list(axioms_used),
            "assumptions": numbered_list(assumptions_challenged),
        })


class ResearchModePromptBuilder(BasePromptBuilder):
    template_path = "researchMode/index.md"

    async def build(
        self,
        topic: str,
        previous_state: str,
        current_state: str,
        next_steps: str,
    ) -> str:
        return await self.render_template(self.template_path, {
            "topic": topic,
            "previousState": previous_state,
            "currentState": current_state,
            "nextSteps": next_steps,
        })
