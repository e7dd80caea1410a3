# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
Prompt Builders — Consumers of the template loader and engine.

Templates live as .md files under templates/v1/templates_en/. Each builder
loads its template by logical path and maps its arguments onto the
template's placeholders; formatting decisions stay in code, not templates.
"""
