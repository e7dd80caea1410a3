# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
TaskPrompt Entry Point.

Sets up logging, builds the service container and warms the template
cache. The tool server that hosts this process wires the container into
its request handlers.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from taskprompt.core.config import TaskPromptSettings, settings as default_settings
from taskprompt.core.context import ServiceContainer, init_container
from taskprompt.core.logging import setup_logging

logger = logging.getLogger("taskprompt.main")


async def bootstrap(settings: Optional[TaskPromptSettings] = None) -> ServiceContainer:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL, production=settings.is_production)

    container = init_container(settings)
    report = await container.startup()
    if report is not None:
        logger.info(
            "[TaskPrompt] Template cache warm: %d/%d loaded",
            report.succeeded, report.total,
            extra={"details": container.metrics_snapshot()},
        )
    logger.info("[TaskPrompt] Ready (templates root: %s)", container.template_resolver.root)
    return container


def main() -> None:
    asyncio.run(bootstrap())


if __name__ == "__main__":
    main()
