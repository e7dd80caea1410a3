# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
Template Loader — Read-through cache for markdown prompt templates.

Template path format:
  - Logical:    "analyzeTask/index.md"
  - Filesystem: {templates_root}/analyzeTask/index.md

Concurrent cold loads of the same path share one read: the first caller
registers a task in the in-flight map and later callers await it.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from taskprompt.core.errors import (
    TemplateNotFoundError,
    TemplateReadError,
)
from taskprompt.core.metrics import TemplateMetrics
from taskprompt.kernel.file_reader import ReadResult, ReadStatus, read_text_file
from taskprompt.kernel.path_resolver import PathResolver
from taskprompt.resilience.settle import settle_all

logger = logging.getLogger("taskprompt.template_loader")

DEFAULT_PRELOAD_TEMPLATES = (
    "planTask/index.md",
    "analyzeTask/index.md",
    "executeTask/index.md",
    "listTasks/index.md",
    "getTaskDetail/index.md",
    "verifyTask/index.md",
    "processThought/index.md",
    "researchMode/index.md",
)

Reader = Callable[[str], Awaitable[ReadResult]]


class PreloadReport(BaseModel):
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    failures: Dict[str, str] = Field(default_factory=dict)


class TemplateCache:
    """
    Process-wide template cache. Created once by the service container.

    Entries are write-once; the cache is only ever cleared wholesale.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    def get(self, template_path: str) -> Optional[str]:
        return self._entries.get(template_path)

    def put(self, template_path: str, content: str) -> None:
        self._entries.setdefault(template_path, content)

    def clear(self) -> int:
        """Drop all entries. Returns the number removed."""
        size = len(self._entries)
        self._entries.clear()
        return size

    def keys(self) -> List[str]:
        return list(self._entries.keys())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, template_path: str) -> bool:
        return template_path in self._entries


class TemplateLoader:
    """Loads templates through a PathResolver and caches them."""

    def __init__(
        self,
        resolver: PathResolver,
        cache: Optional[TemplateCache] = None,
        metrics: Optional[TemplateMetrics] = None,
        reader: Reader = read_text_file,
        preload_paths: Sequence[str] = DEFAULT_PRELOAD_TEMPLATES,
    ) -> None:
        self._resolver = resolver
        self._cache = cache if cache is not None else TemplateCache()
        self._metrics = metrics if metrics is not None else TemplateMetrics()
        self._reader = reader
        self._preload_paths = tuple(preload_paths)
        self._in_flight: Dict[str, asyncio.Task] = {}

    @property
    def cache(self) -> TemplateCache:
        return self._cache

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    @property
    def in_flight_count(self) -> int:
        return len(self._in_flight)

    @property
    def metrics(self) -> TemplateMetrics:
        return self._metrics

    def get_cache_size(self) -> int:
        return len(self._cache)

    async def load_template(self, template_path: str) -> str:
        """
        Return the template body for a logical path.

        The path is sanitized first; cache and in-flight entries are keyed on
        its root-relative form, so aliases of one file share a single read.

        Raises:
            AccessDeniedError: path escapes the templates root (no read is issued)
            TemplateNotFoundError: file does not exist
            TemplateReadError: any other read failure
        """
        absolute_path = self._resolver.resolve(template_path)
        key = self._resolver.relative_key(absolute_path)

        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Template cache hit: %s", key)
            self._metrics.record_hit()
            return cached

        pending = self._in_flight.get(key)
        if pending is not None:
            logger.debug("Joining in-flight load: %s", key)
            self._metrics.record_coalesced()
            return await asyncio.shield(pending)

        self._metrics.record_miss()
        task = asyncio.ensure_future(self._read_and_store(key, absolute_path))
        self._in_flight[key] = task
        task.add_done_callback(lambda t: self._finish(key, t))
        return await asyncio.shield(task)

    def _finish(self, key: str, task: asyncio.Task) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        # Mark the exception retrieved; every awaiting caller re-raises it.
        if not task.cancelled():
            task.exception()

    async def _read_and_store(self, key: str, absolute_path: str) -> str:
        logger.debug("Loading template from disk: %s", key)
        start = time.perf_counter()
        result = await self._reader(absolute_path)
        self._metrics.record_load((time.perf_counter() - start) * 1000)

        if result.status is ReadStatus.OK:
            content = result.content or ""
            self._cache.put(key, content)
            self._metrics.set_cache_size(len(self._cache))
            logger.info(
                "Template loaded and cached: %s (%d bytes)",
                key, len(content),
            )
            return content

        self._metrics.record_error()
        logger.error(
            "Failed to load template: %s (%s)",
            key, result.status.value,
            extra={"template_path": key},
        )
        if result.status is ReadStatus.NOT_FOUND:
            raise TemplateNotFoundError(key, hint_dir=self._resolver.hint_dir)
        raise TemplateReadError(key) from result.error

    async def preload_templates(self, paths: Optional[Sequence[str]] = None) -> PreloadReport:
        """
        Warm the cache. Individual failures are counted, never raised.
        """
        targets = list(paths) if paths is not None else list(self._preload_paths)
        logger.info("Preloading %d common templates...", len(targets))

        outcomes = await settle_all(self.load_template(p) for p in targets)

        report = PreloadReport(total=len(targets))
        for path, outcome in zip(targets, outcomes):
            if outcome.ok:
                report.succeeded += 1
            else:
                report.failed += 1
                report.failures[path] = getattr(outcome.error, "code", type(outcome.error).__name__)

        if report.failed:
            logger.warning(
                "Preloaded %d/%d templates (%d failed)",
                report.succeeded, report.total, report.failed,
            )
        else:
            logger.info("Successfully preloaded all %d templates", report.succeeded)
        return report

    def clear_cache(self) -> None:
        """Drop all cached templates. For tests and dev hot-reload only."""
        removed = self._cache.clear()
        self._metrics.set_cache_size(0)
        logger.debug("Template cache cleared (%d entries removed)", removed)
