# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
Settle-all Join — Wait for every awaitable, collect every outcome.

Unlike a plain ``gather``, one failure never aborts the others and the
caller always gets exactly one Outcome per input, in input order.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def settle_all(awaitables: Iterable[Awaitable[T]]) -> List[Outcome[T]]:
    """
    Run all awaitables concurrently and return their outcomes.

    Exceptions become failed outcomes. Cancellation and other
    BaseExceptions are re-raised.
    """
    results: List[Any] = await asyncio.gather(*awaitables, return_exceptions=True)
    outcomes: List[Outcome[T]] = []
    for result in results:
        if isinstance(result, Exception):
            outcomes.append(Outcome(error=result))
        elif isinstance(result, BaseException):
            raise result
        else:
            outcomes.append(Outcome(value=result))
    return outcomes
