# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
File Reader — Non-blocking text reads with an explicit result status.

The read runs in a worker thread so the event loop is never blocked.
Failures are returned, not raised, so callers branch on ``status``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class ReadStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    FAILED = "failed"


@dataclass(frozen=True)
class ReadResult:
    status: ReadStatus
    content: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.status is ReadStatus.OK


async def read_text_file(path: str | Path, encoding: str = "utf-8") -> ReadResult:
    """Read a whole file as text."""
    try:
        content = await asyncio.to_thread(Path(path).read_text, encoding=encoding)
    except FileNotFoundError as e:
        return ReadResult(ReadStatus.NOT_FOUND, error=e)
    except PermissionError as e:
        return ReadResult(ReadStatus.PERMISSION_DENIED, error=e)
    except (OSError, UnicodeDecodeError) as e:
        return ReadResult(ReadStatus.FAILED, error=e)
    return ReadResult(ReadStatus.OK, content=content)
