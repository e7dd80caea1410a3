# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
Path Resolver — Sandbox caller-supplied paths under an allowed root.

Every path computed from untrusted input goes through ``sanitize_path``:

    sanitize_path("tasks.json", "/app/.mcp-tasks")        -> "/app/.mcp-tasks/tasks.json"
    sanitize_path("../../../etc/passwd", "/app/.mcp-tasks") -> AccessDeniedError

Both ``/`` and ``\\`` are treated as separators regardless of host. The
string checks (absolute form, ``..`` segments) run before any filesystem
call and the joined result is verified against the root afterwards.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from taskprompt.core.config import TaskPromptSettings, settings as default_settings
from taskprompt.core.errors import TEMPLATES_HINT, AccessDeniedError

logger = logging.getLogger("taskprompt.path_resolver")

PACKAGE_DIR = Path(__file__).resolve().parent.parent
BUNDLED_TEMPLATES_DIR = PACKAGE_DIR / "prompts" / "templates" / "v1" / "templates_en"

DEFAULT_TEMPLATE_EXTENSIONS = (".md",)

PROTECTED_DIRS = (
    "/etc",
    "/usr",
    "/bin",
    "/sbin",
    "/sys",
    "/proc",
    "C:\\Windows",
    "C:\\Program Files",
)

_DRIVE_RE = re.compile(r"^[A-Za-z]:")


def _split_segments(requested_path: str) -> List[str]:
    """Split on either separator, rejecting absolute and traversal forms."""
    if "\x00" in requested_path:
        raise AccessDeniedError(requested_path, "contains a null byte")

    unified = requested_path.replace("\\", "/")
    if unified.startswith("/") or _DRIVE_RE.match(unified):
        raise AccessDeniedError(requested_path, "must be relative")

    segments = unified.split("/")
    if ".." in segments:
        raise AccessDeniedError(requested_path, "contains a parent-directory segment")

    return [seg for seg in segments if seg not in ("", ".")]


def sanitize_path(requested_path: str, root: str | Path) -> str:
    """
    Resolve ``requested_path`` under ``root`` or raise AccessDeniedError.

    Returns the absolute, normalized path. ``"."`` resolves to the root.
    """
    absolute_root = os.path.normpath(os.path.abspath(root))
    segments = _split_segments(requested_path)

    resolved = os.path.normpath(os.path.join(absolute_root, *segments))
    prefix = absolute_root if absolute_root.endswith(os.sep) else absolute_root + os.sep
    if resolved != absolute_root and not resolved.startswith(prefix):
        logger.warning(
            "Path escaped root after normalization",
            extra={"details": {"requested": requested_path}},
        )
        raise AccessDeniedError(requested_path)

    return resolved


def is_valid_path(path: str | Path, root: str | Path) -> bool:
    """
    Check that an existing entry really lives under ``root``.

    Symlinks are followed on both sides. Never raises.
    """
    try:
        real_root = Path(root).resolve(strict=True)
        real_path = Path(path).resolve(strict=True)
    except (OSError, RuntimeError, ValueError):
        return False
    return real_path == real_root or real_root in real_path.parents


def resolve_workspace_root(settings: Optional[TaskPromptSettings] = None) -> str:
    """
    Resolve the workspace root directory.

    Priority: MCP_WORKSPACE_ROOT, then cwd (unless it is a protected system
    directory), then the user's home directory.
    """
    settings = settings or default_settings
    if settings.MCP_WORKSPACE_ROOT:
        return os.path.abspath(settings.MCP_WORKSPACE_ROOT)

    cwd = os.getcwd()
    lowered = cwd.lower()
    if not any(lowered.startswith(d.lower()) for d in PROTECTED_DIRS):
        return cwd

    home = os.path.expanduser("~")
    if home and home != "~":
        logger.info("cwd is a protected directory, using home as workspace root")
        return home
    return cwd


def resolve_data_dir(settings: Optional[TaskPromptSettings] = None) -> str:
    """DATA_DIR if absolute, otherwise joined to the workspace root."""
    settings = settings or default_settings
    data_dir = settings.DATA_DIR or ".mcp-tasks"
    if os.path.isabs(data_dir):
        return data_dir
    return os.path.join(resolve_workspace_root(settings), data_dir)


def default_templates_root(settings: Optional[TaskPromptSettings] = None) -> str:
    settings = settings or default_settings
    if settings.TEMPLATES_DIR:
        return os.path.abspath(settings.TEMPLATES_DIR)
    return str(BUNDLED_TEMPLATES_DIR)


def ensure_directory(path: str | Path) -> None:
    """Create a directory (and parents) if it does not exist."""
    Path(path).mkdir(parents=True, exist_ok=True)


def _check_extension(requested_path: str, extensions: Optional[Iterable[str]]) -> None:
    if extensions is None:
        return
    allowed = tuple(ext.lower() for ext in extensions)
    if not requested_path.lower().endswith(allowed):
        raise AccessDeniedError(requested_path, "has a disallowed file extension")


def get_data_path(name: str, data_dir: Optional[str | Path] = None) -> str:
    """Sanitized path inside the data directory."""
    return sanitize_path(name, data_dir if data_dir is not None else resolve_data_dir())


def resolve_template_path(
    template_path: str,
    templates_root: Optional[str | Path] = None,
    extensions: Optional[Sequence[str]] = DEFAULT_TEMPLATE_EXTENSIONS,
) -> str:
    """Sanitized path inside the templates root (e.g. "analyzeTask/index.md")."""
    root = templates_root if templates_root is not None else default_templates_root()
    resolved = sanitize_path(template_path, root)
    _check_extension(template_path, extensions)
    return resolved


class PathResolver:
    """
    A resolver bound to exactly one allowed root.

    ``extensions`` optionally restricts accepted file suffixes.
    """

    def __init__(
        self,
        root: str | Path,
        extensions: Optional[Sequence[str]] = None,
    ) -> None:
        self._root = os.path.normpath(os.path.abspath(root))
        self._extensions = tuple(extensions) if extensions is not None else None

    @property
    def root(self) -> str:
        return self._root

    @property
    def extensions(self) -> Optional[tuple]:
        return self._extensions

    def resolve(self, requested_path: str) -> str:
        resolved = sanitize_path(requested_path, self._root)
        _check_extension(requested_path, self._extensions)
        return resolved

    def relative_key(self, resolved_path: str) -> str:
        """
        Canonical root-relative form of an already resolved path.

        Aliases of one file ("a/b.md", "a\\b.md", "./a/b.md") share a key.
        """
        return Path(os.path.relpath(resolved_path, self._root)).as_posix()

    @property
    def hint_dir(self) -> str:
        """Root named for user-facing messages, never as an absolute path."""
        if Path(self._root) == BUNDLED_TEMPLATES_DIR:
            return TEMPLATES_HINT
        return os.path.basename(self._root) + "/"

    def is_valid(self, path: str | Path) -> bool:
        return is_valid_path(path, self._root)

    def __repr__(self) -> str:
        return f"PathResolver(root={self._root!r}, extensions={self._extensions!r})"
