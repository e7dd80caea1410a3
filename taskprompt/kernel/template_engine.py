# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.

"""
Template Engine — Single-pass placeholder substitution.

Supported tokens (case-sensitive):
  {{ key }}   {{key}}   {key}

Any non-empty context key can be a placeholder, including keys with spaces
or non-ASCII characters ("{task id}", "{名前}"). Only keys present in the
context are matched; every other brace sequence, such as JSON in a
template, is left untouched.

Substitution is one regex pass over the original template. Values are
never re-scanned, so a value containing "{other}" is emitted literally.
There is no expression language and no code execution.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Iterable, List, Mapping, Optional, Tuple, Union

RenderValue = Union[str, bool, int, float, None]
RenderContext = Mapping[str, RenderValue]


def _unsupported(value: object) -> TypeError:
    return TypeError(
        f"Unsupported context value type: {type(value).__name__} "
        "(expected str, int, finite float, bool or None)"
    )


def format_value(value: RenderValue) -> str:
    """Convert a context value to its rendered string form.

    Numbers are written in plain decimal notation: ``1e-07`` renders as
    ``0.0000001`` and ``2.0`` as ``2``. NaN and infinities are rejected.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise _unsupported(value)
        if value.is_integer():
            return str(int(value))
        # repr is the shortest round-tripping form; Decimal drops the exponent
        return format(Decimal(repr(value)), "f")
    raise _unsupported(value)


def _token_pattern(keys: Iterable[str]) -> re.Pattern:
    # Longest first so a key never shadows a longer one sharing its prefix
    names = "|".join(re.escape(k) for k in sorted(keys, key=len, reverse=True))
    return re.compile(
        rf"\{{\{{\s*(?P<double>{names})\s*\}}\}}"
        rf"|\{{(?P<single>{names})\}}"
    )


def render(template: str, context: Optional[RenderContext] = None) -> str:
    """
    Render ``template`` against ``context``.

    >>> render("Hello {name}", {"name": "World"})
    'Hello World'
    >>> render("{missing}", {})
    '{missing}'
    """
    if not isinstance(template, str):
        raise TypeError(f"Template must be a string, got {type(template).__name__}")

    keys = [k for k in context or () if isinstance(k, str) and k]
    if not keys:
        return template

    def _substitute(match: re.Match) -> str:
        key = match.group("double")
        if key is None:
            key = match.group("single")
        return format_value(context[key])

    return _token_pattern(keys).sub(_substitute, template)


class TemplateEngine:
    """Stateless renderer; an object form of ``render`` for injection."""

    def render(self, template: str, context: Optional[RenderContext] = None) -> str:
        return render(template, context)

    def render_batch(
        self,
        items: Iterable[Tuple[str, Optional[RenderContext]]],
    ) -> List[str]:
        """Render several (template, context) pairs independently."""
        return [self.render(template, context) for template, context in items]


default_engine = TemplateEngine()
