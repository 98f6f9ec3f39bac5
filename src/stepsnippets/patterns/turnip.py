"""
Turnip-style step patterns with ``:argN`` placeholders.
"""

from __future__ import annotations

import re
from typing import Optional

from ..constants import TURNIP_PATTERN_TYPE
from ..models import Pattern
from .base import PatternPolicy, canonicalize, replace_tokens

TURNIP_TOKEN_REGEX = re.compile(
    r"(?<!\w)\"[^\"]+\"(?!\w)"
    r"|(?<!\w)'[^']+'(?!\w)"
    r"|(?<![\w.,])-?\d+(?:[.,]\d+)?(?![\w.,])"
)


def _escape_alternation_syntax(text: str) -> str:
    return text.replace("/", "\\/")


class TurnipPatternPolicy(PatternPolicy):
    """
    Default pattern policy producing readable turnip phrases.

    Quoted strings and numbers become ``:arg1``, ``:arg2`` placeholders in order of appearance.
    A literal ``/`` is escaped since turnip reads it as word alternation.
    """

    pattern_type = TURNIP_PATTERN_TYPE

    def supports_type(self, pattern_type: Optional[str]) -> bool:
        return pattern_type is None or pattern_type == self.pattern_type

    def generate_pattern(self, step_text: str) -> Pattern:
        pattern, count = replace_tokens(
            step_text,
            TURNIP_TOKEN_REGEX,
            escape_literal=_escape_alternation_syntax,
            placeholder=lambda _match, position: f":arg{position}",
        )
        return Pattern(
            canonical_text=canonicalize(step_text, TURNIP_TOKEN_REGEX),
            pattern=pattern,
            placeholder_count=count,
        )
