"""
Regular expression step patterns.
"""

from __future__ import annotations

import re

from ..constants import REGEX_PATTERN_TYPE
from ..models import Pattern
from .base import PatternPolicy, canonicalize, replace_tokens

REGEX_TOKEN_REGEX = re.compile(
    r"(?P<double>(?<!\w)\"[^\"]*\"(?!\w))"
    r"|(?P<single>(?<!\w)'[^']*'(?!\w))"
    r"|(?P<number>(?<![\w.,-])\d+(?![\w.,]))"
    r"|(?P<outline>(?<!\w)<[^>]+>(?!\w))"
)

_CAPTURE_GROUPS = {
    "double": '"([^"]*)"',
    "single": "'([^']*)'",
    "number": r"(\d+)",
    "outline": "<([^>]*)>",
}

_SPECIAL_CHARACTERS = re.compile(r"([/\[\]()\\^$.|?*+{}])")


def escape_step_text(text: str) -> str:
    """
    Escape regular expression metacharacters and the ``/`` delimiter.

    :param text: Literal step text.
    :type text: str
    :return: Escaped text.
    :rtype: str
    """
    return _SPECIAL_CHARACTERS.sub(r"\\\1", text)


def _capture_group(match: re.Match[str], _position: int) -> str:
    return _CAPTURE_GROUPS[match.lastgroup or "double"]


class RegexPatternPolicy(PatternPolicy):
    """
    Pattern policy producing anchored ``/^...$/`` regular expressions.

    Quoted strings, numbers and outline placeholders become capture groups; the placeholder
    count is the number of capture groups.
    """

    pattern_type = REGEX_PATTERN_TYPE

    def generate_pattern(self, step_text: str) -> Pattern:
        regex, count = replace_tokens(
            step_text,
            REGEX_TOKEN_REGEX,
            escape_literal=escape_step_text,
            placeholder=_capture_group,
        )
        return Pattern(
            canonical_text=canonicalize(step_text, REGEX_TOKEN_REGEX),
            pattern=f"/^{regex}$/",
            placeholder_count=count,
        )
