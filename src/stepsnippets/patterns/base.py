"""
Pattern policy interface and shared step text helpers.
"""

from __future__ import annotations

import re
import unicodedata
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple

from ..errors import PatternGenerationError
from ..models import Pattern

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")
_NON_IDENTIFIER = re.compile(r"[^a-zA-Z_ ]")


class PatternPolicy(ABC):
    """
    Abstract interface for step pattern policies.

    :ivar pattern_type: Pattern type handled by the policy.
    :vartype pattern_type: str
    """

    pattern_type: str

    def supports_type(self, pattern_type: Optional[str]) -> bool:
        """
        Check whether the policy produces patterns of a type.

        :param pattern_type: Requested pattern type, or None for the default type.
        :type pattern_type: str or None
        :return: True when supported.
        :rtype: bool
        """
        return pattern_type == self.pattern_type

    @abstractmethod
    def generate_pattern(self, step_text: str) -> Pattern:
        """
        Generate a step pattern from step text.

        :param step_text: Step text without the keyword.
        :type step_text: str
        :return: Generated pattern.
        :rtype: Pattern
        :raises PatternGenerationError: If the step text cannot be converted.
        """
        raise NotImplementedError


def transliterate(text: str) -> str:
    """
    Convert text to lower-case ASCII words separated by single spaces.

    :param text: Text to convert.
    :type text: str
    :return: Transliterated text.
    :rtype: str
    """
    decomposed = unicodedata.normalize("NFKD", text)
    ascii_text = decomposed.encode("ascii", "ignore").decode("ascii").lower()
    return _NON_ALPHANUMERIC.sub(" ", ascii_text).strip()


def canonicalize(step_text: str, token_regex: re.Pattern[str]) -> str:
    """
    Build the canonical text of a step: placeholder tokens removed, words joined in title case.

    :param step_text: Step text.
    :type step_text: str
    :param token_regex: Regular expression matching placeholder tokens.
    :type token_regex: re.Pattern
    :return: Canonical text, possibly empty.
    :rtype: str
    """
    words = _NON_IDENTIFIER.sub("", transliterate(token_regex.sub("", step_text)))
    return "".join(word[:1].upper() + word[1:] for word in words.split(" "))


def replace_tokens(
    step_text: str,
    token_regex: re.Pattern[str],
    *,
    escape_literal: Callable[[str], str],
    placeholder: Callable[[re.Match[str], int], str],
) -> Tuple[str, int]:
    """
    Replace placeholder tokens in step text, escaping the literal text between them.

    :param step_text: Step text.
    :type step_text: str
    :param token_regex: Regular expression matching placeholder tokens.
    :type token_regex: re.Pattern
    :param escape_literal: Escaping applied to literal segments.
    :type escape_literal: Callable[[str], str]
    :param placeholder: Builds the replacement for a token from its match and 1-based position.
    :type placeholder: Callable[[re.Match, int], str]
    :return: Pattern text and number of replaced tokens.
    :rtype: tuple[str, int]
    :raises PatternGenerationError: If the step text is blank.
    """
    if not step_text.strip():
        raise PatternGenerationError(step_text, "step text is blank")
    parts: List[str] = []
    position = 0
    count = 0
    for match in token_regex.finditer(step_text):
        parts.append(escape_literal(step_text[position : match.start()]))
        count += 1
        parts.append(placeholder(match, count))
        position = match.end()
    parts.append(escape_literal(step_text[position:]))
    return "".join(parts), count
