"""
Method name derivation for generated step definitions.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from .constants import DEFAULT_SUFFIX_NUMBER, FALLBACK_METHOD_NAME

logger = logging.getLogger(__name__)

_TRAILING_DIGITS = re.compile(r"([0-9]+)$")


def deduce_method_name(canonical_text: str) -> str:
    """
    Derive the seed method name from a pattern's canonical text.

    Only the first character is lower-cased; the remainder is expected to be identifier-safe
    already.

    :param canonical_text: Canonical text of the step pattern.
    :type canonical_text: str
    :return: Seed method name.
    :rtype: str
    """
    if canonical_text:
        return canonical_text[0].lower() + canonical_text[1:]
    return FALLBACK_METHOD_NAME


def initial_suffix_number(method_name: str) -> int:
    """
    Return the first suffix number to try when the method name is taken.

    :param method_name: Seed method name.
    :type method_name: str
    :return: Trailing number of the name, or the default starting number.
    :rtype: int
    """
    match = _TRAILING_DIGITS.search(method_name)
    if match is None:
        return DEFAULT_SUFFIX_NUMBER
    return int(match.group(1))


def with_suffix(method_name: str, number: int) -> str:
    """
    Replace any trailing digit run of a method name with a number.

    :param method_name: Method name.
    :type method_name: str
    :param number: Suffix number.
    :type number: int
    :return: Suffixed method name.
    :rtype: str
    """
    return f"{_TRAILING_DIGITS.sub('', method_name)}{number}"


def resolve_unique_name(
    seed: str,
    is_taken_by_method: Callable[[str], bool],
    is_taken_by_other_pattern: Callable[[str], bool],
) -> str:
    """
    Bump a seed method name until neither predicate claims it.

    Declared methods are checked before names proposed for other patterns and a single suffix
    counter is shared by both checks. Each predicate is consulted against its full set after
    every bump, so a bump that escapes one collision can never land on another. The loop has no
    cap; it terminates because both sets are finite.

    :param seed: Seed method name.
    :type seed: str
    :param is_taken_by_method: Whether the target class already declares a name.
    :type is_taken_by_method: Callable[[str], bool]
    :param is_taken_by_other_pattern: Whether a name is proposed for a different pattern.
    :type is_taken_by_other_pattern: Callable[[str], bool]
    :return: Unique method name.
    :rtype: str
    """
    number = initial_suffix_number(seed)
    candidate = seed
    while is_taken_by_method(candidate) or is_taken_by_other_pattern(candidate):
        bumped = with_suffix(candidate, number)
        logger.debug("Method name %s is taken, trying %s", candidate, bumped)
        candidate = bumped
        number += 1
    return candidate
