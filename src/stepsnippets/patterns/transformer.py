"""
Pattern transformer dispatching step text to pattern policies.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..errors import UnsupportedPatternTypeError
from ..models import Pattern
from .base import PatternPolicy

logger = logging.getLogger(__name__)


class PatternTransformer:
    """
    Turn step text into patterns using the first policy that supports the requested type.

    :param policies: Pattern policies in lookup order.
    :type policies: Sequence[PatternPolicy]
    """

    def __init__(self, policies: Sequence[PatternPolicy]) -> None:
        self._policies: List[PatternPolicy] = list(policies)

    def register_policy(self, policy: PatternPolicy) -> None:
        """
        Append a pattern policy to the lookup order.

        :param policy: Pattern policy to add.
        :type policy: PatternPolicy
        :return: None.
        :rtype: None
        """
        self._policies.append(policy)

    def generate_pattern(self, pattern_type: Optional[str], step_text: str) -> Pattern:
        """
        Generate a pattern of the requested type for step text.

        :param pattern_type: Pattern type, or None for the default type.
        :type pattern_type: str or None
        :param step_text: Step text without the keyword.
        :type step_text: str
        :return: Generated pattern.
        :rtype: Pattern
        :raises UnsupportedPatternTypeError: If no policy supports the pattern type.
        :raises PatternGenerationError: If the policy cannot convert the step text.
        """
        for policy in self._policies:
            if policy.supports_type(pattern_type):
                pattern = policy.generate_pattern(step_text)
                logger.debug(
                    "Generated %s pattern %r for step %r",
                    policy.pattern_type,
                    pattern.pattern,
                    step_text,
                )
                return pattern
        raise UnsupportedPatternTypeError(pattern_type, step_text)
