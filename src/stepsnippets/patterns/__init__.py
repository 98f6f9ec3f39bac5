"""
Pattern policy registry for step snippet generation.
"""

from __future__ import annotations

from typing import Dict, Type

from .base import PatternPolicy
from .regex import RegexPatternPolicy
from .transformer import PatternTransformer
from .turnip import TurnipPatternPolicy


def available_pattern_policies() -> Dict[str, Type[PatternPolicy]]:
    """
    Return the registered pattern policies.

    :return: Mapping of pattern types to policy classes, default type first.
    :rtype: dict[str, Type[PatternPolicy]]
    """
    return {
        TurnipPatternPolicy.pattern_type: TurnipPatternPolicy,
        RegexPatternPolicy.pattern_type: RegexPatternPolicy,
    }


def get_pattern_policy(pattern_type: str) -> PatternPolicy:
    """
    Instantiate a pattern policy by pattern type.

    :param pattern_type: Pattern type.
    :type pattern_type: str
    :return: Pattern policy instance.
    :rtype: PatternPolicy
    :raises KeyError: If the pattern type is unknown.
    """
    registry = available_pattern_policies()
    policy_class = registry.get(pattern_type)
    if policy_class is None:
        known = ", ".join(sorted(registry))
        raise KeyError(f"Unknown pattern type '{pattern_type}'. Known pattern types: {known}")
    return policy_class()


def build_default_transformer() -> PatternTransformer:
    """
    Build a transformer with every registered policy, default type first.

    :return: Pattern transformer.
    :rtype: PatternTransformer
    """
    return PatternTransformer([policy() for policy in available_pattern_policies().values()])


__all__ = [
    "PatternPolicy",
    "PatternTransformer",
    "RegexPatternPolicy",
    "TurnipPatternPolicy",
    "available_pattern_policies",
    "build_default_transformer",
    "get_pattern_policy",
]
