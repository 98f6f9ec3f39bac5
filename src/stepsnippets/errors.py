"""
Error types for stepsnippets.
"""

from __future__ import annotations

from typing import List, Optional


class NoEligibleTargetError(RuntimeError):
    """
    No candidate context class accepts generated snippets.

    Callers are expected to check ``supports`` before ``generate``, so this error signals a
    caller contract violation rather than a user-facing condition.

    :param environment_classes: Names of the candidate context classes that were inspected.
    :type environment_classes: list[str]
    """

    def __init__(self, *, environment_classes: List[str]) -> None:
        self.environment_classes = list(environment_classes)
        listed = ", ".join(self.environment_classes) or "none"
        message = f"No snippet-accepting context class in environment: candidates={listed}"
        super().__init__(message)


class PatternGenerationError(ValueError):
    """
    Step text could not be converted into a step pattern.

    :param step_text: Step text that failed to convert.
    :type step_text: str
    :param reason: Optional explanation.
    :type reason: str or None
    """

    def __init__(self, step_text: str, reason: Optional[str] = None) -> None:
        self.step_text = step_text
        message = f"Could not infer a step pattern for {step_text!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedPatternTypeError(PatternGenerationError):
    """
    No pattern policy supports the requested pattern type.

    :param pattern_type: Requested pattern type.
    :type pattern_type: str or None
    :param step_text: Step text that was being converted.
    :type step_text: str
    """

    def __init__(self, pattern_type: Optional[str], step_text: str) -> None:
        self.pattern_type = pattern_type
        super().__init__(step_text, f"unsupported pattern type {pattern_type!r}")
