"""
Run-scoped registry of method names proposed for step patterns.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict

from .models import ContextClass
from .naming import resolve_unique_name

logger = logging.getLogger(__name__)


class ProposedMethodRegistry:
    """
    Remember which method name was proposed for each pattern of each context class.

    One registry covers one generation run. Share the same instance across every generation
    call of the run and call :meth:`reset` (or create a new registry) before the next run.
    Entries are only ever added during a run.

    For a given context class, two different patterns never share a method name, and the same
    pattern always gets back the name it was first given.
    """

    def __init__(self) -> None:
        self._proposed: Dict[str, Dict[str, str]] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, context_class_name: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(context_class_name)
            if lock is None:
                lock = threading.Lock()
                self._locks[context_class_name] = lock
            return lock

    def propose(self, context_class: ContextClass, pattern: str, seed: str) -> str:
        """
        Resolve a unique method name for a pattern and register it.

        Resolution and registration run under the context class lock, so concurrent proposals
        for the same class cannot interleave.

        :param context_class: Target context class.
        :type context_class: ContextClass
        :param pattern: Pattern identity.
        :type pattern: str
        :param seed: Seed method name derived from the canonical text.
        :type seed: str
        :return: Method name registered for the pattern.
        :rtype: str
        """
        with self._lock_for(context_class.name):
            proposed = self._proposed.get(context_class.name, {})

            def is_taken_by_other_pattern(candidate: str) -> bool:
                return any(
                    proposed_pattern != pattern and proposed_method == candidate
                    for proposed_pattern, proposed_method in proposed.items()
                )

            method_name = resolve_unique_name(
                seed, context_class.has_method, is_taken_by_other_pattern
            )
            self._proposed.setdefault(context_class.name, {})[pattern] = method_name
        logger.debug(
            "Registered method %s for pattern %r on %s", method_name, pattern, context_class.name
        )
        return method_name

    def proposed_methods(self, context_class_name: str) -> Dict[str, str]:
        """
        Return the patterns and method names registered for a context class.

        :param context_class_name: Context class identifier.
        :type context_class_name: str
        :return: Mapping of pattern to method name.
        :rtype: dict[str, str]
        """
        with self._lock_for(context_class_name):
            return dict(self._proposed.get(context_class_name, {}))

    def reset(self) -> None:
        """
        Forget every proposed method name.

        :return: None.
        :rtype: None
        """
        with self._locks_guard:
            self._proposed = {}
            self._locks = {}

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._proposed.values())
