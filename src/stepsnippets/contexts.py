"""
Capability descriptors for Python context classes.

Context classes opt into snippet generation by inheriting from the marker bases below. The
descriptor is computed once, when the class is registered with an environment.
"""

from __future__ import annotations

from typing import Iterable, List

from .models import ContextClass, ContextEnvironment


class SnippetAcceptingContext:
    """
    Marker base for context classes that accept generated snippets.
    """


class CustomSnippetAcceptingContext(SnippetAcceptingContext):
    """
    Marker base for context classes that also choose the pattern type of their snippets.
    """

    @staticmethod
    def get_accepted_snippet_type() -> str:
        """
        Return the pattern type accepted by the context class.

        :return: Pattern type.
        :rtype: str
        """
        raise NotImplementedError


def _declared_methods(context_class: type) -> List[str]:
    return sorted(
        name
        for name in dir(context_class)
        if not name.startswith("__") and callable(getattr(context_class, name, None))
    )


def describe_context_class(context_class: type) -> ContextClass:
    """
    Build the capability descriptor of a Python context class.

    :param context_class: Context class.
    :type context_class: type
    :return: Capability descriptor.
    :rtype: ContextClass
    """
    accepted_snippet_type = None
    if issubclass(context_class, CustomSnippetAcceptingContext):
        accepted_snippet_type = context_class.get_accepted_snippet_type()
    return ContextClass(
        name=f"{context_class.__module__}.{context_class.__qualname__}",
        accepts_snippets=issubclass(context_class, SnippetAcceptingContext),
        accepted_snippet_type=accepted_snippet_type,
        declared_methods=_declared_methods(context_class),
    )


def build_environment(context_classes: Iterable[type]) -> ContextEnvironment:
    """
    Build an environment from Python context classes, keeping their order.

    :param context_classes: Context classes in declaration order.
    :type context_classes: Iterable[type]
    :return: Context environment.
    :rtype: ContextEnvironment
    """
    return ContextEnvironment(
        context_classes=[describe_context_class(cls) for cls in context_classes]
    )
