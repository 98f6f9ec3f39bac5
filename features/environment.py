from __future__ import annotations

from stepsnippets.generator import ContextSnippetGenerator
from stepsnippets.patterns import build_default_transformer
from stepsnippets.registry import ProposedMethodRegistry


def before_scenario(context, scenario) -> None:
    """
    Behave hook executed before each scenario.

    Every scenario is its own generation run with a fresh registry.

    :param context: Behave context object.
    :type context: object
    :param scenario: Behave scenario.
    :type scenario: object
    :return: None.
    :rtype: None
    """
    context.context_classes = []
    context.registry = ProposedMethodRegistry()
    context.generator = ContextSnippetGenerator(build_default_transformer(), context.registry)
    context.last_snippet = None
    context.last_error = None


def after_scenario(context, scenario) -> None:
    """
    Behave hook executed after each scenario.

    :param context: Behave context object.
    :type context: object
    :param scenario: Behave scenario.
    :type scenario: object
    :return: None.
    :rtype: None
    """
    registry = getattr(context, "registry", None)
    if registry is not None:
        registry.reset()
