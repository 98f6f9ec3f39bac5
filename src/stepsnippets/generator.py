"""
Context snippet generator.

Generates method stubs for steps that no existing definition matches, targeting the first
context class of the environment that accepts generated snippets.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .constants import BLOCK_TEXT_ARGUMENT_DECLARATION, TABLE_ARGUMENT_DECLARATION
from .errors import NoEligibleTargetError
from .models import (
    BlockTextArgument,
    ContextClass,
    ContextEnvironment,
    ContextSnippet,
    StepNode,
    TableArgument,
)
from .naming import deduce_method_name
from .patterns import PatternTransformer
from .registry import ProposedMethodRegistry

logger = logging.getLogger(__name__)

SNIPPET_TEMPLATE = """    /**
     * @%%s %s
     */
    public function %s(%s)
    {
        throw new PendingException();
    }"""


class ContextSnippetGenerator:
    """
    Generate context snippets for unmatched steps.

    :param pattern_transformer: Transformer used to turn step text into patterns.
    :type pattern_transformer: PatternTransformer
    :param registry: Registry shared by every generation call of one run.
    :type registry: ProposedMethodRegistry or None
    """

    def __init__(
        self,
        pattern_transformer: PatternTransformer,
        registry: Optional[ProposedMethodRegistry] = None,
    ) -> None:
        self.pattern_transformer = pattern_transformer
        self.registry = registry if registry is not None else ProposedMethodRegistry()

    def supports(self, environment: ContextEnvironment, step: StepNode) -> bool:
        """
        Check whether the generator can produce a snippet for the environment.

        :param environment: Test environment.
        :type environment: ContextEnvironment
        :param step: Unmatched step.
        :type step: StepNode
        :return: True when a snippet-accepting context class exists.
        :rtype: bool
        """
        if not environment.has_context_classes():
            return False
        return self.get_snippet_accepting_context_class(environment) is not None

    def generate(self, environment: ContextEnvironment, step: StepNode) -> ContextSnippet:
        """
        Generate a snippet for a step.

        :param environment: Test environment.
        :type environment: ContextEnvironment
        :param step: Unmatched step.
        :type step: StepNode
        :return: Generated snippet bound to the target context class.
        :rtype: ContextSnippet
        :raises NoEligibleTargetError: If no context class accepts snippets.
        :raises PatternGenerationError: If the step text cannot be turned into a pattern.
        """
        context_class = self.get_snippet_accepting_context_class(environment)
        if context_class is None:
            raise NoEligibleTargetError(
                environment_classes=[
                    candidate.name for candidate in environment.get_context_classes()
                ]
            )
        pattern_type = self.get_pattern_type(context_class)
        pattern = self.pattern_transformer.generate_pattern(pattern_type, step.text)

        method_name = self.get_method_name(context_class, pattern.canonical_text, pattern.pattern)
        method_arguments = self.get_method_arguments(step, pattern.placeholder_count)
        template = self.get_snippet_template(pattern.pattern, method_name, method_arguments)
        logger.debug("Generated snippet %s for %s", method_name, context_class.name)

        return ContextSnippet(step=step, template=template, target=context_class.name)

    def get_snippet_accepting_context_class(
        self, environment: ContextEnvironment
    ) -> Optional[ContextClass]:
        """
        Return the first context class that accepts generated snippets.

        :param environment: Test environment.
        :type environment: ContextEnvironment
        :return: Context class, or None when none accepts snippets.
        :rtype: ContextClass or None
        """
        for context_class in environment.get_context_classes():
            if context_class.accepts_snippets:
                return context_class
        return None

    def get_pattern_type(self, context_class: ContextClass) -> Optional[str]:
        """
        Return the pattern type accepted by a context class.

        :param context_class: Target context class.
        :type context_class: ContextClass
        :return: Declared pattern type, or None for the default type.
        :rtype: str or None
        """
        if not context_class.declares_custom_snippet_type:
            return None
        return context_class.accepted_snippet_type

    def get_method_name(
        self, context_class: ContextClass, canonical_text: str, pattern: str
    ) -> str:
        """
        Derive a unique method name for a pattern on a context class.

        :param context_class: Target context class.
        :type context_class: ContextClass
        :param canonical_text: Canonical text of the pattern.
        :type canonical_text: str
        :param pattern: Pattern identity.
        :type pattern: str
        :return: Method name.
        :rtype: str
        """
        return self.registry.propose(context_class, pattern, deduce_method_name(canonical_text))

    def get_method_arguments(self, step: StepNode, placeholder_count: int) -> List[str]:
        """
        Return the argument declarations for a step.

        Positional ``$argN`` arguments come first, followed by at most one block text argument
        and at most one table argument, whatever their order on the step.

        :param step: Unmatched step.
        :type step: StepNode
        :param placeholder_count: Number of placeholders in the pattern.
        :type placeholder_count: int
        :return: Argument declarations.
        :rtype: list[str]
        """
        arguments = [f"$arg{index}" for index in range(1, placeholder_count + 1)]
        if any(isinstance(argument, BlockTextArgument) for argument in step.arguments):
            arguments.append(BLOCK_TEXT_ARGUMENT_DECLARATION)
        if any(isinstance(argument, TableArgument) for argument in step.arguments):
            arguments.append(TABLE_ARGUMENT_DECLARATION)
        return arguments

    def get_snippet_template(
        self, pattern: str, method_name: str, method_arguments: List[str]
    ) -> str:
        """
        Render the snippet template.

        The result keeps a ``%s`` placeholder for the step keyword.

        :param pattern: Pattern text.
        :type pattern: str
        :param method_name: Method name.
        :type method_name: str
        :param method_arguments: Argument declarations.
        :type method_arguments: list[str]
        :return: Snippet template.
        :rtype: str
        """
        return SNIPPET_TEMPLATE % (
            pattern.replace("%", "%%"),
            method_name,
            ", ".join(method_arguments),
        )
