"""
Context snippet generator tests.
"""

from __future__ import annotations

from typing import Dict, Optional

import pytest

from stepsnippets.errors import NoEligibleTargetError, UnsupportedPatternTypeError
from stepsnippets.generator import ContextSnippetGenerator
from stepsnippets.models import (
    BlockTextArgument,
    ContextClass,
    ContextEnvironment,
    Pattern,
    StepNode,
    TableArgument,
)
from stepsnippets.patterns import build_default_transformer
from stepsnippets.registry import ProposedMethodRegistry


class StaticPatternTransformer:
    """
    Transformer returning preset patterns keyed by step text.
    """

    def __init__(self, patterns: Dict[str, Pattern]) -> None:
        self.patterns = patterns
        self.requested_types = []

    def generate_pattern(self, pattern_type: Optional[str], step_text: str) -> Pattern:
        self.requested_types.append(pattern_type)
        return self.patterns[step_text]


def _environment(*context_classes: ContextClass) -> ContextEnvironment:
    return ContextEnvironment(context_classes=list(context_classes))


def _accepting(name: str = "FeatureContext", **fields) -> ContextClass:
    return ContextClass(name=name, accepts_snippets=True, **fields)


def _signature(snippet_text: str) -> str:
    for line in snippet_text.splitlines():
        stripped = line.strip()
        if stripped.startswith("public function "):
            return stripped[stripped.index("(") :]
    raise AssertionError("snippet has no method signature")


def _method_name(snippet_text: str) -> str:
    for line in snippet_text.splitlines():
        stripped = line.strip()
        if stripped.startswith("public function "):
            return stripped[len("public function ") : stripped.index("(")]
    raise AssertionError("snippet has no method signature")


def test_supports_requires_a_snippet_accepting_context():
    """
    Support depends on at least one context class accepting snippets.
    """
    generator = ContextSnippetGenerator(build_default_transformer())
    step = StepNode(text="I have a basket")
    assert not generator.supports(_environment(), step)
    assert not generator.supports(_environment(ContextClass(name="PlainContext")), step)
    assert generator.supports(_environment(ContextClass(name="PlainContext"), _accepting()), step)


def test_generate_without_accepting_context_raises():
    """
    Generating without an eligible target is a contract violation.
    """
    generator = ContextSnippetGenerator(build_default_transformer())
    environment = _environment(ContextClass(name="PlainContext"))
    with pytest.raises(NoEligibleTargetError) as excinfo:
        generator.generate(environment, StepNode(text="I have a basket"))
    assert excinfo.value.environment_classes == ["PlainContext"]


def test_first_accepting_context_in_declared_order_is_targeted():
    """
    The first accepting context class wins.
    """
    generator = ContextSnippetGenerator(build_default_transformer())
    environment = _environment(
        ContextClass(name="PlainContext"), _accepting("FirstContext"), _accepting("SecondContext")
    )
    snippet = generator.generate(environment, StepNode(text="I have a basket"))
    assert snippet.target == "FirstContext"


def test_new_class_gets_plain_method_name():
    """
    A class without methods gets the canonical name and an empty signature.
    """
    generator = ContextSnippetGenerator(build_default_transformer())
    step = StepNode(text="I have a basket")
    snippet = generator.generate(_environment(_accepting()), step)

    assert snippet.step == step
    assert snippet.template == (
        "    /**\n"
        "     * @%s I have a basket\n"
        "     */\n"
        "    public function iHaveABasket()\n"
        "    {\n"
        "        throw new PendingException();\n"
        "    }"
    )
    assert "     * @Given I have a basket" in snippet.snippet.splitlines()


def test_declared_method_forces_suffix():
    """
    A declared method with the same name pushes the new stub to the next suffix.
    """
    transformer = StaticPatternTransformer(
        {"I have a basket": Pattern(canonical_text="iHaveABasket", pattern="I have a basket")}
    )
    generator = ContextSnippetGenerator(transformer)
    environment = _environment(_accepting(declared_methods=["iHaveABasket"]))
    snippet = generator.generate(environment, StepNode(text="I have a basket"))
    assert _method_name(snippet.template) == "iHaveABasket2"


def test_patterns_with_same_canonical_text_get_distinct_names():
    """
    Different patterns share a seed without sharing a name, and repeats stay stable.
    """
    transformer = StaticPatternTransformer(
        {
            "there are 3 items": Pattern(
                canonical_text="thereAreNItems", pattern="there are :arg1 items", placeholder_count=1
            ),
            "there are many items": Pattern(
                canonical_text="thereAreNItems", pattern="there are many items"
            ),
        }
    )
    generator = ContextSnippetGenerator(transformer)
    environment = _environment(_accepting())

    first = generator.generate(environment, StepNode(text="there are 3 items"))
    second = generator.generate(environment, StepNode(text="there are many items"))
    again = generator.generate(environment, StepNode(text="there are 3 items"))

    assert _method_name(first.template) == "thereAreNItems"
    assert _method_name(second.template) == "thereAreNItems2"
    assert _method_name(again.template) == "thereAreNItems"
    assert again.hash == first.hash


def test_empty_canonical_text_uses_fallback_name():
    """
    Steps without words are named after the fallback seed.
    """
    generator = ContextSnippetGenerator(build_default_transformer())
    environment = _environment(_accepting())
    first = generator.generate(environment, StepNode(text="'hello'"))
    second = generator.generate(environment, StepNode(text="'bye' 'now'"))
    assert _method_name(first.template) == "stepDefinition1"
    assert _signature(first.template) == "($arg1)"
    assert _method_name(second.template) == "stepDefinition2"


def test_table_argument_follows_placeholders():
    """
    A table argument adds one typed parameter after the positional ones.
    """
    generator = ContextSnippetGenerator(build_default_transformer())
    step = StepNode(
        text='there are 2 users in "admins"',
        arguments=[TableArgument(rows=[["name"], ["ana"]])],
    )
    snippet = generator.generate(_environment(_accepting()), step)
    assert _signature(snippet.template) == "($arg1, $arg2, TableNode $table)"


def test_block_text_and_table_arguments_have_fixed_order():
    """
    Block text comes before the table, whatever the order on the step.
    """
    generator = ContextSnippetGenerator(build_default_transformer())
    step = StepNode(
        text="I receive 1 message",
        arguments=[
            TableArgument(rows=[["a"]]),
            BlockTextArgument(lines=["hello"]),
            TableArgument(rows=[["b"]]),
        ],
    )
    assert generator.get_method_arguments(step, 1) == [
        "$arg1",
        "PyStringNode $string",
        "TableNode $table",
    ]
    assert generator.get_method_arguments(StepNode(text="x"), 0) == []


def test_placeholder_count_matches_positional_arguments():
    """
    One anonymous argument is declared per placeholder.
    """
    generator = ContextSnippetGenerator(build_default_transformer())
    assert generator.get_method_arguments(StepNode(text="x"), 3) == ["$arg1", "$arg2", "$arg3"]


def test_percent_signs_survive_rendering():
    """
    Percent signs in patterns are escaped in the template and restored in the snippet.
    """
    generator = ContextSnippetGenerator(build_default_transformer())
    snippet = generator.generate(_environment(_accepting()), StepNode(text="I get 50% off"))
    assert "* @%s I get :arg1%% off" in snippet.template
    assert "* @Given I get :arg1% off" in snippet.snippet


def test_custom_snippet_type_selects_pattern_flavor():
    """
    Context classes declaring a pattern type get patterns of that type.
    """
    generator = ContextSnippetGenerator(build_default_transformer())
    environment = _environment(_accepting(accepted_snippet_type="regex"))
    step = StepNode(keyword_type="When", text="I have 3 apples")
    snippet = generator.generate(environment, step)
    assert "     * @When /^I have (\\d+) apples$/" in snippet.snippet.splitlines()
    assert _method_name(snippet.template) == "iHaveApples"
    assert _signature(snippet.template) == "($arg1)"


def test_default_pattern_type_is_none():
    """
    Context classes without a declared type request the default flavor.
    """
    transformer = StaticPatternTransformer(
        {"I wait": Pattern(canonical_text="IWait", pattern="I wait")}
    )
    generator = ContextSnippetGenerator(transformer)
    generator.generate(_environment(_accepting()), StepNode(text="I wait"))
    assert transformer.requested_types == [None]


def test_pattern_failure_leaves_registry_untouched():
    """
    Pattern errors propagate before any name is registered.
    """
    registry = ProposedMethodRegistry()
    generator = ContextSnippetGenerator(build_default_transformer(), registry)
    environment = _environment(_accepting(accepted_snippet_type="cucumber"))
    with pytest.raises(UnsupportedPatternTypeError):
        generator.generate(environment, StepNode(text="I have 3 apples"))
    assert len(registry) == 0


def test_shared_registry_spans_generators():
    """
    Generators sharing a registry see each other's proposals.
    """
    registry = ProposedMethodRegistry()
    transformer = build_default_transformer()
    environment = _environment(_accepting())
    first = ContextSnippetGenerator(transformer, registry)
    second = ContextSnippetGenerator(transformer, registry)
    first.generate(environment, StepNode(text="I have 3 apples"))
    snippet = second.generate(environment, StepNode(text="I have apples"))
    assert _method_name(snippet.template) == "iHaveApples2"
