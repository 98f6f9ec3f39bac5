from __future__ import annotations

from typing import Any, Dict, List

from behave import given, then, when

from stepsnippets.errors import NoEligibleTargetError
from stepsnippets.models import (
    BlockTextArgument,
    ContextEnvironment,
    StepNode,
    TableArgument,
)


def _environment(context) -> ContextEnvironment:
    return ContextEnvironment.model_validate({"context_classes": context.context_classes})


def _context_class(context, name: str) -> Dict[str, Any]:
    for entry in context.context_classes:
        if entry["name"] == name:
            return entry
    raise AssertionError(f"Unknown context class {name!r}")


def _table_rows(context) -> List[List[str]]:
    rows = [list(context.table.headings)]
    rows.extend(list(row.cells) for row in context.table)
    return rows


def _signature_line(context) -> str:
    assert context.last_snippet is not None, context.last_error
    for line in context.last_snippet.snippet.splitlines():
        stripped = line.strip()
        if stripped.startswith("public function "):
            return stripped[len("public function ") :]
    raise AssertionError("snippet has no method signature")


def _generate(context, step: StepNode) -> None:
    context.last_snippet = None
    context.last_error = None
    try:
        context.last_snippet = context.generator.generate(_environment(context), step)
    except NoEligibleTargetError as error:
        context.last_error = error


@given('a context class "{name}" that accepts snippets')
def step_accepting_context(context, name: str) -> None:
    context.context_classes.append({"name": name, "accepts_snippets": True})


@given('a context class "{name}" that accepts "{pattern_type}" snippets')
def step_custom_accepting_context(context, name: str, pattern_type: str) -> None:
    context.context_classes.append(
        {"name": name, "accepts_snippets": True, "accepted_snippet_type": pattern_type}
    )


@given('a context class "{name}" that does not accept snippets')
def step_plain_context(context, name: str) -> None:
    context.context_classes.append({"name": name, "accepts_snippets": False})


@given('the context class "{name}" declares the method "{method}"')
def step_declares_method(context, name: str, method: str) -> None:
    _context_class(context, name).setdefault("declared_methods", []).append(method)


@when('I generate a snippet for the {keyword_type} step "{text}" with a table')
def step_generate_with_table(context, keyword_type: str, text: str) -> None:
    arguments = [TableArgument(rows=_table_rows(context))]
    _generate(context, StepNode(keyword_type=keyword_type, text=text, arguments=arguments))


@when('I generate a snippet for the {keyword_type} step "{text}" with block text')
def step_generate_with_block_text(context, keyword_type: str, text: str) -> None:
    arguments = [BlockTextArgument(lines=context.text.splitlines())]
    _generate(context, StepNode(keyword_type=keyword_type, text=text, arguments=arguments))


@when('I generate a snippet for the {keyword_type} step "{text}"')
def step_generate(context, keyword_type: str, text: str) -> None:
    _generate(context, StepNode(keyword_type=keyword_type, text=text))


@when("I start a new generation run")
def step_new_run(context) -> None:
    context.registry.reset()


@then('the snippet method is "{method}"')
def step_snippet_method(context, method: str) -> None:
    signature = _signature_line(context)
    assert signature[: signature.index("(")] == method, signature


@then('the snippet signature is "{signature}"')
def step_snippet_signature(context, signature: str) -> None:
    line = _signature_line(context)
    assert line[line.index("(") :] == signature, line


@then('the snippet targets "{name}"')
def step_snippet_target(context, name: str) -> None:
    assert context.last_snippet is not None, context.last_error
    assert context.last_snippet.target == name


@then('the snippet documents "{annotation}"')
def step_snippet_annotation(context, annotation: str) -> None:
    assert context.last_snippet is not None, context.last_error
    lines = [line.strip() for line in context.last_snippet.snippet.splitlines()]
    assert f"* {annotation}" in lines, lines


@then("no snippet is generated")
def step_no_snippet(context) -> None:
    assert context.last_snippet is None
    assert isinstance(context.last_error, NoEligibleTargetError)
