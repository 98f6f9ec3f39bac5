"""
Command-line interface for stepsnippets.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import ValidationError

from .configuration import (
    apply_dotted_overrides,
    environment_from_configuration,
    load_environment_configuration,
    parse_dotted_overrides,
)
from .constants import DEFAULT_KEYWORD_TYPE
from .errors import NoEligibleTargetError, PatternGenerationError
from .generator import ContextSnippetGenerator
from .models import ContextEnvironment, ContextSnippet, StepNode
from .patterns import build_default_transformer, get_pattern_policy
from .registry import ProposedMethodRegistry

KEYWORD_TYPES = ("Given", "When", "Then")
CONJUNCTIONS = ("And", "But")


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(message)s")


def _load_environment(arguments: argparse.Namespace) -> ContextEnvironment:
    """
    Load the context environment named by command-line interface arguments.

    :param arguments: Parsed command-line interface arguments.
    :type arguments: argparse.Namespace
    :return: Context environment.
    :rtype: ContextEnvironment
    :raises KeyError: If a context declares an unknown pattern type.
    """
    configuration = load_environment_configuration(arguments.environment)
    configuration = apply_dotted_overrides(
        configuration, parse_dotted_overrides(arguments.override)
    )
    environment = environment_from_configuration(configuration)
    for context_class in environment.get_context_classes():
        if context_class.declares_custom_snippet_type:
            get_pattern_policy(context_class.accepted_snippet_type)
    return environment


def parse_step_line(line: str, *, previous_keyword_type: str = DEFAULT_KEYWORD_TYPE) -> StepNode:
    """
    Parse a step line such as ``When I add 3 apples`` into a step node.

    ``And`` and ``But`` take the keyword type of the previous step. Lines without a keyword
    use the previous keyword type as well.

    :param line: Step line.
    :type line: str
    :param previous_keyword_type: Keyword type of the preceding step.
    :type previous_keyword_type: str
    :return: Step node.
    :rtype: StepNode
    """
    stripped = line.strip()
    keyword, _, remainder = stripped.partition(" ")
    if keyword in KEYWORD_TYPES and remainder.strip():
        return StepNode(keyword_type=keyword, text=remainder.strip())
    if keyword in CONJUNCTIONS and remainder.strip():
        return StepNode(keyword_type=previous_keyword_type, text=remainder.strip())
    return StepNode(keyword_type=previous_keyword_type, text=stripped)


def _load_steps(arguments: argparse.Namespace) -> List[StepNode]:
    steps: List[StepNode] = []
    keyword_type = DEFAULT_KEYWORD_TYPE
    for line in arguments.step or []:
        step = parse_step_line(line, previous_keyword_type=keyword_type)
        keyword_type = step.keyword_type
        steps.append(step)
    if arguments.steps_file:
        path = Path(arguments.steps_file)
        if not path.is_file():
            raise FileNotFoundError(f"Steps file not found: {path}")
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or []
        if not isinstance(data, list):
            raise ValueError(f"Steps file must contain a list of steps: {path}")
        steps.extend(StepNode.model_validate(entry) for entry in data)
    if not steps:
        raise ValueError("Provide at least one --step or a --steps-file")
    return steps


def _group_snippets(snippets: List[ContextSnippet]) -> Dict[str, List[ContextSnippet]]:
    grouped: Dict[str, List[ContextSnippet]] = {}
    seen = set()
    for snippet in snippets:
        if snippet.hash in seen:
            continue
        seen.add(snippet.hash)
        grouped.setdefault(snippet.target, []).append(snippet)
    return grouped


def cmd_generate(arguments: argparse.Namespace) -> int:
    """
    Generate snippets for every requested step in one generation run.

    :param arguments: Parsed command-line interface arguments.
    :type arguments: argparse.Namespace
    :return: Exit code.
    :rtype: int
    """
    environment = _load_environment(arguments)
    steps = _load_steps(arguments)
    generator = ContextSnippetGenerator(build_default_transformer(), ProposedMethodRegistry())

    snippets: List[ContextSnippet] = []
    for step in steps:
        if not generator.supports(environment, step):
            print(
                f"No snippet-accepting context class for step: {step.text}",
                file=sys.stderr,
            )
            return 2
        snippets.append(generator.generate(environment, step))

    for target, target_snippets in _group_snippets(snippets).items():
        print(f"--- {target} has missing steps. Define them with these snippets:")
        print()
        for snippet in target_snippets:
            print(snippet.snippet)
            print()
    return 0


def cmd_contexts(arguments: argparse.Namespace) -> int:
    """
    List the candidate context classes of an environment.

    :param arguments: Parsed command-line interface arguments.
    :type arguments: argparse.Namespace
    :return: Exit code.
    :rtype: int
    """
    environment = _load_environment(arguments)
    for context_class in environment.get_context_classes():
        accepts = "accepts snippets" if context_class.accepts_snippets else "no snippets"
        pattern_type = context_class.accepted_snippet_type or "default"
        print(
            f"{context_class.name}\t{accepts}\tpattern_type={pattern_type}"
            f"\tdeclared_methods={len(context_class.declared_methods)}"
        )
    return 0


def _add_environment_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--environment",
        required=True,
        action="append",
        help="Environment configuration YAML. Repeatable; later files override earlier ones.",
    )
    parser.add_argument(
        "--override",
        action="append",
        default=[],
        help="Override key=value pairs applied after composing configurations (supports dotted keys).",
    )


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line interface argument parser.

    :return: Argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="stepsnippets",
        description="Generate step definition snippets for unmatched scenario steps.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log generation details.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_generate = sub.add_parser("generate", help="Generate snippets for unmatched steps.")
    _add_environment_args(p_generate)
    p_generate.add_argument(
        "--step",
        action="append",
        help="Step line, optionally starting with its keyword (repeatable).",
    )
    p_generate.add_argument(
        "--steps-file",
        default=None,
        help="YAML list of steps with optional block-text and table arguments.",
    )
    p_generate.set_defaults(func=cmd_generate)

    p_contexts = sub.add_parser("contexts", help="List candidate context classes.")
    _add_environment_args(p_contexts)
    p_contexts.set_defaults(func=cmd_contexts)

    return parser


def main(argument_list: Optional[List[str]] = None) -> int:
    """
    Entry point for the stepsnippets command-line interface.

    :param argument_list: Optional command-line interface arguments.
    :type argument_list: list[str] or None
    :return: Exit code.
    :rtype: int
    """
    parser = build_parser()
    arguments = parser.parse_args(argument_list)
    _configure_logging(arguments.verbose)
    try:
        return int(arguments.func(arguments))
    except (
        FileNotFoundError,
        KeyError,
        ValueError,
        ValidationError,
        PatternGenerationError,
        NoEligibleTargetError,
    ) as exception:
        message = exception.args[0] if getattr(exception, "args", None) else str(exception)
        print(str(message), file=sys.stderr)
        return 2
