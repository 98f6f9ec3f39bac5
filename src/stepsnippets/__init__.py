"""
stepsnippets public package interface.
"""

from .contexts import (
    CustomSnippetAcceptingContext,
    SnippetAcceptingContext,
    build_environment,
    describe_context_class,
)
from .errors import NoEligibleTargetError, PatternGenerationError, UnsupportedPatternTypeError
from .generator import ContextSnippetGenerator
from .models import (
    BlockTextArgument,
    ContextClass,
    ContextEnvironment,
    ContextSnippet,
    Pattern,
    StepNode,
    TableArgument,
)
from .naming import deduce_method_name, resolve_unique_name
from .patterns import PatternTransformer, build_default_transformer
from .registry import ProposedMethodRegistry

__all__ = [
    "__version__",
    "BlockTextArgument",
    "ContextClass",
    "ContextEnvironment",
    "ContextSnippet",
    "ContextSnippetGenerator",
    "CustomSnippetAcceptingContext",
    "NoEligibleTargetError",
    "Pattern",
    "PatternGenerationError",
    "PatternTransformer",
    "ProposedMethodRegistry",
    "SnippetAcceptingContext",
    "StepNode",
    "TableArgument",
    "UnsupportedPatternTypeError",
    "build_default_transformer",
    "build_environment",
    "deduce_method_name",
    "describe_context_class",
    "resolve_unique_name",
]

__version__ = "0.1.0"
