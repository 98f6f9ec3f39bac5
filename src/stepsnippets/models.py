"""
Pydantic models for step snippet generation.
"""

from __future__ import annotations

import hashlib
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .constants import DEFAULT_KEYWORD_TYPE


class BlockTextArgument(BaseModel):
    """
    Multi-line block text attached to a step.

    :ivar type: Always "block-text".
    :vartype type: str
    :ivar lines: Text lines of the block.
    :vartype lines: list[str]
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["block-text"] = "block-text"
    lines: List[str] = Field(default_factory=list)


class TableArgument(BaseModel):
    """
    Tabular data attached to a step.

    :ivar type: Always "table".
    :vartype type: str
    :ivar rows: Table rows, each a list of cell values.
    :vartype rows: list[list[str]]
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["table"] = "table"
    rows: List[List[str]] = Field(default_factory=list)


StepArgument = Annotated[
    Union[BlockTextArgument, TableArgument],
    Field(discriminator="type"),
]


class StepNode(BaseModel):
    """
    Unmatched scenario step that needs a definition.

    :ivar keyword_type: Step keyword type (Given, When, Then).
    :vartype keyword_type: str
    :ivar text: Step text without the keyword.
    :vartype text: str
    :ivar arguments: Ordered step arguments.
    :vartype arguments: list[StepArgument]
    :ivar line: Optional source line of the step.
    :vartype line: int or None
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    keyword_type: str = Field(default=DEFAULT_KEYWORD_TYPE, min_length=1)
    text: str = Field(min_length=1)
    arguments: List[StepArgument] = Field(default_factory=list)
    line: Optional[int] = Field(default=None, ge=0)


class Pattern(BaseModel):
    """
    Step pattern produced by a pattern transformer.

    The ``pattern`` string doubles as the pattern identity.

    :ivar canonical_text: Identifier seed derived from the step text.
    :vartype canonical_text: str
    :ivar pattern: Matcher text (turnip phrase or regular expression).
    :vartype pattern: str
    :ivar placeholder_count: Number of free parameters in the pattern.
    :vartype placeholder_count: int
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    canonical_text: str
    pattern: str
    placeholder_count: int = Field(default=0, ge=0)


class ContextClass(BaseModel):
    """
    Capability descriptor for a candidate context class.

    :ivar name: Context class identifier.
    :vartype name: str
    :ivar accepts_snippets: Whether the class accepts generated snippets.
    :vartype accepts_snippets: bool
    :ivar accepted_snippet_type: Pattern type declared by the class, if it declares one.
    :vartype accepted_snippet_type: str or None
    :ivar declared_methods: Method names already declared on the class.
    :vartype declared_methods: list[str]
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    accepts_snippets: bool = False
    accepted_snippet_type: Optional[str] = None
    declared_methods: List[str] = Field(default_factory=list)

    @property
    def declares_custom_snippet_type(self) -> bool:
        """
        Whether the class declares its own accepted pattern type.

        :return: True when an accepted snippet type is declared.
        :rtype: bool
        """
        return self.accepted_snippet_type is not None

    def has_method(self, method_name: str) -> bool:
        """
        Check whether the class already declares a method.

        Method lookups are case-insensitive, matching how the generated stubs are resolved.

        :param method_name: Method name to look up.
        :type method_name: str
        :return: True when the method is declared.
        :rtype: bool
        """
        lowered = method_name.lower()
        return any(declared.lower() == lowered for declared in self.declared_methods)


class ContextEnvironment(BaseModel):
    """
    Test environment exposing the candidate context classes in declaration order.

    :ivar context_classes: Candidate context classes.
    :vartype context_classes: list[ContextClass]
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    context_classes: List[ContextClass] = Field(default_factory=list)

    def has_context_classes(self) -> bool:
        """
        Check whether the environment has any context classes.

        :return: True when at least one context class is present.
        :rtype: bool
        """
        return bool(self.context_classes)

    def get_context_classes(self) -> List[ContextClass]:
        """
        Return the candidate context classes in declaration order.

        :return: Context classes.
        :rtype: list[ContextClass]
        """
        return list(self.context_classes)


class ContextSnippet(BaseModel):
    """
    Generated method stub for a context class.

    :ivar step: Step the snippet was generated for.
    :vartype step: StepNode
    :ivar template: Rendered stub with a ``%s`` placeholder for the step keyword.
    :vartype template: str
    :ivar target: Name of the context class that should host the stub.
    :vartype target: str
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    step: StepNode
    template: str
    target: str

    @property
    def snippet(self) -> str:
        """
        Stub text with the step keyword filled in.

        :return: Snippet text.
        :rtype: str
        """
        return self.template % self.step.keyword_type

    @property
    def hash(self) -> str:
        """
        Stable digest of the template, shared by identical snippets.

        :return: Hex digest.
        :rtype: str
        """
        return hashlib.sha256(self.template.encode("utf-8")).hexdigest()
