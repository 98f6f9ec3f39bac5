"""
Method name derivation and uniqueness tests.
"""

from __future__ import annotations

from typing import Iterable

from stepsnippets.naming import (
    deduce_method_name,
    initial_suffix_number,
    resolve_unique_name,
    with_suffix,
)


def _taken(names: Iterable[str]):
    taken = set(names)
    return lambda candidate: candidate in taken


def _nothing_taken(_candidate: str) -> bool:
    return False


def test_deduce_method_name_lowercases_only_the_first_character():
    """
    Canonical text keeps its camel case apart from the first character.
    """
    assert deduce_method_name("IHaveABasket") == "iHaveABasket"
    assert deduce_method_name("iHaveABasket") == "iHaveABasket"


def test_deduce_method_name_uses_fallback_for_empty_text():
    """
    Empty canonical text falls back to the numbered step definition name.
    """
    assert deduce_method_name("") == "stepDefinition1"


def test_initial_suffix_number_reads_trailing_digits():
    """
    Trailing digits set the first suffix, otherwise counting starts at two.
    """
    assert initial_suffix_number("iHaveABasket") == 2
    assert initial_suffix_number("stepDefinition1") == 1
    assert initial_suffix_number("item42") == 42


def test_with_suffix_replaces_trailing_digits():
    """
    Suffixing strips an existing trailing number first.
    """
    assert with_suffix("item12", 3) == "item3"
    assert with_suffix("item", 2) == "item2"


def test_resolve_returns_seed_when_free():
    """
    A free seed is returned unchanged.
    """
    assert resolve_unique_name("iHaveABasket", _nothing_taken, _nothing_taken) == "iHaveABasket"


def test_resolve_skips_declared_methods():
    """
    Declared methods push the name to the next free suffix.
    """
    declared = _taken(["item", "item2", "item3"])
    assert resolve_unique_name("item", declared, _nothing_taken) == "item4"


def test_resolve_skips_names_of_other_patterns_after_declared_methods():
    """
    Both checks share one counter.
    """
    declared = _taken(["item"])
    other_patterns = _taken(["item2"])
    assert resolve_unique_name("item", declared, other_patterns) == "item3"


def test_resolve_never_lands_on_a_declared_method_after_pattern_bump():
    """
    A bump caused by another pattern is checked against declared methods again.
    """
    declared = _taken(["item", "item3"])
    other_patterns = _taken(["item2"])
    assert resolve_unique_name("item", declared, other_patterns) == "item4"


def test_resolve_fallback_seed_counts_from_its_own_number():
    """
    The fallback seed retries its own number before moving on.
    """
    assert resolve_unique_name("stepDefinition1", _taken(["stepDefinition1"]), _nothing_taken) == (
        "stepDefinition2"
    )
    assert (
        resolve_unique_name(
            "stepDefinition1", _taken(["stepDefinition1"]), _taken(["stepDefinition2"])
        )
        == "stepDefinition3"
    )


def test_resolve_digit_only_seed():
    """
    A seed made only of digits counts up from its own value.
    """
    assert resolve_unique_name("123", _taken(["123"]), _nothing_taken) == "124"


def test_resolve_has_no_suffix_cap():
    """
    Long runs of taken names are walked until a free one appears.
    """
    declared = _taken(["item"] + [f"item{number}" for number in range(2, 500)])
    assert resolve_unique_name("item", declared, _nothing_taken) == "item500"
