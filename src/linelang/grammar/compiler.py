#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Compiles declarative rule descriptors into grammar rules.

A rule descriptor is a mapping with the keys ``name``, ``type`` (one of
``terminal``, ``seq``, ``or`` and ``repeat``; a missing type means ``terminal``),
``optional`` and ``content``.  The content is a regular expression for terminals,
a list of descriptors for ``seq`` and ``or`` rules, and a single descriptor for
``repeat`` rules.
"""
from __future__ import annotations

import re

from collections.abc import Mapping
from collections.abc import Sequence
from typing import TYPE_CHECKING
from typing import Any

from frozendict import frozendict

from linelang.grammar.grammar import Alternation
from linelang.grammar.grammar import Anchor
from linelang.grammar.grammar import Grammar
from linelang.grammar.grammar import GrammarRule
from linelang.grammar.grammar import GrammarRuleVisitor
from linelang.grammar.grammar import Optional
from linelang.grammar.grammar import Repetition
from linelang.grammar.grammar import Sequential
from linelang.grammar.grammar import Terminal
from linelang.utils.exceptions import InvalidRuleDescriptorError
from linelang.utils.exceptions import UnsupportedRuleTypeError


if TYPE_CHECKING:
    from collections.abc import Callable


RuleDescriptor = Mapping[str, Any]


def anchor_pattern(pattern: str) -> str:
    """Anchors a pattern at the start and the end of a line.

    Args:
        pattern: The pattern to anchor.

    Returns:
        The pattern, starting with ``^`` and ending with ``$``.
    """
    if not pattern.startswith("^"):
        pattern = "^" + pattern
    if not pattern.endswith("$"):
        pattern += "$"
    return pattern


def _rule_name(descriptor: RuleDescriptor) -> str:
    return descriptor.get("name") or ""


def _content(descriptor: RuleDescriptor) -> Any:
    try:
        return descriptor["content"]
    except KeyError as e:
        raise InvalidRuleDescriptorError(
            _rule_name(descriptor), "missing content"
        ) from e


def _sub_rules(descriptor: RuleDescriptor) -> tuple[GrammarRule, ...]:
    content = _content(descriptor)
    if isinstance(content, (str, bytes)) or not isinstance(content, Sequence):
        raise InvalidRuleDescriptorError(
            _rule_name(descriptor), "content must be a list of rule descriptors"
        )
    return tuple(compile_rule(sub_descriptor) for sub_descriptor in content)


def _create_terminal(descriptor: RuleDescriptor) -> Terminal:
    name = _rule_name(descriptor)
    content = _content(descriptor)
    if not isinstance(content, str):
        raise InvalidRuleDescriptorError(name, "content must be a pattern string")
    try:
        pattern = re.compile(anchor_pattern(content))
    except re.error as e:
        raise InvalidRuleDescriptorError(name, f"invalid pattern: {e}") from e
    return Terminal(name, pattern)


def _create_sequential(descriptor: RuleDescriptor) -> Sequential:
    return Sequential(_rule_name(descriptor), _sub_rules(descriptor))


def _create_alternation(descriptor: RuleDescriptor) -> Alternation:
    return Alternation(_rule_name(descriptor), _sub_rules(descriptor))


def _create_repetition(descriptor: RuleDescriptor) -> Repetition:
    content = _content(descriptor)
    if not isinstance(content, Mapping):
        raise InvalidRuleDescriptorError(
            _rule_name(descriptor), "content must be a single rule descriptor"
        )
    return Repetition(_rule_name(descriptor), compile_rule(content))


_RULE_FACTORIES: dict[str | None, Callable[[RuleDescriptor], GrammarRule]] = {
    None: _create_terminal,
    "terminal": _create_terminal,
    "seq": _create_sequential,
    "or": _create_alternation,
    "repeat": _create_repetition,
}


def compile_rule(descriptor: RuleDescriptor) -> GrammarRule:
    """Compiles a rule descriptor into a grammar rule.

    Args:
        descriptor: The rule descriptor.

    Returns:
        The compiled grammar rule.

    Raises:
        UnsupportedRuleTypeError: If the descriptor, or one of its sub-descriptors,
            has an unknown type.
        InvalidRuleDescriptorError: If the descriptor is malformed.
    """
    if not isinstance(descriptor, Mapping):
        raise InvalidRuleDescriptorError("", "rule descriptor must be a mapping")

    rule_type = descriptor.get("type")
    try:
        factory = _RULE_FACTORIES[rule_type]
    except (KeyError, TypeError) as e:
        raise UnsupportedRuleTypeError(_rule_name(descriptor), rule_type) from e

    if descriptor.get("optional"):
        inner_rule = compile_rule({**descriptor, "optional": False})
        return Optional(_rule_name(descriptor), inner_rule)

    return factory(descriptor)


class RuleIndexer(GrammarRuleVisitor[None]):
    """A visitor that collects the named rules of a rule tree."""

    def __init__(self) -> None:  # noqa: D107
        self._rules: dict[str, list[GrammarRule]] = {}

    @property
    def rules(self) -> frozendict[str, tuple[GrammarRule, ...]]:
        """Provides the collected rules by name.

        Returns:
            The collected rules
        """
        return frozendict(
            {name: tuple(rules) for name, rules in self._rules.items()}
        )

    def _add(self, rule: GrammarRule) -> None:
        if rule.name:
            self._rules.setdefault(rule.name, []).append(rule)

    def visit_terminal(self, terminal: Terminal) -> None:  # noqa: D102
        self._add(terminal)

    def visit_sequential(self, sequential: Sequential) -> None:  # noqa: D102
        self._add(sequential)
        for rule in sequential.rules:
            rule.accept(self)

    def visit_alternation(self, alternation: Alternation) -> None:  # noqa: D102
        self._add(alternation)
        for rule in alternation.rules:
            rule.accept(self)

    def visit_repetition(self, repetition: Repetition) -> None:  # noqa: D102
        self._add(repetition)
        repetition.rule.accept(self)

    def visit_optional(self, optional: Optional) -> None:  # noqa: D102
        # The wrapped rule carries the same name.
        optional.rule.accept(self)

    def visit_anchor(self, anchor: Anchor) -> None:  # noqa: D102
        anchor.rule.accept(self)


def compile_grammar(descriptor: RuleDescriptor, root_name: str = "start") -> Grammar:
    """Compiles a grammar description.

    Args:
        descriptor: The descriptor of the top-level rule.
        root_name: The name of the root node of the parsed trees.

    Returns:
        The compiled grammar.
    """
    rule = compile_rule(descriptor)
    start = Anchor(rule.name, rule, root_name)

    indexer = RuleIndexer()
    start.accept(indexer)

    return Grammar(start, indexer.rules)
