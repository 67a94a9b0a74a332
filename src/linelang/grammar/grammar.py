#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides the compiled grammar rules and the grammar itself."""
from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import Protocol
from typing import TypeVar


if TYPE_CHECKING:
    import re

    from frozendict import frozendict


T_co = TypeVar("T_co", covariant=True)


class GrammarRuleVisitor(Protocol[T_co]):
    """A visitor for grammar rules."""

    @abstractmethod
    def visit_terminal(self, terminal: Terminal) -> T_co:
        """Visit a terminal rule.

        Args:
            terminal: The terminal rule to visit.

        Returns:
            The result of visiting the terminal rule.
        """

    @abstractmethod
    def visit_sequential(self, sequential: Sequential) -> T_co:
        """Visit a sequential rule.

        Args:
            sequential: The sequential rule to visit.

        Returns:
            The result of visiting the sequential rule.
        """

    @abstractmethod
    def visit_alternation(self, alternation: Alternation) -> T_co:
        """Visit an alternation rule.

        Args:
            alternation: The alternation rule to visit.

        Returns:
            The result of visiting the alternation rule.
        """

    @abstractmethod
    def visit_repetition(self, repetition: Repetition) -> T_co:
        """Visit a repetition rule.

        Args:
            repetition: The repetition rule to visit.

        Returns:
            The result of visiting the repetition rule.
        """

    @abstractmethod
    def visit_optional(self, optional: Optional) -> T_co:
        """Visit an optional rule.

        Args:
            optional: The optional rule to visit.

        Returns:
            The result of visiting the optional rule.
        """

    @abstractmethod
    def visit_anchor(self, anchor: Anchor) -> T_co:
        """Visit an anchor rule.

        Args:
            anchor: The anchor rule to visit.

        Returns:
            The result of visiting the anchor rule.
        """


class GrammarRule(Protocol):
    """A compiled grammar rule."""

    name: str

    @abstractmethod
    def accept(self, visitor: GrammarRuleVisitor[T_co]) -> T_co:
        """Accept a visitor.

        Args:
            visitor: The visitor to accept.

        Returns:
            The result of accepting the visitor.
        """


@dataclass(frozen=True)
class Terminal(GrammarRule):
    """A rule that matches exactly one whole line."""

    name: str
    pattern: re.Pattern[str]

    def accept(self, visitor: GrammarRuleVisitor[T_co]) -> T_co:  # noqa: D102
        return visitor.visit_terminal(self)


@dataclass(frozen=True)
class Sequential(GrammarRule):
    """A rule that matches its sub-rules one after another."""

    name: str
    rules: tuple[GrammarRule, ...]

    def accept(self, visitor: GrammarRuleVisitor[T_co]) -> T_co:  # noqa: D102
        return visitor.visit_sequential(self)


@dataclass(frozen=True)
class Alternation(GrammarRule):
    """A rule that matches the first of its sub-rules that matches."""

    name: str
    rules: tuple[GrammarRule, ...]

    def accept(self, visitor: GrammarRuleVisitor[T_co]) -> T_co:  # noqa: D102
        return visitor.visit_alternation(self)


@dataclass(frozen=True)
class Repetition(GrammarRule):
    """A rule that matches its sub-rule as often as possible."""

    name: str
    rule: GrammarRule

    def accept(self, visitor: GrammarRuleVisitor[T_co]) -> T_co:  # noqa: D102
        return visitor.visit_repetition(self)


@dataclass(frozen=True)
class Optional(GrammarRule):
    """A rule that matches its sub-rule or nothing at all."""

    name: str
    rule: GrammarRule

    def accept(self, visitor: GrammarRuleVisitor[T_co]) -> T_co:  # noqa: D102
        return visitor.visit_optional(self)


@dataclass(frozen=True)
class Anchor(GrammarRule):
    """The top-level rule, which has to consume the whole input.

    The anchor wraps the output of its rule into a root node named ``root_name``.
    """

    name: str
    rule: GrammarRule
    root_name: str = "start"

    def accept(self, visitor: GrammarRuleVisitor[T_co]) -> T_co:  # noqa: D102
        return visitor.visit_anchor(self)


@dataclass(frozen=True)
class Grammar:
    """A compiled grammar."""

    start: Anchor
    rules: frozendict[str, tuple[GrammarRule, ...]]

    @property
    def rule_names(self) -> frozenset[str]:
        """Provides the names of all named rules of the grammar.

        Returns:
            The rule names
        """
        return frozenset(self.rules)
