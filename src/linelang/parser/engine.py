#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides the recursive-descent engine that parses lines against grammar rules.

Every rule is parsed at a line index and yields either a success, carrying the
index after the consumed lines and the syntax tree fragment to append to the
enclosing node, or a failure carrying the diagnostics explaining it.  Composite
rules decide on their own whether a failure of a sub-rule propagates or is
discarded.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import TypeAlias

from linelang.grammar.grammar import GrammarRuleVisitor
from linelang.parser.ast import AstLeaf
from linelang.parser.ast import AstNode
from linelang.parser.diagnostics import Diagnostic
from linelang.parser.diagnostics import DiagnosticKind


if TYPE_CHECKING:
    from collections.abc import Sequence

    from linelang.grammar.grammar import Alternation
    from linelang.grammar.grammar import Anchor
    from linelang.grammar.grammar import GrammarRule
    from linelang.grammar.grammar import Optional
    from linelang.grammar.grammar import Repetition
    from linelang.grammar.grammar import Sequential
    from linelang.grammar.grammar import Terminal
    from linelang.parser.ast import AstTree


@dataclass(frozen=True)
class ParseSuccess:
    """A rule matched.

    The diagnostics of a success are only ever set by an anchor that did not
    consume the whole input.
    """

    index: int
    nodes: tuple[AstTree, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class ParseFailure:
    """A rule did not match."""

    diagnostics: tuple[Diagnostic, ...]


ParseResult: TypeAlias = ParseSuccess | ParseFailure


class RuleParser(GrammarRuleVisitor[ParseResult]):
    """A visitor that parses the lines starting at a fixed index."""

    def __init__(self, lines: Sequence[str], index: int) -> None:
        """Create a new rule parser.

        Args:
            lines: The input lines.
            index: The index of the line to start parsing at.
        """
        self._lines = lines
        self._index = index

    def _parse(self, rule: GrammarRule, index: int) -> ParseResult:
        return rule.accept(RuleParser(self._lines, index))

    def _diagnostic(
        self, kind: DiagnosticKind, rule: GrammarRule, line: int
    ) -> Diagnostic:
        return Diagnostic.create(kind, rule.name, self._lines, line)

    def visit_terminal(self, terminal: Terminal) -> ParseResult:  # noqa: D102
        if self._index >= len(self._lines):
            return ParseFailure(
                (self._diagnostic(DiagnosticKind.END_OF_INPUT, terminal, self._index),)
            )

        match = terminal.pattern.fullmatch(self._lines[self._index])
        if match is None:
            return ParseFailure(
                (self._diagnostic(DiagnosticKind.NO_MATCH, terminal, self._index),)
            )

        leaf = AstLeaf.from_match(terminal.name, self._index, match)
        return ParseSuccess(self._index + 1, (leaf,))

    def visit_sequential(self, sequential: Sequential) -> ParseResult:  # noqa: D102
        index = self._index
        children: list[AstTree] = []

        for rule in sequential.rules:
            result = self._parse(rule, index)
            if isinstance(result, ParseFailure):
                return ParseFailure(
                    (
                        *result.diagnostics,
                        self._diagnostic(
                            DiagnosticKind.CHILD_FAILURE, sequential, self._index
                        ),
                    )
                )
            index = result.index
            children.extend(result.nodes)

        node = AstNode(sequential.name, self._index, index, children)
        return ParseSuccess(index, (node,))

    def visit_alternation(self, alternation: Alternation) -> ParseResult:  # noqa: D102
        for rule in alternation.rules:
            result = self._parse(rule, self._index)
            if isinstance(result, ParseSuccess):
                return result

        return ParseFailure(
            (
                self._diagnostic(
                    DiagnosticKind.NO_ALTERNATIVE_MATCHED, alternation, self._index
                ),
            )
        )

    def visit_repetition(self, repetition: Repetition) -> ParseResult:  # noqa: D102
        index = self._index
        children: list[AstTree] = []

        while True:
            result = self._parse(repetition.rule, index)
            # A success that does not advance would repeat forever.
            if isinstance(result, ParseFailure) or result.index <= index:
                break
            index = result.index
            children.extend(result.nodes)

        node = AstNode(repetition.name, self._index, index, children)
        return ParseSuccess(index, (node,))

    def visit_optional(self, optional: Optional) -> ParseResult:  # noqa: D102
        result = self._parse(optional.rule, self._index)
        if isinstance(result, ParseSuccess):
            return result
        return ParseSuccess(self._index)

    def visit_anchor(self, anchor: Anchor) -> ParseResult:  # noqa: D102
        result = self._parse(anchor.rule, self._index)
        if isinstance(result, ParseFailure):
            return result

        end = result.index
        root = AstNode(anchor.root_name, 0, end, list(result.nodes))
        line_count = len(self._lines)

        if end > line_count:
            kind: DiagnosticKind | None = DiagnosticKind.INTERNAL_OVERRUN
        elif end < line_count:
            kind = DiagnosticKind.TRAILING_CONTENT
        else:
            kind = None

        if kind is None:
            return ParseSuccess(end, (root,))
        return ParseSuccess(end, (root,), (self._diagnostic(kind, anchor, end),))


def parse_rule(rule: GrammarRule, lines: Sequence[str], index: int = 0) -> ParseResult:
    """Parses lines against a rule.

    Args:
        rule: The rule to parse with.
        lines: The input lines.
        index: The index of the line to start parsing at.

    Returns:
        The result of the parse.
    """
    return rule.accept(RuleParser(lines, index))
