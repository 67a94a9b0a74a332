#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides the entry point to parse texts against a grammar."""
from __future__ import annotations

import logging

from collections.abc import Mapping
from typing import TYPE_CHECKING

from linelang.configuration import ParserConfiguration
from linelang.grammar.compiler import compile_grammar
from linelang.parser.ast import AstNode
from linelang.parser.diagnostics import DiagnosticKind
from linelang.parser.engine import ParseSuccess
from linelang.parser.engine import parse_rule


if TYPE_CHECKING:
    from collections.abc import Sequence

    from linelang.grammar.compiler import RuleDescriptor
    from linelang.grammar.grammar import Grammar
    from linelang.parser.diagnostics import Diagnostic


class LineLangParser:
    """Parses line-oriented texts against a grammar.

    The grammar is compiled once and can be reused for any number of parses.
    Diagnostics of parses that do not consume their whole input are logged, they
    are never returned.
    """

    _logger = logging.getLogger(__name__)

    def __init__(
        self,
        grammar: Grammar | RuleDescriptor,
        configuration: ParserConfiguration | None = None,
    ) -> None:
        """Create a new parser.

        Args:
            grammar: A compiled grammar or the descriptor of its top-level rule.
            configuration: The parser configuration.
        """
        self._configuration = (
            ParserConfiguration() if configuration is None else configuration
        )
        if isinstance(grammar, Mapping):
            grammar = compile_grammar(grammar, self._configuration.root_name)
        self._grammar: Grammar = grammar

    @property
    def grammar(self) -> Grammar:
        """Provides the compiled grammar.

        Returns:
            The compiled grammar
        """
        return self._grammar

    @property
    def configuration(self) -> ParserConfiguration:
        """Provides the parser configuration.

        Returns:
            The parser configuration
        """
        return self._configuration

    def parse_text(
        self, text: str, allow_partial: bool | None = None
    ) -> AstNode | None:
        """Parses a text, line by line.

        Args:
            text: The text to parse.
            allow_partial: Whether to return the partial tree of a text that does
                not match completely.  Defaults to the configured behaviour.

        Returns:
            The syntax tree, or None if the text does not match the grammar and
            partial trees are not allowed.
        """
        return self.parse_lines(text.split("\n"), allow_partial)

    def parse_lines(
        self, lines: Sequence[str], allow_partial: bool | None = None
    ) -> AstNode | None:
        """Parses a sequence of lines.

        Args:
            lines: The lines to parse.
            allow_partial: Whether to return the partial tree of lines that do not
                match completely.  Defaults to the configured behaviour.

        Returns:
            The syntax tree, or None if the lines do not match the grammar and
            partial trees are not allowed.
        """
        if allow_partial is None:
            allow_partial = self._configuration.allow_partial

        start = self._grammar.start
        result = parse_rule(start, lines)

        if isinstance(result, ParseSuccess):
            (root,) = result.nodes
            assert isinstance(root, AstNode)
            end = result.index
        else:
            root = AstNode(start.root_name)
            end = 0

        if isinstance(result, ParseSuccess) and end == len(lines):
            self._logger.debug("Parsed %d line(s)", len(lines))
            return root

        self._log_diagnostics(result.diagnostics)
        self._logger.info(
            "Input does not match the grammar, consumed %d of %d line(s)",
            end,
            len(lines),
        )
        return root if allow_partial else None

    def _log_diagnostics(self, diagnostics: Sequence[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            if diagnostic.kind is DiagnosticKind.INTERNAL_OVERRUN:
                self._logger.error("%s", diagnostic)
            else:
                self._logger.warning("%s", diagnostic)
