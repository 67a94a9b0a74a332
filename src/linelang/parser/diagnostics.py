#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides the diagnostics produced while parsing."""
from __future__ import annotations

import enum

from dataclasses import dataclass
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence


class DiagnosticKind(enum.Enum):
    """The kinds of problems a parse can run into."""

    END_OF_INPUT = "Unexpected end of input"
    NO_MATCH = "Expression does not match"
    CHILD_FAILURE = "Error in child rule"
    NO_ALTERNATIVE_MATCHED = "None of the alternatives matches"
    TRAILING_CONTENT = "Unexpected contents starting at this line"
    INTERNAL_OVERRUN = "Parser consumed past the end of the input (parser bug)"


@dataclass(frozen=True)
class Diagnostic:
    """A human-readable problem report tied to a rule and an input line."""

    kind: DiagnosticKind
    rule_name: str
    line: int
    line_text: str

    @classmethod
    def create(
        cls, kind: DiagnosticKind, rule_name: str, lines: Sequence[str], line: int
    ) -> Diagnostic:
        """Create a diagnostic for a line of the input.

        Args:
            kind: The kind of the diagnostic.
            rule_name: The name of the rule reporting it.
            lines: The input lines.
            line: The index of the offending line, possibly past the end.

        Returns:
            The diagnostic.
        """
        line_text = lines[line] if 0 <= line < len(lines) else ""
        return cls(kind, rule_name, line, line_text)

    @property
    def reason(self) -> str:
        """Provides the reason of the diagnostic.

        Returns:
            The reason
        """
        return self.kind.value

    def __str__(self) -> str:
        return (
            f"({self.rule_name}) Error in line {self.line}: "
            f"{self.line_text}: {self.reason}"
        )
