#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
import pytest

from linelang.parser.diagnostics import Diagnostic
from linelang.parser.diagnostics import DiagnosticKind


def test_diagnostic_str():
    diagnostic = Diagnostic.create(DiagnosticKind.NO_MATCH, "b", ["a", "c"], 1)
    assert str(diagnostic) == "(b) Error in line 1: c: Expression does not match"


@pytest.mark.parametrize("line", [-1, 2, 5])
def test_diagnostic_outside_input(line):
    diagnostic = Diagnostic.create(DiagnosticKind.END_OF_INPUT, "a", ["a", "b"], line)
    assert diagnostic.line_text == ""
    assert str(diagnostic) == (
        f"(a) Error in line {line}: : Unexpected end of input"
    )


def test_diagnostic_reason():
    diagnostic = Diagnostic(DiagnosticKind.TRAILING_CONTENT, "start", 3, "x")
    assert diagnostic.reason == "Unexpected contents starting at this line"
