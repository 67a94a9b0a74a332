#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides the exceptions raised by linelang."""
from __future__ import annotations


class LineLangError(Exception):
    """Base class of all linelang errors."""


class GrammarError(LineLangError):
    """Raised when a grammar description cannot be compiled."""


class UnsupportedRuleTypeError(GrammarError):
    """Raised when a rule descriptor names an unknown rule type."""

    def __init__(self, rule_name: str, rule_type: object) -> None:
        """Create a new error.

        Args:
            rule_name: The name of the offending rule.
            rule_type: The unsupported type value.
        """
        super().__init__(f"Unsupported rule type {rule_type!r} in rule {rule_name!r}")
        self.rule_name = rule_name
        self.rule_type = rule_type


class InvalidRuleDescriptorError(GrammarError):
    """Raised when a rule descriptor is malformed."""

    def __init__(self, rule_name: str, reason: str) -> None:
        """Create a new error.

        Args:
            rule_name: The name of the offending rule.
            reason: Why the descriptor was rejected.
        """
        super().__init__(f"Invalid rule {rule_name!r}: {reason}")
        self.rule_name = rule_name
        self.reason = reason
