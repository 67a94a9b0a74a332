#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides a configuration interface for the parser and the command line."""
import dataclasses


@dataclasses.dataclass
class ParserConfiguration:
    """Configuration of the parser."""

    allow_partial: bool = False
    """Return the partial syntax tree of an input that does not fully match the
    grammar instead of no tree at all.  A partial tree is only advisory."""

    root_name: str = "start"
    """Name of the root node of every parsed syntax tree."""


@dataclasses.dataclass
class OutputConfiguration:
    """Configuration of the outputs of the command line."""

    output_path: str = ""
    """Path of the file to write the flattened leaves to, one per line.  Nothing is
    written if empty."""

    print_tree: bool = False
    """Print the parsed syntax tree to the console."""


@dataclasses.dataclass
class Configuration:
    """General configuration of linelang."""

    grammar_path: str
    """Path to the JSON grammar description."""

    input_path: str
    """Path to the text file to parse."""

    parser: ParserConfiguration = dataclasses.field(
        default_factory=ParserConfiguration
    )
    """Parser configuration."""

    output: OutputConfiguration = dataclasses.field(
        default_factory=OutputConfiguration
    )
    """Output configuration."""
