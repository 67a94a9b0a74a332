#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""linelang parses line-oriented texts against declarative grammars.

This module provides the main entry location for the program execution from the command
line.
"""
from __future__ import annotations

import enum
import json
import logging
import sys

from pathlib import Path
from typing import TYPE_CHECKING

import simple_parsing

from rich.console import Console
from rich.logging import RichHandler
from rich.traceback import install

import linelang.configuration as config

from linelang.__version__ import __version__
from linelang.grammar.compiler import compile_grammar
from linelang.parser.ast import to_rich_tree
from linelang.parser.driver import LineLangParser
from linelang.utils.exceptions import LineLangError
from linelang.visitors.flatten import FlattenVisitor


if TYPE_CHECKING:
    from argparse import ArgumentParser

    from linelang.grammar.grammar import Grammar


class ReturnCode(enum.IntEnum):
    """Return codes of the command line."""

    OK = 0
    PARSE_FAILED = 1
    SETUP_FAILED = 2


def _create_argument_parser() -> ArgumentParser:
    parser = simple_parsing.ArgumentParser(
        add_option_string_dash_variants=simple_parsing.DashVariant.UNDERSCORE_AND_DASH,
        description="Parses line-oriented texts against a JSON grammar description",
        fromfile_prefix_chars="@",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s " + __version__
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        dest="verbosity",
        default=0,
        help="verbose output (repeat for increased verbosity)",
    )
    parser.add_argument(
        "--no-rich",
        "--no_rich",
        dest="no_rich",
        action="store_true",
        default=False,
        help="Don't use rich for nicer console output.",
    )
    parser.add_arguments(config.Configuration, dest="config")

    return parser


def _setup_logging(verbosity: int, no_rich: bool) -> Console | None:  # noqa: FBT001
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    if verbosity >= 2:
        level = logging.DEBUG

    console = None
    if no_rich:
        handler: logging.Handler = logging.StreamHandler()
    else:
        install()
        console = Console(tab_size=4)
        handler = RichHandler(
            rich_tracebacks=True, log_time_format="[%X]", console=console
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s]"
        "(%(name)s:%(funcName)s:%(lineno)d): %(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )
    return console


def _load_grammar(grammar_path: str, root_name: str) -> Grammar:
    descriptor = json.loads(Path(grammar_path).read_text(encoding="utf-8"))
    grammar = compile_grammar(descriptor, root_name)
    logging.info(
        'Compiled grammar "%s" with %d named rule(s)',
        grammar_path,
        len(grammar.rules),
    )
    return grammar


def _write_output(
    configuration: config.Configuration, tree_text: str | None, flattened: str | None
) -> None:
    if tree_text is not None:
        print(tree_text)  # noqa: T201
    if flattened is not None:
        Path(configuration.output.output_path).write_text(flattened, encoding="utf-8")
        logging.info('Wrote flattened output to "%s"', configuration.output.output_path)


def run_linelang(configuration: config.Configuration, console: Console | None) -> int:
    """Parses the configured input against the configured grammar.

    Args:
        configuration: The configuration to run with.
        console: The rich console to print to, if any.

    Returns:
        The return code.
    """
    try:
        grammar = _load_grammar(
            configuration.grammar_path, configuration.parser.root_name
        )
        text = Path(configuration.input_path).read_text(encoding="utf-8")
    except (OSError, json.JSONDecodeError, LineLangError):
        logging.exception("Failed to set up the parser")
        return ReturnCode.SETUP_FAILED

    parser = LineLangParser(grammar, configuration.parser)
    tree = parser.parse_text(text)
    if tree is None:
        logging.error('"%s" does not match the grammar', configuration.input_path)
        return ReturnCode.PARSE_FAILED

    tree_text = None
    if configuration.output.print_tree:
        if console is None:
            tree_text = tree.pretty()
        else:
            console.print(to_rich_tree(tree))

    flattened = None
    if configuration.output.output_path:
        flatten_visitor = FlattenVisitor()
        flatten_visitor.visit(tree)
        flattened = flatten_visitor.text()

    try:
        _write_output(configuration, tree_text, flattened)
    except OSError:
        logging.exception("Failed to write the output")
        return ReturnCode.SETUP_FAILED
    return ReturnCode.OK


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI of linelang.

    This method behaves like a standard UNIX command-line application, i.e.,
    the return value `0` signals a successful execution.  Any other return value
    signals some errors.

    Args:
        argv: List of command-line arguments

    Returns:
        An integer representing the success of the program run.  0 means
        success, all non-zero exit codes indicate errors.
    """
    if argv is None:
        argv = sys.argv
    if len(argv) <= 1:
        argv = [*argv, "--help"]

    argument_parser = _create_argument_parser()
    parsed = argument_parser.parse_args(argv[1:])

    console = _setup_logging(parsed.verbosity, parsed.no_rich)

    return run_linelang(parsed.config, console)


if __name__ == "__main__":
    sys.exit(main(sys.argv))
