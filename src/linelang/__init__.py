#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Line-oriented parsing driven by declarative grammar descriptions."""

from linelang.__version__ import __version__
from linelang.grammar.compiler import compile_grammar
from linelang.grammar.compiler import compile_rule
from linelang.parser.ast import AstLeaf
from linelang.parser.ast import AstNode
from linelang.parser.driver import LineLangParser
from linelang.visitors.dispatcher import Visitor
from linelang.visitors.dispatcher import handles
from linelang.visitors.flatten import FlattenVisitor


__all__ = [
    "AstLeaf",
    "AstNode",
    "FlattenVisitor",
    "LineLangParser",
    "Visitor",
    "__version__",
    "compile_grammar",
    "compile_rule",
    "handles",
]
