#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
from linelang.parser.ast import AstLeaf
from linelang.parser.driver import LineLangParser
from linelang.visitors.dispatcher import Visitor
from linelang.visitors.dispatcher import handles
from linelang.visitors.flatten import FlattenVisitor


class SubtitleVisitor(Visitor):
    def __init__(self):
        super().__init__()
        self.current_id = ""

    @handles("id")
    def visit_id(self, leaf):
        self.current_id = leaf.captures[1]

    @handles("jtxt")
    def visit_jtxt(self, leaf):
        leaf.captures[0] = f"[{self.current_id}]{leaf.captures[1]}"

    @handles("ctxt")
    def visit_ctxt(self, leaf):
        leaf.captures[0] = f";[{self.current_id}]{leaf.captures[0]}"

    @handles("block")
    def visit_block(self, node):
        node.children = [
            child for child in node.children if child.name in ("texts", "whitespace")
        ]


def test_flatten(ab_tree):
    visitor = FlattenVisitor()
    visitor.visit(ab_tree)
    assert visitor.lines == ["a", "b"]
    assert visitor.text() == "a\nb\n"


def test_flatten_top_down_keeps_parse_order(ab_tree):
    visitor = FlattenVisitor()
    visitor.visit_top_down(ab_tree)
    assert visitor.lines == ["a", "b"]


def test_flatten_skips_subscribed_names(ab_tree):
    visitor = FlattenVisitor({"a": lambda leaf: None})
    visitor.visit(ab_tree)
    assert visitor.lines == ["b"]


class SkipAFlattenVisitor(FlattenVisitor):
    @handles("a")
    def skip_a(self, leaf):
        pass


class MarkAFlattenVisitor(SkipAFlattenVisitor):
    def skip_a(self, leaf):
        self.lines.append(f"<{leaf.value}>")


def test_flatten_subclass_override_keeps_subscription(ab_tree):
    visitor = MarkAFlattenVisitor()
    visitor.visit(ab_tree)
    assert visitor.lines == ["<a>", "b"]


def test_flatten_missing_capture():
    visitor = FlattenVisitor()
    visitor.visit(AstLeaf("empty", 0, 1, []))
    assert visitor.lines == [""]


def test_flatten_write_to_file(ab_tree, tmp_path):
    visitor = FlattenVisitor()
    visitor.visit(ab_tree)
    output = tmp_path / "out.txt"
    visitor.write_to_file(output)
    assert output.read_text(encoding="utf-8") == "a\nb\n"


def test_flatten_clear(ab_tree):
    visitor = FlattenVisitor()
    visitor.visit(ab_tree)
    visitor.clear()
    assert visitor.lines == []
    visitor.visit(ab_tree)
    assert visitor.lines == ["a", "b"]


def test_rewrite_and_flatten_subtitles(subtitle_grammar):
    parser = LineLangParser(subtitle_grammar)
    tree = parser.parse_text(
        "1\n00:01 --> 00:02\n> Hello\nBonjour\n\n2\n00:03 --> 00:04\nSalut"
    )
    SubtitleVisitor().visit(tree)
    flatten = FlattenVisitor()
    flatten.visit(tree)
    assert flatten.lines == ["[1]Hello", ";[1]Bonjour", "", ";[2]Salut"]
