#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
from unittest.mock import MagicMock
from unittest.mock import call

import pytest

from linelang.grammar.compiler import compile_grammar
from linelang.visitors.dispatcher import Visitor
from linelang.visitors.dispatcher import handles


class RecordingVisitor(Visitor):
    def __init__(self, handlers=None):
        super().__init__(handlers)
        self.visited: list[str] = []

    def default_visit(self, tree):
        self.visited.append(tree.name)


class DecoratedVisitor(RecordingVisitor):
    @handles("a")
    def visit_a(self, tree):
        self.visited.append(f"handled {tree.name}")

    @handles("b", "ab")
    def visit_b_or_ab(self, tree):
        self.visited.append(f"also handled {tree.name}")

    @property
    def broken(self):
        raise RuntimeError


def test_handler_and_default(ab_tree):
    handler = MagicMock()
    visitor = Visitor({"a": handler})
    visitor.default_visit = MagicMock()
    visitor.visit(ab_tree)
    a, b = ab_tree.children[0].children
    handler.assert_called_once_with(a)
    assert visitor.default_visit.mock_calls == [
        call(b),
        call(ab_tree.children[0]),
        call(ab_tree),
    ]


def test_default_visit_does_nothing(ab_tree):
    before = ab_tree.pretty()
    Visitor().visit(ab_tree)
    assert ab_tree.pretty() == before


def test_visit_bottom_up(ab_tree):
    visitor = RecordingVisitor()
    visitor.visit(ab_tree)
    assert visitor.visited == ["a", "b", "ab", "start"]


def test_visit_top_down(ab_tree):
    visitor = RecordingVisitor()
    visitor.visit_top_down(ab_tree)
    assert visitor.visited == ["start", "ab", "a", "b"]


def test_decorated_handlers(ab_tree):
    visitor = DecoratedVisitor()
    visitor.visit(ab_tree)
    assert visitor.visited == [
        "handled a",
        "also handled b",
        "also handled ab",
        "start",
    ]


def test_handlers_are_resolved_once():
    visitor = DecoratedVisitor()
    assert set(visitor.handlers) == {"a", "b", "ab"}
    assert visitor.handlers["a"] == visitor.visit_a


def test_explicit_handlers_take_precedence(ab_tree):
    handler = MagicMock()
    visitor = DecoratedVisitor({"a": handler})
    visitor.visit(ab_tree)
    handler.assert_called_once()
    assert "handled a" not in visitor.visited


def test_handlers_are_read_only():
    visitor = DecoratedVisitor()
    with pytest.raises(TypeError):
        visitor.handlers["start"] = MagicMock()  # type: ignore[index]


def test_bottom_up_handler_mutates_leaf(ab_tree):
    def shout(leaf):
        leaf.captures[0] = leaf.captures[0].upper()

    Visitor({"a": shout, "b": shout}).visit(ab_tree)
    assert [leaf.value for leaf in ab_tree.children[0].children] == ["A", "B"]


def test_top_down_handler_restructures_children(ab_tree):
    def drop_b(node):
        node.children = [child for child in node.children if child.name != "b"]

    visitor = RecordingVisitor({"ab": drop_b})
    visitor.visit_top_down(ab_tree)
    assert visitor.visited == ["start", "a"]
    assert [child.name for child in ab_tree.children[0].children] == ["a"]


def test_unknown_handler_names(ab_descriptor):
    grammar = compile_grammar(ab_descriptor)
    visitor = Visitor({"a": MagicMock(), "start": MagicMock(), "typo": MagicMock()})
    assert visitor.unknown_handler_names(grammar) == {"typo"}


def test_unknown_handler_names_does_not_log(ab_descriptor, caplog):
    grammar = compile_grammar(ab_descriptor)
    visitor = Visitor({"typo": MagicMock()})
    visitor.unknown_handler_names(grammar)
    assert caplog.records == []


class OverridingVisitor(DecoratedVisitor):
    def visit_a(self, tree):
        self.visited.append(f"overridden {tree.name}")


def test_override_keeps_handled_names(ab_tree):
    visitor = OverridingVisitor()
    visitor.visit(ab_tree)
    assert visitor.visited == [
        "overridden a",
        "also handled b",
        "also handled ab",
        "start",
    ]


class RedecoratingVisitor(DecoratedVisitor):
    @handles("start")
    def visit_a(self, tree):
        self.visited.append(f"redecorated {tree.name}")


def test_redecorated_override_adds_handled_names(ab_tree):
    visitor = RedecoratingVisitor()
    visitor.visit(ab_tree)
    assert set(visitor.handlers) == {"a", "b", "ab", "start"}
    assert visitor.visited == [
        "redecorated a",
        "also handled b",
        "also handled ab",
        "redecorated start",
    ]
