#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides visitors that dispatch syntax tree nodes to handlers by rule name.

A visitor subscribes to a rule name by registering a handler for it, either by
decorating one of its methods with :func:`handles` or by passing an explicit
mapping.  Nodes of any other name are passed to :meth:`Visitor.default_visit`.

Example:
    class IdVisitor(Visitor):
        @handles("id")
        def visit_id(self, node):
            ...
"""
from __future__ import annotations

import inspect

from abc import abstractmethod
from typing import TYPE_CHECKING
from typing import Protocol
from typing import TypeVar

from frozendict import frozendict

from linelang.parser.ast import AstLeaf
from linelang.parser.ast import AstNode
from linelang.parser.ast import AstTree
from linelang.parser.ast import AstVisitor


if TYPE_CHECKING:
    from collections.abc import Callable
    from collections.abc import Mapping

    from linelang.grammar.grammar import Grammar


T_contra = TypeVar("T_contra", bound=AstTree, contravariant=True)

F = TypeVar("F", bound="Callable[..., None]")

_HANDLED_NAMES_ATTRIBUTE = "__linelang_handled_names__"


class AstHandler(Protocol[T_contra]):
    """Protocol for reacting to the syntax tree nodes of a rule."""

    @abstractmethod
    def __call__(self, tree: T_contra) -> None:
        """Handles a syntax tree node.

        Args:
            tree: The node to handle.  Handlers may modify it in place.
        """


def handles(*names: str) -> Callable[[F], F]:
    """Registers a visitor method as handler of the nodes with the given names.

    Args:
        names: The rule names handled by the method.

    Returns:
        A decorator that registers the method.
    """

    def decorator(method: F) -> F:
        setattr(
            method,
            _HANDLED_NAMES_ATTRIBUTE,
            (*getattr(method, _HANDLED_NAMES_ATTRIBUTE, ()), *names),
        )
        return method

    return decorator


class _BottomUpWalker(AstVisitor[None]):
    def __init__(self, dispatch: Callable[[AstTree], None]) -> None:
        self._dispatch = dispatch

    def visit_leaf(self, leaf: AstLeaf) -> None:
        self._dispatch(leaf)

    def visit_node(self, node: AstNode) -> None:
        for child in list(node.children):
            child.accept(self)
        self._dispatch(node)


class _TopDownWalker(AstVisitor[None]):
    def __init__(self, dispatch: Callable[[AstTree], None]) -> None:
        self._dispatch = dispatch

    def visit_leaf(self, leaf: AstLeaf) -> None:
        self._dispatch(leaf)

    def visit_node(self, node: AstNode) -> None:
        self._dispatch(node)
        # The handler may have replaced the children.
        for child in list(node.children):
            child.accept(self)


class Visitor:
    """Walks syntax trees and calls the handler registered for each node's name."""

    def __init__(self, handlers: Mapping[str, AstHandler] | None = None) -> None:
        """Create a new visitor.

        Args:
            handlers: Handlers by rule name, in addition to the decorated methods.
                They take precedence over decorated methods of the same name.
        """
        resolved: dict[str, AstHandler] = {}
        # Overrides keep the names their overridden methods handle.
        for klass in reversed(type(self).__mro__):
            for attribute, member in vars(klass).items():
                if not inspect.isfunction(member):
                    continue
                for name in getattr(member, _HANDLED_NAMES_ATTRIBUTE, ()):
                    resolved[name] = getattr(self, attribute)
        if handlers is not None:
            resolved.update(handlers)
        self._handlers: frozendict[str, AstHandler] = frozendict(resolved)

    @property
    def handlers(self) -> frozendict[str, AstHandler]:
        """Provides the handlers by rule name.

        Returns:
            The handlers by rule name
        """
        return self._handlers

    def visit(self, tree: AstTree) -> None:
        """Visits a tree bottom-up, i.e., children before their parent.

        Args:
            tree: The tree to visit.
        """
        tree.accept(_BottomUpWalker(self._dispatch))

    def visit_top_down(self, tree: AstTree) -> None:
        """Visits a tree top-down, i.e., parents before their children.

        Args:
            tree: The tree to visit.
        """
        tree.accept(_TopDownWalker(self._dispatch))

    def default_visit(self, tree: AstTree) -> None:
        """Handles a node for whose name no handler is registered.

        Does nothing unless overridden.

        Args:
            tree: The node to handle.
        """

    def unknown_handler_names(self, grammar: Grammar) -> frozenset[str]:
        """Provides the handled names that no node parsed with a grammar can carry.

        Args:
            grammar: The grammar.

        Returns:
            The handled names unknown to the grammar
        """
        known_names = grammar.rule_names | {grammar.start.root_name}
        return frozenset(self._handlers) - known_names

    def _dispatch(self, tree: AstTree) -> None:
        handler = self._handlers.get(tree.name)
        if handler is None:
            self.default_visit(tree)
        else:
            handler(tree)
