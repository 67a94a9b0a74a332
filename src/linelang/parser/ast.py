#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides the abstract syntax trees produced by the parser."""
from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from dataclasses import field
from typing import TYPE_CHECKING
from typing import Protocol
from typing import TypeVar

from rich.markup import escape
from rich.tree import Tree


if TYPE_CHECKING:
    import re


T_co = TypeVar("T_co", covariant=True)

_INDENT = "  "


class AstVisitor(Protocol[T_co]):
    """A visitor for abstract syntax trees."""

    @abstractmethod
    def visit_leaf(self, leaf: AstLeaf) -> T_co:
        """Visit a leaf.

        Args:
            leaf: The leaf to visit.

        Returns:
            The result of visiting the leaf.
        """

    @abstractmethod
    def visit_node(self, node: AstNode) -> T_co:
        """Visit an interior node.

        Args:
            node: The node to visit.

        Returns:
            The result of visiting the node.
        """


class AstTree(Protocol):
    """An abstract syntax tree covering the half-open line range [begin, end)."""

    name: str
    begin: int
    end: int

    @abstractmethod
    def accept(self, visitor: AstVisitor[T_co]) -> T_co:
        """Accept a visitor.

        Args:
            visitor: The visitor to accept.

        Returns:
            The result of the visit.
        """

    @abstractmethod
    def pretty(self, level: int = 0) -> str:
        """Get an indented textual representation of the tree.

        Args:
            level: The indentation level of the tree.

        Returns:
            The textual representation.
        """


@dataclass
class AstLeaf(AstTree):
    """A leaf, i.e., a single line consumed by a terminal rule.

    The captures hold the whole matched line followed by the groups of the
    terminal's pattern.  Visitors may rewrite them in place.
    """

    name: str
    begin: int
    end: int
    captures: list[str | None]

    @classmethod
    def from_match(cls, name: str, index: int, match: re.Match[str]) -> AstLeaf:
        """Create a leaf for a matched line.

        Args:
            name: The name of the terminal rule.
            index: The index of the matched line.
            match: The match of the terminal's pattern.

        Returns:
            The new leaf.
        """
        return cls(name, index, index + 1, [match.group(0), *match.groups()])

    @property
    def value(self) -> str | None:
        """Provides the primary captured field, i.e., the whole line by default.

        Returns:
            The primary captured field
        """
        return self.captures[0] if self.captures else None

    def accept(self, visitor: AstVisitor[T_co]) -> T_co:  # noqa: D102
        return visitor.visit_leaf(self)

    def pretty(self, level: int = 0) -> str:  # noqa: D102
        data = ",".join(
            "" if capture is None else capture for capture in self.captures
        )
        return (
            f"{_INDENT * level}<{self.name}  range=[{self.begin}, {self.end}]"
            f'  data="{data}"/>'
        )

    def __str__(self) -> str:
        return self.pretty()


@dataclass
class AstNode(AstTree):
    """An interior node owning its children in parse order."""

    name: str
    begin: int = 0
    end: int = 0
    children: list[AstTree] = field(default_factory=list)

    def accept(self, visitor: AstVisitor[T_co]) -> T_co:  # noqa: D102
        return visitor.visit_node(self)

    def pretty(self, level: int = 0) -> str:  # noqa: D102
        indent = _INDENT * level
        parts = [f"{indent}<{self.name}  range=[{self.begin}, {self.end}]"]
        if self.children:
            parts.append(
                ",\n".join(child.pretty(level + 1) for child in self.children)
            )
        parts.append(f"{indent}/>")
        return "\n".join(parts)

    def __str__(self) -> str:
        return self.pretty()


class RichTreeBuilder(AstVisitor[Tree]):
    """A visitor that renders a syntax tree as a rich tree for the console."""

    def visit_leaf(self, leaf: AstLeaf) -> Tree:  # noqa: D102
        return Tree(
            f"[bold]{escape(leaf.name)}[/bold] [dim][{leaf.begin}, {leaf.end})[/dim] "
            f"{escape(repr(leaf.value))}"
        )

    def visit_node(self, node: AstNode) -> Tree:  # noqa: D102
        tree = Tree(
            f"[bold blue]{escape(node.name)}[/bold blue] "
            f"[dim][{node.begin}, {node.end})[/dim]"
        )
        for child in node.children:
            tree.children.append(child.accept(self))
        return tree


def to_rich_tree(tree: AstTree) -> Tree:
    """Renders a syntax tree for a rich console.

    Args:
        tree: The syntax tree.

    Returns:
        The rich tree.
    """
    return tree.accept(RichTreeBuilder())
