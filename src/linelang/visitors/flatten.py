#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
"""Provides a visitor that flattens syntax trees back into lines."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from linelang.parser.ast import AstLeaf
from linelang.visitors.dispatcher import Visitor


if TYPE_CHECKING:
    from collections.abc import Mapping

    from linelang.parser.ast import AstTree
    from linelang.visitors.dispatcher import AstHandler


class FlattenVisitor(Visitor):
    """Collects the primary captured field of every leaf, in parse order.

    Leaves whose name has a registered handler go to that handler instead.
    """

    def __init__(self, handlers: Mapping[str, AstHandler] | None = None) -> None:
        """Create a new flattening visitor.

        Args:
            handlers: Handlers by rule name, in addition to the decorated methods.
        """
        super().__init__(handlers)
        self._lines: list[str] = []

    @property
    def lines(self) -> list[str]:
        """Provides the collected lines.

        Returns:
            The collected lines
        """
        return self._lines

    def default_visit(self, tree: AstTree) -> None:  # noqa: D102
        if isinstance(tree, AstLeaf):
            self._lines.append(self.node_data(tree))

    def node_data(self, leaf: AstLeaf) -> str:
        """Provides the text a leaf is flattened to.

        Args:
            leaf: The leaf to flatten.

        Returns:
            The primary captured field of the leaf.
        """
        value = leaf.value
        return "" if value is None else value

    def text(self) -> str:
        """Joins the collected lines.

        Returns:
            The collected lines separated by line breaks, with a final line break.
        """
        return "\n".join(self._lines) + "\n"

    def write_to_file(self, path: str | Path) -> None:
        """Writes the collected lines to a file.

        Args:
            path: The path of the file.
        """
        Path(path).write_text(self.text(), encoding="utf-8")

    def clear(self) -> None:
        """Forgets the collected lines."""
        self._lines = []
