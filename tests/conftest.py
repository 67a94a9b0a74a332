#  This file is part of linelang.
#
#  SPDX-FileCopyrightText: 2024 linelang Contributors
#
#  SPDX-License-Identifier: MIT
#
import pytest

from linelang.grammar.compiler import compile_grammar
from linelang.parser.driver import LineLangParser


@pytest.fixture()
def ab_descriptor() -> dict:
    return {
        "name": "ab",
        "type": "seq",
        "content": [
            {"name": "a", "content": "a"},
            {"name": "b", "content": "b"},
        ],
    }


@pytest.fixture()
def ab_parser(ab_descriptor) -> LineLangParser:
    return LineLangParser(ab_descriptor)


@pytest.fixture()
def ab_tree(ab_parser):
    return ab_parser.parse_text("a\nb")


@pytest.fixture()
def subtitle_descriptor() -> dict:
    return {
        "name": "document",
        "type": "repeat",
        "content": {
            "name": "block",
            "type": "seq",
            "content": [
                {"name": "id", "content": r"(\d+)"},
                {"name": "time", "content": r"\d\d:\d\d --> \d\d:\d\d"},
                {
                    "name": "texts",
                    "type": "repeat",
                    "content": {
                        "name": "text",
                        "type": "or",
                        "content": [
                            {"name": "jtxt", "content": r"> (.+)"},
                            {"name": "ctxt", "content": r"[^>\s\d].*"},
                        ],
                    },
                },
                {"name": "whitespace", "content": r"\s*", "optional": True},
            ],
        },
    }


@pytest.fixture()
def subtitle_grammar(subtitle_descriptor):
    return compile_grammar(subtitle_descriptor)
