"""
Tests for the Lark-based MYA parser built on the preprocessed token stream.
"""

import pytest
from lark import Token, Tree

from myalang.errors import MYAParseError
from myalang.main import EXAMPLE_SOURCE
from myalang.parser import load_lark_parser, outline, parse


def statements(tree):
    return [child for child in tree.children if isinstance(child, Tree) and child.data == "statement"]


class TestParser:
    """Structural parsing of block-indented MYA code."""

    def test_parse_nested_block(self):
        tree = parse("a:\n    b\n")

        assert tree.data == "start"
        (statement,) = statements(tree)
        suite = statement.children[-1]
        assert isinstance(suite, Tree) and suite.data == "suite"
        assert [str(token) for token in statement.children[:-1]] == ["a", ":"]

    def test_parse_empty_source(self):
        tree = parse("")

        assert tree.data == "start"
        assert tree.children == []

    def test_parse_example_program(self):
        tree = parse(EXAMPLE_SOURCE)

        # Main, multiply, Point, render and asm, plus three "end" lines
        assert len(statements(tree)) == 8

    def test_outline_of_example_program(self):
        blocks = outline(parse(EXAMPLE_SOURCE))

        assert blocks == [
            ("Main ( ) fn :", 5, 0),
            ("filter x > 0 pass :", 10, 1),
            ("for i in range 0 to 5 :", 13, 1),
            ("fn multiply ( a : int , b : int ) -> int :", 17, 0),
            ("struct Point :", 22, 0),
            ("render :", 28, 0),
            ("camera :", 30, 1),
            ("object : cube", 34, 1),
            ("asm :", 39, 0),
        ]

    def test_comments_and_blank_lines_are_ignored(self):
        tree = parse("$ header\n\na:\n\n    $ inside\n    b\n")

        assert outline(tree) == [("a :", 3, 0)]

    def test_leading_indented_block(self):
        """A source that starts indented parses as a leading suite."""
        tree = parse("    a\nb\n")

        assert tree.children[0].data == "suite"
        assert len(statements(tree)) == 1

    def test_misaligned_dedent_still_parses(self):
        """The stream stays balanced, so the parser accepts it."""
        tree = parse("a\n    b\n  c\n    d\n")

        assert outline(tree) == [("a", 1, 0), ("c", 3, 0)]

    def test_token_positions_point_into_source(self):
        tree = parse("a:\n\tb\n", tab_width=8)
        inner = tree.children[0].children[-1].children[0]
        token = inner.children[0]

        assert isinstance(token, Token)
        assert (token.line, token.column) == (2, 9)

    def test_parsers_are_cached_per_tab_width(self):
        assert load_lark_parser(4) is load_lark_parser(4)
        assert load_lark_parser(2) is not load_lark_parser(4)

    def test_invalid_tab_width(self):
        with pytest.raises(ValueError):
            parse("a\n", tab_width=0)

    def test_unexpected_character(self):
        with pytest.raises(MYAParseError) as excinfo:
            parse("let x = 1;\nlet y = x ? 2;\n")

        assert excinfo.value.line == 2
        assert excinfo.value.column == 10

    def test_line_without_tokens_is_rejected(self):
        """A line of form feeds has no tokens for the statement rule."""
        with pytest.raises(MYAParseError):
            parse("a\n\f\n")
