"""
MYA Parser using Lark

This module wires the indentation preprocessor into a Lark LALR parser.
The grammar only describes block structure: a program is a list of
statements, and each statement may own an indented suite.
"""

import logging
from functools import lru_cache
from typing import List, Tuple

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from myalang.errors import MYAParseError
from myalang.grammars import read_grammar
from myalang.preprocessor import IndentationPreprocessor
from myalang.token_stream import MYAIndentedLexer

logger = logging.getLogger(__name__)


class BlockOutline:
    """Collect every statement that opens an indented suite."""

    def __init__(self):
        self.blocks: List[Tuple[str, int, int]] = []
        self._depth = 0

    def visit(self, tree):
        """Visit a tree node and record block headers."""
        if not isinstance(tree, Tree):
            return

        if tree.data == "statement":
            self._visit_statement(tree)
        elif tree.data == "suite":
            self._depth += 1
            for child in tree.children:
                self.visit(child)
            self._depth -= 1
        else:
            for child in tree.children:
                self.visit(child)

    def _visit_statement(self, tree):
        header = [child for child in tree.children if isinstance(child, Token)]
        suites = [child for child in tree.children if isinstance(child, Tree)]

        if suites:
            self.blocks.append((self._get_text(header), header[0].line, self._depth))

        for suite in suites:
            self.visit(suite)

    def _get_text(self, tokens):
        """Get the source-like text of a header line."""
        return " ".join(str(token) for token in tokens)


def indented_lexer(tab_width: int = 4) -> type:
    """Return an MYAIndentedLexer class bound to tab_width."""
    # Fail early, before Lark builds anything
    IndentationPreprocessor(tab_width=tab_width)
    if tab_width == MYAIndentedLexer.tab_width:
        return MYAIndentedLexer
    return type(
        f"MYAIndentedLexer{tab_width}", (MYAIndentedLexer,), {"tab_width": tab_width}
    )


@lru_cache(maxsize=None)
def load_lark_parser(tab_width: int = 4) -> Lark:
    """Load the Lark parser from the grammar file."""
    return Lark(
        read_grammar(),
        parser="lalr",
        lexer=indented_lexer(tab_width),
        start="start",
        propagate_positions=True,
        maybe_placeholders=False,
    )


def parse(source: str, tab_width: int = 4) -> Tree:
    """
    Parse MYA source text into a Lark tree.

    Raises:
        MYAParseError: if a line cannot be lexed or the structure is invalid
    """
    parser = load_lark_parser(tab_width)
    try:
        tree = parser.parse(source)
    except UnexpectedInput as e:
        line = e.line if e.line and e.line > 0 else None
        column = e.column - 1 if line is not None and e.column and e.column > 0 else None
        raise MYAParseError(str(e).strip().splitlines()[0], line, column) from e

    logger.debug("Parsed %d top-level statements", len(tree.children))
    return tree


def outline(tree: Tree) -> List[Tuple[str, int, int]]:
    """List (header, line, depth) for every block-opening statement."""
    builder = BlockOutline()
    builder.visit(tree)
    return builder.blocks
