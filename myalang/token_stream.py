"""
Token stream adapter between the indentation preprocessor and Lark

Re-emits preprocessed tokens as lark.Token objects: INDENT, DEDENT and
NEWLINE become the grammar's _INDENT, _DEDENT and _NL terminals, each CODE
line is re-lexed with the grammar's own terminals, and END_OF_FILE ends the
stream (Lark appends its own $END).
"""

import logging
from typing import Iterable, Iterator, Optional

from lark import Lark, Token as LarkToken
from lark.exceptions import UnexpectedCharacters
from lark.lexer import Lexer

from myalang.errors import MYAParseError
from myalang.grammars import read_grammar
from myalang.preprocessor import IndentationPreprocessor, Token, TokenKind

logger = logging.getLogger(__name__)

BRACKET_TYPES = {
    TokenKind.INDENT: "_INDENT",
    TokenKind.DEDENT: "_DEDENT",
    TokenKind.NEWLINE: "_NL",
}

_code_lexer = None


def load_code_lexer() -> Lark:
    """Load (once) the Lark lexer used to re-lex CODE payloads."""
    global _code_lexer
    if _code_lexer is None:
        _code_lexer = Lark(read_grammar(), parser=None, lexer="basic")
    return _code_lexer


class TokenStreamAdapter:
    """
    Single-pass iterable of lark tokens built from a preprocessed stream.

    Args:
        tokens: Preprocessed tokens, as returned by IndentationPreprocessor
        lexer: Lark instance whose lex() re-lexes CODE payloads
    """

    def __init__(self, tokens: Iterable[Token], lexer: Optional[Lark] = None):
        self._tokens = iter(tokens)
        self._lexer = lexer if lexer is not None else load_code_lexer()

    def __iter__(self) -> Iterator[LarkToken]:
        for token in self._tokens:
            if token.kind is TokenKind.END_OF_FILE:
                return
            if token.kind is TokenKind.CODE:
                yield from self._relex(token)
            else:
                # Lark columns are 1-based
                yield LarkToken(
                    BRACKET_TYPES[token.kind],
                    token.payload,
                    line=token.line,
                    column=token.column + 1,
                )

    def _relex(self, code: Token) -> Iterator[LarkToken]:
        try:
            for sub in self._lexer.lex(code.payload):
                yield LarkToken(
                    sub.type,
                    sub.value,
                    line=code.line,
                    column=code.column + sub.column,
                    end_line=code.line,
                    end_column=code.column + sub.end_column,
                )
        except UnexpectedCharacters as e:
            column = code.column + e.column - 1
            raise MYAParseError(
                f"Unexpected character {e.char!r}", code.line, column
            ) from e


class MYAIndentedLexer(Lexer):
    """
    Custom Lark lexer that runs the indentation preprocessor.

    Pass the class as ``lexer=`` when building a Lark parser.
    """

    tab_width = 4

    def __init__(self, lexer_conf):
        self.lexer_conf = lexer_conf

    def lex(self, data) -> Iterator[LarkToken]:
        # Newer Lark versions hand over a TextSlice instead of a str
        text = getattr(data, "text", data)

        preprocessor = IndentationPreprocessor(
            tab_width=self.tab_width, emit_newlines=True
        )
        tokens, _ = preprocessor.process(text)
        logger.debug("Feeding %d preprocessed tokens to Lark", len(tokens))
        return iter(TokenStreamAdapter(tokens))
